"""Runtime settings for a site generation run.

``SiteSettings`` is the boundary between the process environment and the
pipeline. Values come from explicit arguments first, then environment
variables (optionally seeded from a project ``.env`` file), then the
constants in ``src.config``.

Examples
--------
>>> from src.pipeline.website_generator.settings import SiteSettings
>>> settings = SiteSettings(base_url="https://example.com/")
>>> settings.base_url
'https://example.com'
"""

import os
from pathlib import Path

from dotenv import load_dotenv

import src.config as _project_config
from src.config import (
    DATA_ZIP_PATH,
    OUTPUT_DIR,
    SITE_BASE_URL,
    SITE_NAME,
    SITEMAP_BATCH_SIZE,
)
from src.exceptions import ConfigurationError


class SiteSettings:
    r"""Validated settings for one generation run.

    Attributes
    ----------
    zip_path : Path
        Dataset archive to read.
    output_dir : Path
        Root of the generated site.
    base_url : str
        Absolute site URL without a trailing slash, used in sitemaps.
    site_name : str
        Display name used in page titles.
    sitemap_batch_size : int
        Maximum number of ``<url>`` entries per company sitemap shard.

    Raises
    ------
    ConfigurationError
        If the base URL is empty or the batch size is not a positive integer.
    """

    def __init__(
        self,
        zip_path: Path | None = None,
        output_dir: Path | None = None,
        base_url: str | None = None,
        site_name: str | None = None,
        sitemap_batch_size: int | None = None,
    ) -> None:
        env_path = Path(_project_config.PROJECT_ROOT) / ".env"
        if env_path.exists():
            load_dotenv(env_path, override=False)
        self.zip_path: Path = Path(
            zip_path or os.getenv("DIRECTORY_DATA_ZIP") or DATA_ZIP_PATH
        )
        self.output_dir: Path = Path(
            output_dir or os.getenv("DIRECTORY_OUTPUT_DIR") or OUTPUT_DIR
        )
        raw_base_url = (
            base_url
            if base_url is not None
            else os.getenv("DIRECTORY_BASE_URL", SITE_BASE_URL)
        )
        self.base_url: str = raw_base_url.strip().rstrip("/")
        self.site_name: str = site_name or os.getenv("DIRECTORY_SITE_NAME", SITE_NAME)
        raw_batch_size = (
            sitemap_batch_size
            if sitemap_batch_size is not None
            else os.getenv("DIRECTORY_SITEMAP_BATCH_SIZE", SITEMAP_BATCH_SIZE)
        )
        try:
            self.sitemap_batch_size: int = int(raw_batch_size)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(
                "Sitemap batch size must be an integer",
                context={"sitemap_batch_size": raw_batch_size},
            ) from exc
        if self.sitemap_batch_size <= 0:
            raise ConfigurationError(
                "Sitemap batch size must be positive",
                context={"sitemap_batch_size": self.sitemap_batch_size},
            )
        if not self.base_url:
            raise ConfigurationError("Missing base URL for sitemap generation")

    def __repr__(self) -> str:
        return (
            f"SiteSettings(zip_path={self.zip_path!r}, output_dir={self.output_dir!r}, "
            f"base_url={self.base_url!r}, sitemap_batch_size={self.sitemap_batch_size})"
        )
