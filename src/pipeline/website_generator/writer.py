"""Filesystem sink for the generated site.

Writes HTML pages, XML sitemaps and JSON snapshots into the output tree.
Unlike page rendering, write failures are fatal: every ``OSError`` is
re-raised as ``OutputWriteError`` so the run aborts instead of producing a
partial site silently.
"""

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from src.config import (
    CATEGORIES_JSON_FILENAME,
    CATEGORIES_SUBDIR,
    CITIES_JSON_FILENAME,
    CITIES_SUBDIR,
    COMPANIES_SUBDIR,
    DATA_SUBDIR,
    HTML_SITEMAP_SUBDIR,
    PAGE_FILENAME,
    SALONS_JSON_FILENAME,
    STATES_JSON_FILENAME,
    STATES_SUBDIR,
    XML_SITEMAPS_SUBDIR,
)
from src.exceptions import OutputWriteError
from src.pipeline.directory_data import Projections

logger = logging.getLogger(__name__)

OUTPUT_SUBDIRS: tuple[str, ...] = (
    DATA_SUBDIR,
    COMPANIES_SUBDIR,
    CITIES_SUBDIR,
    STATES_SUBDIR,
    CATEGORIES_SUBDIR,
    HTML_SITEMAP_SUBDIR,
    XML_SITEMAPS_SUBDIR,
)


def ensure_output_tree(output_dir: Path) -> None:
    """Create the output root and its fixed section directories."""
    try:
        for subdir in OUTPUT_SUBDIRS:
            (output_dir / subdir).mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputWriteError(
            f"Cannot create output directory {output_dir}",
            context={"output_dir": str(output_dir)},
        ) from exc


def write_text_output(content: str, output_file: Path) -> None:
    r"""Write text to disk as UTF-8, creating parent directories.

    Parameters
    ----------
    content : str
        Full document to write.
    output_file : Path
        Destination path.

    Raises
    ------
    OutputWriteError
        If the directory cannot be created or the file cannot be written.

    Examples
    --------
    >>> import tempfile
    >>> from pathlib import Path
    >>> target = Path(tempfile.gettempdir()) / "site" / "index.html"
    >>> write_text_output("<html></html>", target)
    >>> target.read_text(encoding="utf-8")
    '<html></html>'
    """
    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise OutputWriteError(
            f"Failed to write {output_file}", context={"path": str(output_file)}
        ) from exc


def write_html_output(html_content: str, output_file: Path) -> None:
    """Write one HTML document."""
    write_text_output(html_content, output_file)


def page_path(output_dir: Path, section: str, slug: str) -> Path:
    """Location of a section page: ``<output>/<section>/<slug>/index.html``."""
    return output_dir / section / slug / PAGE_FILENAME


def write_page(output_dir: Path, section: str, slug: str, html_content: str) -> Path:
    """Write a section page keyed by its slug and return its path."""
    target = page_path(output_dir, section, slug)
    write_html_output(html_content, target)
    return target


def write_json_snapshot(path: Path, records: Sequence[dict[str, Any]]) -> None:
    """Serialize projected records as a pretty-printed JSON array."""
    write_text_output(json.dumps(list(records), ensure_ascii=False, indent=2), path)


def write_json_snapshots(output_dir: Path, projections: Projections) -> list[Path]:
    """Write the four projection snapshots under ``<output>/data/``.

    Returns
    -------
    list[Path]
        Paths of the written files, salons first.
    """
    data_dir = output_dir / DATA_SUBDIR
    targets = [
        (data_dir / SALONS_JSON_FILENAME, projections.businesses),
        (data_dir / CITIES_JSON_FILENAME, projections.cities),
        (data_dir / STATES_JSON_FILENAME, projections.states),
        (data_dir / CATEGORIES_JSON_FILENAME, projections.categories),
    ]
    for path, records in targets:
        write_json_snapshot(path, records)
    logger.info("Generated JSON data files.")
    return [path for path, _ in targets]
