"""Website Generator Pipeline Module.

Summary
-------
Provides the import surface for the directory website generation stage:
display formatting, page rendering, XML sitemap assembly, the filesystem
sink and the headless runner that drives the whole pipeline.

System Boundaries
-----------------
- This initializer contains no logic; it re-exports names from submodules.
- Resolution and counting live in ``src.pipeline.directory_data``.

References
----------
- ``renderer.py`` for HTML pages, ``sitemaps.py`` for XML sitemaps.
- ``writer.py`` for output files and JSON snapshots.
- ``runner.py`` for the end-to-end run; ``settings.py`` for runtime settings.
- For configuration and constants, see ``src/config.py``.

Usage
-----
    >>> from src.pipeline.website_generator import SiteSettings, run_pipeline
    >>> summary = run_pipeline(SiteSettings())  # doctest: +SKIP
    >>> summary.company_pages  # doctest: +SKIP
    200
"""

from .formatting import (
    clean_html_output,
    format_opening_hours,
    format_phone_number,
    format_services,
    render_description_html,
    render_star_rating,
)
from .renderer import (
    render_category_page,
    render_city_page,
    render_company_page,
    render_html_sitemap,
    render_state_page,
)
from .runner import GenerationSummary, configure_logging, run_from_config, run_pipeline
from .settings import SiteSettings
from .sitemaps import build_all_sitemaps, build_company_sitemaps, build_sitemap_index
from .writer import write_html_output, write_json_snapshots, write_page

__all__ = [
    "GenerationSummary",
    "SiteSettings",
    "build_all_sitemaps",
    "build_company_sitemaps",
    "build_sitemap_index",
    "clean_html_output",
    "configure_logging",
    "format_opening_hours",
    "format_phone_number",
    "format_services",
    "render_category_page",
    "render_city_page",
    "render_company_page",
    "render_description_html",
    "render_html_sitemap",
    "render_star_rating",
    "render_state_page",
    "run_from_config",
    "run_pipeline",
    "write_html_output",
    "write_json_snapshots",
    "write_page",
]
