"""Generate the static directory website from the zipped dataset.

This module provides the headless runner that wires the stages together:
load the archive, resolve keys, count, project, then write JSON snapshots,
pages and sitemaps. Stages run strictly in sequence and each consumes the
previous stage's in-memory output.

Usage Examples
--------------
Typical programmatic usage with config defaults::

    from src.pipeline.website_generator.runner import run_from_config
    result = run_from_config()
    assert result is True

Explicit path usage::

    from pathlib import Path
    from src.pipeline.website_generator.runner import run_from_config

    run_from_config(
        zip_path=Path("data/data.zip"),
        output_dir=Path("public"),
        base_url="https://staging.example.com",
    )

"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from src.config import (
    CATEGORIES_SUBDIR,
    CITIES_SUBDIR,
    COMPANIES_SUBDIR,
    DEBUG_SAMPLE_SIZE,
    HTML_SITEMAP_CITY_LIMIT,
    HTML_SITEMAP_SUBDIR,
    LOG_DIR,
    LOG_FILENAME_GENERATE_SITE,
    LOG_FORMAT,
    PAGE_FILENAME,
    PROGRESS_LOG_INTERVAL,
    SITEMAP_INDEX_FILENAME,
    STATES_SUBDIR,
    XML_SITEMAPS_SUBDIR,
)
from src.exceptions import AppError
from src.pipeline.directory_data import (
    Projections,
    aggregate_counts,
    build_index,
    build_projections,
    load_directory_data,
    resolve_directory,
)

from .renderer import (
    render_all_cities_sitemap,
    render_category_page,
    render_city_page,
    render_company_page,
    render_html_sitemap,
    render_state_page,
)
from .settings import SiteSettings
from .sitemaps import build_all_sitemaps
from .writer import (
    ensure_output_tree,
    write_html_output,
    write_json_snapshots,
    write_page,
    write_text_output,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationSummary:
    """Counts of what a run produced."""

    businesses: int
    cities: int
    states: int
    categories: int
    company_pages: int
    city_pages: int
    state_pages: int
    category_pages: int
    sitemap_files: int
    output_dir: Path


def configure_logging(log_level: str = "INFO", enable_file: bool = True) -> None:
    r"""Configure logging for a site generation run.

    Installs a console handler and, when ``enable_file`` is true, a file
    handler appending to ``LOG_DIR / LOG_FILENAME_GENERATE_SITE``. Failures
    creating the file handler are ignored so the run still logs to the
    console. Existing root handlers are removed first, which makes the call
    idempotent.

    Parameters
    ----------
    log_level : str, optional
        Logging level name (e.g. ``"INFO"``, ``"DEBUG"``).
    enable_file : bool, optional
        Whether to also log to a file.
    """
    for h in logging.root.handlers[:]:
        logging.root.removeHandler(h)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if enable_file and not os.environ.get("DISABLE_FILE_LOGS"):
        try:
            LOG_DIR.mkdir(exist_ok=True)
            handlers.insert(
                0,
                logging.FileHandler(LOG_DIR / LOG_FILENAME_GENERATE_SITE, mode="a"),
            )
        except OSError:
            pass
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )


def _log_samples(projections: Projections) -> None:
    for i, salon in enumerate(projections.businesses[:DEBUG_SAMPLE_SIZE], start=1):
        logger.debug(
            'Salon %d: "%s" - City: %s, State: %s',
            i,
            salon["title"],
            salon.get("city_name", ""),
            salon.get("state_name", ""),
        )
    for i, city in enumerate(projections.cities[:DEBUG_SAMPLE_SIZE], start=1):
        logger.debug(
            'City %d: "%s" - Salon count: %d', i, city["city"], len(city["salon_ids"])
        )
    for i, state in enumerate(projections.states[:DEBUG_SAMPLE_SIZE], start=1):
        logger.debug(
            'State %d: "%s" - Cities: %d, Salons: %d',
            i,
            state["state"],
            len(state["city_ids"]),
            len(state["salon_ids"]),
        )


def _has_slug(section: str, record: dict) -> bool:
    if record.get("slug"):
        return True
    logger.warning(
        "Skipping %s record %r with an empty slug",
        section,
        record.get("id", ""),
    )
    return False


def write_pages(
    projections: Projections,
    output_dir: Path,
    site_name: str,
    year: int | None = None,
) -> dict[str, int]:
    """Render and write every company, city, state and category page.

    Returns
    -------
    dict[str, int]
        Number of pages written per section.
    """
    businesses_by_id = build_index(projections.businesses)
    cities_by_id = build_index(projections.cities)
    categories_by_id = build_index(projections.categories)

    company_pages = 0
    for business in projections.businesses:
        if not _has_slug(COMPANIES_SUBDIR, business):
            continue
        html = render_company_page(
            business, categories_by_id, site_name=site_name, year=year
        )
        write_page(output_dir, COMPANIES_SUBDIR, business["slug"], html)
        company_pages += 1
        if company_pages % PROGRESS_LOG_INTERVAL == 0:
            logger.info("Generated %d company pages...", company_pages)
    logger.info("Generated %d company pages.", company_pages)

    city_pages = 0
    for city in projections.cities:
        if not _has_slug(CITIES_SUBDIR, city):
            continue
        city_businesses = [
            businesses_by_id[salon_id]
            for salon_id in city["salon_ids"]
            if salon_id in businesses_by_id
        ]
        html = render_city_page(
            city, city_businesses, projections.cities, site_name=site_name, year=year
        )
        write_page(output_dir, CITIES_SUBDIR, city["slug"], html)
        city_pages += 1
        if city_pages % PROGRESS_LOG_INTERVAL == 0:
            logger.info("Generated %d city pages...", city_pages)
    logger.info("Generated %d city pages.", city_pages)

    state_pages = 0
    for state in projections.states:
        if not _has_slug(STATES_SUBDIR, state):
            continue
        state_cities = [
            cities_by_id[city_id] for city_id in state["city_ids"] if city_id in cities_by_id
        ]
        state_businesses = [
            businesses_by_id[salon_id]
            for salon_id in state["salon_ids"]
            if salon_id in businesses_by_id
        ]
        html = render_state_page(
            state, state_cities, state_businesses, site_name=site_name, year=year
        )
        write_page(output_dir, STATES_SUBDIR, state["slug"], html)
        state_pages += 1
    logger.info("Generated %d state pages.", state_pages)

    category_pages = 0
    for category in projections.categories:
        if not _has_slug(CATEGORIES_SUBDIR, category):
            continue
        category_businesses = [
            businesses_by_id[salon_id]
            for salon_id in category["salon_ids"]
            if salon_id in businesses_by_id
        ]
        html = render_category_page(
            category, category_businesses, site_name=site_name, year=year
        )
        write_page(output_dir, CATEGORIES_SUBDIR, category["slug"], html)
        category_pages += 1
    logger.info("Generated %d category pages.", category_pages)

    return {
        COMPANIES_SUBDIR: company_pages,
        CITIES_SUBDIR: city_pages,
        STATES_SUBDIR: state_pages,
        CATEGORIES_SUBDIR: category_pages,
    }


def write_sitemaps(
    projections: Projections,
    settings: SiteSettings,
    lastmod: str | None = None,
    year: int | None = None,
) -> int:
    """Write the XML sitemaps, their index and the HTML sitemap pages.

    Returns
    -------
    int
        Number of XML sitemap files written, the index included.
    """
    logger.info("Generating sitemaps...")
    output_dir = settings.output_dir
    stamp = lastmod or datetime.now(timezone.utc).isoformat()
    documents, index_xml = build_all_sitemaps(
        projections.businesses,
        projections.cities,
        projections.states,
        projections.categories,
        settings.base_url,
        stamp,
        settings.sitemap_batch_size,
    )
    for filename, xml in documents.items():
        write_text_output(xml, output_dir / XML_SITEMAPS_SUBDIR / filename)
    write_text_output(index_xml, output_dir / SITEMAP_INDEX_FILENAME)

    write_html_output(
        render_html_sitemap(
            projections.states,
            projections.cities,
            projections.categories,
            site_name=settings.site_name,
            year=year,
        ),
        output_dir / HTML_SITEMAP_SUBDIR / PAGE_FILENAME,
    )
    if len(projections.cities) > HTML_SITEMAP_CITY_LIMIT:
        write_page(
            output_dir,
            HTML_SITEMAP_SUBDIR,
            CITIES_SUBDIR,
            render_all_cities_sitemap(
                projections.cities, site_name=settings.site_name, year=year
            ),
        )
    logger.info("Sitemaps generated successfully!")
    return len(documents) + 1


def run_pipeline(
    settings: SiteSettings, *, lastmod: str | None = None, year: int | None = None
) -> GenerationSummary:
    """Run every stage once and return what was produced.

    Parameters
    ----------
    settings : SiteSettings
        Input archive, output directory and site options.
    lastmod : str or None, optional
        Timestamp for the sitemap index; defaults to now (UTC, ISO 8601).
    year : int or None, optional
        Copyright year for page footers; defaults to the current year.

    Raises
    ------
    DataLoadError
        If the archive or a required member cannot be read.
    OutputWriteError
        If any output file cannot be written.
    """
    logger.info("Starting HTML generation...")
    ensure_output_tree(settings.output_dir)

    data = load_directory_data(settings.zip_path)
    resolved = resolve_directory(data)
    aggregates = aggregate_counts(
        resolved.businesses, resolved.cities, resolved.states, resolved.categories
    )
    projections = build_projections(resolved, aggregates)
    _log_samples(projections)

    write_json_snapshots(settings.output_dir, projections)
    pages = write_pages(projections, settings.output_dir, settings.site_name, year)
    sitemap_files = write_sitemaps(projections, settings, lastmod, year)
    logger.info("HTML generation completed successfully!")

    return GenerationSummary(
        businesses=len(projections.businesses),
        cities=len(projections.cities),
        states=len(projections.states),
        categories=len(projections.categories),
        company_pages=pages[COMPANIES_SUBDIR],
        city_pages=pages[CITIES_SUBDIR],
        state_pages=pages[STATES_SUBDIR],
        category_pages=pages[CATEGORIES_SUBDIR],
        sitemap_files=sitemap_files,
        output_dir=settings.output_dir,
    )


def run_from_config(
    zip_path: Path | None = None,
    output_dir: Path | None = None,
    base_url: str | None = None,
) -> bool:
    """Generate the site, returning ``True`` on success and ``False`` on failure.

    If any argument is ``None`` the environment or ``src.config`` default is
    used. Exceptions are logged, not raised.

    Examples
    --------
    >>> from src.pipeline.website_generator.runner import run_from_config
    >>> result = run_from_config()  # doctest: +SKIP
    >>> assert result in (True, False)  # doctest: +SKIP
    """
    try:
        settings = SiteSettings(
            zip_path=zip_path, output_dir=output_dir, base_url=base_url
        )
        run_pipeline(settings)
        return True
    except AppError as exc:
        logger.exception("Error generating HTML: %s", exc.to_dict())
        return False
    except Exception:
        logger.exception("Error generating HTML")
        return False


__all__ = [
    "GenerationSummary",
    "configure_logging",
    "run_from_config",
    "run_pipeline",
    "write_pages",
    "write_sitemaps",
]
