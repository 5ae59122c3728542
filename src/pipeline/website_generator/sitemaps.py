"""XML sitemap assembly.

Company URLs are split into shards of at most ``batch_size`` entries
(``companies-sitemap1.xml``, ``companies-sitemap2.xml``, ...); cities, states
and categories each get a single sitemap. A sitemap index references every
generated file. Functions here return ``{filename: xml}`` mappings and never
touch the filesystem.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any, TypeVar
from xml.sax.saxutils import escape

from src.config import (
    CATEGORIES_SUBDIR,
    CITIES_SUBDIR,
    COMPANIES_SUBDIR,
    COMPANY_CHANGEFREQ,
    COMPANY_PRIORITY,
    LOCATION_CHANGEFREQ,
    LOCATION_PRIORITY,
    SITEMAP_BATCH_SIZE,
    SITEMAP_NAMESPACE,
    STATES_SUBDIR,
    XML_SITEMAPS_SUBDIR,
)

T = TypeVar("T")

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'
CITIES_SITEMAP_FILENAME = "cities-sitemap.xml"
STATES_SITEMAP_FILENAME = "states-sitemap.xml"
CATEGORIES_SITEMAP_FILENAME = "categories-sitemap.xml"


def chunk_records(records: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """Yield consecutive slices of at most ``size`` records.

    >>> [list(chunk) for chunk in chunk_records([1, 2, 3], 2)]
    [[1, 2], [3]]
    """
    if size <= 0:
        raise ValueError("Chunk size must be positive.")
    for start in range(0, len(records), size):
        yield records[start : start + size]


def section_url(base_url: str, section: str, slug: str) -> str:
    """Absolute URL of a generated page: ``<base>/<section>/<slug>/``."""
    return f"{base_url.rstrip('/')}/{section}/{slug}/"


def build_urlset(locs: Iterable[str], changefreq: str, priority: str) -> str:
    """Build a ``<urlset>`` document with one ``<url>`` per location.

    >>> print(build_urlset(["https://x.test/a/"], "weekly", "0.7"))  # doctest: +NORMALIZE_WHITESPACE
    <?xml version="1.0" encoding="UTF-8"?>
    <urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
      <url>
        <loc>https://x.test/a/</loc>
        <changefreq>weekly</changefreq>
        <priority>0.7</priority>
      </url>
    </urlset>
    """
    parts = [XML_DECLARATION, f'<urlset xmlns="{SITEMAP_NAMESPACE}">\n']
    for loc in locs:
        parts.append(
            "  <url>\n"
            f"    <loc>{escape(loc)}</loc>\n"
            f"    <changefreq>{changefreq}</changefreq>\n"
            f"    <priority>{priority}</priority>\n"
            "  </url>\n"
        )
    parts.append("</urlset>")
    return "".join(parts)


def build_company_sitemaps(
    businesses: Sequence[Mapping[str, Any]],
    base_url: str,
    batch_size: int = SITEMAP_BATCH_SIZE,
) -> dict[str, str]:
    """Build the sharded company sitemaps, in shard order.

    Zero businesses produce zero shards. Records without a slug are left out.
    """
    businesses = [business for business in businesses if business.get("slug")]
    shards: dict[str, str] = {}
    for number, chunk in enumerate(chunk_records(businesses, batch_size), start=1):
        shards[f"companies-sitemap{number}.xml"] = build_urlset(
            (
                section_url(base_url, COMPANIES_SUBDIR, business["slug"])
                for business in chunk
            ),
            COMPANY_CHANGEFREQ,
            COMPANY_PRIORITY,
        )
    return shards


def build_location_sitemap(
    records: Iterable[Mapping[str, Any]], base_url: str, section: str
) -> str:
    """Build a single city, state or category sitemap, skipping records without a slug."""
    return build_urlset(
        (
            section_url(base_url, section, record["slug"])
            for record in records
            if record.get("slug")
        ),
        LOCATION_CHANGEFREQ,
        LOCATION_PRIORITY,
    )


def build_sitemap_index(filenames: Iterable[str], base_url: str, lastmod: str) -> str:
    """Build the ``<sitemapindex>`` document referencing every sitemap file."""
    parts = [XML_DECLARATION, f'<sitemapindex xmlns="{SITEMAP_NAMESPACE}">\n']
    root = base_url.rstrip("/")
    for filename in filenames:
        parts.append(
            "  <sitemap>\n"
            f"    <loc>{escape(f'{root}/{XML_SITEMAPS_SUBDIR}/{filename}')}</loc>\n"
            f"    <lastmod>{escape(lastmod)}</lastmod>\n"
            "  </sitemap>\n"
        )
    parts.append("</sitemapindex>")
    return "".join(parts)


def build_all_sitemaps(
    businesses: Sequence[Mapping[str, Any]],
    cities: Sequence[Mapping[str, Any]],
    states: Sequence[Mapping[str, Any]],
    categories: Sequence[Mapping[str, Any]],
    base_url: str,
    lastmod: str,
    batch_size: int = SITEMAP_BATCH_SIZE,
) -> tuple[dict[str, str], str]:
    """Build every shard plus the index.

    Returns
    -------
    tuple[dict[str, str], str]
        ``{filename: xml}`` for the files under ``sitemaps/`` and the index
        document.
    """
    documents = build_company_sitemaps(businesses, base_url, batch_size)
    documents[CITIES_SITEMAP_FILENAME] = build_location_sitemap(
        cities, base_url, CITIES_SUBDIR
    )
    documents[STATES_SITEMAP_FILENAME] = build_location_sitemap(
        states, base_url, STATES_SUBDIR
    )
    documents[CATEGORIES_SITEMAP_FILENAME] = build_location_sitemap(
        categories, base_url, CATEGORIES_SUBDIR
    )
    return documents, build_sitemap_index(documents, base_url, lastmod)
