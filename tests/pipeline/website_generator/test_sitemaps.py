"""Tests for XML sitemap sharding and the sitemap index.
"""

import xml.etree.ElementTree as ET

import pytest

from src.config import SITEMAP_NAMESPACE
from src.pipeline.website_generator.sitemaps import (
    build_all_sitemaps,
    build_company_sitemaps,
    build_location_sitemap,
    build_sitemap_index,
    build_urlset,
    chunk_records,
    section_url,
)

NS = {"sm": SITEMAP_NAMESPACE}
BASE = "https://example.test"


def _businesses(n: int):
    return [{"id": str(i), "slug": f"biz-{i}"} for i in range(n)]


def _locs(xml: str) -> list[str]:
    root = ET.fromstring(xml.encode("utf-8"))
    return [el.text for el in root.findall(".//sm:loc", NS)]


def test_chunk_records_rejects_non_positive() -> None:
    with pytest.raises(ValueError):
        list(chunk_records([1], 0))


def test_section_url_strips_trailing_slash() -> None:
    assert section_url(BASE + "/", "companies", "a") == f"{BASE}/companies/a/"


def test_build_urlset_escapes_and_is_valid_xml() -> None:
    xml = build_urlset([f"{BASE}/a/?x=1&y=2"], "weekly", "0.7")
    assert "&amp;" in xml
    assert _locs(xml) == [f"{BASE}/a/?x=1&y=2"]


def test_exactly_one_shard_at_batch_boundary() -> None:
    shards = build_company_sitemaps(_businesses(200), BASE, 200)
    assert list(shards) == ["companies-sitemap1.xml"]
    assert shards["companies-sitemap1.xml"].count("<url>") == 200


def test_second_shard_after_boundary() -> None:
    shards = build_company_sitemaps(_businesses(201), BASE, 200)
    assert list(shards) == ["companies-sitemap1.xml", "companies-sitemap2.xml"]
    assert shards["companies-sitemap2.xml"].count("<url>") == 1
    assert _locs(shards["companies-sitemap2.xml"]) == [f"{BASE}/companies/biz-200/"]


def test_no_businesses_no_shards() -> None:
    assert build_company_sitemaps([], BASE) == {}


def test_company_entries_carry_frequency_and_priority() -> None:
    xml = build_company_sitemaps(_businesses(1), BASE)["companies-sitemap1.xml"]
    assert "<changefreq>monthly</changefreq>" in xml
    assert "<priority>0.8</priority>" in xml


def test_location_sitemap() -> None:
    xml = build_location_sitemap([{"slug": "austin-s1"}], BASE, "cities")
    assert _locs(xml) == [f"{BASE}/cities/austin-s1/"]
    assert "<changefreq>weekly</changefreq>" in xml


def test_records_without_slug_are_left_out() -> None:
    xml = build_location_sitemap([{"slug": ""}, {"slug": "texas"}], BASE, "states")
    assert _locs(xml) == [f"{BASE}/states/texas/"]
    shards = build_company_sitemaps([{"id": "1", "slug": ""}], BASE)
    assert shards == {}


def test_sitemap_index_references_every_file() -> None:
    xml = build_sitemap_index(["a.xml", "b.xml"], BASE, "2024-01-01T00:00:00+00:00")
    assert _locs(xml) == [f"{BASE}/sitemaps/a.xml", f"{BASE}/sitemaps/b.xml"]
    assert xml.count("<lastmod>2024-01-01T00:00:00+00:00</lastmod>") == 2


def test_build_all_sitemaps() -> None:
    documents, index_xml = build_all_sitemaps(
        _businesses(3),
        [{"slug": "c"}],
        [{"slug": "s"}],
        [{"slug": "k"}],
        BASE,
        "2024-01-01",
        batch_size=2,
    )
    assert list(documents) == [
        "companies-sitemap1.xml",
        "companies-sitemap2.xml",
        "cities-sitemap.xml",
        "states-sitemap.xml",
        "categories-sitemap.xml",
    ]
    assert len(_locs(index_xml)) == len(documents)
    assert _locs(documents["categories-sitemap.xml"]) == [f"{BASE}/categories/k/"]
