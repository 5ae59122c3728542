"""Tests for the output filesystem sink.
"""

import json
from pathlib import Path

import pytest

from src.exceptions import OutputWriteError
from src.pipeline.directory_data.projections import Projections
from src.pipeline.website_generator import writer as w


def test_ensure_output_tree_creates_sections(tmp_path: Path) -> None:
    w.ensure_output_tree(tmp_path / "site")
    for subdir in w.OUTPUT_SUBDIRS:
        assert (tmp_path / "site" / subdir).is_dir()


def test_write_page_uses_slug_directory(tmp_path: Path) -> None:
    target = w.write_page(tmp_path, "companies", "smooth-skin-1", "<html></html>")
    assert target == tmp_path / "companies" / "smooth-skin-1" / "index.html"
    assert target.read_text(encoding="utf-8") == "<html></html>"


def test_write_text_output_failure_is_fatal(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("file", encoding="utf-8")
    with pytest.raises(OutputWriteError) as excinfo:
        w.write_text_output("x", blocker / "child.html")
    assert excinfo.value.code == "OUTPUT_WRITE_ERROR"


def test_write_json_snapshots(tmp_path: Path) -> None:
    projections = Projections(
        businesses=[{"id": "1", "title": "Café", "slug": "cafe-1", "images": []}],
        cities=[{"id": "c1", "city": "Austin", "salon_ids": ["1"]}],
        states=[],
        categories=[{"id": "k1", "category": "Electrolysis", "salon_ids": []}],
    )
    paths = w.write_json_snapshots(tmp_path, projections)
    assert [p.name for p in paths] == [
        "salons.json",
        "cities.json",
        "states.json",
        "categories.json",
    ]
    salons_text = (tmp_path / "data" / "salons.json").read_text(encoding="utf-8")
    assert "Café" in salons_text
    assert json.loads(salons_text) == projections.businesses
    assert json.loads((tmp_path / "data" / "states.json").read_text(encoding="utf-8")) == []
