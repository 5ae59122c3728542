"""Tests for slugged projections and back-references.
"""

from src.pipeline.directory_data.data_aggregator import aggregate_counts
from src.pipeline.directory_data.projections import (
    build_projections,
    business_slug,
    category_slug,
    city_slug,
    project_businesses,
    state_slug,
)
from src.pipeline.directory_data.resolver import ResolvedDirectory


def _resolved() -> ResolvedDirectory:
    return ResolvedDirectory(
        businesses=[
            {
                "id": "1",
                "title": "Smooth Skin",
                "city_id": "c1",
                "city_name": "Austin",
                "state_id": "s1",
                "state_name": "Texas",
                "category_ids": "k1, k2",
                "images": "a.jpg,b.jpg",
                "telephone": "5125550100",
            },
            {
                "id": "2",
                "title": "Smooth Skin",
                "city_name": "austin",
                "category_ids": "k1",
            },
            {"id": "3", "title": "Lone Studio", "state_name": "TEXAS"},
            {"id": "4", "title": "Dallas Hair Free", "city_id": "c2"},
            {"id": "5", "title": "Nowhere"},
        ],
        cities=[
            {"id": "c1", "city": "Austin", "state_id": "s1", "state_name": "Texas"},
            {"id": "c2", "city": "Dallas", "state_id": "", "state_name": "texas"},
            {"id": "c3", "city": "Reno", "state_id": "s2", "state_name": "Nevada"},
        ],
        states=[{"id": "s1", "state": "Texas"}, {"id": "s2", "state": "Nevada"}],
        categories=[
            {"id": "k1", "category": "Electrolysis"},
            {"id": "k2", "category": "Laser & Waxing"},
        ],
    )


def _projections():
    resolved = _resolved()
    aggregates = aggregate_counts(
        resolved.businesses, resolved.cities, resolved.states, resolved.categories
    )
    return build_projections(resolved, aggregates)


def test_slug_helpers() -> None:
    assert city_slug({"city": "St. Louis", "state_id": "MO1"}) == "st-louis-mo1"
    assert state_slug({"state": "New York"}) == "new-york"
    assert category_slug({"category": "Laser & Waxing"}) == "laser-waxing"
    assert business_slug({"id": "9", "title": "Café Éclat"}) == "unknown-city-us-cafe-eclat-9"


def test_business_slugs_unique_for_same_title() -> None:
    projected = _projections().businesses
    slugs = [b["slug"] for b in projected]
    assert len(set(slugs)) == len(slugs)
    assert slugs[0] == "austin-texas-smooth-skin-1"
    assert slugs[1] == "austin-us-smooth-skin-2"


def test_project_businesses_splits_lists_and_keeps_present_scalars() -> None:
    [first, second] = project_businesses(
        [
            {"id": "1", "title": "A", "images": "x.jpg, y.jpg", "telephone": "1"},
            {"id": "2", "title": "B"},
        ]
    )
    assert first["images"] == ["x.jpg", "y.jpg"]
    assert first["telephone"] == "1"
    assert second["category_ids"] == []
    assert "telephone" not in second


def test_city_back_references_use_id_or_name() -> None:
    cities = {c["id"]: c for c in _projections().cities}
    assert cities["c1"]["salon_ids"] == ["1", "2"]
    assert cities["c1"]["salon_count"] == 1
    assert cities["c2"]["salon_ids"] == ["4"]
    assert cities["c3"]["salon_ids"] == []
    assert cities["c3"]["slug"] == "reno-s2"


def test_state_back_references_include_city_members() -> None:
    states = {s["id"]: s for s in _projections().states}
    texas = states["s1"]
    assert texas["city_ids"] == ["c1", "c2"]
    assert texas["salon_ids"] == ["1", "3", "4"]
    assert texas["city_count"] == 1
    assert texas["salon_count"] == 1
    assert states["s2"]["city_ids"] == ["c3"]
    assert states["s2"]["salon_ids"] == []


def test_category_back_references_by_id_only() -> None:
    categories = {c["id"]: c for c in _projections().categories}
    assert categories["k1"]["salon_ids"] == ["1", "2"]
    assert categories["k1"]["salon_count"] == 2
    assert categories["k2"]["salon_ids"] == ["1"]
    assert categories["k2"]["slug"] == "laser-waxing"


def test_back_references_list_each_business_once() -> None:
    projections = _projections()
    for collection in (projections.cities, projections.states, projections.categories):
        for item in collection:
            assert len(item["salon_ids"]) == len(set(item["salon_ids"]))
