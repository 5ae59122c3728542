"""Tests for count accumulation over resolved directory records.
"""

from src.pipeline.directory_data.data_aggregator import Aggregates, aggregate_counts


def test_aggregate_counts_per_dimension() -> None:
    businesses = [
        {"id": "1", "city_id": "c1", "state_id": "s1", "category_ids": "k1,k2"},
        {"id": "2", "city_id": "c1", "state_id": "s1", "category_ids": "k1"},
        {"id": "3", "city_id": "c2", "state_id": "s2", "category_ids": ""},
        {"id": "4", "city_id": "", "state_id": "", "category_ids": "k9"},
    ]
    cities = [
        {"id": "c1", "state_id": "s1"},
        {"id": "c2", "state_id": "s2"},
        {"id": "c3", "state_id": "s1"},
        {"id": "c4", "state_id": "missing"},
    ]
    states = [{"id": "s1"}, {"id": "s2"}, {"id": "s3"}]
    categories = [{"id": "k1"}, {"id": "k2"}, {"id": "k3"}]

    agg = aggregate_counts(businesses, cities, states, categories)

    assert agg.city_salon_counts == {"c1": 2, "c2": 1}
    assert agg.state_salon_counts == {"s1": 2, "s2": 1}
    assert agg.state_city_counts == {"s1": 2, "s2": 1}
    assert agg.category_salon_counts == {"k1": 2, "k2": 1}
    assert agg.city_salons("c3") == 0
    assert agg.state_cities("s3") == 0
    assert agg.category_salons("k3") == 0
    assert agg.category_salons("k9") == 0


def test_city_count_equals_cities_in_state() -> None:
    cities = [{"id": str(i), "state_id": "s1" if i % 3 else "s2"} for i in range(10)]
    states = [{"id": "s1"}, {"id": "s2"}]
    agg = aggregate_counts([], cities, states, [])
    for state in states:
        expected = sum(1 for city in cities if city["state_id"] == state["id"])
        assert agg.state_cities(state["id"]) == expected


def test_category_count_matches_membership() -> None:
    businesses = [
        {"id": "1", "category_ids": "a, b, a"},
        {"id": "2", "category_ids": "b"},
        {"id": "3"},
    ]
    agg = aggregate_counts(businesses, [], [], [{"id": "a"}, {"id": "b"}])
    assert agg.category_salons("a") == 1
    assert agg.category_salons("b") == 2


def test_aggregate_counts_fresh_each_pass() -> None:
    businesses = [{"id": "1", "city_id": "c1"}]
    cities = [{"id": "c1"}]
    first = aggregate_counts(businesses, cities, [], [])
    second = aggregate_counts(businesses, cities, [], [])
    assert first == second
    assert first.city_salons("c1") == 1
    assert Aggregates().city_salons("c1") == 0
