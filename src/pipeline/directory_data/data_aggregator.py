"""Count aggregation over resolved directory records.

Counts are returned as explicit ``id -> count`` accumulator maps instead of
being written back onto the entities, so the counting pass has no side
effects and can be tested in isolation.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from .data_loader import Record, split_multi_value
from .resolver import build_index


@dataclass(frozen=True)
class Aggregates:
    """Accumulated counts for one resolution pass."""

    city_salon_counts: dict[str, int] = field(default_factory=dict)
    state_salon_counts: dict[str, int] = field(default_factory=dict)
    state_city_counts: dict[str, int] = field(default_factory=dict)
    category_salon_counts: dict[str, int] = field(default_factory=dict)

    def city_salons(self, city_id: str) -> int:
        return self.city_salon_counts.get(city_id, 0)

    def state_salons(self, state_id: str) -> int:
        return self.state_salon_counts.get(state_id, 0)

    def state_cities(self, state_id: str) -> int:
        return self.state_city_counts.get(state_id, 0)

    def category_salons(self, category_id: str) -> int:
        return self.category_salon_counts.get(category_id, 0)


def aggregate_counts(
    businesses: Iterable[Record],
    cities: Iterable[Record],
    states: Iterable[Record],
    categories: Iterable[Record],
) -> Aggregates:
    """Count businesses per city, state and category, and cities per state.

    Parameters
    ----------
    businesses : Iterable[dict[str, str]]
        Resolved business records.
    cities : Iterable[dict[str, str]]
        Resolved city records.
    states, categories : Iterable[dict[str, str]]
        State and category records, used only to decide which ids count.

    Returns
    -------
    Aggregates
        Fresh accumulators. A business that did not resolve to a city or
        state contributes nothing to that dimension, and a business counts at
        most once per category even if the id is repeated in its
        ``category_ids``.

    Examples
    --------
    >>> agg = aggregate_counts(
    ...     [{"id": "1", "city_id": "c", "state_id": "s", "category_ids": "k,k"}],
    ...     [{"id": "c", "state_id": "s"}],
    ...     [{"id": "s"}],
    ...     [{"id": "k"}],
    ... )
    >>> agg.city_salons("c"), agg.state_salons("s"), agg.state_cities("s"), agg.category_salons("k")
    (1, 1, 1, 1)
    """
    city_list = list(cities)
    city_ids = set(build_index(city_list))
    state_ids = set(build_index(states))
    category_ids = set(build_index(categories))

    city_salons: Counter[str] = Counter()
    state_salons: Counter[str] = Counter()
    category_salons: Counter[str] = Counter()
    for business in businesses:
        city_id = business.get("city_id", "")
        if city_id in city_ids:
            city_salons[city_id] += 1
        state_id = business.get("state_id", "")
        if state_id in state_ids:
            state_salons[state_id] += 1
        for category_id in dict.fromkeys(
            split_multi_value(business.get("category_ids"))
        ):
            if category_id in category_ids:
                category_salons[category_id] += 1

    state_cities: Counter[str] = Counter()
    for city in city_list:
        state_id = city.get("state_id", "")
        if state_id in state_ids:
            state_cities[state_id] += 1

    return Aggregates(
        city_salon_counts=dict(city_salons),
        state_salon_counts=dict(state_salons),
        state_city_counts=dict(state_cities),
        category_salon_counts=dict(category_salons),
    )
