"""Relational backfill for businesses and cities.

The resolver reconciles the loosely linked CSV collections: it copies state
names onto cities and fills in missing city/state keys on businesses, using
only data present in the same batch. It works on immutable ``id -> record``
indices built once up front and always returns new record copies; the raw
collections handed in are never modified.

Stages run in a fixed order because each depends on the one before it:

1. state-name backfill on cities,
2. per-business backfill: (a) from ``city_id``, (b) state abbreviation taken
   from the free-text address, (c) city name taken from the free-text
   address.

Every lookup miss leaves the field as it was. There is no fixpoint
iteration: a value inferred in one stage is not fed back into earlier ones.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .data_loader import DirectoryData, Record


@dataclass(frozen=True)
class ResolvedDirectory:
    """Resolved copies of the four collections, in their original order."""

    businesses: list[Record]
    cities: list[Record]
    states: list[Record]
    categories: list[Record]


def build_index(records: Iterable[Record], key: str = "id") -> Mapping[str, Record]:
    """Return a read-only ``key -> record`` index; the first record wins on duplicates.

    Records with an empty key are left out.
    """
    index: dict[str, Record] = {}
    for record in records:
        value = record.get(key, "")
        if value:
            index.setdefault(value, record)
    return MappingProxyType(index)


def _address_segments(address: str) -> list[str]:
    return [segment.strip() for segment in address.split(",")]


def _last_token(segment: str) -> str:
    tokens = segment.split()
    return tokens[-1] if tokens else ""


def _abbreviation_matches(token: str, state_name: str) -> bool:
    """Check a two-letter token against a state's display name.

    The token matches the first two characters of the name, or the initials
    of a multi-word name ("NY" for "New York").
    """
    token = token.upper()
    if state_name[:2].upper() == token:
        return True
    words = state_name.split()
    return len(words) > 1 and "".join(word[0] for word in words).upper() == token


def state_abbreviation_from_address(address: str) -> str:
    """Extract a candidate two-letter state abbreviation from an address.

    The last whitespace token of the second-to-last comma segment is used.
    When that token is not two characters long (addresses with no trailing
    country segment) the last token of the final segment is tried instead.
    Returns ``""`` when no two-character candidate exists.

    >>> state_abbreviation_from_address("123 Main St, Springfield, IL, USA")
    'IL'
    >>> state_abbreviation_from_address("1 A St, Suite 2, New York, NY")
    'NY'
    >>> state_abbreviation_from_address("Main St")
    ''
    """
    segments = _address_segments(address)
    if len(segments) < 2:
        return ""
    token = _last_token(segments[-2])
    if len(token) != 2:
        token = _last_token(segments[-1])
    return token if len(token) == 2 else ""


def infer_state_from_address(
    address: str, states: Iterable[Record]
) -> Record | None:
    """Return the first state whose name matches the address abbreviation.

    Ties are broken by iteration order of ``states``. This is a heuristic
    and returns ``None`` when nothing matches.
    """
    token = state_abbreviation_from_address(address)
    if not token:
        return None
    for state in states:
        if _abbreviation_matches(token, state.get("state", "")):
            return state
    return None


def infer_city_from_address(address: str, cities: Iterable[Record]) -> Record | None:
    """Return the first city named like the third-to-last address segment.

    Comparison is exact and case-insensitive. Addresses with fewer than three
    comma-separated segments never match.
    """
    segments = _address_segments(address)
    if len(segments) < 3:
        return None
    candidate = segments[-3].lower()
    if not candidate:
        return None
    for city in cities:
        if city.get("city", "").lower() == candidate:
            return city
    return None


def resolve_cities(
    cities: Iterable[Record], states_by_id: Mapping[str, Record]
) -> list[Record]:
    """Return copies of ``cities`` with ``state_name`` taken from their state."""
    resolved: list[Record] = []
    for city in cities:
        copy = dict(city)
        state = states_by_id.get(copy.get("state_id", ""))
        copy["state_name"] = state.get("state", "") if state is not None else ""
        resolved.append(copy)
    return resolved


def resolve_business(
    business: Record,
    cities_by_id: Mapping[str, Record],
    states_by_id: Mapping[str, Record],
) -> Record:
    """Return a copy of ``business`` with city and state keys backfilled.

    Parameters
    ----------
    business : dict[str, str]
        Raw business record.
    cities_by_id : Mapping[str, dict[str, str]]
        Index of cities that already carry their ``state_name``.
    states_by_id : Mapping[str, dict[str, str]]
        Index of states.

    Returns
    -------
    dict[str, str]
        New record. The input is not modified.

    Notes
    -----
    A city found through ``city_id`` overrides any state the business
    already had. A city found through the address only contributes its state
    when the business has no ``state_id`` of its own.

    Examples
    --------
    >>> cities = build_index([{"id": "9", "city": "Springfield", "state_id": "IL1"}])
    >>> states = build_index([{"id": "IL1", "state": "Illinois"}])
    >>> out = resolve_business(
    ...     {"id": "5", "city_id": "", "address": "123 Main St, Springfield, IL, USA"},
    ...     cities, states,
    ... )
    >>> out["city_id"], out["city_name"], out["state_id"]
    ('9', 'Springfield', 'IL1')
    """
    resolved = dict(business)

    city = cities_by_id.get(resolved.get("city_id", ""))
    if city is not None:
        resolved["city_name"] = city.get("city", "")
        state = states_by_id.get(city.get("state_id", ""))
        if state is not None:
            resolved["state_id"] = state["id"]
            resolved["state_name"] = state.get("state", "")

    address = resolved.get("address", "")

    if address and not (resolved.get("state_id") and resolved.get("state_name")):
        state = infer_state_from_address(address, states_by_id.values())
        if state is not None:
            resolved["state_id"] = state["id"]
            resolved["state_name"] = state.get("state", "")

    if address and not resolved.get("city_name"):
        city = infer_city_from_address(address, cities_by_id.values())
        if city is not None:
            resolved["city_id"] = city["id"]
            resolved["city_name"] = city.get("city", "")
            city_state_id = city.get("state_id", "")
            if city_state_id and not resolved.get("state_id"):
                resolved["state_id"] = city_state_id
                state = states_by_id.get(city_state_id)
                if state is not None:
                    resolved["state_name"] = state.get("state", "")

    return resolved


def resolve_directory(data: DirectoryData) -> ResolvedDirectory:
    """Run the city and business backfill stages over a loaded dataset.

    Returns new lists; ``data`` is left untouched, so calling this twice on
    the same input gives equal results.
    """
    states_by_id = build_index(data.states)
    cities = resolve_cities(data.cities, states_by_id)
    cities_by_id = build_index(cities)
    businesses = [
        resolve_business(business, cities_by_id, states_by_id)
        for business in data.businesses
    ]
    return ResolvedDirectory(
        businesses=businesses,
        cities=cities,
        states=[dict(state) for state in data.states],
        categories=[dict(category) for category in data.categories],
    )
