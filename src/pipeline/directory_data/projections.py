"""Public-facing projections of resolved directory records.

Projections are what the renderer and the JSON snapshots consume: each entity
gets a URL slug and, for cities, states and categories, the list of ids that
refer back to it. Building them is a pure transform of the resolved records
and the count accumulators; nothing here feeds back into resolution.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from slugify import slugify

from src.config import UNKNOWN_CITY_SLUG, UNKNOWN_STATE_SLUG

from .data_aggregator import Aggregates
from .data_loader import Record, split_multi_value
from .resolver import ResolvedDirectory

Projection = dict[str, Any]

BUSINESS_SCALAR_FIELDS: tuple[str, ...] = (
    "website",
    "telephone",
    "address",
    "postal_code",
    "latitude",
    "longitude",
    "email",
    "opening_hours",
    "description",
    "service_product",
    "reviews",
    "average_star",
    "city_id",
    "city_name",
    "state_id",
    "state_name",
)

BUSINESS_LIST_FIELDS: tuple[str, ...] = (
    "category_ids",
    "detail_keys",
    "detail_values",
    "amenity_ids",
    "payment_ids",
    "images",
)


@dataclass(frozen=True)
class Projections:
    """Slugged, cross-referenced views of the four collections."""

    businesses: list[Projection]
    cities: list[Projection]
    states: list[Projection]
    categories: list[Projection]


def business_slug(business: Record) -> str:
    """Build the slug ``<city>-<state>-<title>-<id>`` for a business.

    Missing city or state labels fall back to fixed placeholders so the slug
    is always valid; the embedded id keeps it unique.

    >>> business_slug({"id": "7", "title": "Smooth Skin", "city_name": "Austin", "state_name": "Texas"})
    'austin-texas-smooth-skin-7'
    >>> business_slug({"id": "8", "title": "Nowhere Studio"})
    'unknown-city-us-nowhere-studio-8'
    """
    city_name = business.get("city_name", "")
    state_name = business.get("state_name", "")
    city_label = slugify(city_name) if city_name else UNKNOWN_CITY_SLUG
    state_label = slugify(state_name) if state_name else UNKNOWN_STATE_SLUG
    title = business.get("title", "")
    return slugify(f"{city_label}-{state_label}-{title}-{business.get('id', '')}")


def city_slug(city: Record) -> str:
    """Slug from the city name and its state id."""
    return slugify(f"{city.get('city', '')}-{city.get('state_id', '')}")


def state_slug(state: Record) -> str:
    return slugify(state.get("state", ""))


def category_slug(category: Record) -> str:
    return slugify(category.get("category", ""))


def _same_name(left: str | None, right: str | None) -> bool:
    return bool(left) and bool(right) and left.lower() == right.lower()


def project_businesses(businesses: Sequence[Record]) -> list[Projection]:
    """Project resolved businesses, splitting their comma-delimited fields."""
    projected: list[Projection] = []
    for business in businesses:
        item: Projection = {
            "id": business.get("id", ""),
            "title": business.get("title", ""),
            "slug": business_slug(business),
        }
        for name in BUSINESS_SCALAR_FIELDS:
            if name in business:
                item[name] = business[name]
        for name in BUSINESS_LIST_FIELDS:
            item[name] = split_multi_value(business.get(name))
        projected.append(item)
    return projected


def project_cities(
    cities: Sequence[Record],
    businesses: Sequence[Projection],
    aggregates: Aggregates,
) -> list[Projection]:
    """Project cities with the ids of businesses located in them.

    A business belongs to a city when its ``city_id`` matches, or when its
    ``city_name`` matches case-insensitively. Each business is listed once.
    """
    projected: list[Projection] = []
    for city in cities:
        city_id = city.get("id", "")
        name = city.get("city", "")
        salon_ids = [
            business["id"]
            for business in businesses
            if (business.get("city_id") and business.get("city_id") == city_id)
            or _same_name(business.get("city_name"), name)
        ]
        projected.append(
            {
                "id": city_id,
                "city": name,
                "slug": city_slug(city),
                "state_id": city.get("state_id", ""),
                "state_name": city.get("state_name", ""),
                "salon_count": aggregates.city_salons(city_id),
                "salon_ids": salon_ids,
            }
        )
    return projected


def project_states(
    states: Sequence[Record],
    cities: Sequence[Projection],
    businesses: Sequence[Projection],
    aggregates: Aggregates,
) -> list[Projection]:
    """Project states with the ids of their cities and businesses.

    Cities match by ``state_id`` or case-insensitive ``state_name``.
    Businesses match by ``state_id``, case-insensitive ``state_name``, or by
    being located in one of the state's cities.
    """
    projected: list[Projection] = []
    for state in states:
        state_id = state.get("id", "")
        name = state.get("state", "")
        city_ids = [
            city["id"]
            for city in cities
            if (city.get("state_id") and city.get("state_id") == state_id)
            or _same_name(city.get("state_name"), name)
        ]
        member_city_ids = set(city_ids)
        salon_ids = [
            business["id"]
            for business in businesses
            if (business.get("state_id") and business.get("state_id") == state_id)
            or _same_name(business.get("state_name"), name)
            or (business.get("city_id") and business.get("city_id") in member_city_ids)
        ]
        projected.append(
            {
                "id": state_id,
                "state": name,
                "slug": state_slug(state),
                "city_count": aggregates.state_cities(state_id),
                "salon_count": aggregates.state_salons(state_id),
                "city_ids": city_ids,
                "salon_ids": salon_ids,
            }
        )
    return projected


def project_categories(
    categories: Sequence[Record],
    businesses: Sequence[Projection],
    aggregates: Aggregates,
) -> list[Projection]:
    """Project categories with the ids of businesses carrying them."""
    return [
        {
            "id": category.get("id", ""),
            "category": category.get("category", ""),
            "slug": category_slug(category),
            "salon_count": aggregates.category_salons(category.get("id", "")),
            "salon_ids": [
                business["id"]
                for business in businesses
                if category.get("id", "") in business["category_ids"]
            ],
        }
        for category in categories
    ]


def build_projections(
    resolved: ResolvedDirectory, aggregates: Aggregates
) -> Projections:
    """Build all four projections from resolved records and their counts."""
    businesses = project_businesses(resolved.businesses)
    cities = project_cities(resolved.cities, businesses, aggregates)
    states = project_states(resolved.states, cities, businesses, aggregates)
    categories = project_categories(resolved.categories, businesses, aggregates)
    return Projections(
        businesses=businesses,
        cities=cities,
        states=states,
        categories=categories,
    )
