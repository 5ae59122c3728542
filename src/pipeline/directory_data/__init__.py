"""Directory data pipeline package.

Loads the zipped directory dataset, resolves missing city/state keys,
accumulates per-entity counts and builds the slugged, cross-referenced
projections consumed by the website generator. No rendering or file output
happens here apart from reading the input archive.

Examples
--------
>>> from pathlib import Path
>>> from src.pipeline.directory_data import (
...     aggregate_counts, build_projections, load_directory_data, resolve_directory,
... )
>>> data = load_directory_data(Path("data/data.zip"))  # doctest: +SKIP
>>> resolved = resolve_directory(data)  # doctest: +SKIP
>>> counts = aggregate_counts(
...     resolved.businesses, resolved.cities, resolved.states, resolved.categories
... )  # doctest: +SKIP
>>> projections = build_projections(resolved, counts)  # doctest: +SKIP
"""

from .data_aggregator import Aggregates, aggregate_counts
from .data_loader import (
    DirectoryData,
    load_directory_data,
    read_csv_from_zip,
    split_multi_value,
)
from .projections import (
    Projections,
    build_projections,
    business_slug,
    category_slug,
    city_slug,
    state_slug,
)
from .resolver import (
    ResolvedDirectory,
    build_index,
    infer_city_from_address,
    infer_state_from_address,
    resolve_business,
    resolve_cities,
    resolve_directory,
)

__all__ = [
    "Aggregates",
    "DirectoryData",
    "Projections",
    "ResolvedDirectory",
    "aggregate_counts",
    "build_index",
    "build_projections",
    "business_slug",
    "category_slug",
    "city_slug",
    "infer_city_from_address",
    "infer_state_from_address",
    "load_directory_data",
    "read_csv_from_zip",
    "resolve_business",
    "resolve_cities",
    "resolve_directory",
    "split_multi_value",
    "state_slug",
]
