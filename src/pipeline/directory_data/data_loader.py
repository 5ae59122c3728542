"""Archive loader for the directory CSV datasets.

This module is the ingestion boundary of the directory pipeline. It opens the
zipped dataset, parses each fixed CSV member with pandas and returns ordered
lists of flat string records. Nothing here resolves or joins records; that is
the resolver's job.

All values are kept as strings and empty cells become ``""``. There is no
schema validation: unexpected columns are carried along and absent columns
simply do not appear in the records.

Examples
--------
>>> from pathlib import Path
>>> from src.pipeline.directory_data.data_loader import load_directory_data
>>> data = load_directory_data(Path("data/data.zip"))  # doctest: +SKIP
>>> len(data.businesses) >= 0  # doctest: +SKIP
True
"""

from __future__ import annotations

import logging
import zipfile
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from src.config import (
    BUSINESSES_MEMBER,
    CATEGORIES_MEMBER,
    CITIES_MEMBER,
    STATES_MEMBER,
)
from src.exceptions import DataLoadError

logger = logging.getLogger(__name__)

Record = dict[str, str]


@dataclass(frozen=True)
class DirectoryData:
    """The four raw collections exactly as loaded from the archive."""

    businesses: list[Record]
    cities: list[Record]
    states: list[Record]
    categories: list[Record]


def read_csv_from_zip(zip_path: Path, member_name: str) -> list[Record]:
    """Read one CSV member of a zip archive into a list of string records.

    Parameters
    ----------
    zip_path : Path
        Path to the zip archive.
    member_name : str
        Exact name of the CSV member inside the archive.

    Returns
    -------
    list[dict[str, str]]
        One dict per CSV row in file order. Empty cells are ``""``.

    Raises
    ------
    DataLoadError
        If the archive is missing or unreadable, the member is absent, or
        the member cannot be parsed as CSV.

    Examples
    --------
    >>> rows = read_csv_from_zip(Path("data.zip"), "city.csv")  # doctest: +SKIP
    >>> rows[0]["city"]  # doctest: +SKIP
    'Springfield'
    """
    context = {"archive": str(zip_path), "member": member_name}
    try:
        with zipfile.ZipFile(zip_path) as archive:
            if member_name not in archive.namelist():
                raise DataLoadError(
                    f"CSV file {member_name} not found in zip archive.",
                    context=context,
                )
            with archive.open(member_name) as handle:
                dataframe = pd.read_csv(
                    handle,
                    dtype=str,
                    keep_default_na=False,
                    encoding="utf-8-sig",
                )
    except DataLoadError:
        raise
    except FileNotFoundError as exc:
        raise DataLoadError(
            f"Archive {zip_path} does not exist.", context=context
        ) from exc
    except zipfile.BadZipFile as exc:
        raise DataLoadError(
            f"Archive {zip_path} is not a readable zip file.", context=context
        ) from exc
    except pd.errors.EmptyDataError:
        logger.warning("CSV member %s in %s is empty", member_name, zip_path)
        return []
    except (pd.errors.ParserError, UnicodeDecodeError, OSError) as exc:
        raise DataLoadError(
            f"Error reading {member_name} from zip: {exc}", context=context
        ) from exc
    return [
        {str(key): str(value) for key, value in row.items()}
        for row in dataframe.to_dict("records")
    ]


def load_directory_data(zip_path: Path) -> DirectoryData:
    """Load businesses, cities, states and categories from the archive.

    Parameters
    ----------
    zip_path : Path
        Path to the dataset archive.

    Returns
    -------
    DirectoryData
        The four raw collections in file order.

    Raises
    ------
    DataLoadError
        If any of the four members cannot be read.
    """
    data = DirectoryData(
        businesses=read_csv_from_zip(zip_path, BUSINESSES_MEMBER),
        cities=read_csv_from_zip(zip_path, CITIES_MEMBER),
        states=read_csv_from_zip(zip_path, STATES_MEMBER),
        categories=read_csv_from_zip(zip_path, CATEGORIES_MEMBER),
    )
    logger.info(
        "Read %d beauty salons, %d cities, %d states, and %d categories.",
        len(data.businesses),
        len(data.cities),
        len(data.states),
        len(data.categories),
    )
    return data


def split_multi_value(value: str | None) -> list[str]:
    """Split a comma-delimited relational field into trimmed, non-empty parts.

    >>> split_multi_value("1, 2,,3")
    ['1', '2', '3']
    >>> split_multi_value("")
    []
    """
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]
