"""Pytest configuration for test environment setup.

- Forces ``DISABLE_FILE_LOGS=1`` to avoid writing log files during tests.
- Ensures the project root is available on ``sys.path`` for imports.
- Provides a ``make_directory_zip`` fixture building dataset archives.
"""

import csv
import io
import logging
import os
import signal
import sys
import zipfile

os.environ.setdefault("DISABLE_FILE_LOGS", "1")  # Avoid creating log files during tests
from pathlib import Path

import pytest

# Ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

_TEST_TIMEOUT = int(os.environ.get("PYTEST_TEST_TIMEOUT", "10"))


def _timeout_handler(signum, frame):
    """Test Timeout handler."""
    raise TimeoutError(f"Test exceeded {_TEST_TIMEOUT} seconds timeout")


def pytest_runtest_setup(item):
    """Test Pytest runtest setup."""
    try:
        signal.signal(signal.SIGALRM, _timeout_handler)
        signal.alarm(_TEST_TIMEOUT)
    except (AttributeError, ValueError):
        pass


def pytest_runtest_teardown(item, nextitem):
    """Test Pytest runtest teardown."""
    try:
        signal.alarm(0)
    except (AttributeError, ValueError):
        pass


def rows_to_csv(rows: list[dict[str, str]], fieldnames: list[str] | None = None) -> str:
    """Serialize dict rows as CSV text with a header line."""
    if fieldnames is None:
        fieldnames = []
        for row in rows:
            for key in row:
                if key not in fieldnames:
                    fieldnames.append(key)
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return buffer.getvalue()


@pytest.fixture
def make_directory_zip(tmp_path: Path):
    """Return a factory writing a dataset archive into ``tmp_path``.

    The factory takes ``businesses``, ``cities``, ``states`` and
    ``categories`` row lists and an optional ``skip`` set of member names to
    leave out of the archive.
    """

    def _make(
        businesses=(),
        cities=(),
        states=(),
        categories=(),
        skip=frozenset(),
        name="data.zip",
    ) -> Path:
        members = {
            "beauty_salon.csv": (list(businesses), ["id", "title"]),
            "city.csv": (list(cities), ["id", "city", "state_id"]),
            "state.csv": (list(states), ["id", "state"]),
            "category.csv": (list(categories), ["id", "category"]),
        }
        zip_path = tmp_path / name
        with zipfile.ZipFile(zip_path, "w") as archive:
            for member, (rows, default_fields) in members.items():
                if member in skip:
                    continue
                archive.writestr(
                    member, rows_to_csv(rows, None if rows else default_fields)
                )
        return zip_path

    return _make


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Drop handlers installed by ``configure_logging`` during a test."""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in saved_handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_level)
