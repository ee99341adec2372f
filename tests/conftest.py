"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
and provides the in-memory database double shared by all test modules.
"""

import sys
from collections.abc import Callable, Generator
from datetime import UTC, datetime
from pathlib import Path

import pytest
import structlog

# Insert local src directory at the beginning of sys.path
# This ensures that the local mongoplane package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Test helpers (mongo_fakes) live beside this file
_tests_dir = Path(__file__).parent
if str(_tests_dir) not in sys.path:
    sys.path.insert(0, str(_tests_dir))

from mongo_fakes import FakeDatabase  # noqa: E402

FIXED_NOW = datetime(2026, 6, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def db() -> FakeDatabase:
    """Fresh in-memory database recording every request."""
    return FakeDatabase()


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """Clock pinned to FIXED_NOW for threshold evaluation."""
    return lambda: FIXED_NOW


@pytest.fixture(autouse=True)
def _reset_structlog() -> Generator[None, None, None]:
    yield
    structlog.reset_defaults()
