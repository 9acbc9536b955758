"""Root conftest for all tests.

Shared fixtures: the bundled location index, a goal factory and a fixed
notion of "today".
"""

from datetime import date, datetime

import pytest

from quran_tracker.index.location_index import LocationIndex, load_location_index
from quran_tracker.plans.types import Goal, WholeText

ALL_DAYS = [0, 1, 2, 3, 4, 5, 6]


@pytest.fixture(scope="session")
def location_index() -> LocationIndex:
    """Index over the bundled Madani dataset, built once per session."""
    return load_location_index()


@pytest.fixture
def fixed_today() -> date:
    """A Wednesday."""
    return date(2025, 1, 15)


@pytest.fixture
def clock():
    """Mutable clock: call it for "now", set `.now` to move time."""

    class _Clock:
        def __init__(self) -> None:
            self.now = datetime(2025, 1, 15, 9, 30)

        def __call__(self) -> datetime:
            return self.now

    return _Clock()


@pytest.fixture
def make_goal():
    """Factory for goals: whole text, one page a day, every day, from 2025-01-01."""

    def _make(**overrides) -> Goal:
        fields = {
            "id": "test-goal",
            "scope": WholeText(),
            "unit": "page",
            "daily_amount": 1,
            "start_date": date(2025, 1, 1),
            "active_weekdays": ALL_DAYS,
        }
        fields.update(overrides)
        return Goal(**fields)

    return _make
