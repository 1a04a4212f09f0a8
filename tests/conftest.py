"""Shared fixtures for Nudge tests."""

from collections.abc import Callable, Iterator
from typing import Any
from zoneinfo import ZoneInfo

import pytest

from nudge.models import NotificationItem
from nudge.utils import dt_utils


@pytest.fixture(autouse=True)
def pinned_default_timezone() -> Iterator[ZoneInfo]:
    """Pin the package default timezone to UTC and restore it afterwards."""
    previous = dt_utils.get_default_timezone()
    utc = ZoneInfo("UTC")
    dt_utils.set_default_timezone(utc)
    yield utc
    dt_utils.set_default_timezone(previous)


@pytest.fixture
def utc_tz() -> ZoneInfo:
    """Return UTC timezone."""
    return ZoneInfo("UTC")


@pytest.fixture
def berlin_tz() -> ZoneInfo:
    """Return Europe/Berlin (DST switch 2026-03-29 and 2026-10-25)."""
    return ZoneInfo("Europe/Berlin")


@pytest.fixture
def new_york_tz() -> ZoneInfo:
    """Return America/New_York (DST switch 2026-03-08 and 2026-11-01)."""
    return ZoneInfo("America/New_York")


@pytest.fixture(params=["UTC", "Europe/Berlin", "America/New_York"])
def any_tz(request: pytest.FixtureRequest) -> ZoneInfo:
    """Parametrize a test over zones with and without DST."""
    return ZoneInfo(request.param)


@pytest.fixture
def make_item() -> Callable[..., NotificationItem]:
    """Factory for enabled items with a fixed id."""

    def _make(item_id: str = "item-1", **fields: Any) -> NotificationItem:
        fields.setdefault("name", f"Item {item_id}")
        fields.setdefault("enabled", True)
        return NotificationItem(id=item_id, **fields)

    return _make
