"""Tests for models.py invariants."""

from dataclasses import FrozenInstanceError

import pytest

from nudge import const
from nudge.models import (
    DailyRule,
    ExactTime,
    ExactTimes,
    MonthlyByDateRule,
    NotificationItem,
    NotificationSettings,
    RandomRange,
    WeeklyRule,
)


class TestNotificationItem:
    """Test item construction and copy-on-write edits."""

    def test_defaults(self) -> None:
        """A new item is a disabled daily random-range item."""
        item = NotificationItem(id="x")
        assert item.name == const.DEFAULT_ITEM_NAME
        assert not item.enabled
        assert item.texts == (const.DEFAULT_NOTIFICATION_TEXT,)
        assert item.rule == DailyRule()
        assert item.time_policy == RandomRange()
        assert not item.use_exact_time

    @pytest.mark.parametrize(
        ("texts", "requested", "expected"),
        [(("a", "b", "c"), 2, 2), (("a", "b"), 5, 2), (("a",), 0, 1), ((), 3, 1)],
    )
    def test_texts_per_fire_clamped(
        self, texts: tuple[str, ...], requested: int, expected: int
    ) -> None:
        """texts_per_fire stays within [1, max(1, len(texts))]."""
        assert NotificationItem(id="x", texts=texts, texts_per_fire=requested).texts_per_fire == expected

    def test_with_changes_reclamps(self) -> None:
        """Shrinking the pool re-applies the clamp."""
        item = NotificationItem(id="x", texts=("a", "b", "c"), texts_per_fire=3)
        assert item.with_changes(texts=("a",)).texts_per_fire == 1
        assert item.texts_per_fire == 3

    def test_frozen(self) -> None:
        """Items cannot be mutated in place."""
        item = NotificationItem(id="x")
        with pytest.raises(FrozenInstanceError):
            item.name = "other"  # type: ignore[misc]

    def test_texts_list_stored_as_tuple(self) -> None:
        """Lists are converted so the item stays immutable."""
        assert NotificationItem(id="x", texts=["a", "b"]).texts == ("a", "b")  # type: ignore[arg-type]

    def test_create_default_unique_ids(self) -> None:
        """Each default item gets a fresh id."""
        assert NotificationItem.create_default().id != NotificationItem.create_default().id

    def test_use_exact_time(self) -> None:
        """The flag follows the active time policy."""
        assert NotificationItem(id="x", time_policy=ExactTimes()).use_exact_time


class TestRules:
    """Test rule normalization."""

    def test_day_sets_frozen(self) -> None:
        """Weekday and month-day collections become frozensets."""
        assert WeeklyRule(days=[1, 1, 3]).days == frozenset({1, 3})  # type: ignore[arg-type]
        assert MonthlyByDateRule(days=(31,)).days == frozenset({31})  # type: ignore[arg-type]

    def test_exact_time_validity(self) -> None:
        """Hour 0-23 and minute 0-59 are valid."""
        assert ExactTime(23, 59).is_valid
        assert ExactTime(23, 59).minute_of_day == 1439
        assert not ExactTime(24, 0).is_valid
        assert not ExactTime(-1, 0).is_valid

    @pytest.mark.parametrize(
        ("policy", "expected"),
        [
            (RandomRange(9, 0, 21, 0, 1), 720),
            (RandomRange(22, 0, 2, 0, 1), 240),
            (RandomRange(12, 0, 12, 0, 1), 1440),
        ],
    )
    def test_random_range_total_minutes(self, policy: RandomRange, expected: int) -> None:
        """The window wraps past midnight when end <= start."""
        assert policy.total_minutes == expected

    def test_random_range_count_capped(self) -> None:
        """A count above the cap is clamped, one at the cap is kept."""
        assert RandomRange(count=1_000_000_000).count == const.MAX_NOTIFICATION_COUNT
        assert RandomRange(count=const.MAX_NOTIFICATION_COUNT).count == 50


class TestNotificationSettings:
    """Test the settings collection."""

    def test_default_has_one_disabled_item(self) -> None:
        """A fresh install shows one item."""
        settings = NotificationSettings()
        assert len(settings.items) == 1
        assert not settings.any_enabled()

    def test_enabled_items_in_order(self, make_item) -> None:
        """Only enabled items, in configured order."""
        settings = NotificationSettings(
            items=(make_item("a"), make_item("b", enabled=False), make_item("c"))
        )
        assert [item.id for item in settings.enabled_items()] == ["a", "c"]
        assert settings.any_enabled()

    def test_get_item(self, make_item) -> None:
        """Lookup by id."""
        settings = NotificationSettings(items=(make_item("a"),))
        assert settings.get_item("a").id == "a"
        assert settings.get_item("b") is None
