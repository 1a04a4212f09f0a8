# File: models.py
"""Typed in-memory model for notification items.

A schedule rule and a time policy are tagged unions of frozen dataclasses:
exactly one variant is active per item, so inconsistent flag combinations of
the flat persisted format cannot be represented here. Conversion to and from
the persisted shape lives in ``data_builders.py``.

All classes are immutable. Use ``NotificationItem.with_changes`` for
copy-on-write edits; it re-applies the item invariants.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any
import uuid

from . import const

# =============================================================================
# Schedule Rules
# =============================================================================


@dataclass(frozen=True, slots=True)
class DailyRule:
    """Every N days counted from an anchor day.

    Without an anchor the evaluated day itself is day 0 of the cycle, so the
    rule always fires the first time it is checked. Non-positive intervals
    are coerced to 1.
    """

    interval_days: int = const.DEFAULT_INTERVAL_DAYS
    anchor_day: date | None = None

    def __post_init__(self) -> None:
        if self.interval_days <= 0:
            object.__setattr__(self, "interval_days", const.DEFAULT_INTERVAL_DAYS)


@dataclass(frozen=True, slots=True)
class DateRangeRule:
    """Every day between two calendar days, both inclusive."""

    start_day: date | None = None
    end_day: date | None = None


@dataclass(frozen=True, slots=True)
class SpecificDateRule:
    """A single calendar day."""

    day: date | None = None


@dataclass(frozen=True, slots=True)
class WeeklyRule:
    """Selected ISO weekdays (1=Monday .. 7=Sunday)."""

    days: frozenset[int] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "days", frozenset(self.days))


@dataclass(frozen=True, slots=True)
class MonthlyByDateRule:
    """Selected days of the month (1..31), no rollover for short months."""

    days: frozenset[int] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "days", frozenset(self.days))


@dataclass(frozen=True, slots=True)
class MonthlyByWorkingDayRule:
    """First or last working day (Mon-Fri) of each month."""

    position: str | None = None


@dataclass(frozen=True, slots=True)
class MonthlyByWeekdayRule:
    """Nth (or last) occurrence of a weekday in each month."""

    ordinal: str | None = None
    weekday: int | None = None


@dataclass(frozen=True, slots=True)
class YearlyRule:
    """A fixed month and day each year, no Feb 29 shift."""

    month: int | None = None
    day: int | None = None


ScheduleRule = (
    DailyRule
    | DateRangeRule
    | SpecificDateRule
    | WeeklyRule
    | MonthlyByDateRule
    | MonthlyByWorkingDayRule
    | MonthlyByWeekdayRule
    | YearlyRule
)


# =============================================================================
# Time Policies
# =============================================================================


@dataclass(frozen=True, slots=True)
class ExactTime:
    """A wall-clock time of day."""

    hour: int
    minute: int

    @property
    def minute_of_day(self) -> int:
        """Minutes since local midnight."""
        return self.hour * const.MINUTES_PER_HOUR + self.minute

    @property
    def is_valid(self) -> bool:
        """True when hour is 0-23 and minute is 0-59."""
        return (
            0 <= self.hour < const.HOURS_PER_DAY
            and 0 <= self.minute < const.MINUTES_PER_HOUR
        )


@dataclass(frozen=True, slots=True)
class ExactTimes:
    """Fire at each configured wall-clock time. May be empty."""

    times: tuple[ExactTime, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "times", tuple(self.times))


@dataclass(frozen=True, slots=True)
class RandomRange:
    """Fire ``count`` times at random minutes inside a window.

    A window whose end is not after its start wraps past midnight. ``count``
    is capped at MAX_NOTIFICATION_COUNT.
    """

    start_hour: int = const.DEFAULT_START_HOUR
    start_minute: int = const.DEFAULT_START_MINUTE
    end_hour: int = const.DEFAULT_END_HOUR
    end_minute: int = const.DEFAULT_END_MINUTE
    count: int = const.DEFAULT_NOTIFICATION_COUNT

    def __post_init__(self) -> None:
        if self.count > const.MAX_NOTIFICATION_COUNT:
            object.__setattr__(self, "count", const.MAX_NOTIFICATION_COUNT)

    @property
    def start_minutes(self) -> int:
        """Window start as minutes since midnight."""
        return self.start_hour * const.MINUTES_PER_HOUR + self.start_minute

    @property
    def end_minutes(self) -> int:
        """Window end as minutes since midnight."""
        return self.end_hour * const.MINUTES_PER_HOUR + self.end_minute

    @property
    def total_minutes(self) -> int:
        """Window length in minutes, wrapping past midnight when end <= start."""
        start, end = self.start_minutes, self.end_minutes
        if end > start:
            return end - start
        return (const.MINUTES_PER_DAY - start) + end


TimePolicy = ExactTimes | RandomRange


# =============================================================================
# Items and Settings
# =============================================================================


@dataclass(frozen=True, slots=True)
class NotificationItem:
    """A user-configured notification with its rule, time policy and texts.

    ``texts_per_fire`` is clamped to ``[1, max(1, len(texts))]`` on every
    construction, including copies made by ``with_changes``.

    ``retained`` holds persisted fields of the inactive rule and time policy
    variants, keyed by their persisted names, so an export writes back what
    was imported.
    """

    id: str
    name: str = const.DEFAULT_ITEM_NAME
    enabled: bool = const.DEFAULT_IS_ENABLED
    texts: tuple[str, ...] = (const.DEFAULT_NOTIFICATION_TEXT,)
    texts_per_fire: int = const.DEFAULT_TEXTS_PER_NOTIFICATION
    rule: ScheduleRule = field(default_factory=DailyRule)
    time_policy: TimePolicy = field(default_factory=RandomRange)
    retained: dict[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        texts = tuple(self.texts)
        object.__setattr__(self, "texts", texts)
        upper = max(1, len(texts))
        object.__setattr__(
            self, "texts_per_fire", min(max(self.texts_per_fire, 1), upper)
        )

    @property
    def use_exact_time(self) -> bool:
        """True when the item fires at exact wall-clock times."""
        return isinstance(self.time_policy, ExactTimes)

    def with_changes(self, **changes: Any) -> NotificationItem:
        """Return a copy with the given fields replaced.

        Example:
            item.with_changes(texts=("a",), texts_per_fire=3).texts_per_fire → 1
        """
        return replace(self, **changes)

    @classmethod
    def create_default(cls, name: str = const.DEFAULT_ITEM_NAME) -> NotificationItem:
        """Create a new disabled daily item with a fresh id."""
        return cls(id=str(uuid.uuid4()), name=name)


def _default_items() -> tuple[NotificationItem, ...]:
    return (NotificationItem.create_default(),)


@dataclass(frozen=True, slots=True)
class NotificationSettings:
    """The ordered list of all notification items."""

    items: tuple[NotificationItem, ...] = field(default_factory=_default_items)

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def enabled_items(self) -> list[NotificationItem]:
        """Return enabled items in configured order."""
        return [item for item in self.items if item.enabled]

    def any_enabled(self) -> bool:
        """Return True if at least one item is enabled."""
        return any(item.enabled for item in self.items)

    def get_item(self, item_id: str) -> NotificationItem | None:
        """Return the item with the given id, or None."""
        return next((item for item in self.items if item.id == item_id), None)
