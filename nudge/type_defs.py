"""Type definitions for the persisted Nudge settings format.

The persisted shape is flat: every schedule and time-policy field of every
variant is present on each item, inactive ones carrying defaults or nulls.
The typed in-memory model lives in ``models.py``; these TypedDicts describe
only what goes to and comes from JSON.

NOTE: TypedDict is STATIC ANALYSIS ONLY. Runtime validation is done by the
voluptuous schemas in ``data_builders.py``.
"""

from typing import Literal, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

ItemId = str  # UUID string
EpochMillis = int  # Milliseconds since the Unix epoch

ScheduleMode = Literal[
    "DAILY",
    "WEEKLY",
    "MONTHLY_BY_DATE",
    "MONTHLY_BY_WEEKDAY",
    "YEARLY",
    "DATE_RANGE",
    "SPECIFIC_DATE",
]
WorkingDayPosition = Literal["FIRST", "LAST"]
MonthlyOrdinal = Literal["FIRST", "SECOND", "THIRD", "FOURTH", "LAST"]


# =============================================================================
# Persisted Structures
# =============================================================================


class ExactTimeData(TypedDict):
    """One wall-clock time of an exact-time item."""

    hour: int
    minute: int


# camelCase keys are part of the persisted format, hence the functional syntax
NotificationItemData = TypedDict(
    "NotificationItemData",
    {
        "id": ItemId,
        "name": str,
        "isEnabled": bool,
        "notificationTexts": list[str],
        "textsPerNotification": int,
        # Time policy
        "useExactTime": bool,
        "exactTimes": list[ExactTimeData],
        "startHour": int,
        "startMinute": int,
        "endHour": int,
        "endMinute": int,
        "notificationCount": int,
        # Schedule rule
        "scheduleMode": ScheduleMode,
        "intervalDays": int,
        "intervalStartDateMillis": EpochMillis | None,
        "startDateMillis": EpochMillis | None,
        "endDateMillis": EpochMillis | None,
        "specificDateMillis": EpochMillis | None,
        "selectedWeekDays": list[int],
        "selectedMonthDays": list[int],
        "workingDaysOnly": bool,
        "workingDayPosition": WorkingDayPosition | None,
        "monthWeekdayOrdinal": MonthlyOrdinal | None,
        "monthWeekday": int | None,
        "yearlyMonth": int | None,
        "yearlyDay": int | None,
    },
)


class NotificationSettingsData(TypedDict):
    """Top-level persisted settings document."""

    items: list[NotificationItemData]
