# File: utils/dt_utils.py
"""Date and time utilities for Nudge.

Pure Python calendar arithmetic shared by the recurrence engine, the slot
planner and the persisted-format builders. A calendar day is always a
``datetime.date``; an instant is always a timezone-aware ``datetime``.

Functions:
    - set_default_timezone / get_default_timezone: Package-wide local zone
    - dt_now_local / dt_now_utc: Current instant
    - as_local / as_utc: Timezone conversion
    - to_calendar_day: Normalize a date or datetime to a local calendar day
    - start_of_local_day: Local midnight instant of a calendar day
    - at_minute_of_day: Instant for a wall-clock minute on a calendar day
    - millis_to_day / day_to_millis / normalize_to_start_of_day: Epoch millis
    - days_between, iso_weekday, day_of_year, month_length, is_working_day
    - yearly_date_exists: Whether a month/day pair ever occurs
    - format_hhmm: "HH:MM" rendering
"""

from __future__ import annotations

from calendar import monthrange
from datetime import UTC, date, datetime, time, timedelta
import logging
from zoneinfo import ZoneInfo

from .. import const

# Module-level logger
_LOGGER = logging.getLogger(__name__)

# Default timezone - can be overridden by caller
DEFAULT_TIME_ZONE: ZoneInfo = ZoneInfo("UTC")

# Leap year used to check that a (month, day) pair can ever exist
LEAP_REFERENCE_YEAR = 2000


# ==============================================================================
# Timezone Configuration
# ==============================================================================


def set_default_timezone(tz: ZoneInfo | str) -> None:
    """Set the default timezone for all dt_utils functions.

    Call this once at start-up with the device's local zone.

    Args:
        tz: ZoneInfo object or IANA zone name (e.g. "Europe/Berlin")
    """
    global DEFAULT_TIME_ZONE  # noqa: PLW0603
    DEFAULT_TIME_ZONE = ZoneInfo(tz) if isinstance(tz, str) else tz


def get_default_timezone() -> ZoneInfo:
    """Get the current default timezone."""
    return DEFAULT_TIME_ZONE


def _resolve_tz(tz: ZoneInfo | None) -> ZoneInfo:
    return tz or DEFAULT_TIME_ZONE


# ==============================================================================
# Current Date/Time Functions
# ==============================================================================


def dt_now_local(tz: ZoneInfo | None = None) -> datetime:
    """Return the current datetime in local timezone (timezone-aware)."""
    return datetime.now(_resolve_tz(tz))


def dt_now_utc() -> datetime:
    """Return the current datetime in UTC (timezone-aware)."""
    return datetime.now(UTC)


def as_utc(dt_obj: datetime) -> datetime:
    """Convert a datetime to UTC. Naive datetimes are assumed to be UTC."""
    if dt_obj.tzinfo is None:
        return dt_obj.replace(tzinfo=UTC)
    return dt_obj.astimezone(UTC)


def as_local(dt_obj: datetime, tz: ZoneInfo | None = None) -> datetime:
    """Convert a datetime to local timezone.

    Args:
        dt_obj: Datetime object. Naive values are assumed to be UTC.
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Datetime in local timezone
    """
    if dt_obj.tzinfo is None:
        dt_obj = dt_obj.replace(tzinfo=UTC)
    return dt_obj.astimezone(_resolve_tz(tz))


# ==============================================================================
# Calendar Day Functions
# ==============================================================================


def to_calendar_day(value: date | datetime, tz: ZoneInfo | None = None) -> date:
    """Normalize a date or datetime to the local calendar day it falls on.

    A plain ``date`` is returned unchanged. A ``datetime`` is converted to the
    local zone first, so 23:30 UTC may land on the next local day.
    """
    if isinstance(value, datetime):
        return as_local(value, tz).date()
    return value


def start_of_local_day(day: date | datetime, tz: ZoneInfo | None = None) -> datetime:
    """Get the local midnight instant (00:00:00.000) of a calendar day.

    Built with ``datetime.combine`` instead of ``replace`` on an existing
    datetime so the offset is the one in force at midnight, not the one of
    the input time (DST transition days differ).
    """
    return at_minute_of_day(to_calendar_day(day, tz), 0, tz)


def at_minute_of_day(day: date, minute_of_day: int, tz: ZoneInfo | None = None) -> datetime:
    """Build the instant for a wall-clock minute on a calendar day.

    Wall-clock times that do not exist (inside a spring-forward gap) are
    resolved to the real instant they map to, e.g. 02:30 becomes 03:30 on the
    Europe/Berlin switch day. Repeated times (fall-back) take the first
    occurrence.

    Args:
        day: Local calendar day
        minute_of_day: Minutes since local midnight, 0..1439
        tz: Optional timezone override

    Returns:
        Timezone-aware datetime in the local zone
    """
    tz_info = _resolve_tz(tz)
    hour, minute = divmod(minute_of_day, const.MINUTES_PER_HOUR)
    wall = datetime.combine(day, time(hour, minute), tzinfo=tz_info)
    # Round-trip through UTC to land on a real instant
    return wall.astimezone(UTC).astimezone(tz_info)


def days_between(start: date, end: date) -> int:
    """Return the signed number of calendar days from start to end."""
    return (end - start).days


def iso_weekday(day: date) -> int:
    """Return the ISO weekday (1=Monday .. 7=Sunday)."""
    return day.isoweekday()


def day_of_year(day: date) -> int:
    """Return the 1-based day of the year."""
    return day.timetuple().tm_yday


def month_length(year: int, month: int) -> int:
    """Return the number of days in a month (leap-year aware)."""
    return monthrange(year, month)[1]


def yearly_date_exists(month: int | None, day: int | None) -> bool:
    """Return True if month/day occurs in at least one year (Feb 29 does).

    Example:
        yearly_date_exists(2, 30) → False
    """
    if month is None or day is None or not 1 <= month <= 12:
        return False
    return 1 <= day <= month_length(LEAP_REFERENCE_YEAR, month)


def is_working_day(day: date) -> bool:
    """Return True for Monday through Friday."""
    return iso_weekday(day) in const.WORKING_DAYS


def next_day(day: date, days: int = 1) -> date:
    """Return the calendar day ``days`` after ``day``."""
    return day + timedelta(days=days)


# ==============================================================================
# Epoch Millis (persisted format)
# ==============================================================================


def millis_to_day(millis: int | None, tz: ZoneInfo | None = None) -> date | None:
    """Convert epoch milliseconds to the local calendar day they fall on.

    Stored values may carry a time-of-day component; only the local date is
    kept. Returns None for None or values outside the supported range.
    """
    if millis is None:
        return None
    try:
        instant = datetime.fromtimestamp(millis / const.MILLIS_PER_SECOND, tz=UTC)
    except (OverflowError, OSError, ValueError) as err:
        _LOGGER.warning("Ignoring out-of-range epoch millis %s: %s", millis, err)
        return None
    return as_local(instant, tz).date()


def day_to_millis(day: date | None, tz: ZoneInfo | None = None) -> int | None:
    """Convert a calendar day to epoch milliseconds of its local midnight."""
    if day is None:
        return None
    midnight = start_of_local_day(day, tz)
    return int(midnight.timestamp() * const.MILLIS_PER_SECOND)


def normalize_to_start_of_day(millis: int, tz: ZoneInfo | None = None) -> int:
    """Strip the time-of-day from epoch millis (local midnight of the same day).

    Example:
        2026-06-15 14:30:45.123 local → 2026-06-15 00:00:00.000 local
    """
    day = millis_to_day(millis, tz)
    if day is None:
        return millis
    return day_to_millis(day, tz) or 0


# ==============================================================================
# Formatting
# ==============================================================================


def format_hhmm(hour: int, minute: int) -> str:
    """Format a wall-clock time as zero-padded "HH:MM"."""
    return f"{hour:02d}:{minute:02d}"
