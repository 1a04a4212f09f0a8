"""Calendar-day ranges for property checks."""

from datetime import date

from nudge.utils.dt_utils import month_length


def days_in(start: date, end: date) -> list[date]:
    """Every calendar day from start to end inclusive."""
    return [date.fromordinal(n) for n in range(start.toordinal(), end.toordinal() + 1)]


def month_days(year: int, month: int) -> list[date]:
    """Every calendar day of a month."""
    return days_in(date(year, month, 1), date(year, month, month_length(year, month)))
