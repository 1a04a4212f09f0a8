"""Recurrence Engine for Nudge.

Decides whether a schedule rule fires on a calendar day.

- ``fires_on`` evaluates each rule variant with explicit calendar arithmetic
  so single-day checks need no iteration.
- ``get_occurrences`` / ``next_occurrence`` enumerate firing days through an
  equivalent `dateutil.rrule`, which is also used to find the first and last
  working day of a month (``bysetpos``).

Evaluation is pure and total: incomplete or out-of-range rule data means
"never fires", never an exception.

IMPORTANT: This module must NOT import from the slot planner or the text
selector. Only import from const.py, models.py and utils.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime
from typing import Any, ClassVar
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta
from dateutil.rrule import DAILY, FR, MO, MONTHLY, SA, SU, TH, TU, WE, YEARLY, rrule

from .. import const
from ..models import (
    DailyRule,
    DateRangeRule,
    MonthlyByDateRule,
    MonthlyByWeekdayRule,
    MonthlyByWorkingDayRule,
    ScheduleRule,
    SpecificDateRule,
    WeeklyRule,
    YearlyRule,
)
from ..utils.dt_utils import (
    days_between,
    is_working_day,
    iso_weekday,
    next_day,
    to_calendar_day,
    yearly_date_exists,
)

# rrule weekday objects keyed by ISO weekday
RRULE_WEEKDAYS = {1: MO, 2: TU, 3: WE, 4: TH, 5: FR, 6: SA, 7: SU}
RRULE_WORKING_DAYS = (MO, TU, WE, TH, FR)


def _midnight(day: date) -> datetime:
    """Naive midnight datetime for rrule arithmetic."""
    return datetime.combine(day, datetime.min.time())


def _working_day_setpos(position: str | None) -> int | None:
    if position == const.WORKING_DAY_POSITION_FIRST:
        return 1
    if position == const.WORKING_DAY_POSITION_LAST:
        return -1
    return None


def _ordinal_number(ordinal: str | None) -> int | None:
    """Map an ordinal name to an rrule occurrence number (LAST is -1)."""
    if ordinal == const.ORDINAL_LAST:
        return -1
    if ordinal is None:
        return None
    return const.ORDINAL_OCCURRENCE.get(ordinal)


def working_day_boundary(year: int, month: int, position: str) -> date | None:
    """Return the first or last working day (Mon-Fri) of a month.

    Args:
        year: Calendar year
        month: Month 1-12
        position: WORKING_DAY_POSITION_FIRST or WORKING_DAY_POSITION_LAST

    Returns:
        The boundary day, or None for an unknown position.

    Example:
        working_day_boundary(2026, 2, "FIRST") → date(2026, 2, 2)  # Feb 1 is a Sunday
    """
    setpos = _working_day_setpos(position)
    if setpos is None:
        return None
    rule = rrule(
        MONTHLY,
        dtstart=datetime(year, month, 1),
        count=1,
        byweekday=RRULE_WORKING_DAYS,
        bysetpos=setpos,
    )
    return rule[0].date()


# =============================================================================
# Per-variant evaluation
# =============================================================================


def _fires_daily(rule: DailyRule, day: date) -> bool:
    if rule.interval_days == 1:
        return True
    # No anchor recorded: the evaluated day is day 0 of the cycle
    anchor = rule.anchor_day or day
    delta = days_between(anchor, day)
    return delta >= 0 and delta % rule.interval_days == 0


def _fires_date_range(rule: DateRangeRule, day: date) -> bool:
    if rule.start_day is None or rule.end_day is None:
        return False
    return rule.start_day <= day <= rule.end_day


def _fires_specific_date(rule: SpecificDateRule, day: date) -> bool:
    return rule.day is not None and rule.day == day


def _fires_weekly(rule: WeeklyRule, day: date) -> bool:
    return iso_weekday(day) in rule.days


def _fires_monthly_by_date(rule: MonthlyByDateRule, day: date) -> bool:
    return day.day in rule.days


def _fires_monthly_by_working_day(rule: MonthlyByWorkingDayRule, day: date) -> bool:
    if rule.position is None or not is_working_day(day):
        return False
    return working_day_boundary(day.year, day.month, rule.position) == day


def _fires_monthly_by_weekday(rule: MonthlyByWeekdayRule, day: date) -> bool:
    if rule.ordinal is None or rule.weekday is None:
        return False
    if iso_weekday(day) != rule.weekday:
        return False
    if rule.ordinal == const.ORDINAL_LAST:
        # Last occurrence: one week later is already next month
        return next_day(day, const.DAYS_PER_WEEK).month != day.month
    occurrence = const.ORDINAL_OCCURRENCE.get(rule.ordinal)
    if occurrence is None:
        return False
    return (day.day - 1) // const.DAYS_PER_WEEK + 1 == occurrence


def _fires_yearly(rule: YearlyRule, day: date) -> bool:
    if rule.month is None or rule.day is None:
        return False
    return day.month == rule.month and day.day == rule.day


class RecurrenceEngine:
    """Evaluate and enumerate the firing days of one schedule rule.

    Days may be passed as ``date`` or as aware ``datetime``; datetimes are
    first normalized to their local calendar day in ``tz`` (or the package
    default timezone).
    """

    # Mapping from rule variant to its single-day evaluator
    EVALUATORS: ClassVar[dict[type, Callable[[Any, date], bool]]] = {
        DailyRule: _fires_daily,
        DateRangeRule: _fires_date_range,
        SpecificDateRule: _fires_specific_date,
        WeeklyRule: _fires_weekly,
        MonthlyByDateRule: _fires_monthly_by_date,
        MonthlyByWorkingDayRule: _fires_monthly_by_working_day,
        MonthlyByWeekdayRule: _fires_monthly_by_weekday,
        YearlyRule: _fires_yearly,
    }

    def __init__(self, rule: ScheduleRule, tz: ZoneInfo | None = None) -> None:
        """Initialize the recurrence engine.

        Args:
            rule: Any ScheduleRule variant
            tz: Optional timezone override for datetime inputs
        """
        self._rule = rule
        self._tz = tz

    @property
    def rule(self) -> ScheduleRule:
        """The rule being evaluated."""
        return self._rule

    def fires_on(self, day: date | datetime) -> bool:
        """Return True if the rule fires on the given calendar day."""
        evaluator = self.EVALUATORS.get(type(self._rule))
        if evaluator is None:
            const.LOGGER.debug(
                "RecurrenceEngine: Unknown rule type %s, never fires",
                type(self._rule).__name__,
            )
            return False
        return evaluator(self._rule, to_calendar_day(day, self._tz))

    def get_occurrences(
        self,
        start: date | datetime,
        end: date | datetime,
        limit: int = const.MAX_OCCURRENCE_SCAN,
    ) -> list[date]:
        """List every firing day in an inclusive window.

        Args:
            start: First day of the window (inclusive)
            end: Last day of the window (inclusive)
            limit: Maximum number of days returned (safety limit)

        Returns:
            Firing days in ascending order.
        """
        start_day = to_calendar_day(start, self._tz)
        end_day = to_calendar_day(end, self._tz)
        if end_day < start_day or limit <= 0:
            return []

        recurrence = self._build_rrule(start_day)
        if recurrence is None:
            return []

        occurrences: list[date] = []
        for occurrence in recurrence.xafter(_midnight(start_day), count=limit, inc=True):
            occurrence_day = occurrence.date()
            if occurrence_day > end_day:
                break
            occurrences.append(occurrence_day)
        return occurrences

    def next_occurrence(
        self, after: date | datetime, include_after: bool = True
    ) -> date | None:
        """Return the next firing day on or after a reference day.

        Args:
            after: Reference day
            include_after: If False, the result must be strictly later.

        Returns:
            Next firing day, or None if the rule does not fire again within
            MAX_DATE_CALCULATION_ITERATIONS days.
        """
        reference = to_calendar_day(after, self._tz)
        if not include_after:
            reference = next_day(reference)

        recurrence = self._build_rrule(reference)
        if recurrence is None:
            return None

        horizon = next_day(reference, const.MAX_DATE_CALCULATION_ITERATIONS)
        found = recurrence.after(_midnight(reference), inc=True)
        if found is None or found.date() > horizon:
            const.LOGGER.debug(
                "RecurrenceEngine: No occurrence within %s days after %s",
                const.MAX_DATE_CALCULATION_ITERATIONS,
                reference,
            )
            return None
        return found.date()

    def to_rrule_string(self) -> str:
        """Generate RFC 5545 RRULE string for iCal export.

        Returns:
            RRULE string (e.g., "FREQ=WEEKLY;BYDAY=MO,WE,FR")
            or empty string if not representable.
        """
        rule = self._rule

        if isinstance(rule, DailyRule):
            return f"FREQ=DAILY;INTERVAL={rule.interval_days}"
        if isinstance(rule, WeeklyRule):
            tokens = [
                const.RRULE_WEEKDAY_TOKENS[d]
                for d in sorted(rule.days)
                if d in const.RRULE_WEEKDAY_TOKENS
            ]
            return f"FREQ=WEEKLY;BYDAY={','.join(tokens)}" if tokens else ""
        if isinstance(rule, MonthlyByDateRule):
            month_days = [str(d) for d in sorted(rule.days) if 1 <= d <= 31]
            return f"FREQ=MONTHLY;BYMONTHDAY={','.join(month_days)}" if month_days else ""
        if isinstance(rule, MonthlyByWorkingDayRule):
            setpos = _working_day_setpos(rule.position)
            if setpos is None:
                return ""
            return f"FREQ=MONTHLY;BYDAY=MO,TU,WE,TH,FR;BYSETPOS={setpos}"
        if isinstance(rule, MonthlyByWeekdayRule):
            ordinal = _ordinal_number(rule.ordinal)
            token = const.RRULE_WEEKDAY_TOKENS.get(rule.weekday or 0)
            if ordinal is None or token is None:
                return ""
            return f"FREQ=MONTHLY;BYDAY={ordinal}{token}"
        if isinstance(rule, YearlyRule) and yearly_date_exists(rule.month, rule.day):
            return f"FREQ=YEARLY;BYMONTH={rule.month};BYMONTHDAY={rule.day}"

        # DateRange and SpecificDate need DTSTART/UNTIL, not a bare RRULE
        return ""

    # =========================================================================
    # Private: rrule construction
    # =========================================================================

    def _build_rrule(self, reference: date) -> rrule | None:
        """Build an rrule equivalent to ``fires_on`` for days >= reference.

        Returns None when the rule can never fire (missing or out-of-range
        fields), which callers treat as "no occurrences".

        Args:
            reference: First day the caller will ask about. Used as DTSTART
                where the rule itself has no anchor.
        """
        rule = self._rule

        if isinstance(rule, DailyRule):
            if rule.interval_days == 1 or rule.anchor_day is None:
                return rrule(DAILY, dtstart=_midnight(reference))
            return rrule(DAILY, interval=rule.interval_days, dtstart=_midnight(rule.anchor_day))

        if isinstance(rule, DateRangeRule):
            if rule.start_day is None or rule.end_day is None:
                return None
            if rule.end_day < rule.start_day:
                return None
            return rrule(
                DAILY, dtstart=_midnight(rule.start_day), until=_midnight(rule.end_day)
            )

        if isinstance(rule, SpecificDateRule):
            if rule.day is None:
                return None
            return rrule(DAILY, dtstart=_midnight(rule.day), count=1)

        if isinstance(rule, WeeklyRule):
            weekdays = [RRULE_WEEKDAYS[d] for d in sorted(rule.days) if d in RRULE_WEEKDAYS]
            if not weekdays:
                return None
            return rrule(DAILY, dtstart=_midnight(reference), byweekday=weekdays)

        if isinstance(rule, MonthlyByDateRule):
            month_days = [d for d in sorted(rule.days) if 1 <= d <= 31]
            if not month_days:
                return None
            # rrule skips months without the day, no rollover to the next month
            return rrule(MONTHLY, dtstart=self._month_start(reference), bymonthday=month_days)

        if isinstance(rule, MonthlyByWorkingDayRule):
            setpos = _working_day_setpos(rule.position)
            if setpos is None:
                return None
            return rrule(
                MONTHLY,
                dtstart=self._month_start(reference),
                byweekday=RRULE_WORKING_DAYS,
                bysetpos=setpos,
            )

        if isinstance(rule, MonthlyByWeekdayRule):
            ordinal = _ordinal_number(rule.ordinal)
            if ordinal is None or rule.weekday not in RRULE_WEEKDAYS:
                return None
            return rrule(
                MONTHLY,
                dtstart=self._month_start(reference),
                byweekday=RRULE_WEEKDAYS[rule.weekday](ordinal),
            )

        if isinstance(rule, YearlyRule):
            if not yearly_date_exists(rule.month, rule.day):
                return None
            return rrule(
                YEARLY,
                dtstart=_midnight(reference) + relativedelta(month=1, day=1),
                bymonth=rule.month,
                bymonthday=rule.day,
            )

        return None

    @staticmethod
    def _month_start(reference: date) -> datetime:
        """Midnight of the first day of the reference month."""
        return _midnight(reference) + relativedelta(day=1)


# =============================================================================
# Module-level convenience functions
# =============================================================================


def fires(
    rule: ScheduleRule, day: date | datetime, tz: ZoneInfo | None = None
) -> bool:
    """Return True if ``rule`` fires on ``day``.

    Pure and total: malformed or partial rule data returns False.

    Example:
        fires(WeeklyRule(days={1, 3, 5}), date(2026, 2, 16)) → True  # Monday
    """
    return RecurrenceEngine(rule, tz).fires_on(day)


def get_occurrences(
    rule: ScheduleRule,
    start: date | datetime,
    end: date | datetime,
    limit: int = const.MAX_OCCURRENCE_SCAN,
    tz: ZoneInfo | None = None,
) -> list[date]:
    """List every day in ``[start, end]`` on which ``rule`` fires."""
    return RecurrenceEngine(rule, tz).get_occurrences(start, end, limit)
