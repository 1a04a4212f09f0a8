"""Short list-row summaries of notification items.

Produces the one-line descriptions shown under an item name, e.g.
"09:00 - 21:00 • 3x • Mon, Wed, Fri". Missing rule fields render as "?"
rather than failing, matching how incomplete rules evaluate.
"""

from __future__ import annotations

from datetime import date

from .. import const
from ..models import (
    DailyRule,
    DateRangeRule,
    ExactTimes,
    MonthlyByDateRule,
    MonthlyByWeekdayRule,
    MonthlyByWorkingDayRule,
    NotificationItem,
    RandomRange,
    ScheduleRule,
    SpecificDateRule,
    TimePolicy,
    WeeklyRule,
    YearlyRule,
)
from ..utils.dt_utils import format_hhmm


def _format_day(day: date | None) -> str:
    if day is None:
        return const.SUMMARY_UNKNOWN
    return day.strftime(const.SUMMARY_DATE_FORMAT)


def describe_rule(rule: ScheduleRule) -> str:
    """Describe a schedule rule.

    Examples:
        DailyRule(interval_days=3) → "Every 3 days"
        WeeklyRule(days={1, 3, 5}) → "Mon, Wed, Fri"
        MonthlyByWeekdayRule("SECOND", 2) → "2nd Tue of the month"
        YearlyRule(2, 29) → "29 Feb"
    """
    if isinstance(rule, DailyRule):
        if rule.interval_days > 1:
            return const.SUMMARY_EVERY_N_DAYS.format(interval=rule.interval_days)
        return const.SUMMARY_DAILY

    if isinstance(rule, DateRangeRule):
        return f"{_format_day(rule.start_day)} – {_format_day(rule.end_day)}"

    if isinstance(rule, SpecificDateRule):
        return _format_day(rule.day) if rule.day else const.SUMMARY_NO_DATE

    if isinstance(rule, WeeklyRule):
        names = [
            const.WEEKDAY_SHORT_NAMES[day]
            for day in sorted(rule.days)
            if day in const.WEEKDAY_SHORT_NAMES
        ]
        return ", ".join(names) if names else const.SUMMARY_WEEKLY

    if isinstance(rule, MonthlyByDateRule):
        days = sorted(rule.days)
        if not days:
            return const.SUMMARY_MONTHLY
        shown = ", ".join(str(day) for day in days[: const.SUMMARY_MONTH_DAYS_SHOWN])
        return f"{shown}..." if len(days) > const.SUMMARY_MONTH_DAYS_SHOWN else shown

    if isinstance(rule, MonthlyByWorkingDayRule):
        return const.SUMMARY_WORKING_DAY.get(rule.position or "", const.SUMMARY_MONTHLY)

    if isinstance(rule, MonthlyByWeekdayRule):
        return const.SUMMARY_MONTH_WEEKDAY.format(
            ordinal=const.SUMMARY_ORDINAL.get(rule.ordinal or "", const.SUMMARY_UNKNOWN),
            weekday=const.WEEKDAY_SHORT_NAMES.get(rule.weekday or 0, const.SUMMARY_UNKNOWN),
        )

    if isinstance(rule, YearlyRule):
        month = const.MONTH_SHORT_NAMES.get(rule.month or 0, const.SUMMARY_UNKNOWN)
        day = rule.day if rule.day is not None else const.SUMMARY_UNKNOWN
        return f"{day} {month}"

    return const.SUMMARY_UNKNOWN


def describe_time_policy(policy: TimePolicy) -> str:
    """Describe a time policy ("09:00 - 21:00 • 3x" or "3 exact times")."""
    if isinstance(policy, ExactTimes):
        count = len(policy.times)
        if count == 0:
            return const.SUMMARY_NO_EXACT_TIMES
        if count == 1:
            return const.SUMMARY_ONE_EXACT_TIME
        return const.SUMMARY_EXACT_TIMES.format(count=count)

    if isinstance(policy, RandomRange):
        return const.SUMMARY_RANDOM_RANGE.format(
            start=format_hhmm(policy.start_hour, policy.start_minute),
            end=format_hhmm(policy.end_hour, policy.end_minute),
            count=policy.count,
        )

    return const.SUMMARY_UNKNOWN


def describe_item(item: NotificationItem) -> str:
    """Full list-row summary: time policy, then schedule rule."""
    return const.SUMMARY_SEPARATOR.join(
        (describe_time_policy(item.time_policy), describe_rule(item.rule))
    )
