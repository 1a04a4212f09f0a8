"""Tests for data_builders.py: schemas, building, validation, serialization."""

from datetime import date, datetime
from typing import Any

import pytest
import voluptuous as vol

from nudge import const
from nudge.data_builders import (
    ITEM_SCHEMA,
    ItemValidationError,
    build_notification_item,
    build_settings,
    coerce_int,
    item_to_data,
    validate_item_data,
)
from nudge.models import (
    DailyRule,
    DateRangeRule,
    ExactTime,
    ExactTimes,
    MonthlyByDateRule,
    MonthlyByWeekdayRule,
    MonthlyByWorkingDayRule,
    RandomRange,
    SpecificDateRule,
    WeeklyRule,
    YearlyRule,
)


def full_item_data(**overrides: Any) -> dict[str, Any]:
    """Every persisted field, as written by an export."""
    data: dict[str, Any] = {
        "id": "abc",
        "name": "Water",
        "isEnabled": True,
        "notificationTexts": ["Drink", "Sip"],
        "textsPerNotification": 1,
        "useExactTime": False,
        "exactTimes": [{"hour": 8, "minute": 0}],
        "startHour": 9,
        "startMinute": 0,
        "endHour": 21,
        "endMinute": 0,
        "notificationCount": 2,
        "scheduleMode": "DATE_RANGE",
        "intervalDays": 1,
        "intervalStartDateMillis": 1000000,
        "startDateMillis": 2000000,
        "endDateMillis": 3000000,
        "specificDateMillis": 4000000,
        "selectedWeekDays": [1, 3],
        "selectedMonthDays": [15, 1],
        "workingDaysOnly": False,
        "workingDayPosition": None,
        "monthWeekdayOrdinal": None,
        "monthWeekday": None,
        "yearlyMonth": None,
        "yearlyDay": None,
    }
    data.update(overrides)
    return data


def build(data: dict[str, Any], **kwargs: Any):
    return build_notification_item(ITEM_SCHEMA(data), **kwargs)


def local_millis(tz, *args: int) -> int:
    return int(datetime(*args, tzinfo=tz).timestamp() * 1000)


# =============================================================================
# Schema
# =============================================================================


class TestItemSchema:
    """Test defaults and range checks of the persisted item schema."""

    def test_empty_item_gets_defaults(self) -> None:
        """Every field is filled in."""
        data = ITEM_SCHEMA({})
        assert data["scheduleMode"] == const.SCHEDULE_MODE_DAILY
        assert data["intervalDays"] == 1
        assert data["intervalStartDateMillis"] is None
        assert data["useExactTime"] is False
        assert data["exactTimes"] == []
        assert data["notificationTexts"] == [const.DEFAULT_NOTIFICATION_TEXT]
        assert data["isEnabled"] is False
        assert isinstance(data["id"], str) and data["id"]

    def test_document_from_older_version(self) -> None:
        """A document without schedule fields reads as a daily item."""
        old = {
            "id": "old-1",
            "name": "Stretch",
            "isEnabled": True,
            "notificationTexts": ["Stand up"],
            "startHour": 10,
            "startMinute": 0,
            "endHour": 18,
            "endMinute": 0,
            "notificationCount": 3,
        }
        item = build(old)
        assert item.rule == DailyRule()
        assert item.time_policy == RandomRange(10, 0, 18, 0, 3)
        assert item.enabled

    def test_unknown_keys_dropped(self) -> None:
        """Fields from newer versions are ignored."""
        data = ITEM_SCHEMA({"id": "x", "soundUri": "content://chime"})
        assert "soundUri" not in data

    @pytest.mark.parametrize(
        "overrides",
        [
            {"startHour": 25},
            {"endMinute": 60},
            {"selectedWeekDays": [8]},
            {"selectedMonthDays": [0]},
            {"scheduleMode": "HOURLY"},
            {"workingDayPosition": "MIDDLE"},
            {"exactTimes": [{"hour": 24, "minute": 0}]},
            {"notificationCount": 51},
            {"notificationCount": 1_000_000_000},
            {"textsPerNotification": float("inf")},
            {"intervalDays": float("nan")},
            {"specificDateMillis": float("inf")},
        ],
    )
    def test_out_of_range_rejected(self, overrides: dict[str, Any]) -> None:
        """Values the engines cannot interpret are rejected."""
        with pytest.raises(vol.Invalid):
            ITEM_SCHEMA(full_item_data(**overrides))


class TestCoerceInt:
    """Test the integer validator used for numeric fields."""

    def test_numeric_values_accepted(self) -> None:
        """Ints, integral floats and numeric strings coerce."""
        assert coerce_int(7) == 7
        assert coerce_int(7.0) == 7
        assert coerce_int("12") == 12

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan"), "abc", None])
    def test_non_integer_rejected(self, value: Any) -> None:
        """Non-finite floats raise vol.Invalid instead of OverflowError."""
        with pytest.raises(vol.Invalid):
            coerce_int(value)


# =============================================================================
# Build
# =============================================================================


class TestBuildNotificationItem:
    """Test selection of the active rule and time policy."""

    def test_daily_with_anchor(self) -> None:
        """DAILY reads interval and anchor day."""
        item = build(full_item_data(scheduleMode="DAILY", intervalDays=3))
        assert item.rule == DailyRule(interval_days=3, anchor_day=date(1970, 1, 1))

    def test_date_range(self) -> None:
        """DATE_RANGE reads both bounds."""
        item = build(full_item_data())
        assert item.rule == DateRangeRule(date(1970, 1, 1), date(1970, 1, 1))

    def test_specific_date(self, berlin_tz) -> None:
        """A stored time of day is dropped, the local day is kept."""
        millis = local_millis(berlin_tz, 2026, 6, 15, 14, 30)
        item = build(
            full_item_data(scheduleMode="SPECIFIC_DATE", specificDateMillis=millis),
            tz=berlin_tz,
        )
        assert item.rule == SpecificDateRule(day=date(2026, 6, 15))

    def test_weekly(self) -> None:
        """WEEKLY reads the selected weekdays."""
        item = build(full_item_data(scheduleMode="WEEKLY"))
        assert item.rule == WeeklyRule(days={1, 3})

    def test_monthly_by_date(self) -> None:
        """MONTHLY_BY_DATE reads the selected days."""
        item = build(full_item_data(scheduleMode="MONTHLY_BY_DATE"))
        assert item.rule == MonthlyByDateRule(days={1, 15})

    def test_working_days_only(self) -> None:
        """workingDaysOnly switches MONTHLY_BY_DATE to the working-day rule."""
        item = build(
            full_item_data(
                scheduleMode="MONTHLY_BY_DATE",
                workingDaysOnly=True,
                workingDayPosition="LAST",
            )
        )
        assert item.rule == MonthlyByWorkingDayRule(position="LAST")

    def test_monthly_by_weekday(self) -> None:
        """MONTHLY_BY_WEEKDAY reads ordinal and weekday."""
        item = build(
            full_item_data(
                scheduleMode="MONTHLY_BY_WEEKDAY", monthWeekdayOrdinal="LAST", monthWeekday=5
            )
        )
        assert item.rule == MonthlyByWeekdayRule(ordinal="LAST", weekday=5)

    def test_yearly(self) -> None:
        """YEARLY reads month and day."""
        item = build(full_item_data(scheduleMode="YEARLY", yearlyMonth=2, yearlyDay=29))
        assert item.rule == YearlyRule(month=2, day=29)

    def test_exact_time_policy(self) -> None:
        """useExactTime selects the exact times."""
        item = build(full_item_data(useExactTime=True))
        assert item.time_policy == ExactTimes(times=(ExactTime(8, 0),))
        assert item.use_exact_time

    def test_random_range_policy(self) -> None:
        """Otherwise the random window is used."""
        item = build(full_item_data())
        assert item.time_policy == RandomRange(9, 0, 21, 0, 2)
        assert not item.use_exact_time

    def test_texts_per_notification_clamped(self) -> None:
        """More texts per fire than texts is clamped."""
        assert build(full_item_data(textsPerNotification=5)).texts_per_fire == 2
        assert build(full_item_data(textsPerNotification=0)).texts_per_fire == 1

    def test_strict_raises_on_business_rule(self) -> None:
        """strict=True refuses an incomplete rule."""
        data = ITEM_SCHEMA(full_item_data(scheduleMode="WEEKLY", selectedWeekDays=[]))
        with pytest.raises(ItemValidationError) as exc_info:
            build_notification_item(data, strict=True)
        assert exc_info.value.field == const.DATA_ITEM_WEEK_DAYS

    def test_lenient_build_keeps_incomplete_rule(self) -> None:
        """Without strict the incomplete rule is built and simply never fires."""
        item = build(full_item_data(scheduleMode="WEEKLY", selectedWeekDays=[]))
        assert item.rule == WeeklyRule()


class TestBuildSettings:
    """Test whole-document building."""

    def test_items_in_order(self) -> None:
        """Items keep their document order."""
        settings = build_settings(
            {"items": [full_item_data(id="a"), full_item_data(id="b")]}
        )
        assert [item.id for item in settings.items] == ["a", "b"]

    def test_missing_items_is_empty(self) -> None:
        """A document without items has none."""
        assert build_settings({}).items == ()

    def test_invalid_item_rejects_document(self) -> None:
        """One unknown schedule mode rejects the whole document."""
        with pytest.raises(vol.Invalid):
            build_settings(
                {"items": [full_item_data(id="a"), full_item_data(scheduleMode="HOURLY")]}
            )


# =============================================================================
# Validation
# =============================================================================


class TestValidateItemData:
    """Test business rule validation."""

    def test_complete_item_passes(self) -> None:
        """A complete item has no errors."""
        assert validate_item_data(ITEM_SCHEMA(full_item_data())) == {}

    @pytest.mark.parametrize(
        ("overrides", "field"),
        [
            ({"name": "  "}, const.DATA_ITEM_NAME),
            ({"textsPerNotification": 3}, const.DATA_ITEM_TEXTS_PER_NOTIFICATION),
            ({"notificationCount": 0}, const.DATA_ITEM_NOTIFICATION_COUNT),
            ({"useExactTime": True, "exactTimes": []}, const.DATA_ITEM_EXACT_TIMES),
            ({"endDateMillis": None}, const.DATA_ITEM_START_DATE),
            ({"startDateMillis": 5000000}, const.DATA_ITEM_START_DATE),
            (
                {"scheduleMode": "SPECIFIC_DATE", "specificDateMillis": None},
                const.DATA_ITEM_SPECIFIC_DATE,
            ),
            ({"scheduleMode": "WEEKLY", "selectedWeekDays": []}, const.DATA_ITEM_WEEK_DAYS),
            (
                {"scheduleMode": "MONTHLY_BY_DATE", "selectedMonthDays": []},
                const.DATA_ITEM_MONTH_DAYS,
            ),
            (
                {"scheduleMode": "MONTHLY_BY_DATE", "workingDaysOnly": True},
                const.DATA_ITEM_WORKING_DAY_POSITION,
            ),
            (
                {"scheduleMode": "MONTHLY_BY_WEEKDAY", "monthWeekday": 2},
                const.DATA_ITEM_MONTH_WEEKDAY_ORDINAL,
            ),
            ({"scheduleMode": "YEARLY", "yearlyMonth": 2}, const.DATA_ITEM_YEARLY_MONTH),
            (
                {"scheduleMode": "YEARLY", "yearlyMonth": 2, "yearlyDay": 30},
                const.DATA_ITEM_YEARLY_DAY,
            ),
        ],
    )
    def test_error_reported_on_field(self, overrides: dict[str, Any], field: str) -> None:
        """Each failed rule names the offending field."""
        errors = validate_item_data(ITEM_SCHEMA(full_item_data(**overrides)))
        assert field in errors

    def test_count_above_cap_reported(self) -> None:
        """A count the schema never saw is still checked against the cap."""
        data = {**ITEM_SCHEMA(full_item_data()), "notificationCount": 51}
        assert const.DATA_ITEM_NOTIFICATION_COUNT in validate_item_data(data)


# =============================================================================
# Serialization
# =============================================================================


class TestItemToData:
    """Test writing items back to the persisted shape."""

    def test_unchanged_item_round_trips_exactly(self) -> None:
        """Every field, including inactive variants and raw millis, is written back."""
        data = ITEM_SCHEMA(full_item_data())
        assert item_to_data(build_notification_item(data)) == data

    def test_time_of_day_in_millis_survives(self, berlin_tz) -> None:
        """A stored time of day is kept while the day is unchanged."""
        millis = local_millis(berlin_tz, 2026, 6, 15, 14, 30)
        data = ITEM_SCHEMA(
            full_item_data(scheduleMode="SPECIFIC_DATE", specificDateMillis=millis)
        )
        item = build_notification_item(data, tz=berlin_tz)
        assert item_to_data(item, tz=berlin_tz)["specificDateMillis"] == millis

    def test_changed_day_written_as_local_midnight(self, berlin_tz) -> None:
        """A new day is stored at local midnight."""
        data = ITEM_SCHEMA(full_item_data(scheduleMode="SPECIFIC_DATE"))
        item = build_notification_item(data, tz=berlin_tz)
        changed = item.with_changes(rule=SpecificDateRule(day=date(2026, 7, 1)))
        assert item_to_data(changed, tz=berlin_tz)["specificDateMillis"] == local_millis(
            berlin_tz, 2026, 7, 1, 0, 0
        )

    def test_rule_switch_keeps_inactive_fields(self) -> None:
        """Switching to WEEKLY writes the new rule and keeps the old range."""
        item = build(full_item_data())
        switched = item.with_changes(rule=WeeklyRule(days={2}))
        data = item_to_data(switched)
        assert data["scheduleMode"] == "WEEKLY"
        assert data["selectedWeekDays"] == [2]
        assert data["startDateMillis"] == 2000000
        assert data["endDateMillis"] == 3000000

    def test_policy_switch_keeps_window(self) -> None:
        """Switching to exact times keeps the random window fields."""
        item = build(full_item_data())
        switched = item.with_changes(time_policy=ExactTimes(times=(ExactTime(7, 15),)))
        data = item_to_data(switched)
        assert data["useExactTime"] is True
        assert data["exactTimes"] == [{"hour": 7, "minute": 15}]
        assert (data["startHour"], data["endHour"], data["notificationCount"]) == (9, 21, 2)

    def test_working_day_rule_written_as_monthly_flag(self) -> None:
        """The working-day rule is stored as MONTHLY_BY_DATE with workingDaysOnly."""
        item = build(full_item_data())
        data = item_to_data(item.with_changes(rule=MonthlyByWorkingDayRule(position="FIRST")))
        assert data["scheduleMode"] == "MONTHLY_BY_DATE"
        assert data["workingDaysOnly"] is True
        assert data["workingDayPosition"] == "FIRST"

    def test_working_day_switch_back_to_dates(self) -> None:
        """Leaving working-day mode clears the flag but keeps the position."""
        item = build(
            full_item_data(
                scheduleMode="MONTHLY_BY_DATE",
                workingDaysOnly=True,
                workingDayPosition="LAST",
            )
        )
        data = item_to_data(item.with_changes(rule=MonthlyByDateRule(days={5})))
        assert data["workingDaysOnly"] is False
        assert data["selectedMonthDays"] == [5]
        assert data["workingDayPosition"] == "LAST"

    def test_export_does_not_share_retained_lists(self) -> None:
        """Editing an exported document leaves the item untouched."""
        item = build(full_item_data())
        before = dict(item.retained)
        data = item_to_data(item)
        data["selectedWeekDays"].append(7)
        data["exactTimes"][0]["hour"] = 5
        assert item.retained == before
        assert item_to_data(item)["selectedWeekDays"] == [1, 3]
        assert item_to_data(item)["exactTimes"] == [{"hour": 8, "minute": 0}]

    def test_build_does_not_share_input_lists(self) -> None:
        """Editing the source document after building leaves the item untouched."""
        data = ITEM_SCHEMA(full_item_data())
        item = build_notification_item(data)
        data["selectedWeekDays"].append(7)
        data["exactTimes"][0]["minute"] = 45
        assert item.retained["selectedWeekDays"] == [1, 3]
        assert item.retained["exactTimes"] == [{"hour": 8, "minute": 0}]
