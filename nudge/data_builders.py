"""Item building and validation helpers.

This module is the SINGLE SOURCE OF TRUTH for:
- The persisted item format (voluptuous schemas with field defaults)
- Business logic validation of persisted items
- Conversion between the flat persisted dict and the typed model

## Key Concepts

### Schemas
``ITEM_SCHEMA`` accepts any JSON written by any app version: missing keys get
their defaults (DAILY, interval 1, dates null, useExactTime false) and
unknown keys are dropped. Range checks reject values the engines could not
interpret (hour 25, weekday 8, ``Infinity``) or should not plan
(notificationCount above MAX_NOTIFICATION_COUNT).

### Build Functions
``build_notification_item()`` takes a schema-validated dict and selects the
active rule and time policy variants. Epoch-millis dates become local
calendar days. The raw rule and policy fields are kept on the item
(``retained``) so inactive variants are written back unchanged.

``item_to_data()`` is the inverse. Active fields whose typed value still
matches the stored raw value keep the raw form, so a stored date with a
time-of-day component survives an unchanged round trip.

### Validation Functions
``validate_item_data()`` checks rules the schema cannot express and returns
a dict of errors (empty if valid). The engines never require it: incomplete
rules simply never fire.

See Also:
- models.py: Typed model
- type_defs.py: TypedDict definitions for the persisted shape
"""

from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from datetime import date
from typing import Any, cast
import uuid
from zoneinfo import ZoneInfo

import voluptuous as vol

from . import const
from .models import (
    DailyRule,
    DateRangeRule,
    ExactTime,
    ExactTimes,
    MonthlyByDateRule,
    MonthlyByWeekdayRule,
    MonthlyByWorkingDayRule,
    NotificationItem,
    NotificationSettings,
    RandomRange,
    ScheduleRule,
    SpecificDateRule,
    TimePolicy,
    WeeklyRule,
    YearlyRule,
)
from .type_defs import NotificationItemData, NotificationSettingsData
from .utils.dt_utils import day_to_millis, millis_to_day, yearly_date_exists

RETAINED_KEYS = const.SCHEDULE_VARIANT_KEYS + const.TIME_POLICY_VARIANT_KEYS

# ==============================================================================
# SCHEMAS
# ==============================================================================


def coerce_int(value: Any) -> int:
    """Coerce a JSON number or numeric string to int.

    Unlike ``vol.Coerce(int)`` this also rejects non-finite floats
    (``Infinity``, ``NaN`` and overflowing literals such as ``1e400``), which
    ``json.loads`` accepts.

    Raises:
        vol.Invalid: If the value has no integer form
    """
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError) as err:
        raise vol.Invalid(f"expected an integer, got {value!r}") from err


def _int_range(minimum: int | None = None, maximum: int | None = None) -> vol.All:
    return vol.All(coerce_int, vol.Range(min=minimum, max=maximum))


def _nullable(validator: Any) -> vol.Any:
    return vol.Any(None, validator)


HOUR = _int_range(0, const.HOURS_PER_DAY - 1)
MINUTE = _int_range(0, const.MINUTES_PER_HOUR - 1)
WEEKDAY = _int_range(const.MONDAY, const.SUNDAY)
MONTH_DAY = _int_range(1, 31)
MONTH = _int_range(1, 12)
EPOCH_MILLIS = coerce_int

EXACT_TIME_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_EXACT_TIME_HOUR): HOUR,
        vol.Required(const.DATA_EXACT_TIME_MINUTE): MINUTE,
    },
    extra=vol.REMOVE_EXTRA,
)

ITEM_SCHEMA = vol.Schema(
    {
        vol.Optional(const.DATA_ITEM_ID, default=lambda: str(uuid.uuid4())): str,
        vol.Optional(const.DATA_ITEM_NAME, default=const.DEFAULT_ITEM_NAME): str,
        vol.Optional(
            const.DATA_ITEM_IS_ENABLED, default=const.DEFAULT_IS_ENABLED
        ): bool,
        vol.Optional(
            const.DATA_ITEM_TEXTS,
            default=lambda: [const.DEFAULT_NOTIFICATION_TEXT],
        ): [str],
        vol.Optional(
            const.DATA_ITEM_TEXTS_PER_NOTIFICATION,
            default=const.DEFAULT_TEXTS_PER_NOTIFICATION,
        ): coerce_int,
        # Time policy
        vol.Optional(
            const.DATA_ITEM_USE_EXACT_TIME, default=const.DEFAULT_USE_EXACT_TIME
        ): bool,
        vol.Optional(const.DATA_ITEM_EXACT_TIMES, default=list): [EXACT_TIME_SCHEMA],
        vol.Optional(const.DATA_ITEM_START_HOUR, default=const.DEFAULT_START_HOUR): HOUR,
        vol.Optional(
            const.DATA_ITEM_START_MINUTE, default=const.DEFAULT_START_MINUTE
        ): MINUTE,
        vol.Optional(const.DATA_ITEM_END_HOUR, default=const.DEFAULT_END_HOUR): HOUR,
        vol.Optional(const.DATA_ITEM_END_MINUTE, default=const.DEFAULT_END_MINUTE): MINUTE,
        vol.Optional(
            const.DATA_ITEM_NOTIFICATION_COUNT,
            default=const.DEFAULT_NOTIFICATION_COUNT,
        ): _int_range(0, const.MAX_NOTIFICATION_COUNT),
        # Schedule rule
        vol.Optional(
            const.DATA_ITEM_SCHEDULE_MODE, default=const.DEFAULT_SCHEDULE_MODE
        ): vol.In(const.SCHEDULE_MODES),
        vol.Optional(
            const.DATA_ITEM_INTERVAL_DAYS, default=const.DEFAULT_INTERVAL_DAYS
        ): coerce_int,
        vol.Optional(const.DATA_ITEM_INTERVAL_START_DATE, default=None): _nullable(
            EPOCH_MILLIS
        ),
        vol.Optional(const.DATA_ITEM_START_DATE, default=None): _nullable(EPOCH_MILLIS),
        vol.Optional(const.DATA_ITEM_END_DATE, default=None): _nullable(EPOCH_MILLIS),
        vol.Optional(const.DATA_ITEM_SPECIFIC_DATE, default=None): _nullable(
            EPOCH_MILLIS
        ),
        vol.Optional(const.DATA_ITEM_WEEK_DAYS, default=list): [WEEKDAY],
        vol.Optional(const.DATA_ITEM_MONTH_DAYS, default=list): [MONTH_DAY],
        vol.Optional(const.DATA_ITEM_WORKING_DAYS_ONLY, default=False): bool,
        vol.Optional(const.DATA_ITEM_WORKING_DAY_POSITION, default=None): _nullable(
            vol.In(const.WORKING_DAY_POSITIONS)
        ),
        vol.Optional(const.DATA_ITEM_MONTH_WEEKDAY_ORDINAL, default=None): _nullable(
            vol.In(const.MONTHLY_ORDINALS)
        ),
        vol.Optional(const.DATA_ITEM_MONTH_WEEKDAY, default=None): _nullable(WEEKDAY),
        vol.Optional(const.DATA_ITEM_YEARLY_MONTH, default=None): _nullable(MONTH),
        vol.Optional(const.DATA_ITEM_YEARLY_DAY, default=None): _nullable(MONTH_DAY),
    },
    extra=vol.REMOVE_EXTRA,
)

SETTINGS_SCHEMA = vol.Schema(
    {vol.Optional(const.DATA_ITEMS, default=list): [ITEM_SCHEMA]},
    extra=vol.REMOVE_EXTRA,
)


# ==============================================================================
# EXCEPTIONS
# ==============================================================================


class ItemValidationError(Exception):
    """Validation error with field-specific information.

    Raised by ``build_notification_item(..., strict=True)`` when an item
    fails a business rule. The field attribute names the persisted key that
    caused the failure so an editor can highlight it.

    Attributes:
        field: The DATA_ITEM_* key that failed
        message: Human-readable error message

    Example:
        raise ItemValidationError(
            field=const.DATA_ITEM_START_DATE,
            message=const.ERROR_DATE_RANGE_ORDER,
        )
    """

    def __init__(self, field: str, message: str) -> None:
        """Initialize ItemValidationError.

        Args:
            field: The DATA_ITEM_* key for the field that failed validation
            message: Error message
        """
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


# ==============================================================================
# VALIDATION
# ==============================================================================


def validate_item_data(data: Mapping[str, Any]) -> dict[str, str]:
    """Validate item business rules - SINGLE SOURCE OF TRUTH.

    Works with the persisted keys of a schema-validated dict.

    Args:
        data: Item data dict with DATA_ITEM_* keys

    Returns:
        Dict of errors: {field_key: message}
        Empty dict means validation passed.

    Validation Rules:
        1. Name not blank
        2. textsPerNotification <= max(1, number of texts)
        3. notificationCount 1..MAX_NOTIFICATION_COUNT (random range only)
        4. Exact-time items have at least one time
        5. The active schedule mode has the fields it needs
        6. DATE_RANGE start not after end
        7. YEARLY month/day exists in some year
    """
    errors: dict[str, str] = {}

    # === 1. Name ===
    name = data.get(const.DATA_ITEM_NAME, "")
    if not isinstance(name, str) or not name.strip():
        errors[const.DATA_ITEM_NAME] = const.ERROR_NAME_EMPTY

    # === 2. Texts per notification ===
    texts = data.get(const.DATA_ITEM_TEXTS) or []
    texts_per = data.get(
        const.DATA_ITEM_TEXTS_PER_NOTIFICATION, const.DEFAULT_TEXTS_PER_NOTIFICATION
    )
    if texts_per > max(1, len(texts)):
        errors[const.DATA_ITEM_TEXTS_PER_NOTIFICATION] = (
            const.ERROR_TEXTS_PER_NOTIFICATION
        )

    # === 3-4. Time policy ===
    if data.get(const.DATA_ITEM_USE_EXACT_TIME, False):
        if not data.get(const.DATA_ITEM_EXACT_TIMES):
            errors[const.DATA_ITEM_EXACT_TIMES] = const.ERROR_EXACT_TIMES_EMPTY
    else:
        count = data.get(
            const.DATA_ITEM_NOTIFICATION_COUNT, const.DEFAULT_NOTIFICATION_COUNT
        )
        if not 1 <= count <= const.MAX_NOTIFICATION_COUNT:
            errors[const.DATA_ITEM_NOTIFICATION_COUNT] = (
                const.ERROR_NOTIFICATION_COUNT.format(
                    max_count=const.MAX_NOTIFICATION_COUNT
                )
            )

    # === 5-7. Schedule rule ===
    errors.update(_validate_schedule(data))
    return errors


def _validate_schedule(data: Mapping[str, Any]) -> dict[str, str]:
    errors: dict[str, str] = {}
    mode = data.get(const.DATA_ITEM_SCHEDULE_MODE, const.DEFAULT_SCHEDULE_MODE)

    if mode == const.SCHEDULE_MODE_DATE_RANGE:
        start = data.get(const.DATA_ITEM_START_DATE)
        end = data.get(const.DATA_ITEM_END_DATE)
        if start is None or end is None:
            errors[const.DATA_ITEM_START_DATE] = const.ERROR_DATE_RANGE_INCOMPLETE
        elif start > end:
            errors[const.DATA_ITEM_START_DATE] = const.ERROR_DATE_RANGE_ORDER

    elif mode == const.SCHEDULE_MODE_SPECIFIC_DATE:
        if data.get(const.DATA_ITEM_SPECIFIC_DATE) is None:
            errors[const.DATA_ITEM_SPECIFIC_DATE] = const.ERROR_SPECIFIC_DATE_MISSING

    elif mode == const.SCHEDULE_MODE_WEEKLY:
        if not data.get(const.DATA_ITEM_WEEK_DAYS):
            errors[const.DATA_ITEM_WEEK_DAYS] = const.ERROR_WEEK_DAYS_EMPTY

    elif mode == const.SCHEDULE_MODE_MONTHLY_BY_DATE:
        if data.get(const.DATA_ITEM_WORKING_DAYS_ONLY, False):
            if data.get(const.DATA_ITEM_WORKING_DAY_POSITION) is None:
                errors[const.DATA_ITEM_WORKING_DAY_POSITION] = (
                    const.ERROR_WORKING_DAY_POSITION_MISSING
                )
        elif not data.get(const.DATA_ITEM_MONTH_DAYS):
            errors[const.DATA_ITEM_MONTH_DAYS] = const.ERROR_MONTH_DAYS_EMPTY

    elif mode == const.SCHEDULE_MODE_MONTHLY_BY_WEEKDAY:
        if (
            data.get(const.DATA_ITEM_MONTH_WEEKDAY_ORDINAL) is None
            or data.get(const.DATA_ITEM_MONTH_WEEKDAY) is None
        ):
            errors[const.DATA_ITEM_MONTH_WEEKDAY_ORDINAL] = (
                const.ERROR_MONTH_WEEKDAY_INCOMPLETE
            )

    elif mode == const.SCHEDULE_MODE_YEARLY:
        month = data.get(const.DATA_ITEM_YEARLY_MONTH)
        day = data.get(const.DATA_ITEM_YEARLY_DAY)
        if month is None or day is None:
            errors[const.DATA_ITEM_YEARLY_MONTH] = const.ERROR_YEARLY_INCOMPLETE
        elif not yearly_date_exists(month, day):
            errors[const.DATA_ITEM_YEARLY_DAY] = const.ERROR_YEARLY_DATE_INVALID.format(
                month=month, day=day
            )

    return errors


# ==============================================================================
# BUILD: persisted dict → model
# ==============================================================================


def _build_rule(data: Mapping[str, Any], tz: ZoneInfo | None) -> ScheduleRule:
    """Select the active schedule variant from the flat fields."""
    mode = data.get(const.DATA_ITEM_SCHEDULE_MODE, const.DEFAULT_SCHEDULE_MODE)

    if mode == const.SCHEDULE_MODE_DATE_RANGE:
        return DateRangeRule(
            start_day=millis_to_day(data.get(const.DATA_ITEM_START_DATE), tz),
            end_day=millis_to_day(data.get(const.DATA_ITEM_END_DATE), tz),
        )
    if mode == const.SCHEDULE_MODE_SPECIFIC_DATE:
        return SpecificDateRule(
            day=millis_to_day(data.get(const.DATA_ITEM_SPECIFIC_DATE), tz)
        )
    if mode == const.SCHEDULE_MODE_WEEKLY:
        return WeeklyRule(days=frozenset(data.get(const.DATA_ITEM_WEEK_DAYS) or ()))
    if mode == const.SCHEDULE_MODE_MONTHLY_BY_DATE:
        if data.get(const.DATA_ITEM_WORKING_DAYS_ONLY, False):
            return MonthlyByWorkingDayRule(
                position=data.get(const.DATA_ITEM_WORKING_DAY_POSITION)
            )
        return MonthlyByDateRule(
            days=frozenset(data.get(const.DATA_ITEM_MONTH_DAYS) or ())
        )
    if mode == const.SCHEDULE_MODE_MONTHLY_BY_WEEKDAY:
        return MonthlyByWeekdayRule(
            ordinal=data.get(const.DATA_ITEM_MONTH_WEEKDAY_ORDINAL),
            weekday=data.get(const.DATA_ITEM_MONTH_WEEKDAY),
        )
    if mode == const.SCHEDULE_MODE_YEARLY:
        return YearlyRule(
            month=data.get(const.DATA_ITEM_YEARLY_MONTH),
            day=data.get(const.DATA_ITEM_YEARLY_DAY),
        )

    if mode != const.SCHEDULE_MODE_DAILY:
        const.LOGGER.debug("Unknown schedule mode %s, treating as DAILY", mode)
    return DailyRule(
        interval_days=data.get(const.DATA_ITEM_INTERVAL_DAYS, const.DEFAULT_INTERVAL_DAYS),
        anchor_day=millis_to_day(data.get(const.DATA_ITEM_INTERVAL_START_DATE), tz),
    )


def _build_time_policy(data: Mapping[str, Any]) -> TimePolicy:
    """Select the active time policy variant from the flat fields."""
    if data.get(const.DATA_ITEM_USE_EXACT_TIME, const.DEFAULT_USE_EXACT_TIME):
        return ExactTimes(
            times=tuple(
                ExactTime(
                    hour=entry[const.DATA_EXACT_TIME_HOUR],
                    minute=entry[const.DATA_EXACT_TIME_MINUTE],
                )
                for entry in data.get(const.DATA_ITEM_EXACT_TIMES) or []
            )
        )
    return RandomRange(
        start_hour=data.get(const.DATA_ITEM_START_HOUR, const.DEFAULT_START_HOUR),
        start_minute=data.get(const.DATA_ITEM_START_MINUTE, const.DEFAULT_START_MINUTE),
        end_hour=data.get(const.DATA_ITEM_END_HOUR, const.DEFAULT_END_HOUR),
        end_minute=data.get(const.DATA_ITEM_END_MINUTE, const.DEFAULT_END_MINUTE),
        count=data.get(
            const.DATA_ITEM_NOTIFICATION_COUNT, const.DEFAULT_NOTIFICATION_COUNT
        ),
    )


def build_notification_item(
    data: Mapping[str, Any],
    *,
    tz: ZoneInfo | None = None,
    strict: bool = False,
) -> NotificationItem:
    """Build a NotificationItem from a schema-validated persisted dict.

    Args:
        data: Item dict that passed ITEM_SCHEMA
        tz: Optional timezone for epoch-millis → calendar day conversion
        strict: If True, run validate_item_data() first and raise on errors

    Returns:
        The typed item

    Raises:
        ItemValidationError: If strict and a business rule fails
    """
    if strict:
        errors = validate_item_data(data)
        if errors:
            field, message = next(iter(errors.items()))
            raise ItemValidationError(field=field, message=message)

    retained = {key: deepcopy(data[key]) for key in RETAINED_KEYS if key in data}
    return NotificationItem(
        id=data.get(const.DATA_ITEM_ID) or str(uuid.uuid4()),
        name=data.get(const.DATA_ITEM_NAME, const.DEFAULT_ITEM_NAME),
        enabled=data.get(const.DATA_ITEM_IS_ENABLED, const.DEFAULT_IS_ENABLED),
        texts=tuple(data.get(const.DATA_ITEM_TEXTS) or ()),
        texts_per_fire=data.get(
            const.DATA_ITEM_TEXTS_PER_NOTIFICATION,
            const.DEFAULT_TEXTS_PER_NOTIFICATION,
        ),
        rule=_build_rule(data, tz),
        time_policy=_build_time_policy(data),
        retained=retained,
    )


def build_settings(
    data: Mapping[str, Any], *, tz: ZoneInfo | None = None
) -> NotificationSettings:
    """Validate a settings document against SETTINGS_SCHEMA and build it.

    Raises:
        vol.Invalid: If the document does not match the schema
    """
    validated = SETTINGS_SCHEMA(dict(data))
    return NotificationSettings(
        items=tuple(
            build_notification_item(item, tz=tz) for item in validated[const.DATA_ITEMS]
        )
    )


# ==============================================================================
# SERIALIZE: model → persisted dict
# ==============================================================================


def _rule_to_data(
    rule: ScheduleRule, retained: Mapping[str, Any], tz: ZoneInfo | None
) -> dict[str, Any]:
    """Persisted fields of the active schedule variant."""

    def day_field(key: str, day: date | None) -> int | None:
        if day is None:
            return None
        raw = retained.get(key)
        if raw is not None and millis_to_day(raw, tz) == day:
            return raw
        return day_to_millis(day, tz)

    def days_field(key: str, days: frozenset[int]) -> list[int]:
        raw = retained.get(key)
        if isinstance(raw, list) and frozenset(raw) == days:
            return list(raw)
        return sorted(days)

    if isinstance(rule, DateRangeRule):
        return {
            const.DATA_ITEM_SCHEDULE_MODE: const.SCHEDULE_MODE_DATE_RANGE,
            const.DATA_ITEM_START_DATE: day_field(const.DATA_ITEM_START_DATE, rule.start_day),
            const.DATA_ITEM_END_DATE: day_field(const.DATA_ITEM_END_DATE, rule.end_day),
        }
    if isinstance(rule, SpecificDateRule):
        return {
            const.DATA_ITEM_SCHEDULE_MODE: const.SCHEDULE_MODE_SPECIFIC_DATE,
            const.DATA_ITEM_SPECIFIC_DATE: day_field(const.DATA_ITEM_SPECIFIC_DATE, rule.day),
        }
    if isinstance(rule, WeeklyRule):
        return {
            const.DATA_ITEM_SCHEDULE_MODE: const.SCHEDULE_MODE_WEEKLY,
            const.DATA_ITEM_WEEK_DAYS: days_field(const.DATA_ITEM_WEEK_DAYS, rule.days),
        }
    if isinstance(rule, MonthlyByDateRule):
        return {
            const.DATA_ITEM_SCHEDULE_MODE: const.SCHEDULE_MODE_MONTHLY_BY_DATE,
            const.DATA_ITEM_WORKING_DAYS_ONLY: False,
            const.DATA_ITEM_MONTH_DAYS: days_field(const.DATA_ITEM_MONTH_DAYS, rule.days),
        }
    if isinstance(rule, MonthlyByWorkingDayRule):
        return {
            const.DATA_ITEM_SCHEDULE_MODE: const.SCHEDULE_MODE_MONTHLY_BY_DATE,
            const.DATA_ITEM_WORKING_DAYS_ONLY: True,
            const.DATA_ITEM_WORKING_DAY_POSITION: rule.position,
        }
    if isinstance(rule, MonthlyByWeekdayRule):
        return {
            const.DATA_ITEM_SCHEDULE_MODE: const.SCHEDULE_MODE_MONTHLY_BY_WEEKDAY,
            const.DATA_ITEM_MONTH_WEEKDAY_ORDINAL: rule.ordinal,
            const.DATA_ITEM_MONTH_WEEKDAY: rule.weekday,
        }
    if isinstance(rule, YearlyRule):
        return {
            const.DATA_ITEM_SCHEDULE_MODE: const.SCHEDULE_MODE_YEARLY,
            const.DATA_ITEM_YEARLY_MONTH: rule.month,
            const.DATA_ITEM_YEARLY_DAY: rule.day,
        }
    return {
        const.DATA_ITEM_SCHEDULE_MODE: const.SCHEDULE_MODE_DAILY,
        const.DATA_ITEM_INTERVAL_DAYS: rule.interval_days,
        const.DATA_ITEM_INTERVAL_START_DATE: day_field(
            const.DATA_ITEM_INTERVAL_START_DATE, rule.anchor_day
        ),
    }


def _time_policy_to_data(policy: TimePolicy) -> dict[str, Any]:
    """Persisted fields of the active time policy variant."""
    if isinstance(policy, ExactTimes):
        return {
            const.DATA_ITEM_USE_EXACT_TIME: True,
            const.DATA_ITEM_EXACT_TIMES: [
                {
                    const.DATA_EXACT_TIME_HOUR: exact.hour,
                    const.DATA_EXACT_TIME_MINUTE: exact.minute,
                }
                for exact in policy.times
            ],
        }
    return {
        const.DATA_ITEM_USE_EXACT_TIME: False,
        const.DATA_ITEM_START_HOUR: policy.start_hour,
        const.DATA_ITEM_START_MINUTE: policy.start_minute,
        const.DATA_ITEM_END_HOUR: policy.end_hour,
        const.DATA_ITEM_END_MINUTE: policy.end_minute,
        const.DATA_ITEM_NOTIFICATION_COUNT: policy.count,
    }


def item_to_data(
    item: NotificationItem, *, tz: ZoneInfo | None = None
) -> NotificationItemData:
    """Serialize an item to the flat persisted dict.

    Every field of every variant is written: inactive variants come from the
    retained raw values, falling back to schema defaults.
    """
    data: dict[str, Any] = ITEM_SCHEMA({const.DATA_ITEM_ID: item.id})
    data.update(
        {
            key: deepcopy(value)
            for key, value in item.retained.items()
            if key in RETAINED_KEYS
        }
    )
    data.update(
        {
            const.DATA_ITEM_ID: item.id,
            const.DATA_ITEM_NAME: item.name,
            const.DATA_ITEM_IS_ENABLED: item.enabled,
            const.DATA_ITEM_TEXTS: list(item.texts),
            const.DATA_ITEM_TEXTS_PER_NOTIFICATION: item.texts_per_fire,
        }
    )
    data.update(_rule_to_data(item.rule, item.retained, tz))
    data.update(_time_policy_to_data(item.time_policy))
    return cast(NotificationItemData, data)


def settings_to_data(
    settings: NotificationSettings, *, tz: ZoneInfo | None = None
) -> NotificationSettingsData:
    """Serialize settings to the persisted document."""
    return {const.DATA_ITEMS: [item_to_data(item, tz=tz) for item in settings.items]}
