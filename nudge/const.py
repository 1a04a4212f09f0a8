# File: const.py
"""Constants for the Nudge scheduler.

This file centralizes persisted JSON keys, schedule mode names, defaults and
the tuning constants of the recurrence and slot-placement engines so every
module agrees on them.
"""

import logging

# ------------------------------------------------------------------------------------------------
# General
# ------------------------------------------------------------------------------------------------
# Logger
LOGGER = logging.getLogger(__package__)

# ------------------------------------------------------------------------------------------------
# Persisted settings keys (flat JSON, camelCase for compatibility with existing exports)
# ------------------------------------------------------------------------------------------------
DATA_ITEMS = "items"

DATA_ITEM_ID = "id"
DATA_ITEM_NAME = "name"
DATA_ITEM_IS_ENABLED = "isEnabled"
DATA_ITEM_TEXTS = "notificationTexts"
DATA_ITEM_TEXTS_PER_NOTIFICATION = "textsPerNotification"

# Time policy
DATA_ITEM_USE_EXACT_TIME = "useExactTime"
DATA_ITEM_EXACT_TIMES = "exactTimes"
DATA_ITEM_START_HOUR = "startHour"
DATA_ITEM_START_MINUTE = "startMinute"
DATA_ITEM_END_HOUR = "endHour"
DATA_ITEM_END_MINUTE = "endMinute"
DATA_ITEM_NOTIFICATION_COUNT = "notificationCount"

DATA_EXACT_TIME_HOUR = "hour"
DATA_EXACT_TIME_MINUTE = "minute"

# Schedule rule
DATA_ITEM_SCHEDULE_MODE = "scheduleMode"
DATA_ITEM_INTERVAL_DAYS = "intervalDays"
DATA_ITEM_INTERVAL_START_DATE = "intervalStartDateMillis"
DATA_ITEM_START_DATE = "startDateMillis"
DATA_ITEM_END_DATE = "endDateMillis"
DATA_ITEM_SPECIFIC_DATE = "specificDateMillis"
DATA_ITEM_WEEK_DAYS = "selectedWeekDays"
DATA_ITEM_MONTH_DAYS = "selectedMonthDays"
DATA_ITEM_WORKING_DAYS_ONLY = "workingDaysOnly"
DATA_ITEM_WORKING_DAY_POSITION = "workingDayPosition"
DATA_ITEM_MONTH_WEEKDAY_ORDINAL = "monthWeekdayOrdinal"
DATA_ITEM_MONTH_WEEKDAY = "monthWeekday"
DATA_ITEM_YEARLY_MONTH = "yearlyMonth"
DATA_ITEM_YEARLY_DAY = "yearlyDay"

# Keys that belong to a specific schedule variant (retained when inactive)
SCHEDULE_VARIANT_KEYS = (
    DATA_ITEM_INTERVAL_DAYS,
    DATA_ITEM_INTERVAL_START_DATE,
    DATA_ITEM_START_DATE,
    DATA_ITEM_END_DATE,
    DATA_ITEM_SPECIFIC_DATE,
    DATA_ITEM_WEEK_DAYS,
    DATA_ITEM_MONTH_DAYS,
    DATA_ITEM_WORKING_DAYS_ONLY,
    DATA_ITEM_WORKING_DAY_POSITION,
    DATA_ITEM_MONTH_WEEKDAY_ORDINAL,
    DATA_ITEM_MONTH_WEEKDAY,
    DATA_ITEM_YEARLY_MONTH,
    DATA_ITEM_YEARLY_DAY,
)

# Keys that belong to a specific time policy variant (retained when inactive)
TIME_POLICY_VARIANT_KEYS = (
    DATA_ITEM_EXACT_TIMES,
    DATA_ITEM_START_HOUR,
    DATA_ITEM_START_MINUTE,
    DATA_ITEM_END_HOUR,
    DATA_ITEM_END_MINUTE,
    DATA_ITEM_NOTIFICATION_COUNT,
)

# ------------------------------------------------------------------------------------------------
# Schedule modes
# ------------------------------------------------------------------------------------------------
SCHEDULE_MODE_DAILY = "DAILY"
SCHEDULE_MODE_DATE_RANGE = "DATE_RANGE"
SCHEDULE_MODE_SPECIFIC_DATE = "SPECIFIC_DATE"
SCHEDULE_MODE_WEEKLY = "WEEKLY"
SCHEDULE_MODE_MONTHLY_BY_DATE = "MONTHLY_BY_DATE"
SCHEDULE_MODE_MONTHLY_BY_WEEKDAY = "MONTHLY_BY_WEEKDAY"
SCHEDULE_MODE_YEARLY = "YEARLY"

SCHEDULE_MODES = (
    SCHEDULE_MODE_DAILY,
    SCHEDULE_MODE_WEEKLY,
    SCHEDULE_MODE_MONTHLY_BY_DATE,
    SCHEDULE_MODE_MONTHLY_BY_WEEKDAY,
    SCHEDULE_MODE_YEARLY,
    SCHEDULE_MODE_DATE_RANGE,
    SCHEDULE_MODE_SPECIFIC_DATE,
)

# Working day position (MONTHLY_BY_DATE with workingDaysOnly)
WORKING_DAY_POSITION_FIRST = "FIRST"
WORKING_DAY_POSITION_LAST = "LAST"
WORKING_DAY_POSITIONS = (WORKING_DAY_POSITION_FIRST, WORKING_DAY_POSITION_LAST)

# Monthly ordinal (MONTHLY_BY_WEEKDAY)
ORDINAL_FIRST = "FIRST"
ORDINAL_SECOND = "SECOND"
ORDINAL_THIRD = "THIRD"
ORDINAL_FOURTH = "FOURTH"
ORDINAL_LAST = "LAST"
MONTHLY_ORDINALS = (
    ORDINAL_FIRST,
    ORDINAL_SECOND,
    ORDINAL_THIRD,
    ORDINAL_FOURTH,
    ORDINAL_LAST,
)

# Ordinal → occurrence number within the month (LAST handled separately)
ORDINAL_OCCURRENCE = {
    ORDINAL_FIRST: 1,
    ORDINAL_SECOND: 2,
    ORDINAL_THIRD: 3,
    ORDINAL_FOURTH: 4,
}

# ISO weekdays
MONDAY = 1
FRIDAY = 5
SUNDAY = 7
DAYS_PER_WEEK = 7
WORKING_DAYS = frozenset(range(MONDAY, FRIDAY + 1))

WEEKDAY_SHORT_NAMES = {
    1: "Mon",
    2: "Tue",
    3: "Wed",
    4: "Thu",
    5: "Fri",
    6: "Sat",
    7: "Sun",
}

MONTH_SHORT_NAMES = {
    1: "Jan",
    2: "Feb",
    3: "Mar",
    4: "Apr",
    5: "May",
    6: "Jun",
    7: "Jul",
    8: "Aug",
    9: "Sep",
    10: "Oct",
    11: "Nov",
    12: "Dec",
}

# RFC 5545 BYDAY tokens keyed by ISO weekday
RRULE_WEEKDAY_TOKENS = {
    1: "MO",
    2: "TU",
    3: "WE",
    4: "TH",
    5: "FR",
    6: "SA",
    7: "SU",
}

# ------------------------------------------------------------------------------------------------
# Defaults
# ------------------------------------------------------------------------------------------------
DEFAULT_NOTIFICATION_TEXT = "Reminder!"
DEFAULT_ITEM_NAME = "Notification"
DEFAULT_IS_ENABLED = False
DEFAULT_START_HOUR = 9
DEFAULT_START_MINUTE = 0
DEFAULT_END_HOUR = 21
DEFAULT_END_MINUTE = 0
DEFAULT_NOTIFICATION_COUNT = 1
DEFAULT_TEXTS_PER_NOTIFICATION = 1
DEFAULT_INTERVAL_DAYS = 1
DEFAULT_SCHEDULE_MODE = SCHEDULE_MODE_DAILY
DEFAULT_USE_EXACT_TIME = False

# Editor limit
MAX_NOTIFICATION_COUNT = 50

# ------------------------------------------------------------------------------------------------
# Engine tuning
# ------------------------------------------------------------------------------------------------
MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24
MINUTES_PER_DAY = HOURS_PER_DAY * MINUTES_PER_HOUR
MILLIS_PER_SECOND = 1000

# Random placement
MIN_SLOT_SPACING_MINUTES = 15
MAX_PLACEMENT_ATTEMPTS = 100
SEED_YEAR_MULTIPLIER = 1000

# Safety limit for day-by-day scans
MAX_DATE_CALCULATION_ITERATIONS = 1000

# Default cap on occurrences returned by a window query
MAX_OCCURRENCE_SCAN = 400

# Text formatting
TEXT_BULLET_PREFIX = "• "
TEXT_LINE_SEPARATOR = "\n"

# Daily reschedule (fires just after local midnight)
DAILY_RESCHEDULE_HOUR = 0
DAILY_RESCHEDULE_MINUTE = 1

# Storage
STORAGE_FILE_NAME = "nudge_settings.json"
STORAGE_ENCODING = "utf-8"
EXPORT_JSON_INDENT = 2

# ------------------------------------------------------------------------------------------------
# Validation error messages (validate_item_data)
# ------------------------------------------------------------------------------------------------
ERROR_NAME_EMPTY = "Name must not be empty"
ERROR_TEXTS_PER_NOTIFICATION = "textsPerNotification exceeds the number of texts"
ERROR_NOTIFICATION_COUNT = "notificationCount must be between 1 and {max_count}"
ERROR_DATE_RANGE_ORDER = "startDateMillis is after endDateMillis"
ERROR_DATE_RANGE_INCOMPLETE = "DATE_RANGE needs both startDateMillis and endDateMillis"
ERROR_SPECIFIC_DATE_MISSING = "SPECIFIC_DATE needs specificDateMillis"
ERROR_WEEK_DAYS_EMPTY = "WEEKLY needs at least one selected weekday"
ERROR_MONTH_DAYS_EMPTY = "MONTHLY_BY_DATE needs at least one selected day"
ERROR_WORKING_DAY_POSITION_MISSING = "workingDaysOnly needs workingDayPosition"
ERROR_MONTH_WEEKDAY_INCOMPLETE = "MONTHLY_BY_WEEKDAY needs monthWeekdayOrdinal and monthWeekday"
ERROR_YEARLY_INCOMPLETE = "YEARLY needs yearlyMonth and yearlyDay"
ERROR_YEARLY_DATE_INVALID = "{month}/{day} never occurs"
ERROR_EXACT_TIMES_EMPTY = "useExactTime needs at least one exact time"

# ------------------------------------------------------------------------------------------------
# Summary labels (list-row descriptions)
# ------------------------------------------------------------------------------------------------
SUMMARY_SEPARATOR = " • "
SUMMARY_UNKNOWN = "?"
SUMMARY_DATE_FORMAT = "%d.%m.%Y"
SUMMARY_DAILY = "Daily"
SUMMARY_EVERY_N_DAYS = "Every {interval} days"
SUMMARY_WEEKLY = "Weekly"
SUMMARY_MONTHLY = "Monthly"
SUMMARY_NO_DATE = "No date selected"
SUMMARY_MONTH_DAYS_SHOWN = 3
SUMMARY_WORKING_DAY = {
    WORKING_DAY_POSITION_FIRST: "First working day",
    WORKING_DAY_POSITION_LAST: "Last working day",
}
SUMMARY_ORDINAL = {
    ORDINAL_FIRST: "1st",
    ORDINAL_SECOND: "2nd",
    ORDINAL_THIRD: "3rd",
    ORDINAL_FOURTH: "4th",
    ORDINAL_LAST: "Last",
}
SUMMARY_MONTH_WEEKDAY = "{ordinal} {weekday} of the month"
SUMMARY_RANDOM_RANGE = "{start} - {end} • {count}x"
SUMMARY_EXACT_TIMES = "{count} exact times"
SUMMARY_ONE_EXACT_TIME = "1 exact time"
SUMMARY_NO_EXACT_TIMES = "No exact times"
