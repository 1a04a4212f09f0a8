"""Test helpers for Nudge tests.

This module re-exports all helpers for convenient imports:

    from tests.helpers import RecordingAlarmSink, days_in, month_days

See individual modules for full documentation:
- calendar_days.py: Calendar-day ranges for property checks
- alarm_sink.py: In-memory AlarmSink recording every call
"""

from tests.helpers.alarm_sink import RecordingAlarmSink
from tests.helpers.calendar_days import days_in, month_days

__all__ = ["RecordingAlarmSink", "days_in", "month_days"]
