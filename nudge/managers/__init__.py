"""Managers for Nudge.

Managers orchestrate the pure engines against external collaborators:
- schedule_manager: Scheduling passes against the platform alarm subsystem
"""

from .schedule_manager import (
    AlarmSink,
    ScheduledNotification,
    ScheduleManager,
    build_day_plan,
    next_daily_reschedule,
)

__all__ = [
    "AlarmSink",
    "ScheduleManager",
    "ScheduledNotification",
    "build_day_plan",
    "next_daily_reschedule",
]
