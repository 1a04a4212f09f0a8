"""In-memory AlarmSink for scheduling-pass tests."""

from datetime import datetime

from nudge.managers.schedule_manager import ScheduledNotification


class RecordingAlarmSink:
    """Records every call in order, as ("cancel_all" | "arm" | "reschedule", payload)."""

    def __init__(self) -> None:
        """Start with an empty call log."""
        self.calls: list[tuple[str, object]] = []

    def cancel_all(self) -> None:
        """Record a cancel."""
        self.calls.append(("cancel_all", None))

    def arm(self, notification: ScheduledNotification) -> None:
        """Record an armed notification."""
        self.calls.append(("arm", notification))

    def arm_daily_reschedule(self, when: datetime) -> None:
        """Record the daily reschedule instant."""
        self.calls.append(("reschedule", when))

    @property
    def armed(self) -> list[ScheduledNotification]:
        """Notifications armed so far."""
        return [payload for kind, payload in self.calls if kind == "arm"]  # type: ignore[misc]

    @property
    def reschedules(self) -> list[datetime]:
        """Daily reschedule instants armed so far."""
        return [payload for kind, payload in self.calls if kind == "reschedule"]  # type: ignore[misc]
