# File: managers/schedule_manager.py
"""Schedule Manager for Nudge.

Runs a scheduling pass: for each enabled item that fires today, plan its
slots, pick a text per slot, and hand the result to the alarm subsystem.

A pass is triggered on settings change, on boot, after a notification fires
and once a day just after local midnight. Every pass cancels all armed
alarms first and rebuilds the full plan, which is safe because planning is
deterministic per item and day.

The manager owns no alarm implementation: it talks to an ``AlarmSink``
supplied by the platform layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
import random
from typing import Protocol
from zoneinfo import ZoneInfo

from .. import const
from ..engines.recurrence_engine import fires
from ..engines.slot_planner import plan_slots
from ..engines.text_selector import pick_texts
from ..models import NotificationSettings
from ..utils.dt_utils import (
    as_local,
    at_minute_of_day,
    dt_now_local,
    next_day,
    to_calendar_day,
)


@dataclass(frozen=True, slots=True)
class ScheduledNotification:
    """One armed trigger: when it fires and what it shows.

    ``slot_index`` is unique across the whole pass and stable for identical
    inputs, so the platform layer can use it as the alarm request code.
    """

    trigger_at: datetime
    text: str
    title: str
    item_id: str
    slot_index: int


class AlarmSink(Protocol):
    """Platform alarm subsystem the manager arms triggers with."""

    def cancel_all(self) -> None:
        """Cancel every alarm armed by a previous pass."""

    def arm(self, notification: ScheduledNotification) -> None:
        """Arm one notification trigger."""

    def arm_daily_reschedule(self, when: datetime) -> None:
        """Arm the next scheduling pass."""


def build_day_plan(
    settings: NotificationSettings,
    now: datetime,
    *,
    tz: ZoneInfo | None = None,
    rng: random.Random | None = None,
) -> list[ScheduledNotification]:
    """Plan every trigger of the local day containing ``now``.

    Args:
        settings: All items; disabled ones are skipped
        now: Current instant
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.
        rng: Optional random source for text selection

    Returns:
        Triggers grouped by item in configured order, slots numbered from 0.
    """
    today = to_calendar_day(now, tz)
    plan: list[ScheduledNotification] = []

    for item in settings.enabled_items():
        if not fires(item.rule, today, tz):
            continue
        instants = plan_slots(item.time_policy, today, now, item.id, tz)
        for instant in instants:
            plan.append(
                ScheduledNotification(
                    trigger_at=instant,
                    text=pick_texts(item.texts, item.texts_per_fire, rng),
                    title=item.name,
                    item_id=item.id,
                    slot_index=len(plan),
                )
            )
        const.LOGGER.debug(
            "ScheduleManager: Planned %s slot(s) for %s on %s",
            len(instants),
            item.name,
            today,
        )

    return plan


def next_daily_reschedule(now: datetime, *, tz: ZoneInfo | None = None) -> datetime:
    """Instant of the next daily pass: tomorrow at 00:01 local time."""
    tomorrow = next_day(to_calendar_day(now, tz))
    minute_of_day = (
        const.DAILY_RESCHEDULE_HOUR * const.MINUTES_PER_HOUR
        + const.DAILY_RESCHEDULE_MINUTE
    )
    return at_minute_of_day(tomorrow, minute_of_day, tz)


class ScheduleManager:
    """Runs scheduling passes against an alarm sink."""

    def __init__(
        self,
        sink: AlarmSink,
        *,
        tz: ZoneInfo | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            sink: Platform alarm subsystem
            tz: Optional timezone override
            rng: Optional random source for text selection
        """
        self._sink = sink
        self._tz = tz
        self._rng = rng

    def schedule_all(
        self, settings: NotificationSettings, now: datetime | None = None
    ) -> list[ScheduledNotification]:
        """Cancel everything and arm today's full plan.

        The daily reschedule is armed only while at least one item is enabled.

        Returns:
            The armed plan.
        """
        now = as_local(now, self._tz) if now else dt_now_local(self._tz)
        self._sink.cancel_all()

        plan = build_day_plan(settings, now, tz=self._tz, rng=self._rng)
        for notification in plan:
            self._sink.arm(notification)

        if settings.any_enabled():
            self._sink.arm_daily_reschedule(next_daily_reschedule(now, tz=self._tz))

        const.LOGGER.debug(
            "ScheduleManager: Armed %s notification(s) at %s", len(plan), now
        )
        return plan

    def reschedule_if_needed(
        self, settings: NotificationSettings, now: datetime | None = None
    ) -> list[ScheduledNotification]:
        """Run a pass only if any item is enabled (boot and post-fire hooks)."""
        if not settings.any_enabled():
            return []
        return self.schedule_all(settings, now)
