"""Nudge: recurring notification scheduling.

Decides on which calendar days each configured notification item fires,
plans the trigger instants for a day, and picks the texts to show. The
platform layer supplies storage and the alarm subsystem.
"""

from .engines import RecurrenceEngine, fires, pick_texts, plan_slots
from .models import NotificationItem, NotificationSettings

__all__ = [
    "NotificationItem",
    "NotificationSettings",
    "RecurrenceEngine",
    "fires",
    "pick_texts",
    "plan_slots",
]
