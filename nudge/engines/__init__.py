"""Engine modules for Nudge.

Contains the pure computation engines. Each one takes typed models and
returns data, never touching storage or the alarm subsystem, and none of
them imports another:
- recurrence_engine: Does a schedule rule fire on a calendar day
- slot_planner: Trigger instants of a time policy on a calendar day
- text_selector: Random distinct texts for a trigger
"""

# Use relative imports within package to avoid mypy module resolution issues
from .recurrence_engine import RecurrenceEngine, fires, get_occurrences
from .slot_planner import build_seed, circular_distance, plan_slots
from .text_selector import pick_text, pick_texts

__all__ = [
    "RecurrenceEngine",
    "build_seed",
    "circular_distance",
    "fires",
    "get_occurrences",
    "pick_text",
    "pick_texts",
    "plan_slots",
]
