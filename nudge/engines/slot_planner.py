"""Time Slot Planner for Nudge.

Computes the trigger instants of one item on one calendar day.

- ExactTimes: one instant per configured wall-clock time.
- RandomRange: ``count`` pseudo-random minutes inside the window, pairwise at
  least MIN_SLOT_SPACING_MINUTES apart on the 24h circle, falling back to an
  even split of the window when the spacing cannot be met.

Random placement is seeded from the calendar day and a stable hash of the
item id, so replanning the same item on the same day always yields the same
minutes, across process restarts too.

Any instant at or before ``now`` is moved to the same wall-clock time on the
next day. Degenerate policies yield an empty plan, never an exception.
"""

from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from .. import const
from ..models import ExactTimes, RandomRange, TimePolicy
from ..utils.dt_utils import at_minute_of_day, day_of_year, next_day, to_calendar_day
from ..utils.rng_utils import MASK_64, SplitMix64, fnv1a_64


def circular_distance(a: int, b: int) -> int:
    """Distance in minutes between two minutes-of-day across midnight.

    Example:
        circular_distance(1430, 5) → 15
    """
    diff = abs(a - b)
    return min(diff, const.MINUTES_PER_DAY - diff)


def build_seed(day: date, item_seed: str) -> int:
    """Derive the 64-bit PRNG seed for an item on a calendar day.

    ``year * 1000 + day_of_year`` is unique per day; the FNV-1a hash of the
    item seed separates items.
    """
    day_key = day.year * const.SEED_YEAR_MULTIPLIER + day_of_year(day)
    return (day_key + fnv1a_64(item_seed)) & MASK_64


def plan_slots(
    policy: TimePolicy,
    day: date | datetime,
    now: datetime,
    item_seed: str,
    tz: ZoneInfo | None = None,
) -> list[datetime]:
    """Plan the trigger instants of an item on a calendar day.

    Args:
        policy: ExactTimes or RandomRange
        day: Calendar day to plan (a datetime is normalized to its local day)
        now: Current instant; slots at or before it roll to the next day
        item_seed: Stable item identity (the item id)
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Timezone-aware instants in ascending minute-of-day order.
    """
    local_day = to_calendar_day(day, tz)

    if isinstance(policy, ExactTimes):
        minutes = _exact_minutes(policy)
    elif isinstance(policy, RandomRange):
        minutes = _random_minutes(policy, local_day, item_seed)
    else:
        const.LOGGER.debug(
            "SlotPlanner: Unknown time policy %s, nothing to plan",
            type(policy).__name__,
        )
        return []

    return [_to_instant(local_day, minute, now, tz) for minute in minutes]


# =============================================================================
# Private: minute selection
# =============================================================================


def _exact_minutes(policy: ExactTimes) -> list[int]:
    """Sorted minutes-of-day of the valid configured times (duplicates kept)."""
    minutes: list[int] = []
    for exact in policy.times:
        if not exact.is_valid:
            const.LOGGER.warning(
                "SlotPlanner: Skipping invalid exact time %s:%s",
                exact.hour,
                exact.minute,
            )
            continue
        minutes.append(exact.minute_of_day)
    return sorted(minutes)


def _random_minutes(policy: RandomRange, day: date, item_seed: str) -> list[int]:
    """Pick ``count`` spaced minutes inside the window.

    Up to MAX_PLACEMENT_ATTEMPTS single draws are made; a draw is accepted
    only if it keeps MIN_SLOT_SPACING_MINUTES to every accepted minute. If
    the draws run out first, all accepted minutes are discarded and the
    window is split evenly, jittering each slot inside its share. The
    fallback continues the same PRNG stream.
    """
    total = policy.total_minutes
    count = policy.count
    if total <= 0 or count <= 0:
        return []

    start = policy.start_minutes
    rng = SplitMix64(build_seed(day, item_seed))

    accepted: list[int] = []
    for _ in range(const.MAX_PLACEMENT_ATTEMPTS):
        if len(accepted) >= count:
            break
        candidate = (start + rng.next_int(total)) % const.MINUTES_PER_DAY
        if all(
            circular_distance(candidate, other) >= const.MIN_SLOT_SPACING_MINUTES
            for other in accepted
        ):
            accepted.append(candidate)

    if len(accepted) < count:
        const.LOGGER.debug(
            "SlotPlanner: Placed %s of %s slots for %s on %s, using even split",
            len(accepted),
            count,
            item_seed,
            day,
        )
        interval = total // count
        accepted = [
            (start + interval * index + rng.next_int(max(interval, 1)))
            % const.MINUTES_PER_DAY
            for index in range(count)
        ]

    return sorted(accepted)


def _to_instant(
    day: date, minute_of_day: int, now: datetime, tz: ZoneInfo | None
) -> datetime:
    """Instant of a minute on ``day``, or on the next day if already past."""
    instant = at_minute_of_day(day, minute_of_day, tz)
    if instant <= now:
        instant = at_minute_of_day(next_day(day), minute_of_day, tz)
    return instant
