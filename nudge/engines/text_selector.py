"""Text Selector for Nudge.

Picks what a notification says: a random subset of the item's text pool,
drawn without replacement. Pool positions are what must be distinct, so a
pool holding the same string twice may show it twice.
"""

from __future__ import annotations

from collections.abc import Sequence
import random

from .. import const


def pick_texts(
    pool: Sequence[str], count: int, rng: random.Random | None = None
) -> str:
    """Pick ``count`` distinct texts from the pool and format them.

    Args:
        pool: Candidate texts in configured order
        count: Requested number of texts, clamped to [1, len(pool)]
        rng: Optional random source (defaults to the ``random`` module)

    Returns:
        The single text unprefixed when one is picked, otherwise one
        bullet-prefixed line per text in draw order. An empty pool yields
        DEFAULT_NOTIFICATION_TEXT.

    Example:
        pick_texts(["a", "b"], 2) → "• b\\n• a"
    """
    if not pool:
        return const.DEFAULT_NOTIFICATION_TEXT

    chooser = rng or random
    clamped = min(max(count, 1), len(pool))
    positions = chooser.sample(range(len(pool)), clamped)
    selected = [pool[position] for position in positions]

    if clamped == 1:
        return selected[0]
    return const.TEXT_LINE_SEPARATOR.join(
        f"{const.TEXT_BULLET_PREFIX}{text}" for text in selected
    )


def pick_text(pool: Sequence[str], rng: random.Random | None = None) -> str:
    """Pick a single random text, or DEFAULT_NOTIFICATION_TEXT for an empty pool."""
    return pick_texts(pool, 1, rng)
