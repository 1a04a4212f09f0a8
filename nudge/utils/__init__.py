# File: utils/__init__.py
"""Pure Python utilities for Nudge.

Functions here have no side effects beyond logging and perform no I/O, so
they can be unit tested without fixtures beyond a pinned timezone.

Submodules:
    - dt_utils: Calendar-day arithmetic, timezone handling, epoch millis
    - rng_utils: Stable string hashing and the seeded slot-placement PRNG

Usage:
    from . import dt_utils
    from .rng_utils import SplitMix64
"""

from . import dt_utils, rng_utils

__all__ = ["dt_utils", "rng_utils"]
