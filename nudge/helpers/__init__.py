# File: helpers/__init__.py
"""Helper functions for Nudge that sit outside the pure engines.

NOTE: Functions that touch files or shape user-facing text belong here,
NOT in engines/ or utils/.

Submodules:
    - export_helpers: JSON import/export of settings documents
    - summary_helpers: One-line item descriptions for list rows

Usage:
    from . import export_helpers
    from .summary_helpers import describe_item
"""

from . import export_helpers, summary_helpers

__all__ = ["export_helpers", "summary_helpers"]
