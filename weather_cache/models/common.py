"""Common types and helpers shared across models."""

from datetime import date
from typing import TypeAlias

CanonicalDate: TypeAlias = str  # YYYY-MM-DD

STATUS_OK = "OK"


def canonical(d: date) -> CanonicalDate:
    """Render a calendar date as its cache key."""
    return d.isoformat()
