"""Batch run reporting models."""

from dataclasses import dataclass, field


@dataclass
class BatchSummary:
    dates_requested: int = 0
    ok_count: int = 0
    cache_hits: int = 0
    fetched: int = 0
    invalid_dates: int = 0
    failed: int = 0
    duration_seconds: float = 0.0
    errors: list[str] = field(default_factory=list)
