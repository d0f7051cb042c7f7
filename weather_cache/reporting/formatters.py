"""Output formatters for batch results."""

import json

from weather_cache.models.reporting import BatchSummary
from weather_cache.models.weather import WeatherResult


def _fmt(value: float | None, unit: str) -> str:
    return "-" if value is None else f"{value:.1f}{unit}"


def format_results_text(results: list[WeatherResult]) -> str:
    """One line per date, for terminals and logs."""
    lines = []
    for r in results:
        line = (
            f"{r.date}  min {_fmt(r.min_temperature, 'C')}  "
            f"max {_fmt(r.max_temperature, 'C')}  "
            f"precip {_fmt(r.precipitation_mm, 'mm')}  [{r.status}]"
        )
        lines.append(line)
    return "\n".join(lines)


def format_results_json(results: list[WeatherResult]) -> str:
    return json.dumps([r.to_dict() for r in results], indent=2)


def format_summary_text(s: BatchSummary) -> str:
    lines = [
        f"=== Batch Complete | {s.dates_requested} dates ===",
        f"OK: {s.ok_count} | From cache: {s.cache_hits} | Fetched: {s.fetched}",
        f"Invalid: {s.invalid_dates} | Failed: {s.failed}",
        f"Duration: {s.duration_seconds:.1f}s",
    ]
    return "\n".join(lines)
