"""Normalize Open-Meteo archive responses into per-date records.

The archive API returns a columnar `daily` block:

    {"daily": {"time": ["2024-01-15", ...],
               "temperature_2m_min": [5.0, ...],
               "temperature_2m_max": [12.0, ...],
               "precipitation_sum": [0.0, ...]}}

Every key may be missing and any element may be null or the wrong type.
Nothing here raises on bad payloads; problems surface as a ParseOutcome
or as None values.
"""

import json
import logging
import math
from typing import Any

from weather_cache.models.common import STATUS_OK, CanonicalDate
from weather_cache.models.weather import (
    CacheRecord,
    DailySeries,
    NormalizedWeather,
    ParseOutcome,
    SeriesParse,
    WeatherResult,
)

logger = logging.getLogger(__name__)

STATUS_NO_DAILY = "No daily data returned"

TIME_KEY = "time"
TEMP_MIN_KEY = "temperature_2m_min"
TEMP_MAX_KEY = "temperature_2m_max"
PRECIP_KEY = "precipitation_sum"


def parse_series(body: str | None) -> SeriesParse:
    """Parse a raw response body into a DailySeries."""
    if body is None or not body.strip():
        return SeriesParse(DailySeries(), ParseOutcome.EMPTY_BODY)

    try:
        doc = json.loads(body)
    except (ValueError, RecursionError) as e:
        logger.warning("Malformed archive JSON: %s", e)
        return SeriesParse(DailySeries(), ParseOutcome.MALFORMED_JSON)

    daily = doc.get("daily") if isinstance(doc, dict) else None
    if not isinstance(daily, dict):
        return SeriesParse(DailySeries(), ParseOutcome.NO_DAILY)

    series = DailySeries(
        time=_parse_time(daily[TIME_KEY]) if TIME_KEY in daily else None,
        temp_min=_parse_values(daily[TEMP_MIN_KEY]) if TEMP_MIN_KEY in daily else None,
        temp_max=_parse_values(daily[TEMP_MAX_KEY]) if TEMP_MAX_KEY in daily else None,
        precip_sum=_parse_values(daily[PRECIP_KEY]) if PRECIP_KEY in daily else None,
    )
    return SeriesParse(series, ParseOutcome.OK)


def _parse_time(raw: Any) -> list[str] | None:
    if not isinstance(raw, list):
        return None
    return [item if isinstance(item, str) else "" for item in raw]


def _parse_values(raw: Any) -> list[float | None]:
    """Parse one value column; bad elements become None in place."""
    if not isinstance(raw, list):
        return []
    return [_to_float(item) for item in raw]


def _to_float(item: Any) -> float | None:
    """Finite float for a JSON number, None for anything else."""
    if not isinstance(item, (int, float)) or isinstance(item, bool):
        return None
    try:
        value = float(item)
    except OverflowError:
        return None
    return value if math.isfinite(value) else None


def resolve_index(series: DailySeries, date: CanonicalDate) -> int:
    """Position of `date` in the series, or 0 when it is not there."""
    if not series.time:
        return 0
    try:
        return series.time.index(date)
    except ValueError:
        return 0


def value_at(values: list[float | None] | None, idx: int) -> float | None:
    if values is None or idx >= len(values):
        return None
    return values[idx]


def _values_for(series: DailySeries, date: CanonicalDate) -> tuple[float | None, float | None, float | None]:
    if not series.has_days:
        return None, None, None
    idx = resolve_index(series, date)
    return (
        value_at(series.temp_min, idx),
        value_at(series.temp_max, idx),
        value_at(series.precip_sum, idx),
    )


def map_to_result(series: DailySeries, date: CanonicalDate) -> WeatherResult:
    """Map a series onto a result for one date.

    A date absent from `time` still reports OK with the first day's values.
    """
    if not series.has_days:
        return WeatherResult(date=date, status=STATUS_NO_DAILY)

    t_min, t_max, precip = _values_for(series, date)
    return WeatherResult(
        date=date,
        status=STATUS_OK,
        min_temperature=t_min,
        max_temperature=t_max,
        precipitation_mm=precip,
    )


def normalize(body: str | None, date: CanonicalDate, status_code: int) -> NormalizedWeather:
    """Build the normalized DTO for an archive call that returned `status_code`."""
    t_min, t_max, precip = _values_for(parse_series(body).series, date)
    return NormalizedWeather(
        date=date,
        status_code=status_code,
        min_temperature_c=t_min,
        max_temperature_c=t_max,
        precipitation_mm=precip,
    )


def to_cache_record(body: str | None, date: CanonicalDate) -> CacheRecord:
    """Reduce a raw archive body to the four persisted fields."""
    result = map_to_result(parse_series(body).series, date)
    return CacheRecord(
        date=date,
        min_temperature=result.min_temperature,
        max_temperature=result.max_temperature,
        precipitation_mm=result.precipitation_mm,
    )
