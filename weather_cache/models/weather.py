"""Daily weather data models: archive series, cache records, and results."""

import json
import math
from dataclasses import dataclass, field
from enum import StrEnum

from weather_cache.errors import CacheReadError
from weather_cache.models.common import STATUS_OK, CanonicalDate

DEFAULT_DAILY_VARIABLES = [
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_sum",
]


class ParseOutcome(StrEnum):
    OK = "ok"
    EMPTY_BODY = "empty_body"
    MALFORMED_JSON = "malformed_json"
    NO_DAILY = "no_daily"


@dataclass(frozen=True)
class DailySeries:
    """Columnar `daily` block of an archive response.

    A sequence is None when its key was absent from the payload. Positions
    line up with `time` only while every sequence has the same length.
    """

    time: list[str] | None = None
    temp_min: list[float | None] | None = None
    temp_max: list[float | None] | None = None
    precip_sum: list[float | None] | None = None

    @property
    def is_empty(self) -> bool:
        return (
            self.time is None
            and self.temp_min is None
            and self.temp_max is None
            and self.precip_sum is None
        )

    @property
    def has_days(self) -> bool:
        return bool(self.time)


@dataclass(frozen=True)
class SeriesParse:
    series: DailySeries
    outcome: ParseOutcome

    @property
    def ok(self) -> bool:
        return self.outcome == ParseOutcome.OK


@dataclass(frozen=True)
class ArchiveQuery:
    latitude: float
    longitude: float
    start_date: str
    end_date: str
    daily: list[str] = field(default_factory=lambda: list(DEFAULT_DAILY_VARIABLES))
    timezone: str = "auto"


@dataclass(frozen=True)
class NormalizedWeather:
    date: CanonicalDate
    status_code: int
    min_temperature_c: float | None = None
    max_temperature_c: float | None = None
    precipitation_mm: float | None = None

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "minTemperatureC": self.min_temperature_c,
            "maxTemperatureC": self.max_temperature_c,
            "precipitationMm": self.precipitation_mm,
            "statusCode": self.status_code,
        }


_RECORD_FIELDS = {
    "date": "date",
    "mintemperature": "min_temperature",
    "maxtemperature": "max_temperature",
    "precipitationmm": "precipitation_mm",
}


@dataclass(frozen=True)
class CacheRecord:
    """Minimal per-date record persisted in the cache directory."""

    date: CanonicalDate
    min_temperature: float | None = None
    max_temperature: float | None = None
    precipitation_mm: float | None = None

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "minTemperature": self.min_temperature,
            "maxTemperature": self.max_temperature,
            "precipitationMm": self.precipitation_mm,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, text: str, date: CanonicalDate) -> "CacheRecord":
        """Deserialize a stored record; keys match case-insensitively.

        `date` is the cache key the text was read under; it fills in a
        missing or null `date` field.
        """
        try:
            data = json.loads(text)
        except (ValueError, RecursionError) as e:
            raise CacheReadError(date, f"invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise CacheReadError(date, "stored JSON is not an object")

        values: dict = {}
        for key, raw in data.items():
            attr = _RECORD_FIELDS.get(key.lower())
            if attr is None:
                continue
            if attr == "date":
                if raw is not None and not isinstance(raw, str):
                    raise CacheReadError(date, "date is not a string")
                values[attr] = raw
            elif raw is None:
                values[attr] = None
            elif isinstance(raw, (int, float)) and not isinstance(raw, bool):
                values[attr] = _finite(raw, key, date)
            else:
                raise CacheReadError(date, f"{key} is not a number")

        values["date"] = values.get("date") or date
        return cls(**values)


@dataclass(frozen=True)
class WeatherResult:
    date: str
    status: str
    min_temperature: float | None = None
    max_temperature: float | None = None
    precipitation_mm: float | None = None
    source_file: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "minTemperature": self.min_temperature,
            "maxTemperature": self.max_temperature,
            "precipitationMm": self.precipitation_mm,
            "status": self.status,
            "sourceFile": self.source_file,
        }


def _finite(raw: int | float, key: str, date: CanonicalDate) -> float:
    try:
        value = float(raw)
    except OverflowError as e:
        raise CacheReadError(date, f"{key} out of range") from e
    if not math.isfinite(value):
        raise CacheReadError(date, f"{key} is not finite")
    return value
