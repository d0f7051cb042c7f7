"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field

from weather_cache.config.defaults import (
    DEFAULT_CACHE_DIR,
    DEFAULT_CORS_ORIGINS,
    DEFAULT_DATES_FILE,
)
from weather_cache.ingest.open_meteo_client import (
    ARCHIVE_BASE_URL,
    DEFAULT_LATITUDE,
    DEFAULT_LONGITUDE,
    DEFAULT_TIMEZONE,
)
from weather_cache.models.weather import DEFAULT_DAILY_VARIABLES


class LogLevel(StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class ArchiveConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = ARCHIVE_BASE_URL
    latitude: float = Field(default=DEFAULT_LATITUDE, ge=-90.0, le=90.0)
    longitude: float = Field(default=DEFAULT_LONGITUDE, ge=-180.0, le=180.0)
    daily: list[str] = Field(
        default_factory=lambda: list(DEFAULT_DAILY_VARIABLES), min_length=1
    )
    timezone: str = DEFAULT_TIMEZONE
    timeout_seconds: float = Field(default=30.0, gt=0.0)


class CacheConfig(BaseModel):
    model_config = {"extra": "forbid"}

    directory: str = DEFAULT_CACHE_DIR


class InputConfig(BaseModel):
    model_config = {"extra": "forbid"}

    dates_file: str = DEFAULT_DATES_FILE


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    cors_origins: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CORS_ORIGINS)
    )


class LoggingConfig(BaseModel):
    model_config = {"extra": "forbid"}

    level: LogLevel = LogLevel.INFO


class WeatherCacheConfig(BaseModel):
    model_config = {"extra": "forbid"}

    archive: ArchiveConfig = ArchiveConfig()
    cache: CacheConfig = CacheConfig()
    input: InputConfig = InputConfig()
    api: ApiConfig = ApiConfig()
    logging: LoggingConfig = LoggingConfig()
