"""YAML config loader and component factories."""

import hashlib
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from weather_cache.config.schema import WeatherCacheConfig
from weather_cache.ingest.open_meteo_client import OpenMeteoClient
from weather_cache.pipeline.weather_pipeline import WeatherPipeline
from weather_cache.storage.cache_store import WeatherCacheStore


def load_config(path: str | Path | None) -> WeatherCacheConfig:
    """Load and validate config from a YAML file.

    A missing path or empty file yields the defaults.
    """
    if path is None:
        return WeatherCacheConfig()
    path = Path(path)
    if not path.exists():
        return WeatherCacheConfig()
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return WeatherCacheConfig(**raw)


def config_hash(config: WeatherCacheConfig) -> str:
    """Deterministic short SHA256 of the effective config."""
    data = config.model_dump_json(indent=None)
    return hashlib.sha256(data.encode()).hexdigest()[:16]


def get_config_value(config: WeatherCacheConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path, e.g. 'archive.latitude'.

    List settings take a numeric segment: 'archive.daily.0'.
    """
    obj: Any = config
    for part in dotted_key.split("."):
        if isinstance(obj, BaseModel) and part in type(obj).model_fields:
            obj = getattr(obj, part)
        elif isinstance(obj, list) and part.isdigit() and int(part) < len(obj):
            obj = obj[int(part)]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def build_client(config: WeatherCacheConfig) -> OpenMeteoClient:
    archive = config.archive
    return OpenMeteoClient(
        base_url=archive.base_url,
        latitude=archive.latitude,
        longitude=archive.longitude,
        daily=archive.daily,
        timezone=archive.timezone,
        timeout=archive.timeout_seconds,
    )


def build_store(config: WeatherCacheConfig) -> WeatherCacheStore:
    return WeatherCacheStore(config.cache.directory)


def build_pipeline(config: WeatherCacheConfig) -> WeatherPipeline:
    return WeatherPipeline(build_client(config), build_store(config))
