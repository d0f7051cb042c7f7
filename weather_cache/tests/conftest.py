"""Shared test fixtures."""

from pathlib import Path

import pytest
import yaml

from weather_cache.config.schema import WeatherCacheConfig
from weather_cache.ingest.open_meteo_client import OpenMeteoClient
from weather_cache.storage.cache_store import WeatherCacheStore

TEST_BASE_URL = "https://test-archive.example.com/v1"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def archive_body(fixtures_dir: Path) -> str:
    """Raw archive response for 2024-01-15: min 5.0, max 12.0, precip 0.0."""
    return (fixtures_dir / "archive_2024_01_15.json").read_text()


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "weather-data"


@pytest.fixture
def store(cache_dir: Path) -> WeatherCacheStore:
    return WeatherCacheStore(cache_dir)


@pytest.fixture
def client() -> OpenMeteoClient:
    return OpenMeteoClient(base_url=TEST_BASE_URL, timeout=5.0)


@pytest.fixture
def test_config(tmp_path: Path) -> WeatherCacheConfig:
    """Config pointing every path into tmp_path."""
    return WeatherCacheConfig(
        archive={"base_url": TEST_BASE_URL},
        cache={"directory": str(tmp_path / "weather-data")},
        input={"dates_file": str(tmp_path / "dates.txt")},
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "archive": {"base_url": TEST_BASE_URL, "latitude": 40.71, "longitude": -74.01},
        "cache": {"directory": str(tmp_path / "cache")},
        "input": {"dates_file": str(tmp_path / "dates.txt")},
        "logging": {"level": "WARNING"},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
