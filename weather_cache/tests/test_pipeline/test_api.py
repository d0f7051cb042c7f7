"""Tests for the HTTP API routes."""

from pathlib import Path
from unittest.mock import MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from weather_cache.api import create_app
from weather_cache.config.schema import WeatherCacheConfig
from weather_cache.ingest.open_meteo_client import OpenMeteoClient
from weather_cache.models.weather import NormalizedWeather
from weather_cache.pipeline.weather_pipeline import WeatherPipeline
from weather_cache.storage.cache_store import WeatherCacheStore


@pytest.fixture
def mock_client() -> MagicMock:
    return MagicMock(spec=OpenMeteoClient)


@pytest.fixture
def api(test_config: WeatherCacheConfig, mock_client: MagicMock) -> TestClient:
    store = WeatherCacheStore(test_config.cache.directory)
    pipeline = WeatherPipeline(mock_client, store)
    return TestClient(create_app(test_config, pipeline=pipeline, client=mock_client))


class TestGetAll:
    def test_results_for_dates_file(
        self, api: TestClient, test_config: WeatherCacheConfig,
        mock_client: MagicMock, archive_body: str,
    ):
        Path(test_config.input.dates_file).write_text("01/15/2024\nnot-a-date\n")
        mock_client.fetch_daily_raw.return_value = archive_body

        resp = api.get("/api/weather")
        assert resp.status_code == 200
        body = resp.json()
        assert [r["date"] for r in body] == ["2024-01-15", "not-a-date"]
        assert body[0]["status"] == "OK"
        assert body[0]["minTemperature"] == 5.0
        assert body[0]["sourceFile"].endswith("2024-01-15.json")
        assert body[1]["status"].startswith("Invalid date:")

    def test_missing_dates_file(self, api: TestClient):
        resp = api.get("/api/weather")
        assert resp.status_code == 200
        assert resp.json() == []


class TestQueryArchive:
    def test_success(self, api: TestClient, mock_client: MagicMock):
        mock_client.fetch_archive_normalized.return_value = NormalizedWeather(
            date="2024-01-15", status_code=200,
            min_temperature_c=5.0, max_temperature_c=12.0, precipitation_mm=0.0,
        )
        resp = api.get(
            "/api/weather/archive",
            params={
                "latitude": 32.78, "longitude": -96.8,
                "start_date": "2024-01-15", "end_date": "2024-01-15",
            },
        )
        assert resp.status_code == 200
        assert resp.json()["maxTemperatureC"] == 12.0
        kwargs = mock_client.fetch_archive_normalized.call_args.kwargs
        assert kwargs["daily"] == [
            "temperature_2m_max", "temperature_2m_min", "precipitation_sum",
        ]
        assert kwargs["timezone"] == "auto"

    def test_missing_dates_400(self, api: TestClient, mock_client: MagicMock):
        resp = api.get("/api/weather/archive", params={"start_date": "2024-01-15"})
        assert resp.status_code == 400
        assert "start_date and end_date are required" in resp.json()["detail"]
        mock_client.fetch_archive_normalized.assert_not_called()

    def test_upstream_failure_503(self, api: TestClient, mock_client: MagicMock):
        mock_client.fetch_archive_normalized.side_effect = httpx.ConnectError("down")
        resp = api.get(
            "/api/weather/archive",
            params={"start_date": "2024-01-15", "end_date": "2024-01-15"},
        )
        assert resp.status_code == 503
        assert resp.json() == {"error": "Upstream API request failed", "detail": "down"}

    def test_internal_error_500(self, api: TestClient, mock_client: MagicMock):
        mock_client.fetch_archive_normalized.side_effect = RuntimeError("boom")
        resp = api.get(
            "/api/weather/archive",
            params={"start_date": "2024-01-15", "end_date": "2024-01-15"},
        )
        assert resp.status_code == 500
        assert resp.json()["error"] == "Internal error"
