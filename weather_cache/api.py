"""HTTP API: cached daily weather and a pass-through archive query."""

import logging

import httpx
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from weather_cache.config.loader import build_client, build_pipeline
from weather_cache.config.schema import WeatherCacheConfig
from weather_cache.ingest.date_list import read_date_lines
from weather_cache.ingest.open_meteo_client import OpenMeteoClient
from weather_cache.models.weather import DEFAULT_DAILY_VARIABLES
from weather_cache.pipeline.weather_pipeline import WeatherPipeline

logger = logging.getLogger(__name__)


def create_app(
    config: WeatherCacheConfig | None = None,
    pipeline: WeatherPipeline | None = None,
    client: OpenMeteoClient | None = None,
) -> FastAPI:
    config = config or WeatherCacheConfig()
    pipeline = pipeline or build_pipeline(config)
    client = client or build_client(config)

    app = FastAPI(title="Weather Cache", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/weather")
    def get_all():
        """Weather for every date in the configured dates file."""
        lines = read_date_lines(config.input.dates_file)
        return [r.to_dict() for r in pipeline.run(lines)]

    @app.get("/api/weather/archive")
    def query_archive(
        latitude: float = 0.0,
        longitude: float = 0.0,
        start_date: str = "",
        end_date: str = "",
        daily: str = Query(default=",".join(DEFAULT_DAILY_VARIABLES)),
        timezone: str = "auto",
    ):
        """Proxy one query to the archive API and return normalized values."""
        if not start_date.strip() or not end_date.strip():
            raise HTTPException(
                status_code=400,
                detail="start_date and end_date are required and must be in yyyy-MM-dd format.",
            )
        variables = [v.strip() for v in daily.split(",") if v.strip()]
        try:
            result = client.fetch_archive_normalized(
                start_date,
                end_date,
                latitude=latitude,
                longitude=longitude,
                daily=variables,
                timezone=timezone,
            )
        except httpx.RequestError as e:
            return JSONResponse(
                status_code=503,
                content={"error": "Upstream API request failed", "detail": str(e)},
            )
        except Exception as e:
            logger.exception("Archive proxy failed")
            return JSONResponse(
                status_code=500,
                content={"error": "Internal error", "detail": str(e)},
            )
        return result.to_dict()

    return app
