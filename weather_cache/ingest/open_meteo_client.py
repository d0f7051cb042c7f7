"""Open-Meteo archive API client."""

import logging
from urllib.parse import quote

import httpx

from weather_cache.ingest import normalizer
from weather_cache.models.common import CanonicalDate
from weather_cache.models.weather import (
    DEFAULT_DAILY_VARIABLES,
    ArchiveQuery,
    NormalizedWeather,
)

logger = logging.getLogger(__name__)

ARCHIVE_BASE_URL = "https://archive-api.open-meteo.com/v1"
DEFAULT_TIMEZONE = "auto"

# Dallas, TX
DEFAULT_LATITUDE = 32.78
DEFAULT_LONGITUDE = -96.8


class OpenMeteoClient:
    def __init__(
        self,
        base_url: str = ARCHIVE_BASE_URL,
        latitude: float = DEFAULT_LATITUDE,
        longitude: float = DEFAULT_LONGITUDE,
        daily: list[str] | None = None,
        timezone: str = DEFAULT_TIMEZONE,
        timeout: float = 30.0,
    ):
        self.base_url = (base_url or ARCHIVE_BASE_URL).rstrip("/")
        self.latitude = latitude
        self.longitude = longitude
        self.daily = list(daily) if daily else list(DEFAULT_DAILY_VARIABLES)
        self.timezone = timezone
        self.timeout = timeout

    def build_archive_url(self, query: ArchiveQuery) -> str:
        daily = quote(",".join(query.daily), safe="")
        timezone = quote(query.timezone or DEFAULT_TIMEZONE, safe="")
        return (
            f"{self.base_url}/archive?latitude={query.latitude}"
            f"&longitude={query.longitude}"
            f"&start_date={query.start_date}&end_date={query.end_date}"
            f"&daily={daily}&timezone={timezone}"
        )

    def archive_query(
        self,
        start_date: str,
        end_date: str,
        latitude: float | None = None,
        longitude: float | None = None,
        daily: list[str] | None = None,
        timezone: str | None = None,
    ) -> ArchiveQuery:
        """Build a query, rejecting blank range boundaries."""
        if not start_date or not start_date.strip():
            raise ValueError("start_date is required")
        if not end_date or not end_date.strip():
            raise ValueError("end_date is required")
        return ArchiveQuery(
            latitude=self.latitude if latitude is None else latitude,
            longitude=self.longitude if longitude is None else longitude,
            start_date=start_date.strip(),
            end_date=end_date.strip(),
            daily=list(daily) if daily else list(self.daily),
            timezone=timezone or self.timezone,
        )

    def _get(self, query: ArchiveQuery) -> httpx.Response:
        url = self.build_archive_url(query)
        logger.debug("GET %s", url)
        try:
            return httpx.get(url, timeout=self.timeout)
        except httpx.RequestError as e:
            logger.error(
                "Archive request failed for %s..%s: %s",
                query.start_date, query.end_date, e,
            )
            raise

    def fetch_archive_raw(
        self,
        start_date: str,
        end_date: str,
        latitude: float | None = None,
        longitude: float | None = None,
        daily: list[str] | None = None,
        timezone: str | None = None,
    ) -> str:
        """Return the archive response body.

        Raises httpx.HTTPStatusError on a non-success status.
        """
        query = self.archive_query(
            start_date, end_date, latitude, longitude, daily, timezone
        )
        resp = self._get(query)
        resp.raise_for_status()
        return resp.text

    def fetch_archive_normalized(
        self,
        start_date: str,
        end_date: str,
        latitude: float | None = None,
        longitude: float | None = None,
        daily: list[str] | None = None,
        timezone: str | None = None,
    ) -> NormalizedWeather:
        """Return normalized values for `start_date`.

        A non-success status does not raise; it is carried in the result and
        whatever body came back is still normalized.
        """
        query = self.archive_query(
            start_date, end_date, latitude, longitude, daily, timezone
        )
        resp = self._get(query)
        if resp.is_error:
            logger.warning(
                "Archive returned %d for %s..%s",
                resp.status_code, query.start_date, query.end_date,
            )
        return normalizer.normalize(resp.text, query.start_date, resp.status_code)

    def fetch_daily_raw(self, date: CanonicalDate) -> str:
        return self.fetch_archive_raw(date, date)

    def fetch_daily_normalized(self, date: CanonicalDate) -> NormalizedWeather:
        return self.fetch_archive_normalized(date, date)
