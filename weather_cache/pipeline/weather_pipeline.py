"""Weather pipeline: cache-aside lookup for a batch of requested dates."""

import dataclasses
import logging
import time
from dataclasses import dataclass
from enum import StrEnum
from typing import Callable, Iterable

from weather_cache.errors import CacheReadError
from weather_cache.ingest.date_parser import parse_date
from weather_cache.ingest.normalizer import map_to_result, parse_series
from weather_cache.ingest.open_meteo_client import OpenMeteoClient
from weather_cache.models.common import STATUS_OK
from weather_cache.models.reporting import BatchSummary
from weather_cache.models.weather import WeatherResult
from weather_cache.storage.cache_store import WeatherCacheStore

logger = logging.getLogger(__name__)

STATUS_EMPTY_RESPONSE = "Empty response from API"


class DateState(StrEnum):
    PARSE = "parse"
    CACHE_CHECK = "cache_check"
    CACHE_READ = "cache_read"
    FETCH = "fetch"


class Resolution(StrEnum):
    INVALID = "invalid"
    CACHE_HIT = "cache_hit"
    FETCHED = "fetched"
    FAILED = "failed"


@dataclass
class DateContext:
    """Working state for one requested date."""

    raw: str
    iso: str | None = None
    resolution: Resolution | None = None


StepOutcome = DateState | WeatherResult


class WeatherPipeline:
    """Resolve each requested date from the cache or the archive API.

    Dates are handled one at a time, in input order. A failure on one date
    becomes that date's status and never stops the batch.
    """

    def __init__(self, client: OpenMeteoClient, store: WeatherCacheStore):
        self.client = client
        self.store = store
        self.last_summary: BatchSummary | None = None
        self._steps: dict[DateState, Callable[[DateContext], StepOutcome]] = {
            DateState.PARSE: self._parse,
            DateState.CACHE_CHECK: self._check_cache,
            DateState.CACHE_READ: self._read_cache,
            DateState.FETCH: self._fetch,
        }

    def run(self, lines: Iterable[str]) -> list[WeatherResult]:
        start_time = time.monotonic()
        summary = BatchSummary()
        results: list[WeatherResult] = []

        for line in lines:
            if line is None or not line.strip():
                continue
            ctx = DateContext(raw=line.strip())
            result = self.resolve(ctx)
            results.append(result)
            _record(summary, ctx, result)

        summary.duration_seconds = round(time.monotonic() - start_time, 3)
        self.last_summary = summary
        logger.info(
            "Resolved %d dates: %d ok, %d from cache, %d fetched, %d failed",
            summary.dates_requested, summary.ok_count, summary.cache_hits,
            summary.fetched, summary.failed + summary.invalid_dates,
        )
        return results

    def resolve(self, ctx: DateContext) -> WeatherResult:
        """Drive one date through its states until a result is produced."""
        state = DateState.PARSE
        while True:
            outcome = self._steps[state](ctx)
            if isinstance(outcome, WeatherResult):
                return outcome
            state = outcome

    def _parse(self, ctx: DateContext) -> StepOutcome:
        parsed = parse_date(ctx.raw)
        if not parsed.ok:
            ctx.resolution = Resolution.INVALID
            return WeatherResult(date=ctx.raw, status=f"Invalid date: {parsed.error}")
        ctx.iso = parsed.iso
        return DateState.CACHE_CHECK

    def _check_cache(self, ctx: DateContext) -> StepOutcome:
        if self.store.exists(ctx.iso):
            return DateState.CACHE_READ
        return DateState.FETCH

    def _read_cache(self, ctx: DateContext) -> StepOutcome:
        try:
            record = self.store.read_record(ctx.iso)
        except CacheReadError as e:
            logger.warning("Failed to read cached record for %s: %s", ctx.iso, e.reason)
            return DateState.FETCH

        ctx.resolution = Resolution.CACHE_HIT
        return WeatherResult(
            date=record.date,
            status=STATUS_OK,
            min_temperature=record.min_temperature,
            max_temperature=record.max_temperature,
            precipitation_mm=record.precipitation_mm,
            source_file=str(self.store.path_for(ctx.iso)),
        )

    def _fetch(self, ctx: DateContext) -> StepOutcome:
        try:
            body = self.client.fetch_daily_raw(ctx.iso)
            if not body:
                ctx.resolution = Resolution.FAILED
                return WeatherResult(date=ctx.iso, status=STATUS_EMPTY_RESPONSE)

            path = self.store.write(ctx.iso, body)
        except Exception as e:
            logger.exception("Failed to fetch data for %s", ctx.iso)
            ctx.resolution = Resolution.FAILED
            return WeatherResult(date=ctx.iso, status=f"Fetch failed: {e}")

        ctx.resolution = Resolution.FETCHED
        mapped = map_to_result(parse_series(body).series, ctx.iso)
        return dataclasses.replace(mapped, source_file=str(path))


def _record(summary: BatchSummary, ctx: DateContext, result: WeatherResult) -> None:
    summary.dates_requested += 1
    if result.ok:
        summary.ok_count += 1
    if ctx.resolution == Resolution.CACHE_HIT:
        summary.cache_hits += 1
    elif ctx.resolution == Resolution.FETCHED:
        summary.fetched += 1
    elif ctx.resolution == Resolution.INVALID:
        summary.invalid_dates += 1
    elif ctx.resolution == Resolution.FAILED:
        summary.failed += 1
    if not result.ok:
        summary.errors.append(f"{result.date}: {result.status}")
