"""File-per-date cache of minimal daily weather records."""

import logging
import os
import tempfile
from pathlib import Path

from weather_cache.errors import CacheReadError
from weather_cache.ingest.normalizer import to_cache_record
from weather_cache.models.common import CanonicalDate
from weather_cache.models.weather import CacheRecord

logger = logging.getLogger(__name__)


class WeatherCacheStore:
    """Stores one `<date>.json` per canonical date under `cache_dir`.

    Records never expire; presence alone makes a date a cache hit.
    """

    def __init__(self, cache_dir: str | Path):
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, date: CanonicalDate) -> Path:
        return self.cache_dir / f"{date}.json"

    def exists(self, date: CanonicalDate) -> bool:
        return self.path_for(date).is_file()

    def read(self, date: CanonicalDate) -> str:
        path = self.path_for(date)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise CacheReadError(date, "not cached") from e
        except (OSError, UnicodeDecodeError) as e:
            raise CacheReadError(date, str(e)) from e

    def read_record(self, date: CanonicalDate) -> CacheRecord:
        return CacheRecord.from_json(self.read(date), date)

    def write(self, date: CanonicalDate, raw_body: str) -> Path:
        """Persist the four minimal fields of a raw archive body.

        Overwrites any existing record via an atomic replace.
        """
        record = to_cache_record(raw_body, date)
        path = self.path_for(date)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{date}.", suffix=".tmp", dir=self.cache_dir
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(record.to_json())
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Cached %s at %s", date, path)
        return path

    def list_dates(self) -> list[CanonicalDate]:
        return sorted(p.stem for p in self.cache_dir.glob("*.json"))
