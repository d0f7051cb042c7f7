"""Exceptions raised across the weather cache."""


class WeatherCacheError(Exception):
    """Base class for weather cache errors."""


class CacheReadError(WeatherCacheError):
    """A cached record is missing, unreadable, or not valid JSON."""

    def __init__(self, date: str, reason: str):
        self.date = date
        self.reason = reason
        super().__init__(f"Cached record for {date} unusable: {reason}")
