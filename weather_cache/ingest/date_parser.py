"""Tolerant parsing of free-form date text into calendar dates."""

import datetime as dt
import re
from dataclasses import dataclass

from dateutil import parser as dateutil_parser

from weather_cache.models.common import canonical

# Tried strictly and in order; the first match wins even when a later
# pattern would read the text differently.
DATE_FORMATS = [
    "%m/%d/%Y",  # 01/15/2024 and 1/5/2024
    "%B %d, %Y",  # January 5, 2024
    "%b-%d-%Y",  # Jan-5-2024
    "%b-%d-%y",  # Jan-5-24
    "%Y-%m-%d",
    "%b %d, %Y",  # Jan 05, 2024
]

# US convention for the generic fallback: month before day.
_US_PARSER_INFO = dateutil_parser.parserinfo(dayfirst=False, yearfirst=False)

# Missing day defaults to the 1st; the year is always required.
_GENERIC_DEFAULT = dt.datetime(2000, 1, 1)

_MONTH_PREFIXES = {
    "jan", "feb", "mar", "apr", "may", "jun",
    "jul", "aug", "sep", "oct", "nov", "dec",
}
_NUMBER_RE = re.compile(r"\d+")
_WORD_RE = re.compile(r"[A-Za-z]+")


@dataclass(frozen=True)
class DateParseResult:
    date: dt.date | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.date is not None

    @property
    def iso(self) -> str | None:
        return canonical(self.date) if self.date is not None else None


def _has_full_date_shape(text: str) -> bool:
    """True when text carries a year plus a month, numeric or named.

    Keeps bare numbers like "5" or "2024" away from the generic parser,
    which would otherwise fill the gaps from its defaults.
    """
    numbers = _NUMBER_RE.findall(text)
    if len(numbers) >= 3:
        return True
    has_year = any(len(n) == 4 for n in numbers)
    has_month_name = any(
        w[:3].lower() in _MONTH_PREFIXES for w in _WORD_RE.findall(text)
    )
    return has_year and has_month_name


def parse_date(text: str) -> DateParseResult:
    """Parse arbitrary date text.

    Explicit formats first, then a generic US-convention parse, then a
    strict ISO parse. Calendar-invalid dates such as 2024-04-31 fail.
    """
    if text is None or not text.strip():
        return DateParseResult(error="Empty input")
    text = text.strip()

    for fmt in DATE_FORMATS:
        try:
            return DateParseResult(date=dt.datetime.strptime(text, fmt).date())
        except ValueError:
            continue

    if _has_full_date_shape(text):
        try:
            parsed = dateutil_parser.parse(
                text, parserinfo=_US_PARSER_INFO, default=_GENERIC_DEFAULT
            )
            return DateParseResult(date=parsed.date())
        except (ValueError, OverflowError):
            pass

    try:
        return DateParseResult(date=dt.date.fromisoformat(text))
    except ValueError as e:
        return DateParseResult(error=str(e))
