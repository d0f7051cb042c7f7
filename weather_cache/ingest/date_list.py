"""Read the requested-dates list: one raw date per line."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def read_date_lines(path: str | Path) -> list[str]:
    """Return stripped, non-blank lines in file order.

    A missing file yields an empty list.
    """
    path = Path(path)
    if not path.exists():
        logger.warning("Dates file not found at %s", path)
        return []
    with open(path, encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip()]
