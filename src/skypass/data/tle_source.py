"""Static TLE file source.

The tracker reads a single object from a local three-line record::

    OBJECT NAME
    1 NNNNNU ...
    2 NNNNN ...
"""

from __future__ import annotations

import logging
from pathlib import Path

from skypass.core.tle import TLE
from skypass.errors import DataSourceError

logger = logging.getLogger(__name__)


def read_tle_text(text: str) -> TLE:
    """Parse a three-line TLE record.

    Blank lines and surrounding whitespace are ignored; the first three
    remaining lines are taken as name, line 1 and line 2.

    Args:
        text: Raw record text.

    Returns:
        The parsed TLE.

    Raises:
        DataSourceError: If fewer than three non-empty lines are present or
            the element lines are malformed.
    """
    lines = [l.strip() for l in text.strip().splitlines() if l.strip()]
    if len(lines) < 3:
        logger.error("TLE record has %d non-empty lines, expected 3", len(lines))
        raise DataSourceError(
            f"TLE record is not in the expected format (3 lines required, found {len(lines)})"
        )
    if len(lines) > 3:
        logger.debug("Ignoring %d trailing lines after the first TLE record", len(lines) - 3)

    name, line1, line2 = lines[:3]
    return TLE.from_lines(line1, line2, name=name)


def load_tle_file(path: str | Path) -> TLE:
    """Read the tracked object's TLE from a local file.

    Raises:
        DataSourceError: If the file cannot be read or is malformed.
    """
    path = Path(path)
    logger.debug("Reading TLE from %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Cannot read TLE file %s: %s", path, e)
        raise DataSourceError(f"Cannot read TLE file {path}: {e}") from e

    tle = read_tle_text(text)
    logger.info("Loaded TLE for %s (NORAD %d, epoch %s)", tle.display_name, tle.norad_id, tle.epoch.isoformat())
    return tle
