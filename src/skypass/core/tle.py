"""TLE (Two-Line Element) records for the tracked object.

Decoding is delegated to the sgp4 library; this module only checks the line
layout and exposes the few elements the tracker reports.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from sgp4.api import Satrec, WGS72

from skypass.errors import DataSourceError

logger = logging.getLogger(__name__)

TLE_LINE_LENGTH = 69


def tle_checksum(line: str) -> int:
    """Modulo-10 checksum of a TLE line (digits count, '-' counts as 1)."""
    total = 0
    for ch in line[:68]:
        if ch.isdigit():
            total += int(ch)
        elif ch == "-":
            total += 1
    return total % 10


@dataclass(frozen=True)
class TLE:
    """A parsed Two-Line Element set.

    Attributes:
        name: Object name (line 0).
        line1: Raw TLE line 1.
        line2: Raw TLE line 2.
        norad_id: NORAD catalog number.
        epoch: Element epoch as a UTC datetime.
        inclination_deg: Orbital inclination in degrees.
        mean_motion_rev_per_day: Mean motion in revolutions per day.
        satrec: Underlying sgp4 Satrec used for propagation.
    """

    name: str
    line1: str
    line2: str
    norad_id: int
    epoch: datetime
    inclination_deg: float
    mean_motion_rev_per_day: float
    satrec: Satrec = field(repr=False, compare=False)

    @classmethod
    def from_lines(cls, line1: str, line2: str, name: str = "") -> TLE:
        """Parse a TLE from its two element lines.

        Args:
            line1: TLE line 1 (69 characters).
            line2: TLE line 2 (69 characters).
            name: Object name (line 0).

        Returns:
            A parsed TLE object.

        Raises:
            DataSourceError: If either element line is malformed.
        """
        line1 = line1.strip()
        line2 = line2.strip()

        if len(line1) != TLE_LINE_LENGTH or not line1.startswith("1 "):
            logger.error("Invalid TLE line 1: %r", line1)
            raise DataSourceError(f"Invalid TLE line 1: {line1!r}")
        if len(line2) != TLE_LINE_LENGTH or not line2.startswith("2 "):
            logger.error("Invalid TLE line 2: %r", line2)
            raise DataSourceError(f"Invalid TLE line 2: {line2!r}")

        for number, line in ((1, line1), (2, line2)):
            if line[68].isdigit() and int(line[68]) != tle_checksum(line):
                logger.warning("TLE line %d checksum mismatch: %r", number, line)

        try:
            sat = Satrec.twoline2rv(line1, line2, WGS72)
        except ValueError as e:
            logger.error("sgp4 rejected TLE: %s", e)
            raise DataSourceError(f"Unparseable TLE elements: {e}") from e

        year = int(line1[18:20])
        year = year + 2000 if year < 57 else year + 1900
        day_of_year = float(line1[20:32])
        epoch = datetime(year, 1, 1, tzinfo=timezone.utc) + timedelta(days=day_of_year - 1)

        norad_id = int(line1[2:7].strip())
        logger.debug("Parsed TLE for NORAD %d (epoch %s)", norad_id, epoch.isoformat())

        return cls(
            name=name.strip(),
            line1=line1,
            line2=line2,
            norad_id=norad_id,
            epoch=epoch,
            inclination_deg=math.degrees(sat.inclo),
            mean_motion_rev_per_day=sat.no_kozai * 1440 / (2 * math.pi),
            satrec=sat,
        )

    @property
    def display_name(self) -> str:
        return self.name or f"NORAD {self.norad_id}"

    @property
    def period_minutes(self) -> float:
        return 1440.0 / self.mean_motion_rev_per_day

    def age_days(self, at: datetime) -> float:
        """Days elapsed between the element epoch and ``at``."""
        if at.tzinfo is None:
            at = at.replace(tzinfo=timezone.utc)
        return (at - self.epoch).total_seconds() / 86400.0

    def __str__(self) -> str:
        header = f"{self.name}\n" if self.name else ""
        return f"{header}{self.line1}\n{self.line2}"
