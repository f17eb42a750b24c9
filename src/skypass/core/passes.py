"""Observer, search window and pass records."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterator

from skypass.errors import InvalidParameterError


def as_utc(t: datetime) -> datetime:
    """Return ``t`` as an aware UTC datetime; naive values are taken as UTC."""
    if t.tzinfo is None:
        return t.replace(tzinfo=timezone.utc)
    return t.astimezone(timezone.utc)


@dataclass(frozen=True)
class Observer:
    """A ground site.

    Attributes:
        latitude_deg: Geodetic latitude in degrees, [-90, 90].
        longitude_deg: Longitude in degrees, [-180, 180].
        altitude_m: Height above the WGS-84 ellipsoid in meters.
    """

    latitude_deg: float
    longitude_deg: float
    altitude_m: float = 0.0

    def __post_init__(self) -> None:
        _check_finite("observer_lat", self.latitude_deg)
        _check_finite("observer_lon", self.longitude_deg)
        _check_finite("observer_alt_m", self.altitude_m)
        if not -90.0 <= self.latitude_deg <= 90.0:
            raise InvalidParameterError(
                "observer_lat", f"latitude {self.latitude_deg} outside [-90, 90]"
            )
        if not -180.0 <= self.longitude_deg <= 180.0:
            raise InvalidParameterError(
                "observer_lon", f"longitude {self.longitude_deg} outside [-180, 180]"
            )


@dataclass(frozen=True)
class SearchWindow:
    """Time range scanned for passes.

    Passes shorter than roughly twice ``step`` can fall between two coarse
    samples and go undetected.

    Attributes:
        start: First sampled instant (UTC).
        end: Last instant that may be sampled (UTC).
        step: Coarse sampling interval.
    """

    start: datetime
    end: datetime
    step: timedelta

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", as_utc(self.start))
        object.__setattr__(self, "end", as_utc(self.end))
        if self.step <= timedelta(0):
            raise InvalidParameterError("step", f"step must be positive, got {self.step}")
        if self.start >= self.end:
            raise InvalidParameterError(
                "search_hours",
                f"window start {self.start.isoformat()} is not before end {self.end.isoformat()}",
            )

    @classmethod
    def from_hours(cls, start: datetime, hours: float, step_seconds: float) -> SearchWindow:
        _check_finite("search_hours", hours)
        _check_finite("step", step_seconds)
        if hours <= 0:
            raise InvalidParameterError("search_hours", f"must be positive, got {hours}")
        return cls(
            start=start,
            end=as_utc(start) + timedelta(hours=hours),
            step=timedelta(seconds=step_seconds),
        )

    @property
    def hours(self) -> float:
        return (self.end - self.start).total_seconds() / 3600.0


@dataclass(frozen=True)
class Pass:
    """One visibility pass over an observer.

    Attributes:
        aos: Acquisition of signal, elevation rising through the horizon.
        los: Loss of signal, elevation setting through the horizon.
        tca: Time of the highest sampled elevation.
        max_elevation_deg: Elevation at ``tca`` in degrees.
    """

    aos: datetime
    los: datetime
    tca: datetime
    max_elevation_deg: float

    def __post_init__(self) -> None:
        if not self.aos < self.los:
            raise ValueError(f"Pass AOS {self.aos} is not before LOS {self.los}")
        if not self.aos <= self.tca <= self.los:
            raise ValueError(f"Pass TCA {self.tca} outside [{self.aos}, {self.los}]")
        if self.max_elevation_deg < 0:
            raise ValueError(f"Pass max elevation {self.max_elevation_deg} is below the horizon")

    @property
    def duration(self) -> timedelta:
        return self.los - self.aos

    @property
    def duration_minutes(self) -> float:
        return self.duration.total_seconds() / 60.0


@dataclass(frozen=True)
class PassSearchResult:
    """Outcome of one pass search.

    An empty result is a valid answer ("no passes in the window"), not an
    error.

    Attributes:
        passes: Completed passes ordered by AOS.
        observer: Site the search ran for.
        window: Scanned time range.
        evaluations: Number of oracle calls made.
    """

    passes: tuple[Pass, ...]
    observer: Observer
    window: SearchWindow
    evaluations: int = 0

    @property
    def no_passes(self) -> bool:
        return not self.passes

    def __len__(self) -> int:
        return len(self.passes)

    def __iter__(self) -> Iterator[Pass]:
        return iter(self.passes)

    def __getitem__(self, index: int) -> Pass:
        return self.passes[index]


def _check_finite(field: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidParameterError(field, f"expected a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidParameterError(field, f"expected a finite number, got {value!r}")
