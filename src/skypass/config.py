"""Tracker parameters and their validation."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, Mapping

from skypass.core.passes import Observer, SearchWindow, as_utc
from skypass.errors import InvalidParameterError
from skypass.utils.constants import (
    COARSE_STEP_SECONDS,
    DEFAULT_HOURS_FORWARD,
    DEFAULT_MAX_PASSES,
    DEFAULT_OBSERVER_ALT_M,
    DEFAULT_OBSERVER_LAT_DEG,
    DEFAULT_OBSERVER_LON_DEG,
    DEFAULT_SEARCH_HOURS,
    DEFAULT_TLE_PATH,
)

logger = logging.getLogger(__name__)

# camelCase names used by form-style parameter sources
_ALIASES = {
    "hoursForward": "hours_forward",
    "observerLat": "observer_lat",
    "observerLon": "observer_lon",
    "observerAlt": "observer_alt_m",
    "observer_alt": "observer_alt_m",
    "maxPasses": "max_passes",
    "searchHours": "search_hours",
    "tlePath": "tle_path",
}


def parse_datetime(value: str | datetime) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if isinstance(value, datetime):
        return as_utc(value)
    if not isinstance(value, str):
        raise InvalidParameterError("start", f"expected a timestamp, got {value!r}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return as_utc(datetime.fromisoformat(text))
    except ValueError as e:
        raise InvalidParameterError("start", f"not an ISO-8601 timestamp: {value!r}") from e


def _to_float(name: str, value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(name, f"expected a number, got {value!r}") from e
    if not math.isfinite(number):
        raise InvalidParameterError(name, f"expected a finite number, got {value!r}")
    return number


def _to_int(name: str, value: Any) -> int:
    number = _to_float(name, value)
    if number != int(number):
        raise InvalidParameterError(name, f"expected an integer, got {value!r}")
    return int(number)


@dataclass
class TrackerConfig:
    """Caller-supplied parameters for one tracking run.

    Attributes:
        start: Propagation epoch of the ground track and start of the pass search.
        hours_forward: Ground-track duration in hours.
        observer_lat: Pass-prediction site latitude in degrees.
        observer_lon: Pass-prediction site longitude in degrees.
        observer_alt_m: Pass-prediction site altitude in meters.
        max_passes: Cap on returned passes.
        search_hours: Pass-search horizon in hours.
        tle_path: Static TLE file.
    """

    start: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    hours_forward: float = DEFAULT_HOURS_FORWARD
    observer_lat: float = DEFAULT_OBSERVER_LAT_DEG
    observer_lon: float = DEFAULT_OBSERVER_LON_DEG
    observer_alt_m: float = DEFAULT_OBSERVER_ALT_M
    max_passes: int = DEFAULT_MAX_PASSES
    search_hours: float = DEFAULT_SEARCH_HOURS
    tle_path: str = DEFAULT_TLE_PATH

    def __post_init__(self) -> None:
        self.start = parse_datetime(self.start)
        self.hours_forward = _to_float("hours_forward", self.hours_forward)
        self.observer_lat = _to_float("observer_lat", self.observer_lat)
        self.observer_lon = _to_float("observer_lon", self.observer_lon)
        self.observer_alt_m = _to_float("observer_alt_m", self.observer_alt_m)
        self.max_passes = _to_int("max_passes", self.max_passes)
        self.search_hours = _to_float("search_hours", self.search_hours)
        self.tle_path = str(self.tle_path)

        if self.hours_forward <= 0:
            raise InvalidParameterError("hours_forward", f"must be positive, got {self.hours_forward}")
        if self.max_passes < 1:
            raise InvalidParameterError("max_passes", f"must be at least 1, got {self.max_passes}")
        if self.search_hours <= 0:
            raise InvalidParameterError("search_hours", f"must be positive, got {self.search_hours}")
        # Range checks for the site live on Observer
        self.observer()

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> TrackerConfig:
        """Build a config from a dict of camelCase or snake_case options.

        Raises:
            InvalidParameterError: For unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in values.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise InvalidParameterError(key, "unknown option")
            kwargs[name] = value
        config = cls(**kwargs)
        logger.debug("Loaded config: %s", config)
        return config

    def observer(self) -> Observer:
        return Observer(self.observer_lat, self.observer_lon, self.observer_alt_m)

    def search_window(self, step_seconds: float = COARSE_STEP_SECONDS) -> SearchWindow:
        return SearchWindow.from_hours(self.start, self.search_hours, step_seconds)
