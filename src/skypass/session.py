"""Tracking session — one object, one render surface, explicit state.

A session owns the parsed TLE, its oracle and at most one live-tracking
handle. Searches are pure functions of their arguments, so several sessions
can run side by side.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

from skypass.core.groundtrack import ground_track
from skypass.core.oracle import GroundPoint, SatelliteOracle
from skypass.core.passes import Observer, PassSearchResult, SearchWindow, as_utc
from skypass.core.scanner import ElevationOracle, find_passes
from skypass.core.tle import TLE
from skypass.data.tle_source import load_tle_file
from skypass.live import LiveHandle, RepeatingTask
from skypass.render.surface import RenderSurface
from skypass.utils.constants import COARSE_STEP_SECONDS, LIVE_INTERVAL_SECONDS

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TrackingSession:
    """Ground track, pass prediction and live tracking for a single object.

    Args:
        tle: The tracked object's elements.
        surface: Where results are rendered.
        oracle: Elevation/subpoint provider. Defaults to a SatelliteOracle
            built from ``tle``.
    """

    def __init__(
        self,
        tle: TLE,
        surface: RenderSurface,
        oracle: SatelliteOracle | None = None,
    ) -> None:
        self.tle = tle
        self.surface = surface
        self.oracle = oracle if oracle is not None else SatelliteOracle(tle)
        self._live: LiveHandle | None = None

    @classmethod
    def from_file(cls, path: str | Path, surface: RenderSurface) -> TrackingSession:
        return cls(load_tle_file(path), surface)

    @property
    def name(self) -> str:
        return self.tle.display_name

    def draw_track(self, start: datetime, hours_forward: float) -> list[GroundPoint]:
        """Render the ground track from ``start`` and mark its first point."""
        points = ground_track(self.oracle, as_utc(start), hours_forward)
        self.surface.update_path(points)
        if points:
            self.surface.update_point(points[0], self.name)
        else:
            logger.warning("No resolvable ground-track points for %s from %s", self.name, start)
        return points

    def compute_passes(
        self,
        observer: Observer,
        max_passes: int,
        search_hours: float,
        start: datetime | None = None,
        step_seconds: float = COARSE_STEP_SECONDS,
        should_cancel: Callable[[], bool] | None = None,
    ) -> PassSearchResult:
        """Search for the next passes over ``observer`` and render them.

        Args:
            observer: Ground site.
            max_passes: Cap on returned passes.
            search_hours: Search horizon from ``start``.
            start: Search start; defaults to now.
            step_seconds: Coarse scan interval.
            should_cancel: Optional cancellation callback, polled per step.

        Returns:
            The search result, also passed to the surface.
        """
        if start is None:
            start = _utc_now()
        window = SearchWindow.from_hours(start, search_hours, step_seconds)
        oracle: ElevationOracle = self.oracle
        result = find_passes(oracle, observer, window, max_passes, should_cancel=should_cancel)
        self.surface.show_passes(result, self.name)
        return result

    @property
    def live_running(self) -> bool:
        return self._live is not None and self._live.running

    def start_live(
        self,
        interval_seconds: float = LIVE_INTERVAL_SECONDS,
        clock: Callable[[], datetime] = _utc_now,
    ) -> LiveHandle:
        """Push the current sub-satellite point to the surface periodically.

        Raises:
            RuntimeError: If live tracking is already running for this session.
        """
        if self.live_running:
            raise RuntimeError(f"Live tracking already running for {self.name}")

        def tick() -> None:
            point = self.oracle.subpoint(clock())
            if point is not None:
                self.surface.update_point(point, self.name)

        self._live = RepeatingTask(interval_seconds, tick, name=f"live-{self.tle.norad_id}").start()
        logger.info("Live tracking started for %s (%.1fs)", self.name, interval_seconds)
        return self._live

    def stop_live(self) -> None:
        if self._live is None:
            return
        self._live.cancel()
        self._live = None
        logger.info("Live tracking stopped for %s", self.name)
