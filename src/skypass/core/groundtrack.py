"""Ground-track sampling."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Protocol, Sequence

from skypass.core.oracle import GroundPoint
from skypass.errors import InvalidParameterError
from skypass.utils.constants import GROUND_TRACK_STEP_SECONDS

logger = logging.getLogger(__name__)


class SubpointSource(Protocol):
    def subpoints(self, times: Sequence[datetime]) -> list[GroundPoint]: ...


def track_times(start: datetime, hours_forward: float, step_seconds: float) -> list[datetime]:
    """Sample instants ``start, start+step, ...`` up to ``hours_forward``."""
    total = hours_forward * 3600.0
    count = int(total // step_seconds) + 1
    return [start + timedelta(seconds=i * step_seconds) for i in range(count)]


def ground_track(
    source: SubpointSource,
    start: datetime,
    hours_forward: float,
    step_seconds: float = GROUND_TRACK_STEP_SECONDS,
) -> list[GroundPoint]:
    """Sample the sub-satellite path forward from ``start``.

    Args:
        source: Anything producing sub-satellite points, usually a SatelliteOracle.
        start: First instant of the track.
        hours_forward: Track duration in hours.
        step_seconds: Sampling interval in seconds.

    Returns:
        Points in time order; instants without a solution are skipped.

    Raises:
        InvalidParameterError: If the duration or step is not positive.
    """
    if hours_forward <= 0:
        raise InvalidParameterError("hours_forward", f"must be positive, got {hours_forward}")
    if step_seconds <= 0:
        raise InvalidParameterError("step_seconds", f"must be positive, got {step_seconds}")

    times = track_times(start, hours_forward, step_seconds)
    points = source.subpoints(times)
    logger.debug("Ground track: %d/%d points over %.1f h", len(points), len(times), hours_forward)
    return points
