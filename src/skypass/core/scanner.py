"""Horizon-crossing search — predict AOS/LOS passes from an elevation oracle.

The oracle is any callable ``oracle(t, observer) -> float | None`` returning
the topocentric elevation in degrees, or ``None`` when the position cannot be
resolved at ``t``. The search never inspects how the elevation is produced.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from skypass.core.passes import Observer, Pass, PassSearchResult, SearchWindow
from skypass.errors import InvalidParameterError, SearchCancelled
from skypass.utils.constants import BISECTION_ITERATIONS, HORIZON_DEG, PEAK_SAMPLE_SECONDS

logger = logging.getLogger(__name__)

ElevationOracle = Callable[[datetime, Observer], Optional[float]]


class _CountingOracle:
    """Wraps an oracle to count evaluations for one search."""

    def __init__(self, oracle: ElevationOracle) -> None:
        self._oracle = oracle
        self.calls = 0

    def __call__(self, t: datetime, observer: Observer) -> float | None:
        self.calls += 1
        return self._oracle(t, observer)


def bisect_crossing_time(
    oracle: ElevationOracle,
    observer: Observer,
    t0: datetime,
    t1: datetime,
    target_deg: float = HORIZON_DEG,
    iterations: int = BISECTION_ITERATIONS,
) -> datetime | None:
    """Locate the instant elevation crosses ``target_deg`` between two samples.

    Assumes a single crossing inside ``[t0, t1]``, i.e. the elevation at the
    two endpoints lies on opposite sides of the target (or exactly on it at
    ``t0``).

    Args:
        oracle: Elevation oracle.
        observer: Ground site passed through to the oracle.
        t0: Earlier bracket endpoint.
        t1: Later bracket endpoint.
        target_deg: Elevation threshold in degrees.
        iterations: Number of interval halvings.

    Returns:
        The refined crossing time, or None if the oracle could not resolve an
        endpoint or any midpoint. Callers fall back to the coarse timestamp.
    """
    ea = oracle(t0, observer)
    eb = oracle(t1, observer)
    if ea is None or eb is None:
        return None

    # Offsets in seconds from t0 keep the halving exact below timedelta resolution
    a = 0.0
    b = (t1 - t0).total_seconds()

    for _ in range(iterations):
        m = (a + b) / 2
        em = oracle(t0 + timedelta(seconds=m), observer)
        if em is None:
            return None

        fa = ea - target_deg
        fm = em - target_deg
        if fa == 0:
            return t0 + timedelta(seconds=a)
        if (fa > 0 and fm > 0) or (fa < 0 and fm < 0):
            a, ea = m, em
        else:
            b, eb = m, em

    return t0 + timedelta(seconds=(a + b) / 2)


def find_max_elevation(
    oracle: ElevationOracle,
    observer: Observer,
    aos: datetime,
    los: datetime,
    step_seconds: float = PEAK_SAMPLE_SECONDS,
) -> tuple[datetime, float] | None:
    """Find the time and value of the highest elevation between AOS and LOS.

    Samples the bracket at a fixed fine interval, including ``aos`` and every
    step up to ``los``. A single pass is single-humped, so dense sampling is
    enough without derivatives. Ties keep the earliest sample.

    Returns:
        ``(tca, max_elevation_deg)``, or None if no sample resolved.
    """
    step = timedelta(seconds=step_seconds)
    best: tuple[datetime, float] | None = None

    t = aos
    while t <= los:
        e = oracle(t, observer)
        if e is not None and (best is None or e > best[1]):
            best = (t, e)
        t += step

    return best


def find_passes(
    oracle: ElevationOracle,
    observer: Observer,
    window: SearchWindow,
    max_passes: int,
    *,
    should_cancel: Callable[[], bool] | None = None,
) -> PassSearchResult:
    """Find the next visibility passes of an object over an observer.

    Uses a three-stage algorithm:
    1. Coarse scan of the window to detect sign changes of elevation
    2. Bisection between the bracketing samples to refine AOS and LOS
    3. Fine sampling of each pass to locate TCA and peak elevation

    Unresolved samples (oracle returns None) are skipped and the last valid
    sample is kept for crossing detection, so propagation gaps neither open
    nor close a pass. An object already above the horizon at the first valid
    sample gets that sample's time as AOS. A pass still open when the window
    ends is not reported.

    Args:
        oracle: Elevation oracle.
        observer: Ground site.
        window: Time range and coarse step to scan.
        max_passes: Maximum number of passes to return (>= 1).
        should_cancel: Optional callback polled once per coarse step.

    Returns:
        A PassSearchResult with passes in ascending AOS order. Its
        ``no_passes`` flag is set when nothing completed inside the window.

    Raises:
        InvalidParameterError: If ``max_passes`` is not a positive integer.
        SearchCancelled: If ``should_cancel`` returned True.
    """
    if isinstance(max_passes, bool) or not isinstance(max_passes, int) or max_passes < 1:
        raise InvalidParameterError("max_passes", f"must be an integer >= 1, got {max_passes!r}")

    counted = _CountingOracle(oracle)
    passes: list[Pass] = []

    prev_t: datetime | None = None
    prev_e: float | None = None
    in_pass = False
    current_aos: datetime | None = None
    gaps = 0

    logger.debug(
        "Scanning %s -> %s every %.0fs for up to %d passes",
        window.start.isoformat(), window.end.isoformat(),
        window.step.total_seconds(), max_passes,
    )

    t = window.start
    while t <= window.end:
        if should_cancel is not None and should_cancel():
            logger.info("Pass search cancelled at %s", t.isoformat())
            raise SearchCancelled(f"Pass search cancelled at {t.isoformat()}")

        e = counted(t, observer)
        if e is None:
            gaps += 1
            t += window.step
            continue

        if prev_e is None:
            # First resolvable sample seeds the horizon state
            in_pass = e > HORIZON_DEG
            current_aos = t if in_pass else None
        elif not in_pass and prev_e <= HORIZON_DEG < e:
            aos = bisect_crossing_time(counted, observer, prev_t, t)
            if aos is None:
                logger.warning("AOS bisection unresolved near %s; using coarse sample", t.isoformat())
                aos = t
            in_pass = True
            current_aos = aos
        elif in_pass and prev_e > HORIZON_DEG >= e:
            los = bisect_crossing_time(counted, observer, prev_t, t)
            if los is None:
                logger.warning("LOS bisection unresolved near %s; using coarse sample", t.isoformat())
                los = t
            in_pass = False

            if current_aos is not None and los > current_aos:
                passes.append(_assemble_pass(counted, observer, current_aos, los))
                if len(passes) >= max_passes:
                    break
            current_aos = None

        prev_t, prev_e = t, e
        t += window.step

    if in_pass and len(passes) < max_passes:
        logger.debug("Dropping pass still open at window end (AOS %s)", current_aos)
    if gaps:
        logger.debug("Skipped %d unresolved coarse samples", gaps)

    result = PassSearchResult(
        passes=tuple(passes),
        observer=observer,
        window=window,
        evaluations=counted.calls,
    )
    if result.no_passes:
        logger.info("No passes found within %.1f hours", window.hours)
    else:
        logger.info("Found %d passes using %d oracle evaluations", len(result), counted.calls)
    return result


def _assemble_pass(
    oracle: ElevationOracle,
    observer: Observer,
    aos: datetime,
    los: datetime,
) -> Pass:
    peak = find_max_elevation(oracle, observer, aos, los)
    if peak is None:
        tca, max_elev = aos, 0.0
    else:
        tca, max_elev = peak
    # Bisected endpoints sit on the horizon and may evaluate a hair below it
    return Pass(aos=aos, los=los, tca=tca, max_elevation_deg=max(max_elev, 0.0))
