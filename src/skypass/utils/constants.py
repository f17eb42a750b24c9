from __future__ import annotations

"""Default search resolutions and site parameters.

Durations are in seconds unless otherwise noted.
"""

# --- Pass search ---
COARSE_STEP_SECONDS: float = 20.0
"""Coarse scan interval used to detect horizon crossings."""

BISECTION_ITERATIONS: int = 25
"""Halvings applied to a crossing bracket; sub-second for hour-scale brackets."""

PEAK_SAMPLE_SECONDS: float = 5.0
"""Fine sampling interval of the peak-elevation search."""

HORIZON_DEG: float = 0.0
"""Elevation threshold defining AOS and LOS."""

# --- Ground track and live tracking ---
GROUND_TRACK_STEP_SECONDS: float = 30.0
"""Sampling interval of the ground-track polyline."""

LIVE_INTERVAL_SECONDS: float = 1.0
"""Refresh period of the live sub-satellite marker."""

# --- Default parameters ---
DEFAULT_TLE_PATH: str = "tle.txt"
"""Static three-line TLE file read by default."""

DEFAULT_HOURS_FORWARD: float = 3.0
"""Default ground-track duration in hours."""

DEFAULT_SEARCH_HOURS: float = 24.0
"""Default pass-search horizon in hours."""

DEFAULT_MAX_PASSES: int = 5
"""Default cap on returned passes."""

DEFAULT_OBSERVER_LAT_DEG: float = 39.0
DEFAULT_OBSERVER_LON_DEG: float = 35.0
DEFAULT_OBSERVER_ALT_M: float = 0.0
