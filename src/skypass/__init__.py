"""
skypass — Ground tracks and visibility passes for a single satellite.

Reads one object's TLE from a local file, samples its ground track and
predicts AOS/LOS passes over a ground observer by scanning an elevation
oracle for horizon crossings.
"""

from __future__ import annotations

__version__ = "0.1.0"

from skypass.core.tle import TLE
from skypass.core.passes import Observer, SearchWindow, Pass, PassSearchResult
from skypass.core.scanner import find_passes, bisect_crossing_time, find_max_elevation
from skypass.core.oracle import SatelliteOracle, GroundPoint
from skypass.core.groundtrack import ground_track
from skypass.data.tle_source import load_tle_file, read_tle_text
from skypass.errors import DataSourceError, InvalidParameterError, SearchCancelled, SkypassError
from skypass.config import TrackerConfig
from skypass.session import TrackingSession

__all__ = [
    "__version__",
    "TLE",
    "Observer",
    "SearchWindow",
    "Pass",
    "PassSearchResult",
    "find_passes",
    "bisect_crossing_time",
    "find_max_elevation",
    "SatelliteOracle",
    "GroundPoint",
    "ground_track",
    "load_tle_file",
    "read_tle_text",
    "DataSourceError",
    "InvalidParameterError",
    "SearchCancelled",
    "SkypassError",
    "TrackerConfig",
    "TrackingSession",
]
