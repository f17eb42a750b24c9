"""Elevation and sub-satellite point lookups backed by skyfield.

skyfield runs SGP4 on the TLE's Satrec and performs the TEME to ITRS to
topocentric conversions. When SGP4 cannot produce a position (decayed orbit,
runaway eccentricity) skyfield returns NaN coordinates, which are mapped to
None here.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

import numpy as np
from skyfield.api import EarthSatellite, load, wgs84
from skyfield.toposlib import GeographicPosition

from skypass.core.passes import Observer, as_utc
from skypass.core.tle import TLE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroundPoint:
    """Sub-satellite point at one instant.

    Attributes:
        time: UTC instant.
        latitude_deg: Geodetic latitude in degrees.
        longitude_deg: Longitude in degrees, [-180, 180].
        altitude_km: Height above the WGS-84 ellipsoid in km.
    """

    time: datetime
    latitude_deg: float
    longitude_deg: float
    altitude_km: float


def normalize_longitude(lon: float) -> float:
    """Wrap a longitude by one turn into [-180, 180]."""
    if lon > 180.0:
        lon -= 360.0
    if lon < -180.0:
        lon += 360.0
    return lon


class SatelliteOracle:
    """Elevation oracle for one TLE.

    Instances are callable as ``oracle(t, observer) -> float | None`` and can
    be handed straight to :func:`skypass.core.scanner.find_passes`.

    Args:
        tle: The tracked object's elements.
    """

    def __init__(self, tle: TLE) -> None:
        self.tle = tle
        self._ts = load.timescale()
        self._satellite = EarthSatellite.from_satrec(tle.satrec, self._ts)
        self._topos: dict[Observer, GeographicPosition] = {}

    def _site(self, observer: Observer) -> GeographicPosition:
        site = self._topos.get(observer)
        if site is None:
            site = wgs84.latlon(
                observer.latitude_deg,
                observer.longitude_deg,
                elevation_m=observer.altitude_m,
            )
            self._topos[observer] = site
        return site

    def __call__(self, t: datetime, observer: Observer) -> float | None:
        return self.elevation(t, observer)

    def elevation(self, t: datetime, observer: Observer) -> float | None:
        """Topocentric elevation of the object in degrees, or None if unresolved."""
        st = self._ts.from_datetime(as_utc(t))
        alt, _az, _distance = (self._satellite - self._site(observer)).at(st).altaz()
        elev = float(alt.degrees)
        if math.isnan(elev):
            logger.debug("No SGP4 solution for NORAD %d at %s", self.tle.norad_id, t)
            return None
        return elev

    def subpoint(self, t: datetime) -> GroundPoint | None:
        """Sub-satellite point at ``t``, or None if unresolved."""
        points = self.subpoints([t])
        return points[0] if points else None

    def subpoints(self, times: Sequence[datetime]) -> list[GroundPoint]:
        """Sub-satellite points for many instants in one vectorized call.

        Instants without an SGP4 solution are omitted from the result.
        """
        if not times:
            return []

        utc_times = [as_utc(t) for t in times]
        st = self._ts.from_datetimes(utc_times)
        position = wgs84.geographic_position_of(self._satellite.at(st))

        lat = np.atleast_1d(position.latitude.degrees)
        lon = np.atleast_1d(position.longitude.degrees)
        alt = np.atleast_1d(position.elevation.km)
        valid = ~(np.isnan(lat) | np.isnan(lon) | np.isnan(alt))

        if not np.all(valid):
            logger.debug(
                "Dropped %d/%d unresolved subpoints for NORAD %d",
                int(np.count_nonzero(~valid)), len(utc_times), self.tle.norad_id,
            )

        return [
            GroundPoint(
                time=utc_times[i],
                latitude_deg=float(lat[i]),
                longitude_deg=normalize_longitude(float(lon[i])),
                altitude_km=float(alt[i]),
            )
            for i in np.flatnonzero(valid)
        ]
