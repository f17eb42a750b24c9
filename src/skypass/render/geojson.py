"""GeoJSON render surface for hand-off to web maps and GIS tools."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Sequence

from skypass.core.oracle import GroundPoint
from skypass.core.passes import PassSearchResult

logger = logging.getLogger(__name__)


def _split_antimeridian(points: Sequence[GroundPoint]) -> list[list[list[float]]]:
    """Break a track into segments wherever it wraps across ±180°."""
    segments: list[list[list[float]]] = []
    current: list[list[float]] = []
    prev_lon: float | None = None
    for p in points:
        if prev_lon is not None and abs(p.longitude_deg - prev_lon) > 180.0:
            segments.append(current)
            current = []
        current.append([round(p.longitude_deg, 6), round(p.latitude_deg, 6)])
        prev_lon = p.longitude_deg
    if current:
        segments.append(current)
    return segments


class GeoJSONSurface:
    """Collects the current position, ground track and passes as GeoJSON.

    Nothing is written until :meth:`flush`.

    Args:
        path: Output file.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._point: dict[str, Any] | None = None
        self._track: dict[str, Any] | None = None
        self._passes: list[dict[str, Any]] = []

    def update_point(self, point: GroundPoint, name: str) -> None:
        self._point = {
            "type": "Feature",
            "geometry": {
                "type": "Point",
                "coordinates": [point.longitude_deg, point.latitude_deg],
            },
            "properties": {
                "kind": "position",
                "name": name,
                "time": point.time.isoformat(),
                "altitude_km": round(point.altitude_km, 3),
            },
        }

    def update_path(self, points: Sequence[GroundPoint]) -> None:
        self._track = {
            "type": "Feature",
            "geometry": {
                "type": "MultiLineString",
                "coordinates": _split_antimeridian(points),
            },
            "properties": {
                "kind": "ground_track",
                "start": points[0].time.isoformat() if points else None,
                "end": points[-1].time.isoformat() if points else None,
                "points": len(points),
            },
        }

    def show_passes(self, result: PassSearchResult, name: str) -> None:
        self._passes = [
            {
                "index": i,
                "aos": p.aos.isoformat(),
                "los": p.los.isoformat(),
                "tca": p.tca.isoformat(),
                "duration_min": round(p.duration_minutes, 1),
                "max_elevation_deg": round(p.max_elevation_deg, 1),
            }
            for i, p in enumerate(result, start=1)
        ]

    def to_dict(self) -> dict[str, Any]:
        features = [f for f in (self._track, self._point) if f is not None]
        collection: dict[str, Any] = {"type": "FeatureCollection", "features": features}
        if self._passes:
            collection["passes"] = self._passes
        return collection

    def flush(self) -> Path:
        """Write the collected features to :attr:`path`."""
        self.path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        logger.info("Wrote GeoJSON to %s", self.path)
        return self.path
