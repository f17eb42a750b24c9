"""Plain-text render surface."""

from __future__ import annotations

from datetime import tzinfo
from typing import Sequence

import click
from tabulate import tabulate

from skypass.core.oracle import GroundPoint
from skypass.core.passes import PassSearchResult
from skypass.render.surface import format_pass_rows

_HEADER = ("#", "AOS", "LOS", "Duration", "Max Elev")


class ConsoleSurface:
    """Writes positions, track summaries and pass tables to the terminal.

    Args:
        tz: Zone used for AOS/LOS/TCA columns. Defaults to the system local zone.
        err: Echo to stderr instead of stdout.
    """

    def __init__(self, tz: tzinfo | None = None, err: bool = False) -> None:
        self.tz = tz
        self.err = err

    def _echo(self, text: str = "") -> None:
        click.echo(text, err=self.err)

    def update_point(self, point: GroundPoint, name: str) -> None:
        self._echo(
            f"{name}  {point.time.isoformat()}  "
            f"Lat: {point.latitude_deg:.4f}°, Lon: {point.longitude_deg:.4f}°  "
            f"Alt: {point.altitude_km:.1f} km"
        )

    def update_path(self, points: Sequence[GroundPoint]) -> None:
        self._echo(f"Track: {len(points)} points")
        self._echo(f"Start: {points[0].time.isoformat() if points else '-'}")
        self._echo(f"End:   {points[-1].time.isoformat() if points else '-'}")

    def show_passes(self, result: PassSearchResult, name: str) -> None:
        if result.no_passes:
            self._echo(f"No passes in the next {result.window.hours:g} hours (elevation > 0).")
            return

        rows = [
            (
                str(r.index),
                r.aos,
                r.los,
                f"{r.duration_min} min",
                f"{r.max_elevation}° ({r.tca})",
            )
            for r in format_pass_rows(result, self.tz)
        ]
        self._echo(tabulate(rows, headers=_HEADER, disable_numparse=True))
        self._echo(f"{name}: {len(result)} passes listed.")
