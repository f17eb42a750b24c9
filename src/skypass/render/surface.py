"""Render surface interface and the pass-table layout shared by renderers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Protocol, Sequence

from skypass.core.oracle import GroundPoint
from skypass.core.passes import Pass, PassSearchResult

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class RenderSurface(Protocol):
    """Anything that can show the current position, a track and a pass table."""

    def update_point(self, point: GroundPoint, name: str) -> None: ...

    def update_path(self, points: Sequence[GroundPoint]) -> None: ...

    def show_passes(self, result: PassSearchResult, name: str) -> None: ...


@dataclass(frozen=True)
class PassRow:
    """One formatted row of the pass table."""

    index: int
    aos: str
    los: str
    duration_min: str
    max_elevation: str
    tca: str


def format_local(t: datetime, tz: tzinfo | None = None) -> str:
    """Format an instant in ``tz`` (the system local zone when None)."""
    return t.astimezone(tz).strftime(TIME_FORMAT)


def format_pass_row(index: int, p: Pass, tz: tzinfo | None = None) -> PassRow:
    duration_min = max(0.0, p.duration_minutes)
    return PassRow(
        index=index,
        aos=format_local(p.aos, tz),
        los=format_local(p.los, tz),
        duration_min=f"{duration_min:.1f}",
        max_elevation=f"{p.max_elevation_deg:.1f}",
        tca=format_local(p.tca, tz),
    )


def format_pass_rows(result: PassSearchResult, tz: tzinfo | None = None) -> list[PassRow]:
    """Rows for every pass in ``result``, numbered from 1."""
    return [format_pass_row(i, p, tz) for i, p in enumerate(result, start=1)]
