"""Tests for the pass table layout and the console/GeoJSON surfaces."""
from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from skypass.core.oracle import GroundPoint
from skypass.core.passes import Observer, Pass, PassSearchResult, SearchWindow
from skypass.render.console import ConsoleSurface
from skypass.render.geojson import GeoJSONSurface
from skypass.render.surface import format_pass_rows

T0 = datetime(2024, 2, 14, 12, 0, tzinfo=timezone.utc)
WINDOW = SearchWindow.from_hours(T0, 24.0, 20.0)
OBSERVER = Observer(39.0, 35.0)


@pytest.fixture
def result() -> PassSearchResult:
    passes = (
        Pass(
            aos=T0 + timedelta(minutes=10),
            los=T0 + timedelta(minutes=16, seconds=30),
            tca=T0 + timedelta(minutes=13, seconds=15),
            max_elevation_deg=23.456,
        ),
        Pass(
            aos=T0 + timedelta(hours=2),
            los=T0 + timedelta(hours=2, minutes=3),
            tca=T0 + timedelta(hours=2, minutes=1),
            max_elevation_deg=4.04,
        ),
    )
    return PassSearchResult(passes=passes, observer=OBSERVER, window=WINDOW)


def test_rows_in_given_zone(result: PassSearchResult) -> None:
    rows = format_pass_rows(result, timezone(timedelta(hours=3)))
    assert [r.index for r in rows] == [1, 2]
    first = rows[0]
    assert first.aos == "2024-02-14 15:10:00"
    assert first.los == "2024-02-14 15:16:30"
    assert first.duration_min == "6.5"
    assert first.max_elevation == "23.5"
    assert first.tca == "2024-02-14 15:13:15"
    assert rows[1].duration_min == "3.0"
    assert rows[1].max_elevation == "4.0"


def test_console_table(result: PassSearchResult, capsys: pytest.CaptureFixture[str]) -> None:
    ConsoleSurface(tz=timezone.utc).show_passes(result, "ISS (ZARYA)")
    out = capsys.readouterr().out
    header = out.splitlines()[0]
    for column in ("#", "AOS", "LOS", "Duration", "Max Elev"):
        assert column in header
    separator = out.splitlines()[1]
    assert set(separator) == {"-", " "}
    assert len(out.splitlines()) == 5
    assert "6.5 min" in out
    assert "23.5° (2024-02-14 12:13:15)" in out
    assert "ISS (ZARYA): 2 passes listed." in out


def test_console_no_passes(capsys: pytest.CaptureFixture[str]) -> None:
    empty = PassSearchResult(passes=(), observer=OBSERVER, window=WINDOW)
    ConsoleSurface().show_passes(empty, "ISS (ZARYA)")
    assert "No passes in the next 24 hours" in capsys.readouterr().out


def test_console_point_and_path(capsys: pytest.CaptureFixture[str]) -> None:
    surface = ConsoleSurface()
    p = GroundPoint(time=T0, latitude_deg=12.345678, longitude_deg=-45.0, altitude_km=415.27)
    surface.update_point(p, "ISS")
    surface.update_path([p, p])
    surface.update_path([])
    out = capsys.readouterr().out
    assert "Lat: 12.3457°, Lon: -45.0000°" in out
    assert "Alt: 415.3 km" in out
    assert "Track: 2 points" in out
    assert "Start: -" in out


def test_geojson_splits_at_antimeridian(tmp_path: Path, result: PassSearchResult) -> None:
    lons = [170.0, 178.0, -178.0, -170.0]
    points = [
        GroundPoint(time=T0 + timedelta(seconds=30 * i), latitude_deg=float(i), longitude_deg=lon, altitude_km=400.0)
        for i, lon in enumerate(lons)
    ]
    surface = GeoJSONSurface(tmp_path / "track.geojson")
    surface.update_path(points)
    surface.update_point(points[0], "ISS")
    surface.show_passes(result, "ISS")
    path = surface.flush()

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["type"] == "FeatureCollection"
    track, point = data["features"]
    assert track["geometry"]["type"] == "MultiLineString"
    assert track["geometry"]["coordinates"] == [[[170.0, 0.0], [178.0, 1.0]], [[-178.0, 2.0], [-170.0, 3.0]]]
    assert track["properties"]["points"] == 4
    assert point["geometry"]["coordinates"] == [170.0, 0.0]
    assert point["properties"]["name"] == "ISS"
    assert [p["index"] for p in data["passes"]] == [1, 2]
    assert data["passes"][0]["duration_min"] == 6.5


def test_geojson_empty(tmp_path: Path) -> None:
    surface = GeoJSONSurface(tmp_path / "empty.geojson")
    assert surface.to_dict() == {"type": "FeatureCollection", "features": []}
