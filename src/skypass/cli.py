"""Command-line interface: ground track, pass table and live position."""

from __future__ import annotations

import logging
import os
from datetime import timezone
from typing import Any

import click

from skypass.config import TrackerConfig
from skypass.errors import SkypassError
from skypass.render.console import ConsoleSurface
from skypass.render.geojson import GeoJSONSurface
from skypass.session import TrackingSession
from skypass.utils.constants import (
    COARSE_STEP_SECONDS,
    DEFAULT_HOURS_FORWARD,
    DEFAULT_MAX_PASSES,
    DEFAULT_OBSERVER_ALT_M,
    DEFAULT_OBSERVER_LAT_DEG,
    DEFAULT_OBSERVER_LON_DEG,
    DEFAULT_SEARCH_HOURS,
    DEFAULT_TLE_PATH,
    LIVE_INTERVAL_SECONDS,
)

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger; ``SKYPASS_LOG_LEVEL`` overrides ``level``."""
    level = os.environ.get("SKYPASS_LOG_LEVEL", level)
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _config(**values: Any) -> TrackerConfig:
    if values.get("start") is None:
        values.pop("start", None)
    try:
        return TrackerConfig(**values)
    except SkypassError as e:
        raise click.BadParameter(str(e)) from e


def _session(tle_path: str, surface: Any) -> TrackingSession:
    try:
        return TrackingSession.from_file(tle_path, surface)
    except SkypassError as e:
        raise click.ClickException(str(e)) from e


tle_option = click.option(
    "--tle", "tle_path", default=DEFAULT_TLE_PATH, show_default=True,
    help="Three-line TLE file (name, line 1, line 2)",
)
start_option = click.option(
    "--start", default=None,
    help="Start time, ISO-8601 (naive values are UTC; default: now)",
)


@click.group()
@click.option("--log-level", default="WARNING",
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
              help="Set logging level")
def main(log_level: str) -> None:
    """Satellite ground track and pass prediction for a single TLE."""
    setup_logging(log_level)


@main.command()
@tle_option
@start_option
@click.option("--hours", "hours_forward", default=DEFAULT_HOURS_FORWARD, type=float,
              show_default=True, help="Ground-track duration in hours")
@click.option("--geojson", "geojson_path", type=click.Path(dir_okay=False),
              help="Also write the track and start position as GeoJSON")
def track(tle_path: str, start: str | None, hours_forward: float, geojson_path: str | None) -> None:
    """Print (and optionally export) the ground track."""
    config = _config(tle_path=tle_path, start=start, hours_forward=hours_forward)
    session = _session(config.tle_path, ConsoleSurface())
    try:
        points = session.draw_track(config.start, config.hours_forward)
    except SkypassError as e:
        raise click.ClickException(str(e)) from e

    if geojson_path:
        surface = GeoJSONSurface(geojson_path)
        surface.update_path(points)
        if points:
            surface.update_point(points[0], session.name)
        click.echo(f"GeoJSON written to {surface.flush()}")


@main.command()
@tle_option
@start_option
@click.option("--lat", "observer_lat", default=DEFAULT_OBSERVER_LAT_DEG, type=float,
              show_default=True, help="Observer latitude in degrees")
@click.option("--lon", "observer_lon", default=DEFAULT_OBSERVER_LON_DEG, type=float,
              show_default=True, help="Observer longitude in degrees")
@click.option("--alt", "observer_alt_m", default=DEFAULT_OBSERVER_ALT_M, type=float,
              show_default=True, help="Observer altitude in meters")
@click.option("--count", "max_passes", default=DEFAULT_MAX_PASSES, type=int,
              show_default=True, help="Maximum number of passes to list")
@click.option("--search-hours", default=DEFAULT_SEARCH_HOURS, type=float,
              show_default=True, help="Pass-search horizon in hours")
@click.option("--step", "step_seconds", default=COARSE_STEP_SECONDS, type=float,
              show_default=True, help="Coarse scan step in seconds")
@click.option("--utc", is_flag=True, help="Show times in UTC instead of local time")
def passes(
    tle_path: str,
    start: str | None,
    observer_lat: float,
    observer_lon: float,
    observer_alt_m: float,
    max_passes: int,
    search_hours: float,
    step_seconds: float,
    utc: bool,
) -> None:
    """List the next AOS/LOS passes over an observer."""
    config = _config(
        tle_path=tle_path,
        start=start,
        observer_lat=observer_lat,
        observer_lon=observer_lon,
        observer_alt_m=observer_alt_m,
        max_passes=max_passes,
        search_hours=search_hours,
    )
    surface = ConsoleSurface(tz=timezone.utc if utc else None)
    session = _session(config.tle_path, surface)
    try:
        session.compute_passes(
            config.observer(),
            config.max_passes,
            config.search_hours,
            start=config.start,
            step_seconds=step_seconds,
        )
    except SkypassError as e:
        raise click.ClickException(str(e)) from e


@main.command()
@tle_option
@click.option("--interval", default=LIVE_INTERVAL_SECONDS, type=float, show_default=True,
              help="Seconds between position updates")
@click.option("--duration", default=0.0, type=float,
              help="Stop after this many seconds (default: run until interrupted)")
def live(tle_path: str, interval: float, duration: float) -> None:
    """Print the current sub-satellite position periodically."""
    if interval <= 0:
        raise click.BadParameter(f"must be positive, got {interval}", param_hint="--interval")
    session = _session(tle_path, ConsoleSurface())
    handle = session.start_live(interval)
    click.echo(f"Live tracking {session.name} every {interval:g}s (Ctrl-C to stop)")
    try:
        handle.wait(duration if duration > 0 else None)
    except KeyboardInterrupt:
        pass
    finally:
        session.stop_live()
    click.echo("Live tracking stopped.")


if __name__ == "__main__":
    main()
