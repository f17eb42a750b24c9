"""Tests for tracker parameter validation."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from skypass.config import TrackerConfig, parse_datetime
from skypass.core.passes import Observer
from skypass.errors import InvalidParameterError
from skypass.utils.constants import DEFAULT_MAX_PASSES, DEFAULT_SEARCH_HOURS


def test_defaults() -> None:
    before = datetime.now(timezone.utc)
    config = TrackerConfig()
    assert config.max_passes == DEFAULT_MAX_PASSES
    assert config.search_hours == DEFAULT_SEARCH_HOURS
    assert config.start.tzinfo == timezone.utc
    assert config.start - before < timedelta(seconds=5)


def test_from_mapping_camel_case() -> None:
    config = TrackerConfig.from_mapping(
        {
            "start": "2024-02-14T12:00:00Z",
            "hoursForward": "2",
            "observerLat": "39.93",
            "observerLon": 32.86,
            "observerAlt": "938",
            "maxPasses": "3",
            "searchHours": 12,
        }
    )
    assert config.start == datetime(2024, 2, 14, 12, 0, tzinfo=timezone.utc)
    assert config.hours_forward == 2.0
    assert config.max_passes == 3
    assert config.observer() == Observer(39.93, 32.86, 938.0)


def test_search_window() -> None:
    config = TrackerConfig(start="2024-02-14T12:00:00", search_hours=6)
    window = config.search_window(step_seconds=30.0)
    assert window.start == config.start
    assert window.end - window.start == timedelta(hours=6)
    assert window.step == timedelta(seconds=30)


@pytest.mark.parametrize(
    "values, field",
    [
        ({"observerLat": "north"}, "observer_lat"),
        ({"observerLat": 95}, "observer_lat"),
        ({"observerLon": -200}, "observer_lon"),
        ({"observerAlt": "nan"}, "observer_alt_m"),
        ({"maxPasses": 0}, "max_passes"),
        ({"maxPasses": "2.5"}, "max_passes"),
        ({"searchHours": -1}, "search_hours"),
        ({"hoursForward": 0}, "hours_forward"),
        ({"start": "yesterday"}, "start"),
        ({"start": 12345}, "start"),
        ({"colour": "red"}, "colour"),
    ],
)
def test_invalid_values_name_the_field(values: dict, field: str) -> None:
    with pytest.raises(InvalidParameterError) as excinfo:
        TrackerConfig.from_mapping(values)
    assert excinfo.value.field == field
    assert str(excinfo.value).startswith(f"{field}:")


def test_parse_datetime_offsets() -> None:
    assert parse_datetime("2024-02-14T15:00:00+03:00") == datetime(2024, 2, 14, 12, 0, tzinfo=timezone.utc)
