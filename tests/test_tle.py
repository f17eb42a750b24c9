"""Tests for TLE parsing."""

from datetime import datetime, timezone

import pytest

from skypass.core.tle import TLE, tle_checksum
from skypass.errors import DataSourceError

# ISS (ZARYA) TLE — a well-known reference
ISS_NAME = "ISS (ZARYA)"
ISS_LINE1 = "1 25544U 98067A   24045.54896019  .00016717  00000-0  30093-3 0  9993"
ISS_LINE2 = "2 25544  51.6412 207.4925 0004948 290.5508 178.9792 15.49583488439596"


class TestTLEFromLines:
    def test_parse_basic(self) -> None:
        tle = TLE.from_lines(ISS_LINE1, ISS_LINE2, name=ISS_NAME)
        assert tle.norad_id == 25544
        assert tle.name == ISS_NAME

    def test_elements_reasonable(self) -> None:
        tle = TLE.from_lines(ISS_LINE1, ISS_LINE2)
        assert 51.0 < tle.inclination_deg < 52.0
        assert 15.0 < tle.mean_motion_rev_per_day < 16.0
        assert 90.0 < tle.period_minutes < 95.0

    def test_epoch_parsed(self) -> None:
        tle = TLE.from_lines(ISS_LINE1, ISS_LINE2)
        assert tle.epoch.year == 2024
        assert tle.epoch.month == 2  # day 45 ~ Feb 14
        assert tle.epoch.tzinfo == timezone.utc

    def test_age_days(self) -> None:
        tle = TLE.from_lines(ISS_LINE1, ISS_LINE2)
        later = datetime(2024, 2, 24, 13, 10, 30)
        assert tle.age_days(later) == pytest.approx(10.0, abs=0.01)

    def test_display_name_falls_back_to_norad(self) -> None:
        assert TLE.from_lines(ISS_LINE1, ISS_LINE2).display_name == "NORAD 25544"
        assert TLE.from_lines(ISS_LINE1, ISS_LINE2, name=ISS_NAME).display_name == ISS_NAME

    def test_satrec_available(self) -> None:
        tle = TLE.from_lines(ISS_LINE1, ISS_LINE2)
        assert tle.satrec is not None

    def test_str_roundtrip(self) -> None:
        tle = TLE.from_lines(ISS_LINE1, ISS_LINE2, name=ISS_NAME)
        assert str(tle) == f"{ISS_NAME}\n{ISS_LINE1}\n{ISS_LINE2}"

    def test_invalid_line1_raises(self) -> None:
        with pytest.raises(DataSourceError, match="Invalid TLE line 1"):
            TLE.from_lines("garbage", ISS_LINE2)

    def test_invalid_line2_raises(self) -> None:
        with pytest.raises(ValueError, match="Invalid TLE line 2"):
            TLE.from_lines(ISS_LINE1, "garbage")

    def test_swapped_lines_raise(self) -> None:
        with pytest.raises(DataSourceError):
            TLE.from_lines(ISS_LINE2, ISS_LINE1)


def test_checksum() -> None:
    assert tle_checksum("1 00000U 00000A   00000.00000000  .00000000  00000-0  00000-0 0  0000") == 3


def test_checksum_mismatch_only_warns(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("WARNING", logger="skypass.core.tle"):
        tle = TLE.from_lines(ISS_LINE1, ISS_LINE2)
    assert tle.norad_id == 25544
    assert "checksum mismatch" in caplog.text
