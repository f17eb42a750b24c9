"""Tests for the static TLE file source."""
from __future__ import annotations

from pathlib import Path

import pytest

from skypass.data.tle_source import load_tle_file, read_tle_text
from skypass.errors import DataSourceError

ISS_TLE_TEXT = """\
ISS (ZARYA)
1 25544U 98067A   24045.54896019  .00016717  00000-0  30093-3 0  9993
2 25544  51.6412 207.4925 0004948 290.5508 178.9792 15.49583488439596
"""


def test_read_three_line_record() -> None:
    tle = read_tle_text(ISS_TLE_TEXT)
    assert tle.name == "ISS (ZARYA)"
    assert tle.norad_id == 25544


def test_blank_lines_and_crlf_ignored() -> None:
    text = "\r\n\r\n" + ISS_TLE_TEXT.replace("\n", "\r\n\r\n") + "\r\n"
    assert read_tle_text(text).norad_id == 25544


def test_trailing_records_ignored() -> None:
    tle = read_tle_text(ISS_TLE_TEXT + "HST\n1 20580U ...\n")
    assert tle.name == "ISS (ZARYA)"


@pytest.mark.parametrize("text", ["", "ISS (ZARYA)", "\n".join(ISS_TLE_TEXT.splitlines()[1:])])
def test_fewer_than_three_lines(text: str) -> None:
    with pytest.raises(DataSourceError, match="3 lines required"):
        read_tle_text(text)


def test_malformed_element_line() -> None:
    lines = ISS_TLE_TEXT.splitlines()
    text = "\n".join([lines[0], lines[1][:40], lines[2]])
    with pytest.raises(DataSourceError, match="Invalid TLE line 1"):
        read_tle_text(text)


def test_load_file(tmp_path: Path) -> None:
    path = tmp_path / "tle.txt"
    path.write_text(ISS_TLE_TEXT, encoding="utf-8")
    assert load_tle_file(path).norad_id == 25544
    assert load_tle_file(str(path)).name == "ISS (ZARYA)"


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DataSourceError, match="Cannot read TLE file"):
        load_tle_file(tmp_path / "missing.txt")
