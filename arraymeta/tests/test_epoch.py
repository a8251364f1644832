"""
Tests for epoch parsing.
"""

import pytest
from dataclasses import FrozenInstanceError
from datetime import datetime

from arraymeta.errors import ParseError
from arraymeta.sky.epoch import Epoch, str_to_epoch


class TestStrToEpoch:
    """Test YYYY-MM-DD-HH:MM:SS.s parsing."""

    def test_valid(self):
        epoch = str_to_epoch("2020-01-01-00:00:00.0", 0)
        # 2020-01-01 is MJD 58849
        assert epoch.mjd == pytest.approx(58849.0)
        assert epoch.ref == "UTC"

    def test_offset(self):
        """Offset of 3600 s is exactly one hour later."""
        t0 = str_to_epoch("2020-01-01-00:00:00.0", 0)
        t1 = str_to_epoch("2020-01-01-00:00:00.0", 3600)
        assert t1.seconds - t0.seconds == pytest.approx(3600.0, abs=1e-6)

    def test_fractional_seconds(self):
        epoch = str_to_epoch("2021-06-15-12:30:45.25")
        assert epoch.to_datetime() == datetime(2021, 6, 15, 12, 30, 45, 250000)

    def test_negative_offset_crosses_day(self):
        epoch = str_to_epoch("2020-01-01-00:00:10.0", -20.0)
        assert epoch.to_datetime() == datetime(2019, 12, 31, 23, 59, 50)

    def test_short_fields(self):
        assert str_to_epoch("2020-1-2-3:4:5") == str_to_epoch("2020-01-02-03:04:05.0")

    @pytest.mark.parametrize("text", [
        "not-a-date",
        "",
        "2020-01-01 00:00:00.0",
        "2020-01-01T00:00:00",
        "2020-01-01-00:00",
        "2020-01-01-00:00:00.0extra",
        " 2020-01-01-00:00:00.0",
        "2020-01-01-00:00:00.0 ",
        "2020-01-01-00:00:00.0\n",
        "2020-13-01-00:00:00.0",
        "2020-02-30-00:00:00.0",
        "2020-01-01-25:00:00.0",
        "2020-01-01-00:00:61.0",
    ])
    def test_invalid(self, text):
        with pytest.raises(ParseError):
            str_to_epoch(text, 0)

    def test_not_a_string(self):
        with pytest.raises(ParseError):
            str_to_epoch(None)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            str_to_epoch("garbage")


class TestEpoch:
    """Test Epoch helpers."""

    def test_mjd(self):
        assert Epoch(86400.0).mjd == 1.0

    def test_frozen(self):
        epoch = Epoch(0.0)
        with pytest.raises(FrozenInstanceError):
            epoch.seconds = 1.0
