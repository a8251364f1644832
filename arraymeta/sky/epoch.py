"""
Observation Epochs.

Epochs are held as MJD seconds (UTC), the convention of the MeasurementSet
TIME column.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from arraymeta.errors import ParseError

SECONDS_PER_DAY = 86400.0

# MJD 0
_MJD_ORIGIN = date(1858, 11, 17)

# YYYY-MM-DD-HH:MM:SS.s
_EPOCH_PATTERN = re.compile(
    r"(\d{1,4})-(\d{1,2})-(\d{1,2})-(\d{1,2}):(\d{1,2}):(\d{1,2}(?:\.\d*)?)"
)


@dataclass(frozen=True)
class Epoch:
    """UTC instant in MJD seconds."""
    seconds: float
    ref: str = "UTC"

    @property
    def mjd(self) -> float:
        """Modified Julian Date (days)."""
        return self.seconds / SECONDS_PER_DAY

    def to_datetime(self) -> datetime:
        """Calendar form (microsecond resolution)."""
        return datetime(1858, 11, 17) + timedelta(seconds=self.seconds)

    def to_measure(self, dm):
        """casacore epoch measure for the measures server ``dm``."""
        return dm.epoch(self.ref, f"{float(self.seconds)!r}s")


def str_to_epoch(text: str, offset: float = 0.0) -> Epoch:
    """
    Parse a UTC date/time string in the form YYYY-MM-DD-HH:MM:SS.s.

    Parameters
    ----------
    text : str
        Date and time, e.g. "2020-01-01-00:00:00.0"
    offset : float
        Seconds added to the parsed instant

    Returns
    -------
    epoch : Epoch

    Raises
    ------
    ParseError
        If ``text`` does not match the format or is not a valid date/time
    """
    match = _EPOCH_PATTERN.fullmatch(text) if isinstance(text, str) else None
    if match is None:
        raise ParseError(f"Invalid epoch string: {text!r}")

    yy, MM, dd, hh, mm = (int(v) for v in match.groups()[:5])
    ss = float(match.group(6))

    try:
        # validates calendar fields
        datetime(yy, MM, dd, hh, mm)
    except ValueError as err:
        raise ParseError(f"Invalid epoch string: {text!r} ({err})") from err
    if ss >= 60.0:
        raise ParseError(f"Invalid epoch string: {text!r} (seconds >= 60)")

    days = date(yy, MM, dd).toordinal() - _MJD_ORIGIN.toordinal()
    seconds = days * SECONDS_PER_DAY + hh * 3600.0 + mm * 60.0 + ss

    return Epoch(seconds + float(offset))
