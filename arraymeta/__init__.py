"""
arraymeta - array geometry and calibration metadata for zenith arrays

Synthesizes the metadata describing a radio-interferometer array and its
observations:
- Local East-North-Up antenna offsets -> ITRF positions
- Zenith baselines (autocorrelations included)
- J2000 zenith direction at an epoch and location
- Per-antenna complex gains and flags from CASA calibration tables
- MeasurementSet sub-tables for a zenith-pointed array
"""

__version__ = "0.1.0"

from .geometry import to_geocentric, enumerate_baselines, sea_level_radius
from .sky import str_to_epoch, get_zenith
from .io import load_calibration, read_cal_table

__all__ = [
    'to_geocentric',
    'enumerate_baselines',
    'sea_level_radius',
    'str_to_epoch',
    'get_zenith',
    'load_calibration',
    'read_cal_table',
]
