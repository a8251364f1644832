"""
Shared fixtures for arraymeta tests.
"""

import numpy as np
import pytest

from arraymeta.geometry.geodetic import WGS84_A, WGS84_B


def geodetic_to_ecef(longitude, latitude, height):
    """Closed-form WGS84 geodetic -> ECEF (radians, radians, meters)."""
    e2 = (WGS84_A**2 - WGS84_B**2) / WGS84_A**2
    N = WGS84_A / np.sqrt(1 - e2 * np.sin(latitude)**2)
    return np.array([
        (N + height) * np.cos(latitude) * np.cos(longitude),
        (N + height) * np.cos(latitude) * np.sin(longitude),
        (N * (1 - e2) + height) * np.sin(latitude),
    ])


@pytest.fixture
def ecef_converter():
    """Converter usable in place of casacore measures."""
    return geodetic_to_ecef


class FakeCalTable:
    """Minimal stand-in for an open casacore calibration table."""

    def __init__(self, gain, flag, antenna1, shapes=None):
        self.columns = {
            "CPARAM": np.asarray(gain),
            "FLAG": np.asarray(flag),
            "ANTENNA1": np.asarray(antenna1),
        }
        self.shapes = shapes or {}

    def nrows(self):
        return len(self.columns["ANTENNA1"])

    def getcol(self, name):
        return self.columns[name]

    def getcolshapestring(self, name):
        if name in self.shapes:
            return self.shapes[name]
        cell = self.columns[name].shape[1:]
        return [str(list(reversed(cell)))] * self.nrows()


@pytest.fixture
def cal_table_factory():
    """Build a FakeCalTable with n_ant rows of (n_chan, n_pol) gains."""
    def _make(n_ant=3, n_chan=4, n_pol=2, antenna1=None, flag_every=3):
        rng = np.random.default_rng(42)
        gain = (rng.standard_normal((n_ant, n_chan, n_pol))
                + 1j * rng.standard_normal((n_ant, n_chan, n_pol)))
        flag = np.zeros((n_ant, n_chan, n_pol), dtype=bool)
        flag.reshape(-1)[::flag_every] = True
        if antenna1 is None:
            antenna1 = np.arange(n_ant)
        return FakeCalTable(gain, flag, antenna1)
    return _make
