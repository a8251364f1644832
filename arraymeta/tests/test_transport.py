"""
Tests for HDF5 transport files.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from arraymeta.errors import ShapeError
from arraymeta.io.flags import pack_flags
from arraymeta.io.transport import load_cal_transport, save_cal_transport


@pytest.fixture
def packed():
    rng = np.random.default_rng(7)
    shape = (4, 8, 2)
    gains = (rng.standard_normal(shape) + 1j * rng.standard_normal(shape)).astype(np.complex64)
    flags = rng.random(shape) > 0.8
    return gains.reshape(-1), pack_flags(flags), shape, gains, flags


class TestTransport:
    """Test save/load of packed gains and flags."""

    def test_save_load(self, tmp_path, packed):
        gain, flag, shape, gains, flags = packed
        path = str(tmp_path / "cal.h5")

        save_cal_transport(path, gain, flag, shape, source="gains.G")
        data = load_cal_transport(path)

        assert data["shape"] == shape
        assert data["source"] == "gains.G"
        assert_allclose(data["gains"], gains)
        assert_array_equal(data["flags"], flags)
        assert data["flag"].dtype == np.uint8

    def test_existing_group(self, tmp_path, packed):
        gain, flag, shape, _, _ = packed
        path = str(tmp_path / "cal.h5")
        save_cal_transport(path, gain, flag, shape)

        with pytest.raises(ValueError):
            save_cal_transport(path, gain, flag, shape)
        save_cal_transport(path, gain, flag, shape, overwrite=True)

    def test_named_groups(self, tmp_path, packed):
        gain, flag, shape, _, _ = packed
        path = str(tmp_path / "cal.h5")
        save_cal_transport(path, gain, flag, shape, name="G")
        save_cal_transport(path, gain[:16], flag[:16], (1, 8, 2), name="B")

        assert load_cal_transport(path, "B")["shape"] == (1, 8, 2)
        with pytest.raises(KeyError):
            load_cal_transport(path, "K")

    def test_size_mismatch(self, tmp_path, packed):
        gain, flag, shape, _, _ = packed
        with pytest.raises(ShapeError):
            save_cal_transport(str(tmp_path / "cal.h5"), gain, flag[:-1], shape)
