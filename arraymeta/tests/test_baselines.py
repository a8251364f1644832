"""
Tests for zenith baseline enumeration.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from arraymeta.errors import RangeError, ShapeError
from arraymeta.geometry.baselines import (
    baseline_indices,
    enumerate_baselines,
    n_baselines,
    zenith_uvws,
)


class TestCounts:
    """Test N(N+1)/2 baselines."""

    @pytest.mark.parametrize("n_ant", [0, 1, 2, 5, 17])
    def test_count(self, n_ant):
        positions = np.random.default_rng(n_ant).standard_normal((n_ant, 3))
        assert len(enumerate_baselines(positions)) == n_ant * (n_ant + 1) // 2
        assert zenith_uvws(positions).shape == (n_baselines(n_ant), 3)

    def test_negative(self):
        with pytest.raises(RangeError):
            n_baselines(-1)

    def test_empty(self):
        baselines = enumerate_baselines(np.zeros((0, 3)))
        assert len(baselines) == 0
        assert list(baselines) == []


class TestOrdering:
    """Test pair order (i outer, j >= i inner)."""

    def test_three_antennas(self):
        a1, a2 = baseline_indices(3)
        assert list(zip(a1, a2)) == [(0, 0), (0, 1), (0, 2), (1, 1), (1, 2), (2, 2)]

    def test_index_of(self):
        baselines = enumerate_baselines(np.zeros((6, 3)))
        for k, bl in enumerate(baselines):
            assert baselines.index_of(bl.antenna1, bl.antenna2) == k
            assert baselines.index_of(bl.antenna2, bl.antenna1) == k

    def test_index_of_out_of_range(self):
        baselines = enumerate_baselines(np.zeros((3, 3)))
        with pytest.raises(RangeError):
            baselines.index_of(0, 3)


class TestVectors:
    """Test baseline vectors."""

    def test_autocorrelations_zero(self):
        positions = np.random.default_rng(1).standard_normal((7, 3)) * 1e6
        for bl in enumerate_baselines(positions):
            if bl.antenna1 == bl.antenna2:
                assert_allclose(bl.vector, 0.0)

    def test_subtraction_order(self):
        positions = np.array([[1.0, 2.0, 3.0], [4.0, 6.0, 8.0]])
        uvw = zenith_uvws(positions)
        assert_allclose(uvw[1], [-3.0, -4.0, -5.0])

    def test_bad_shape(self):
        with pytest.raises(ShapeError):
            zenith_uvws(np.zeros((3, 2)))

    def test_antennas_without_coordinates(self):
        with pytest.raises(ShapeError):
            enumerate_baselines(np.zeros((4, 0)))
        with pytest.raises(ShapeError):
            zenith_uvws(np.zeros((4, 0)))
