"""
Tests for flag packing.
"""

import numpy as np
import pytest
from numpy.testing import assert_array_equal

from arraymeta.errors import ShapeError
from arraymeta.io.flags import (
    bool_array_to_char_vector,
    char_vector_to_bool_array,
    pack_flags,
    unpack_flags,
)


class TestBoolToChar:
    """Test boolean -> byte packing."""

    def test_values(self):
        flags = np.array([[True, False], [False, True]])
        buf = np.zeros(4, dtype=np.uint8)
        bool_array_to_char_vector(flags, buf)
        assert_array_equal(buf, [1, 0, 0, 1])

    def test_row_major_order(self):
        flags = np.zeros((2, 3), dtype=bool)
        flags[0, 2] = True
        assert_array_equal(pack_flags(flags), [0, 0, 1, 0, 0, 0])

    @pytest.mark.parametrize("n_flags,n_buf", [(6, 5), (6, 7), (0, 1), (1, 0)])
    def test_size_mismatch(self, n_flags, n_buf):
        with pytest.raises(ShapeError):
            bool_array_to_char_vector(np.zeros(n_flags, dtype=bool), np.zeros(n_buf, dtype=np.uint8))

    def test_buffer_untouched_on_mismatch(self):
        buf = np.full(3, 7, dtype=np.uint8)
        with pytest.raises(ShapeError):
            bool_array_to_char_vector(np.ones(4, dtype=bool), buf)
        assert_array_equal(buf, [7, 7, 7])


class TestCharToBool:
    """Test byte -> boolean unpacking."""

    def test_round_trip(self):
        rng = np.random.default_rng(0)
        flags = rng.random((5, 4, 2)) > 0.5
        assert_array_equal(unpack_flags(pack_flags(flags), flags.shape), flags)

    def test_nonzero_is_true(self):
        out = np.zeros(3, dtype=bool)
        char_vector_to_bool_array(np.array([0, 2, 255], dtype=np.uint8), out)
        assert_array_equal(out, [False, True, True])

    def test_size_mismatch(self):
        with pytest.raises(ShapeError):
            char_vector_to_bool_array(np.zeros(5, dtype=np.uint8), np.zeros((2, 3), dtype=bool))
