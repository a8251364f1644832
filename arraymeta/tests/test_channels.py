"""
Tests for spectral window channel layout.
"""

import pytest
from numpy.testing import assert_allclose

from arraymeta.errors import RangeError
from arraymeta.io.subtables import channel_frequencies


class TestChannelFrequencies:
    """Test channel centres across a window."""

    def test_centres(self):
        assert_allclose(channel_frequencies(4, 100.0, 8.0), [97.0, 99.0, 101.0, 103.0])

    def test_single_channel(self):
        assert_allclose(channel_frequencies(1, 100.0, 8.0), [100.0])

    def test_bad_count(self):
        with pytest.raises(RangeError):
            channel_frequencies(0, 100.0, 8.0)
