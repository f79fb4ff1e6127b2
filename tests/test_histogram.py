"""Tests for the reduced-resolution histogram."""

import numpy as np
import pytest

from palette_cut.constants import HISTO_SIDE, RSHIFT
from palette_cut.histogram import (
    Histogram,
    build_histogram,
    colour_index,
    reduce_channel,
    split_colour_index,
)


class TestColourIndex:
    """Test cases for index packing."""

    def test_white_maps_to_max_index(self):
        """(255,255,255) with 5 bits packs to (31<<10)|(31<<5)|31."""
        r, g, b = (reduce_channel(255),) * 3
        assert colour_index(r, g, b) == 32767

    def test_split_inverts_pack(self):
        assert split_colour_index(colour_index(12, 18, 25)) == (12, 18, 25)

    def test_other_bit_depth(self):
        assert colour_index(15, 15, 15, sigbits=4) == 4095
        assert reduce_channel(255, sigbits=4) == 15

    def test_default_resolution(self):
        histo = build_histogram([(255, 0, 7)])
        assert histo.side == HISTO_SIDE
        assert histo.rshift == RSHIFT
        assert 31 << 10 in histo


class TestBuildHistogram:
    """Test cases for build_histogram."""

    def test_white_pixel_bucket(self):
        histo = build_histogram([(255, 255, 255)])
        assert histo[32767] == 1
        assert list(histo) == [32767]

    def test_aliasing_pixels_share_a_bucket(self):
        histo = build_histogram([(0, 0, 0), (7, 7, 7), (8, 0, 0)])
        assert histo[0] == 2
        assert histo[1 << 10] == 1
        assert len(histo) == 2
        assert histo.total == 3

    def test_keys_are_populated_indices_only(self):
        histo = build_histogram([(10, 20, 30), (200, 100, 50), (10, 20, 30)])
        assert sorted(histo.keys()) == list(histo)
        assert all(histo[k] > 0 for k in histo)
        assert dict(histo.items()) == {
            colour_index(1, 2, 3): 2,
            colour_index(25, 12, 6): 1,
        }

    def test_missing_index_reads_zero(self):
        histo = build_histogram([(255, 255, 255)])
        assert histo[5] == 0
        assert histo[10**9] == 0
        assert histo.get(5) == 0
        assert 5 not in histo
        assert 32767 in histo

    def test_empty_input(self):
        histo = build_histogram([])
        assert len(histo) == 0
        assert histo.total == 0
        assert histo.occupied_bounds() is None

    def test_numpy_image_input(self):
        image = np.zeros((4, 5, 3), dtype=np.uint8)
        image[:2] = [255, 0, 0]
        histo = build_histogram(image)
        assert histo.total == 20
        assert histo[colour_index(31, 0, 0)] == 10
        assert histo[0] == 10

    def test_cell_mean_is_exact_pixel_mean(self):
        histo = build_histogram([(0, 0, 0), (7, 7, 7)])
        assert histo.cell_mean(0, 0, 0) == (3, 3, 3)
        assert histo.cell_mean(1, 1, 1) is None

    def test_occupied_bounds(self):
        histo = build_histogram([(8, 64, 255), (40, 16, 128)])
        assert histo.occupied_bounds() == (1, 5, 2, 8, 16, 31)

    def test_histogram_is_read_only(self):
        histo = build_histogram([(1, 2, 3)])
        with pytest.raises(ValueError):
            histo.counts[0, 0, 0] = 5

    def test_channel_out_of_range(self):
        with pytest.raises(ValueError, match="0..255"):
            build_histogram([(256, 0, 0)])
        with pytest.raises(ValueError, match="0..255"):
            build_histogram([(-1, 0, 0)])

    def test_rejects_non_rgb_shape(self):
        with pytest.raises(ValueError):
            build_histogram([(1, 2, 3, 4)])

    def test_rejects_float_channels(self):
        with pytest.raises(TypeError):
            build_histogram(np.array([[0.5, 0.5, 0.5]]))

    def test_rejects_bad_sigbits(self):
        with pytest.raises(ValueError, match="sigbits"):
            build_histogram([(1, 2, 3)], sigbits=0)

    def test_counts_shape_is_checked(self):
        with pytest.raises(ValueError):
            Histogram(np.zeros((4, 4, 4), dtype=np.int64))
