"""Tests for ColorMap lookups."""

import pytest

from palette_cut.colour_map import ColorMap, ColourMapEntry
from palette_cut.histogram import build_histogram
from palette_cut.quantize import quantize
from palette_cut.vbox import VBox


@pytest.fixture
def black_grey_map():
    return quantize([(0, 0, 0)] * 5 + [(200, 200, 200)] * 5, 4)


class TestColorMap:
    """Test cases for ColorMap."""

    def test_palette_order_and_size(self, black_grey_map):
        assert black_grey_map.palette() == [(0, 0, 0), (200, 200, 200)]
        assert black_grey_map.size() == len(black_grey_map) == 2

    def test_map_exact_containment(self, black_grey_map):
        assert black_grey_map.map((3, 3, 3)) == (0, 0, 0)
        assert black_grey_map.map((207, 201, 200)) == (200, 200, 200)

    def test_map_falls_back_to_nearest(self, black_grey_map):
        assert black_grey_map.map((120, 120, 120)) == (200, 200, 200)
        assert black_grey_map.map((60, 70, 50)) == (0, 0, 0)

    def test_nearest_ties_go_to_first_entry(self, black_grey_map):
        assert black_grey_map.nearest((100, 100, 100)) == (0, 0, 0)

    def test_colour_fixed_at_insertion(self):
        histo = build_histogram([(10, 10, 10)] * 4)
        vbox = VBox(0, 3, 0, 3, 0, 3, histo)
        cmap = ColorMap.from_vboxes([vbox])
        assert cmap.entries[0] == ColourMapEntry(vbox=vbox, colour=(10, 10, 10))
        assert cmap.palette() == [(10, 10, 10)]

    def test_empty_map_nearest(self):
        with pytest.raises(ValueError):
            ColorMap([]).nearest((1, 2, 3))
