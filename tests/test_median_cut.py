"""Tests for the median cut splitter."""

from palette_cut.histogram import build_histogram
from palette_cut.median_cut import choose_split_axis, median_cut_apply
from palette_cut.vbox import VBox


class TestChooseSplitAxis:
    """Longest axis wins; ties resolve r, then g, then b."""

    def test_longest_axis(self):
        histo = build_histogram([(0, 0, 0)])
        assert choose_split_axis(VBox(0, 1, 0, 1, 0, 5, histo)) == "b"
        assert choose_split_axis(VBox(0, 1, 0, 6, 0, 5, histo)) == "g"

    def test_ties_prefer_red_then_green(self):
        histo = build_histogram([(0, 0, 0)])
        assert choose_split_axis(VBox(0, 3, 0, 3, 0, 3, histo)) == "r"
        assert choose_split_axis(VBox(0, 1, 0, 3, 0, 3, histo)) == "g"


class TestMedianCutApply:
    """Test cases for median_cut_apply."""

    def test_empty_box_yields_nothing(self):
        histo = build_histogram([(255, 255, 255)])
        assert median_cut_apply(VBox(0, 3, 0, 3, 0, 3, histo)) == []

    def test_single_pixel_box_is_not_split(self):
        histo = build_histogram([(10, 10, 10)])
        result = median_cut_apply(VBox(0, 31, 0, 31, 0, 31, histo))
        assert len(result) == 1
        assert result[0].bounds == (0, 31, 0, 31, 0, 31)

    def test_single_cell_box_is_not_split(self):
        histo = build_histogram([(10, 10, 10)] * 5)
        result = median_cut_apply(VBox(1, 1, 1, 1, 1, 1, histo))
        assert len(result) == 1
        assert result[0].count() == 5

    def test_cut_nudged_toward_longer_side(self):
        """
        Ten pixels at r=0 and ten at r=10 (reduced). The median lands on 10,
        the nudge pulls the cut back to max(0, 10 - 1 - 10/2) = 4.
        """
        histo = build_histogram([(0, 0, 0)] * 10 + [(80, 0, 0)] * 10)
        vbox1, vbox2 = median_cut_apply(VBox(0, 10, 0, 0, 0, 0, histo))
        assert vbox1.bounds == (0, 4, 0, 0, 0, 0)
        assert vbox2.bounds == (5, 10, 0, 0, 0, 0)
        assert (vbox1.count(), vbox2.count()) == (10, 10)

    def test_three_clusters_first_cut(self, grey_ramp_pixels):
        histo = build_histogram(grey_ramp_pixels)
        seed = VBox.from_histogram(histo)
        vbox1, vbox2 = median_cut_apply(seed)
        assert vbox1.bounds == (0, 7, 0, 31, 0, 31)
        assert vbox2.bounds == (8, 31, 0, 31, 0, 31)
        assert (vbox1.count(), vbox2.count()) == (10, 20)

    def test_halves_partition_parent(self, rng):
        pixels = rng.integers(0, 256, size=(500, 3))
        histo = build_histogram(pixels)
        seed = VBox.from_histogram(histo)
        vbox1, vbox2 = median_cut_apply(seed)
        assert vbox1.count() + vbox2.count() == seed.count()
        assert vbox1.volume() + vbox2.volume() == seed.volume()
        axis = choose_split_axis(seed)
        assert vbox1.axis_bounds(axis)[1] + 1 == vbox2.axis_bounds(axis)[0]
        assert vbox1.count() > 0

    def test_population_in_top_slice_only(self):
        """All pixels in the highest slice leave no valid upper half."""
        histo = build_histogram([(40, 0, 0)] * 3)
        result = median_cut_apply(VBox(0, 5, 0, 0, 0, 0, histo))
        assert len(result) == 1
        assert result[0].bounds == (0, 5, 0, 0, 0, 0)

    def test_parent_is_not_mutated(self, grey_ramp_pixels):
        histo = build_histogram(grey_ramp_pixels)
        seed = VBox.from_histogram(histo)
        before = seed.bounds
        median_cut_apply(seed)
        assert seed.bounds == before
