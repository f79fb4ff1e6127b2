# palette_cut/vbox.py
from __future__ import annotations

"""
Axis-aligned box over the reduced RGB histogram.

Bounds are inclusive and fixed at construction. count(), volume() and avg()
are computed on first use and cached; pass force=True to recompute.
"""

from typing import Optional, Sequence, Tuple

import numpy as np

from .core_types import RGBTuple, coerce_to_rgb_tuple
from .histogram import Bounds, Histogram

AXES: Tuple[str, str, str] = ("r", "g", "b")


class VBox:
    __slots__ = ("r1", "r2", "g1", "g2", "b1", "b2", "histo", "_count", "_volume", "_avg")

    def __init__(
        self, r1: int, r2: int, g1: int, g2: int, b1: int, b2: int, histo: Histogram
    ) -> None:
        if r1 > r2 or g1 > g2 or b1 > b2:
            raise ValueError(
                f"inverted vbox bounds r={r1}..{r2} g={g1}..{g2} b={b1}..{b2}"
            )
        side = histo.side
        if min(r1, g1, b1) < 0 or max(r2, g2, b2) >= side:
            raise ValueError(f"vbox bounds outside reduced range 0..{side - 1}")
        self.r1 = int(r1)
        self.r2 = int(r2)
        self.g1 = int(g1)
        self.g2 = int(g2)
        self.b1 = int(b1)
        self.b2 = int(b2)
        self.histo = histo
        self._count: Optional[int] = None
        self._volume: Optional[int] = None
        self._avg: Optional[RGBTuple] = None

    @classmethod
    def from_histogram(cls, histo: Histogram) -> Optional["VBox"]:
        """Smallest box enclosing every populated cell; None for an empty histogram."""
        bounds = histo.occupied_bounds()
        if bounds is None:
            return None
        return cls(*bounds, histo)

    @property
    def bounds(self) -> Bounds:
        return (self.r1, self.r2, self.g1, self.g2, self.b1, self.b2)

    def axis_bounds(self, axis: str) -> Tuple[int, int]:
        return getattr(self, axis + "1"), getattr(self, axis + "2")

    def extents(self) -> Tuple[int, int, int]:
        """Cell count along r, g and b."""
        return (
            self.r2 - self.r1 + 1,
            self.g2 - self.g1 + 1,
            self.b2 - self.b1 + 1,
        )

    def volume(self, force: bool = False) -> int:
        if self._volume is None or force:
            rw, gw, bw = self.extents()
            self._volume = rw * gw * bw
        return self._volume

    def count(self, force: bool = False) -> int:
        if self._count is None or force:
            self._count = int(self.histo.region(self.bounds).sum())
        return self._count

    def avg(self, force: bool = False) -> RGBTuple:
        """
        Population-weighted centroid in 8-bit space (floored).

        A box whose population sits in a single cell reports that cell's exact
        pixel mean. An empty box reports its geometric centre.
        """
        if self._avg is None or force:
            self._avg = self._compute_avg()
        return self._avg

    def _compute_avg(self) -> RGBTuple:
        mult = 1 << self.histo.rshift
        if self.volume() == 1:
            mean = self.histo.cell_mean(self.r1, self.g1, self.b1)
            if mean is not None:
                return mean

        region = self.histo.region(self.bounds)
        ntot = int(region.sum())
        if ntot == 0:
            return (
                (mult * (self.r1 + self.r2 + 1)) // 2,
                (mult * (self.g1 + self.g2 + 1)) // 2,
                (mult * (self.b1 + self.b2 + 1)) // 2,
            )

        populated = np.argwhere(region)
        if populated.shape[0] == 1:
            i, j, k = (int(v) for v in populated[0])
            mean = self.histo.cell_mean(self.r1 + i, self.g1 + j, self.b1 + k)
            if mean is not None:
                return mean

        # sum(count * (idx + 0.5) * mult) kept in integers as sum(count * (2 idx + 1)) * mult / 2
        out = []
        for axis_pos, (lo, hi) in enumerate(
            ((self.r1, self.r2), (self.g1, self.g2), (self.b1, self.b2))
        ):
            others = tuple(a for a in range(3) if a != axis_pos)
            marginal = region.sum(axis=others)
            centres = 2 * np.arange(lo, hi + 1, dtype=np.int64) + 1
            weighted = int((marginal * centres).sum()) * mult
            out.append(weighted // (2 * ntot))
        return (out[0], out[1], out[2])

    def contains(self, pixel: Sequence[int]) -> bool:
        """True if an 8-bit RGB colour falls inside the box after reduction."""
        r, g, b = coerce_to_rgb_tuple(pixel)
        shift = self.histo.rshift
        rv, gv, bv = r >> shift, g >> shift, b >> shift
        return (
            self.r1 <= rv <= self.r2
            and self.g1 <= gv <= self.g2
            and self.b1 <= bv <= self.b2
        )

    def copy(self) -> "VBox":
        return VBox(self.r1, self.r2, self.g1, self.g2, self.b1, self.b2, self.histo)

    def with_axis_bounds(self, axis: str, lo: int, hi: int) -> "VBox":
        """New box equal to this one except along `axis`."""
        bounds = {
            "r1": self.r1,
            "r2": self.r2,
            "g1": self.g1,
            "g2": self.g2,
            "b1": self.b1,
            "b2": self.b2,
        }
        bounds[axis + "1"] = lo
        bounds[axis + "2"] = hi
        return VBox(histo=self.histo, **bounds)

    def __repr__(self) -> str:
        return (
            f"VBox(r={self.r1}..{self.r2}, g={self.g1}..{self.g2}, "
            f"b={self.b1}..{self.b2})"
        )


__all__ = ["AXES", "VBox"]
