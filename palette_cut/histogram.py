# palette_cut/histogram.py
from __future__ import annotations

"""
Reduced-resolution RGB histogram.

Each 8-bit channel keeps its top `sigbits` bits, so with the default 5 bits the
colour space folds into a 32x32x32 grid addressed by a 15-bit index
(r << 10) | (g << 5) | b. Counts live in a dense (side, side, side) int64 cube;
raw channel sums are kept alongside so single-cell boxes can report the exact
mean of their pixels.

Exports:
  colour_index(r, g, b, sigbits)     -> int
  split_colour_index(index, sigbits) -> (r, g, b) reduced
  Histogram                          (read-only Mapping[int, int])
  build_histogram(pixels, sigbits)   -> Histogram
"""

from typing import Iterator, Mapping, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .constants import SIGBITS
from .core_types import PixelsLike, RGBTuple, as_pixel_array

Bounds = Tuple[int, int, int, int, int, int]  # r1, r2, g1, g2, b1, b2


def colour_index(r: int, g: int, b: int, sigbits: int = SIGBITS) -> int:
    """Pack reduced channel values into a single histogram index."""
    return (r << (2 * sigbits)) + (g << sigbits) + b


def split_colour_index(index: int, sigbits: int = SIGBITS) -> Tuple[int, int, int]:
    """Inverse of colour_index."""
    mask = (1 << sigbits) - 1
    return ((index >> (2 * sigbits)) & mask, (index >> sigbits) & mask, index & mask)


def reduce_channel(value: int, sigbits: int = SIGBITS) -> int:
    """8-bit channel to its reduced value."""
    return int(value) >> (8 - sigbits)


class Histogram(Mapping[int, int]):
    """
    Reduced index -> population count.

    Iteration yields only populated indices, in ascending order. Looking up an
    index that holds no pixels (or lies outside the index space) returns 0.
    """

    __slots__ = ("_counts", "_sums", "_flat", "sigbits")

    def __init__(
        self,
        counts: NDArray[np.int64],
        sums: Optional[NDArray[np.int64]] = None,
        sigbits: int = SIGBITS,
    ) -> None:
        side = 1 << sigbits
        if counts.shape != (side, side, side):
            raise ValueError(
                f"counts must be shaped {(side, side, side)}, got {counts.shape}"
            )
        if sums is not None and sums.shape != (side, side, side, 3):
            raise ValueError(
                f"sums must be shaped {(side, side, side, 3)}, got {sums.shape}"
            )
        counts.setflags(write=False)
        if sums is not None:
            sums.setflags(write=False)
        self.sigbits = sigbits
        self._counts = counts
        self._sums = sums
        self._flat = counts.reshape(-1)

    # Mapping protocol

    def __getitem__(self, index: int) -> int:
        index = int(index)
        if index < 0 or index >= self._flat.size:
            return 0
        return int(self._flat[index])

    def __contains__(self, index: object) -> bool:
        if not isinstance(index, (int, np.integer)):
            return False
        return self[int(index)] > 0

    def __iter__(self) -> Iterator[int]:
        return iter(np.flatnonzero(self._flat).tolist())

    def __len__(self) -> int:
        return int(np.count_nonzero(self._flat))

    def get(self, index: int, default: Optional[int] = 0) -> Optional[int]:  # type: ignore[override]
        return self[index] if index in self else default

    def __repr__(self) -> str:
        return f"Histogram(sigbits={self.sigbits}, cells={len(self)}, total={self.total})"

    # Views

    @property
    def side(self) -> int:
        return 1 << self.sigbits

    @property
    def rshift(self) -> int:
        return 8 - self.sigbits

    @property
    def counts(self) -> NDArray[np.int64]:
        """Read-only (side, side, side) population cube indexed [r, g, b]."""
        return self._counts

    @property
    def total(self) -> int:
        return int(self._flat.sum())

    def region(self, bounds: Bounds) -> NDArray[np.int64]:
        """Population sub-cube for inclusive reduced bounds (r1, r2, g1, g2, b1, b2)."""
        r1, r2, g1, g2, b1, b2 = bounds
        return self._counts[r1 : r2 + 1, g1 : g2 + 1, b1 : b2 + 1]

    def cell_count(self, r: int, g: int, b: int) -> int:
        return self[colour_index(r, g, b, self.sigbits)]

    def cell_mean(self, r: int, g: int, b: int) -> Optional[RGBTuple]:
        """Floor mean of the raw pixels in one cell, or None if empty or untracked."""
        n = self.cell_count(r, g, b)
        if n == 0 or self._sums is None:
            return None
        s = self._sums[r, g, b]
        return (int(s[0]) // n, int(s[1]) // n, int(s[2]) // n)

    def occupied_bounds(self) -> Optional[Bounds]:
        """Min/max reduced value per channel over populated cells."""
        rs, gs, bs = np.nonzero(self._counts)
        if rs.size == 0:
            return None
        return (
            int(rs.min()),
            int(rs.max()),
            int(gs.min()),
            int(gs.max()),
            int(bs.min()),
            int(bs.max()),
        )


def build_histogram(pixels: PixelsLike, sigbits: int = SIGBITS) -> Histogram:
    """
    Count RGB samples per reduced cell.

    Args:
      pixels: sequence of (r, g, b) or integer array[...,3] in 0..255
      sigbits: significant bits kept per channel (1..8)
    Returns:
      Histogram; empty input gives an empty histogram.
    """
    if not 1 <= int(sigbits) <= 8:
        raise ValueError(f"sigbits must be in 1..8, got {sigbits}")
    sigbits = int(sigbits)
    px = as_pixel_array(pixels)
    side = 1 << sigbits
    n_cells = side**3

    reduced = px >> (8 - sigbits)
    idx = (reduced[:, 0] << (2 * sigbits)) + (reduced[:, 1] << sigbits) + reduced[:, 2]

    counts = np.bincount(idx, minlength=n_cells).astype(np.int64, copy=False)
    sums = np.stack(
        [np.bincount(idx, weights=px[:, c], minlength=n_cells) for c in range(3)],
        axis=-1,
    ).astype(np.int64)

    return Histogram(
        counts.reshape(side, side, side),
        sums.reshape(side, side, side, 3),
        sigbits=sigbits,
    )


__all__ = [
    "Bounds",
    "colour_index",
    "split_colour_index",
    "reduce_channel",
    "Histogram",
    "build_histogram",
]
