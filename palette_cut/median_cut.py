# palette_cut/median_cut.py
from __future__ import annotations

"""
Median cut of a single VBox.

Exports:
  choose_split_axis(vbox)  -> 'r' | 'g' | 'b'
  median_cut_apply(vbox)   -> [] | [copy] | [vbox1, vbox2]

Notes:
  - Longest axis wins; equal extents resolve r before g before b.
  - The raw median is nudged toward the middle of the longer remaining side,
    then snapped onto a populated slice so both halves hold histogram cells.
  - A one-element result means the box cannot be split further.
"""

from typing import List

import numpy as np

from .vbox import AXES, VBox


def choose_split_axis(vbox: VBox) -> str:
    """Axis with the largest extent; ties go to r, then g."""
    rw, gw, bw = vbox.extents()
    maxw = max(rw, gw, bw)
    if maxw == rw:
        return "r"
    if maxw == gw:
        return "g"
    return "b"


def _partial_sums(vbox: VBox, axis: str) -> np.ndarray:
    """Cumulative population along `axis`, one entry per slice from low to high."""
    axis_pos = AXES.index(axis)
    others = tuple(a for a in range(3) if a != axis_pos)
    slices = vbox.histo.region(vbox.bounds).sum(axis=others)
    return np.cumsum(slices).astype(np.int64, copy=False)


def median_cut_apply(vbox: VBox) -> List[VBox]:
    """
    Split `vbox` at its population median along the longest axis.

    Returns:
      []               for an empty box
      [copy]           when the box cannot be split
      [vbox1, vbox2]   lower and upper halves otherwise
    """
    count = vbox.count()
    if count == 0:
        return []
    if count == 1 or vbox.volume() == 1:
        return [vbox.copy()]

    axis = choose_split_axis(vbox)
    lo, hi = vbox.axis_bounds(axis)
    partial = _partial_sums(vbox, axis)
    total = int(partial[-1])

    def partial_at(d: int) -> int:
        if d < lo or d > hi:
            return 0
        return int(partial[d - lo])

    def lookahead_at(d: int) -> int:
        return total - partial_at(d)

    above_half = np.flatnonzero(partial * 2 > total)
    if above_half.size == 0:
        return [vbox.copy()]
    i = lo + int(above_half[0])

    left = i - lo
    right = hi - i
    if left <= right:
        d2 = min(hi - 1, int(i + right / 2))
    else:
        d2 = max(lo, int(i - 1 - left / 2))

    while d2 < hi and not partial_at(d2):
        d2 += 1
    count2 = lookahead_at(d2)
    while not count2 and partial_at(d2 - 1):
        d2 -= 1
        count2 = lookahead_at(d2)

    if d2 >= hi:
        # everything sits in the top slice; no non-empty upper half exists
        return [vbox.copy()]

    vbox1 = vbox.with_axis_bounds(axis, lo, d2)
    vbox2 = vbox.with_axis_bounds(axis, d2 + 1, hi)
    return [vbox1, vbox2]


__all__ = ["choose_split_axis", "median_cut_apply"]
