# palette_cut/quantize.py
from __future__ import annotations

"""
Modified median cut quantization (MMCQ).

Pipeline:
  pixels -> histogram -> seed box over the occupied range
         -> phase 1: split the most populous box until ~75% of the target
         -> phase 2: split by population x volume until the target
         -> ColorMap (boxes popped by population x volume, largest first)

Inputs with no more distinct reduced colours than requested skip splitting
and get one single-cell box per colour, in ascending reduced-index order.
"""

from dataclasses import dataclass
from typing import List, Optional, TextIO

import numpy as np

from .colour_map import ColorMap
from .constants import (
    FRACT_BY_POPULATIONS,
    MAX_COLOURS,
    MAX_ITERATIONS,
    MIN_COLOURS,
    SIGBITS,
)
from .core_types import PixelsLike, as_pixel_array
from .histogram import Histogram, build_histogram, split_colour_index
from .median_cut import median_cut_apply
from .pqueue import PQueue
from .utils import debug_log, key_value_pairs_to_string
from .vbox import VBox


@dataclass
class PhaseStats:
    """Counters for one split phase."""

    target: float
    colours: int = 1
    iterations: int = 0
    unsplittable: int = 0


def by_count(vbox: VBox) -> int:
    return vbox.count()


def by_count_volume(vbox: VBox) -> int:
    return vbox.count() * vbox.volume()


def _split_until(
    queue: PQueue[VBox], target: float, max_iterations: int = MAX_ITERATIONS
) -> PhaseStats:
    """
    Pop the top box, split it, push the halves back.

    Stops once `target` colours exist, after `max_iterations` pops, or when
    every remaining box has been found unsplittable. Unsplittable boxes are
    held aside for the rest of the phase and returned to the queue at the end.
    """
    stats = PhaseStats(target=target)
    held: List[VBox] = []

    while stats.iterations < max_iterations:
        if stats.colours >= target or queue.size() == 0:
            break
        vbox = queue.pop()
        stats.iterations += 1

        if not vbox.count():
            queue.push(vbox)
            continue

        halves = median_cut_apply(vbox)
        if len(halves) < 2:
            held.append(vbox)
            stats.unsplittable += 1
            continue

        queue.push(halves[0])
        queue.push(halves[1])
        stats.colours += 1

    for vbox in held:
        queue.push(vbox)
    return stats


def _single_cell_boxes(histo: Histogram) -> List[VBox]:
    boxes: List[VBox] = []
    for index in histo:
        r, g, b = split_colour_index(index, histo.sigbits)
        boxes.append(VBox(r, r, g, g, b, b, histo))
    return boxes


def _drain(queue: PQueue[VBox], into: Optional[PQueue[VBox]] = None) -> List[VBox]:
    out: List[VBox] = []
    while queue.size():
        vbox = queue.pop()
        if into is not None:
            into.push(vbox)
        out.append(vbox)
    return out


def _valid_colour_count(max_colors: int) -> bool:
    if isinstance(max_colors, bool) or not isinstance(max_colors, (int, np.integer)):
        raise TypeError(f"max_colors must be an integer, got {type(max_colors).__name__}")
    return MIN_COLOURS <= int(max_colors) <= MAX_COLOURS


def quantize(
    pixels: PixelsLike,
    max_colors: int,
    *,
    sigbits: int = SIGBITS,
    debug: bool = False,
    out: Optional[TextIO] = None,
) -> Optional[ColorMap]:
    """
    Reduce RGB samples to at most `max_colors` representative colours.

    Args:
      pixels     : sequence of (r, g, b) or integer array[...,3], already filtered
      max_colors : palette size cap, 2..256
      sigbits    : histogram bits per channel
      debug      : print phase counters
      out        : stream for debug lines (default sys.stdout)

    Returns:
      ColorMap, or None when `pixels` is empty or `max_colors` is out of range.
      The map may hold fewer than `max_colors` entries.
    """
    if not _valid_colour_count(max_colors):
        if debug:
            debug_log(
                f"quantize: max_colors {max_colors} outside {MIN_COLOURS}..{MAX_COLOURS}",
                out=out,
            )
        return None
    max_colors = int(max_colors)

    px = as_pixel_array(pixels)
    if px.shape[0] == 0:
        if debug:
            debug_log("quantize: no pixels", out=out)
        return None

    histo = build_histogram(px, sigbits)
    n_cells = len(histo)
    if n_cells <= max_colors:
        if debug:
            debug_log(
                key_value_pairs_to_string(
                    [("Pixels", int(px.shape[0])), ("Cells", n_cells), ("Split", False)]
                ),
                out=out,
            )
        return ColorMap.from_vboxes(_single_cell_boxes(histo))

    seed = VBox.from_histogram(histo)
    if seed is None:
        return None

    pq: PQueue[VBox] = PQueue(by_count)
    pq.push(seed)
    phase1 = _split_until(pq, FRACT_BY_POPULATIONS * max_colors)

    pq2: PQueue[VBox] = PQueue(by_count_volume)
    _drain(pq, into=pq2)
    phase2 = _split_until(pq2, max_colors - pq2.size())

    cmap = ColorMap.from_vboxes(_drain(pq2))

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Pixels", int(px.shape[0])),
                    ("Cells", n_cells),
                    ("Seed", repr(seed)),
                ]
            ),
            out=out,
        )
        for name, stats in (("phase 1", phase1), ("phase 2", phase2)):
            debug_log(
                f"{name}: "
                + key_value_pairs_to_string(
                    [
                        ("Target", float(stats.target)),
                        ("Colours", stats.colours),
                        ("Iterations", stats.iterations),
                        ("Unsplittable", stats.unsplittable),
                    ]
                ),
                out=out,
            )
        debug_log(f"palette size: {cmap.size()}", out=out)
    return cmap


__all__ = ["PhaseStats", "by_count", "by_count_volume", "quantize"]
