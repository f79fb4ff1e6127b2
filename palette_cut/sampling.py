# palette_cut/sampling.py
from __future__ import annotations

"""
Convenience wrappers that take a raw RGBA buffer instead of filtered pixels.

Sampling contract (shared by every wrapper that feeds quantize()):
  - visit pixel indices 0, quality, 2*quality, ...
  - drop pixels with alpha < 125
  - drop near-white pixels (all three channels > 250)

Exports:
  sample_pixels(rgba, quality)                  -> int64 (N, 3)
  get_palette(rgba, colour_count, quality)      -> list[RGBTuple] | None
  get_dominant_colour(rgba, quality)            -> RGBTuple | None
  get_average_colour(rgba, sample_size)         -> RGBTuple | None
"""

import math
from typing import List, Optional, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .constants import (
    ALPHA_THRESHOLD,
    AVERAGE_ALPHA_THRESHOLD,
    DEFAULT_COLOUR_COUNT,
    DEFAULT_QUALITY,
    DOMINANT_PALETTE_SIZE,
    PALETTE_COLOUR_RANGE,
    QUALITY_RANGE,
    WHITE_THRESHOLD,
)
from .core_types import PixelArray, RGBTuple, U8Rgba, assert_u8_rgba, clamp_value
from .quantize import quantize

RgbaLike = Union[NDArray[np.uint8], bytes, bytearray, memoryview]


def _as_rgba_rows(rgba: RgbaLike) -> U8Rgba:
    """(H,W,4), (N,4) or flat 4N-byte buffer -> uint8 (N, 4) view."""
    if isinstance(rgba, (bytes, bytearray, memoryview)):
        buf = np.frombuffer(rgba, dtype=np.uint8)
    elif isinstance(rgba, np.ndarray):
        buf = rgba
    else:
        buf = np.asarray(rgba, dtype=np.uint8)

    if buf.ndim == 1:
        if buf.dtype != np.uint8 or buf.size % 4 != 0:
            raise TypeError("flat RGBA buffer must be uint8 with a length divisible by 4")
        return buf.reshape(-1, 4)
    return assert_u8_rgba(buf).reshape(-1, 4)


def _clamped_int(value: float, bounds: Tuple[int, int]) -> int:
    lo, hi = bounds
    return int(clamp_value(math.floor(value), lo, hi))


def clamp_palette_request(colour_count: float, quality: float) -> Tuple[int, int]:
    """Floor and clamp (colour_count, quality) to the get_palette() ranges."""
    return (
        _clamped_int(colour_count, PALETTE_COLOUR_RANGE),
        _clamped_int(quality, QUALITY_RANGE),
    )


def sample_pixels(rgba: RgbaLike, quality: int = DEFAULT_QUALITY) -> PixelArray:
    """
    Apply the sampling contract to an RGBA buffer.

    Args:
      rgba    : uint8 (H,W,4), (N,4) or flat RGBA bytes
      quality : stride between visited pixels, >= 1
    Returns:
      int64 (N, 3) RGB rows ready for quantize()
    """
    if int(quality) < 1:
        raise ValueError(f"quality must be >= 1, got {quality}")
    rows = _as_rgba_rows(rgba)[:: int(quality)]
    visible = rows[:, 3] >= ALPHA_THRESHOLD
    near_white = np.all(rows[:, :3] > WHITE_THRESHOLD, axis=1)
    return rows[visible & ~near_white, :3].astype(np.int64)


def get_palette(
    rgba: RgbaLike,
    colour_count: int = DEFAULT_COLOUR_COUNT,
    quality: int = DEFAULT_QUALITY,
) -> Optional[List[RGBTuple]]:
    """
    Palette of an RGBA buffer.

    colour_count is clamped to 2..20 and quality to 1..10 (after flooring).
    Returns None when no pixel survives sampling.
    """
    safe_count, safe_quality = clamp_palette_request(colour_count, quality)

    pixels = sample_pixels(rgba, safe_quality)
    if pixels.shape[0] == 0:
        return None

    cmap = quantize(pixels, safe_count)
    return cmap.palette() if cmap is not None else None


def get_dominant_colour(
    rgba: RgbaLike, quality: int = DEFAULT_QUALITY
) -> Optional[RGBTuple]:
    """First entry of a small palette, or None."""
    palette = get_palette(rgba, DOMINANT_PALETTE_SIZE, quality)
    return palette[0] if palette else None


def get_average_colour(rgba: RgbaLike, sample_size: int = 10) -> Optional[RGBTuple]:
    """
    Floor mean RGB of every `sample_size`-th pixel with alpha > 125.
    Near-white pixels are kept here. None when nothing qualifies.
    """
    if int(sample_size) < 1:
        raise ValueError(f"sample_size must be >= 1, got {sample_size}")
    rows = _as_rgba_rows(rgba)[:: int(sample_size)]
    kept = rows[rows[:, 3] > AVERAGE_ALPHA_THRESHOLD, :3].astype(np.int64)
    n = kept.shape[0]
    if n == 0:
        return None
    sums = kept.sum(axis=0)
    return (int(sums[0]) // n, int(sums[1]) // n, int(sums[2]) // n)


get_dominant_color = get_dominant_colour
get_average_color = get_average_colour

__all__ = [
    "clamp_palette_request",
    "sample_pixels",
    "get_palette",
    "get_dominant_colour",
    "get_average_colour",
    "get_dominant_color",
    "get_average_color",
]
