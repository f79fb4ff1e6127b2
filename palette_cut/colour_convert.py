# palette_cut/colour_convert.py
from __future__ import annotations

"""
Colour conversions for palette display.

Exports:
  rgb_to_hsl(rgb)          -> (h deg, s %, l %) integers, rounded half-up
  hsl_to_rgb(hsl)          -> RGB tuple
  rgb_to_hsl_batch(rgb)    -> int64 array[...,3], same maths vectorised
  relative_luma(rgb)       -> float in 0..1 (Rec. 601 weights)
  readable_text_colour(rgb)-> '#000000' or '#ffffff'
"""

import math
from typing import Sequence, Union

import numpy as np
from numpy.typing import NDArray

from .constants import DARK_TEXT_HEX, LIGHT_TEXT_HEX, LUMA_WEIGHTS
from .core_types import HexStr, HslTuple, RGBTuple, coerce_to_rgb_tuple


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# RGB to HSL


def rgb_to_hsl(rgb: Union[Sequence[int], NDArray[np.generic]]) -> HslTuple:
    """
    RGB (0..255) to HSL with hue in degrees and saturation / lightness in percent.
    Each component is rounded half-up to an integer.
    """
    r, g, b = (c / 255.0 for c in coerce_to_rgb_tuple(rgb))

    c_max = max(r, g, b)
    c_min = min(r, g, b)
    diff = c_max - c_min

    h = 0.0
    s = 0.0
    l = (c_max + c_min) / 2.0

    if diff != 0.0:
        s = diff / (2.0 - c_max - c_min) if l > 0.5 else diff / (c_max + c_min)
        if c_max == r:
            h = (g - b) / diff + (6.0 if g < b else 0.0)
        elif c_max == g:
            h = (b - r) / diff + 2.0
        else:
            h = (r - g) / diff + 4.0
        h /= 6.0

    return (_round_half_up(h * 360.0), _round_half_up(s * 100.0), _round_half_up(l * 100.0))


def rgb_to_hsl_batch(rgb: np.ndarray) -> NDArray[np.int64]:
    """
    Vectorised rgb_to_hsl over an integer array[...,3]. Shape is preserved.
    """
    orig_shape = rgb.shape
    flat = np.asarray(rgb).reshape(-1, 3).astype(np.float64) / 255.0
    r = flat[:, 0]
    g = flat[:, 1]
    b = flat[:, 2]

    c_max = flat.max(axis=1)
    c_min = flat.min(axis=1)
    diff = c_max - c_min
    l = (c_max + c_min) / 2.0
    chromatic = diff != 0.0

    with np.errstate(divide="ignore", invalid="ignore"):
        s = np.where(l > 0.5, diff / (2.0 - c_max - c_min), diff / (c_max + c_min))
        h_r = (g - b) / diff + np.where(g < b, 6.0, 0.0)
        h_g = (b - r) / diff + 2.0
        h_b = (r - g) / diff + 4.0
    h = np.select([c_max == r, c_max == g], [h_r, h_g], default=h_b) / 6.0

    s = np.where(chromatic, s, 0.0)
    h = np.where(chromatic, h, 0.0)

    out = np.stack(
        [
            np.floor(h * 360.0 + 0.5),
            np.floor(s * 100.0 + 0.5),
            np.floor(l * 100.0 + 0.5),
        ],
        axis=1,
    ).astype(np.int64)
    return out.reshape(orig_shape)


# HSL to RGB


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0.0:
        t += 1.0
    if t > 1.0:
        t -= 1.0
    if t < 1.0 / 6.0:
        return p + (q - p) * 6.0 * t
    if t < 0.5:
        return q
    if t < 2.0 / 3.0:
        return p + (q - p) * (2.0 / 3.0 - t) * 6.0
    return p


def hsl_to_rgb(hsl: Sequence[float]) -> RGBTuple:
    """HSL (deg, %, %) back to an RGB tuple, channels rounded half-up."""
    h = (float(hsl[0]) % 360.0) / 360.0
    s = float(hsl[1]) / 100.0
    l = float(hsl[2]) / 100.0

    if s == 0.0:
        v = _round_half_up(l * 255.0)
        return (v, v, v)

    q = l * (1.0 + s) if l < 0.5 else l + s - l * s
    p = 2.0 * l - q
    r = _hue_to_channel(p, q, h + 1.0 / 3.0)
    g = _hue_to_channel(p, q, h)
    b = _hue_to_channel(p, q, h - 1.0 / 3.0)
    return (
        _round_half_up(r * 255.0),
        _round_half_up(g * 255.0),
        _round_half_up(b * 255.0),
    )


# Display helpers


def relative_luma(rgb: Union[Sequence[int], NDArray[np.generic]]) -> float:
    """Rec. 601 luma of an RGB triple, scaled to 0..1."""
    r, g, b = coerce_to_rgb_tuple(rgb)
    wr, wg, wb = LUMA_WEIGHTS
    return (wr * r + wg * g + wb * b) / 255.0


def readable_text_colour(rgb: Union[Sequence[int], NDArray[np.generic]]) -> HexStr:
    """Black text on light swatches, white text on dark ones."""
    return DARK_TEXT_HEX if relative_luma(rgb) > 0.5 else LIGHT_TEXT_HEX


__all__ = [
    "rgb_to_hsl",
    "rgb_to_hsl_batch",
    "hsl_to_rgb",
    "relative_luma",
    "readable_text_colour",
]
