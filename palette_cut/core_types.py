# palette_cut/core_types.py
from __future__ import annotations

"""
Core type aliases and lightweight validators / hex helpers.
"""

from typing import Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]
HslTuple = Tuple[int, int, int]  # (hue deg, saturation %, lightness %)
HexStr = str

PixelArray = NDArray[np.int64]  # (N, 3) channels in 0..255
U8Image = NDArray[np.uint8]  # (H, W, 3)
U8Rgba = NDArray[np.uint8]  # (H, W, 4) or (N, 4)

PixelsLike = Union[Sequence[Sequence[int]], NDArray[np.integer]]


# Small helpers


def clamp_value(value: float, lo: float, hi: float) -> float:
    """Clamp value to [lo, hi]."""
    return lo if value < lo else hi if value > hi else value


def coerce_to_rgb_tuple(value: Union[Sequence[int], NDArray[np.generic]]) -> RGBTuple:
    """
    Coerce a 3-length sequence or array to an (int, int, int) RGB tuple.
    Helpful when extracting values from NumPy rows.
    """
    if isinstance(value, np.ndarray):
        if value.size < 3:
            raise ValueError("array too small for RGB")
        flat = value.reshape(-1)
        return (int(flat[0]), int(flat[1]), int(flat[2]))
    if len(value) < 3:
        raise ValueError("sequence too small for RGB")
    return (int(value[0]), int(value[1]), int(value[2]))


def rgb_to_hex(rgb: Union[Sequence[int], NDArray[np.generic]]) -> HexStr:
    """RGB triple to lowercase hex string '#rrggbb'."""
    r, g, b = coerce_to_rgb_tuple(rgb)
    for channel in (r, g, b):
        if not 0 <= channel <= 255:
            raise ValueError(f"channel out of range 0..255: {channel}")
    return f"#{r:02x}{g:02x}{b:02x}"


def hex_to_rgb(hex_str: str) -> RGBTuple:
    """Parse '#rgb' or '#rrggbb' (case-insensitive) into an RGB tuple."""
    s = hex_str.strip().lower()
    if not s.startswith("#"):
        raise ValueError("hex must start with '#'")
    if len(s) == 4:
        r, g, b = s[1], s[2], s[3]
        s = f"#{r}{r}{g}{g}{b}{b}"
    if len(s) != 7:
        raise ValueError("hex must be '#rrggbb' or '#rgb'")
    try:
        return (int(s[1:3], 16), int(s[3:5], 16), int(s[5:7], 16))
    except ValueError as e:
        raise ValueError(f"invalid hex colour: {hex_str!r}") from e


def as_pixel_array(pixels: PixelsLike) -> PixelArray:
    """
    Validate RGB samples and return them as an (N, 3) int64 array.

    Accepts a sequence of 3-sequences or any integer array shaped (..., 3).
    Empty input yields a (0, 3) array.
    """
    arr = np.asarray(pixels)
    if arr.size == 0:
        return np.zeros((0, 3), dtype=np.int64)
    if arr.ndim < 1 or arr.shape[-1] != 3:
        raise ValueError(f"expected RGB triples shaped (..., 3), got {arr.shape}")
    if arr.dtype == np.bool_ or not np.issubdtype(arr.dtype, np.integer):
        raise TypeError(f"expected integer channels, got {arr.dtype}")
    flat = arr.reshape(-1, 3).astype(np.int64, copy=False)
    if int(flat.min()) < 0 or int(flat.max()) > 255:
        raise ValueError("channel values must lie in 0..255")
    return flat


def assert_u8_rgba(buffer: np.ndarray) -> U8Rgba:
    """Validate a uint8 (H,W,4) or (N,4) RGBA buffer and return it typed as U8Rgba."""
    if buffer.dtype != np.uint8 or buffer.ndim not in (2, 3) or buffer.shape[-1] != 4:
        raise TypeError("expected uint8 (H,W,4) or (N,4) RGBA buffer")
    return buffer  # type: ignore[return-value]


__all__ = [
    # aliases / types
    "RGBTuple",
    "HslTuple",
    "HexStr",
    "PixelArray",
    "U8Image",
    "U8Rgba",
    "PixelsLike",
    # helpers
    "clamp_value",
    "coerce_to_rgb_tuple",
    "rgb_to_hex",
    "hex_to_rgb",
    "as_pixel_array",
    "assert_u8_rgba",
]
