# palette_cut/constants.py
"""
Tunables used across the project.

- Histogram resolution (SIGBITS, RSHIFT, HISTO_SIDE)
- Median-cut scheduling (MAX_ITERATIONS, FRACT_BY_POPULATIONS)
- Pixel sampling contract (ALPHA_THRESHOLD, WHITE_THRESHOLD, quality stride)
- Colour-count ranges for quantize() and the get_palette() wrapper
"""
from __future__ import annotations

from typing import Tuple

# =========================
# Histogram resolution
# =========================
SIGBITS: int = 5  # significant bits kept per channel
RSHIFT: int = 8 - SIGBITS
HISTO_SIDE: int = 1 << SIGBITS  # reduced values per channel (0..31)

# =========================
# Median-cut scheduling
# =========================
MAX_ITERATIONS: int = 1000  # per phase
FRACT_BY_POPULATIONS: float = 0.75  # share of the target reached in phase 1

# quantize() accepts max_colors in this closed range
MIN_COLOURS: int = 2
MAX_COLOURS: int = 256

# =========================
# Sampling contract
# =========================
ALPHA_THRESHOLD: int = 125  # keep alpha >= 125
WHITE_THRESHOLD: int = 250  # drop pixels with every channel > 250
AVERAGE_ALPHA_THRESHOLD: int = 125  # get_average_colour keeps alpha > 125

# get_palette() wrapper ranges and defaults
PALETTE_COLOUR_RANGE: Tuple[int, int] = (2, 20)
QUALITY_RANGE: Tuple[int, int] = (1, 10)
DEFAULT_COLOUR_COUNT: int = 10
DEFAULT_QUALITY: int = 10
DOMINANT_PALETTE_SIZE: int = 5

# =========================
# Display helpers
# =========================
LUMA_WEIGHTS: Tuple[float, float, float] = (0.299, 0.587, 0.114)
LIGHT_TEXT_HEX: str = "#ffffff"
DARK_TEXT_HEX: str = "#000000"

# =========================
# CLI
# =========================
IMAGE_EXTENSIONS: Tuple[str, ...] = (".png", ".jpg", ".jpeg", ".webp", ".gif", ".bmp")


__all__ = [
    "SIGBITS",
    "RSHIFT",
    "HISTO_SIDE",
    "MAX_ITERATIONS",
    "FRACT_BY_POPULATIONS",
    "MIN_COLOURS",
    "MAX_COLOURS",
    "ALPHA_THRESHOLD",
    "WHITE_THRESHOLD",
    "AVERAGE_ALPHA_THRESHOLD",
    "PALETTE_COLOUR_RANGE",
    "QUALITY_RANGE",
    "DEFAULT_COLOUR_COUNT",
    "DEFAULT_QUALITY",
    "DOMINANT_PALETTE_SIZE",
    "LUMA_WEIGHTS",
    "LIGHT_TEXT_HEX",
    "DARK_TEXT_HEX",
    "IMAGE_EXTENSIONS",
]
