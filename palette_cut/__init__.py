"""
palette_cut package.

Purpose:
  Palette extraction by modified median cut quantization (MMCQ). See
  extract_palette.py for the CLI.

Public API:
  quantize          : filtered RGB samples -> ColorMap (or None).
  build_histogram   : RGB samples -> reduced-resolution Histogram.
  ColorMap          : palette(), map(colour), nearest(colour).
  get_palette       : RGBA buffer -> list of RGB tuples, with the sampling contract.
  rgb_to_hex / hex_to_rgb / rgb_to_hsl / hsl_to_rgb : colour maths.
  utils             : shared helpers (formatting, logging).

Quick start:
  from palette_cut import quantize, rgb_to_hex
  cmap = quantize(pixels, 8)
  hexes = [rgb_to_hex(c) for c in cmap.palette()] if cmap else []
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import constants
from . import core_types
from . import colour_convert
from . import utils

from .colour_convert import hsl_to_rgb, readable_text_colour, rgb_to_hsl
from .colour_map import ColorMap, ColourMap
from .core_types import hex_to_rgb, rgb_to_hex
from .histogram import Histogram, build_histogram, colour_index
from .median_cut import median_cut_apply
from .pqueue import PQueue
from .quantize import quantize
from .sampling import (
    get_average_colour,
    get_dominant_colour,
    get_palette,
    sample_pixels,
)
from .vbox import VBox

__all__ = [
    "__version__",
    "constants",
    "core_types",
    "colour_convert",
    "utils",
    "quantize",
    "build_histogram",
    "colour_index",
    "Histogram",
    "VBox",
    "PQueue",
    "median_cut_apply",
    "ColorMap",
    "ColourMap",
    "get_palette",
    "get_dominant_colour",
    "get_average_colour",
    "sample_pixels",
    "rgb_to_hex",
    "hex_to_rgb",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "readable_text_colour",
]
