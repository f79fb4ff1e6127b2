# palette_cut/utils.py
from __future__ import annotations

"""
Shared utilities for palette_cut.

Includes time formatting, palette report rows for display, and tidy logging.
"""

from typing import Any, Iterable, List, Optional, Sequence, TextIO, Tuple

import numpy as np

from .colour_convert import rgb_to_hsl_batch
from .core_types import HexStr, HslTuple, RGBTuple, rgb_to_hex


#  Time formatting


def format_seconds_compact(seconds: float) -> str:
    """Human-friendly seconds: '<ms>ms', '<s>s', or 'Mm Ss'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.3f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {seconds - 60 * minutes:.1f}s"


def format_total_duration_compact(seconds: float) -> str:
    """Compact total duration: 'Mm Ss', 'Ss.s', or 'ms'."""
    if seconds >= 60.0:
        minutes = int(seconds // 60)
        rem = int(round(seconds - 60 * minutes))
        return f"{minutes}m {rem}s"
    if seconds >= 1.0:
        return f"{seconds:.1f}s"
    return f"{seconds * 1000.0:.1f}ms"


#  Palette report


def palette_report(colours: Sequence[RGBTuple]) -> List[Tuple[HexStr, RGBTuple, HslTuple]]:
    """
    Display rows for a palette: (hex, rgb, hsl) in palette order.
    """
    if not colours:
        return []
    arr = np.array(colours, dtype=np.int64).reshape(-1, 3)
    hsl = rgb_to_hsl_batch(arr)
    rows: List[Tuple[HexStr, RGBTuple, HslTuple]] = []
    for rgb_row, hsl_row in zip(arr.tolist(), hsl.tolist()):
        rgb: RGBTuple = (rgb_row[0], rgb_row[1], rgb_row[2])
        rows.append((rgb_to_hex(rgb), rgb, (hsl_row[0], hsl_row[1], hsl_row[2])))
    return rows


def format_palette_row(hex_str: HexStr, rgb: RGBTuple, hsl: HslTuple) -> str:
    """'#rrggbb  rgb(r, g, b)  hsl(h, s%, l%)'"""
    return (
        f"{hex_str}  rgb({rgb[0]}, {rgb[1]}, {rgb[2]})  "
        f"hsl({hsl[0]}, {hsl[1]}%, {hsl[2]}%)"
    )


#  CLI / progress logging


def enable_line_buffered_stdout() -> None:
    """
    Enable line-buffered stdout when supported.
    Helps live printing in terminals that expose .reconfigure().
    """
    import sys

    reconfig = getattr(sys.stdout, "reconfigure", None)
    if callable(reconfig):
        try:
            reconfig(line_buffering=True, write_through=True)
        except (OSError, ValueError):
            pass


# Pretty logging


def format_bool_on_off(value: Any) -> str:
    """Pretty boolean: 'on'/'off' for bools; str(value) otherwise."""
    if isinstance(value, bool):
        return "on" if value else "off"
    return str(value)


def format_number_compact(value: Any) -> str:
    """Pretty number: 1_234 style for ints; compact for floats; passthrough otherwise."""
    if isinstance(value, bool):
        return format_bool_on_off(value)
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        text = f"{value:.3f}".rstrip("0").rstrip(".")
        return text
    return str(value)


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """
    Format (name, value) pairs as 'Name: value' blocks separated by sep.
    Uses format_bool_on_off / format_number_compact for readability.
    """
    out: List[str] = []
    for name, value in pairs:
        display = (
            format_bool_on_off(value)
            if isinstance(value, bool)
            else format_number_compact(value)
        )
        out.append(f"{name}{eq}{display}")
    return sep.join(out)


def print_config_line(
    section: str,
    pairs: Iterable[Tuple[str, Any]],
    debug: bool,
    out: Optional[TextIO] = None,
) -> None:
    """
    Emit a single human-readable config line, e.g.:
      [run] Colours: 10  Quality: 10  Jobs: 2
    Routes to debug() when debug=True, else to log().
    """
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    (debug_log if debug else log)(line, out=out)


def print_banner(title: str, out: Optional[TextIO] = None) -> None:
    """Section banner."""
    print(f"\n=== {title} ===", file=out, flush=True)


def log(message: str, out: Optional[TextIO] = None) -> None:
    """Plain log line. `out` defaults to the current sys.stdout."""
    print(message, file=out, flush=True)


def debug_log(message: str, out: Optional[TextIO] = None) -> None:
    """Debug log line."""
    print(f"[debug] {message}", file=out, flush=True)


def warn(message: str, out: Optional[TextIO] = None) -> None:
    """Warning log line."""
    print(f"[warn] {message}", file=out, flush=True)


def error(message: str) -> None:
    """Error log line to stderr."""
    import sys

    print(f"[error] {message}", file=sys.stderr, flush=True)


__all__ = [
    # formatting
    "format_seconds_compact",
    "format_total_duration_compact",
    "format_bool_on_off",
    "format_number_compact",
    # palette display
    "palette_report",
    "format_palette_row",
    # logging
    "enable_line_buffered_stdout",
    "key_value_pairs_to_string",
    "print_config_line",
    "print_banner",
    "log",
    "debug_log",
    "warn",
    "error",
]
