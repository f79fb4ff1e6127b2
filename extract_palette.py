#!/usr/bin/env python3
"""
extract_palette.py
Extract a colour palette from images with modified median cut quantization.

Usage:
  python extract_palette.py SRC --colours N --quality Q [--dominant] [--average] [--map HEX ...] --jobs J --debug

Input:
  Any Pillow-readable image, or a folder of them. Pixels with alpha < 125 and
  near-white pixels are skipped; every Q-th pixel is sampled.

Output:
  One banner per image, then one line per palette colour:
    #rrggbb  rgb(r, g, b)  hsl(h, s%, l%)

Notes:
  Quantization lives in palette_cut.quantize; sampling in palette_cut.sampling.
  Folder mode processes files in parallel with ThreadPoolExecutor. Each file
  logs into its own buffer; buffers are printed in file-name order.
"""

from __future__ import annotations

import argparse
import io
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, TextIO, Tuple

from palette_cut.colour_convert import readable_text_colour
from palette_cut.constants import DEFAULT_COLOUR_COUNT, DEFAULT_QUALITY, IMAGE_EXTENSIONS
from palette_cut.core_types import hex_to_rgb, rgb_to_hex
from palette_cut.image_io import load_image_rgba
from palette_cut.quantize import quantize
from palette_cut.sampling import (
    clamp_palette_request,
    get_average_colour,
    get_dominant_colour,
    sample_pixels,
)
from palette_cut.utils import (
    # formatting
    format_palette_row,
    format_seconds_compact,
    format_total_duration_compact,
    palette_report,
    # pretty logging
    debug_log,
    enable_line_buffered_stdout,
    error,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
    warn,
)

# CLI args


def _hex_arg(value: str) -> str:
    try:
        hex_to_rgb(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e
    return value


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="extract-palette",
        description="Extract a colour palette from image(s) by median cut.",
    )
    parser.add_argument("src", type=Path, help="Input image or folder")
    parser.add_argument(
        "--colours",
        "--colors",
        dest="colours",
        type=int,
        default=DEFAULT_COLOUR_COUNT,
        help="Palette size, clamped to 2..20.",
    )
    parser.add_argument(
        "--quality",
        type=int,
        default=DEFAULT_QUALITY,
        help="Sampling stride, clamped to 1..10 (1 = every pixel).",
    )
    parser.add_argument(
        "--dominant", action="store_true", help="Also print the dominant colour"
    )
    parser.add_argument(
        "--average", action="store_true", help="Also print the average colour"
    )
    parser.add_argument(
        "--map",
        dest="map_hex",
        type=_hex_arg,
        action="append",
        default=[],
        metavar="HEX",
        help="Map a colour onto the palette (repeatable).",
    )
    parser.add_argument(
        "--jobs", type=int, default=2, help="Files processed in parallel"
    )
    parser.add_argument("--debug", action="store_true", help="Verbose quantizer details")
    return parser


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        src: Path to image or folder
        colours: requested palette size
        quality: sampling stride
        dominant / average: extra summary lines
        map_hex: list of '#rrggbb' colours to look up in the palette
        jobs: parallel file workers
        debug: bool for verbose details
    """
    return build_arg_parser().parse_args(argv)


# Per-file processing


def _process_single_image(
    src_path: Path, args: argparse.Namespace, out: Optional[TextIO] = None
) -> bool:
    """
    Process a single image path end-to-end:
      load -> sample -> quantize -> report.
    All lines go to `out` (default sys.stdout).
    Returns False when no palette could be produced.
    """
    t_start = time.perf_counter()
    print_banner(src_path.name, out=out)

    rgba = load_image_rgba(src_path)
    height, width = rgba.shape[0], rgba.shape[1]
    t_loaded = time.perf_counter()

    colours, quality = clamp_palette_request(args.colours, args.quality)
    if (colours, quality) != (args.colours, args.quality):
        warn(f"clamped request to colours={colours} quality={quality}", out=out)

    pixels = sample_pixels(rgba, quality)
    if args.debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Size", f"{width}x{height}"),
                    ("Sampled", int(pixels.shape[0])),
                    ("Load", format_seconds_compact(t_loaded - t_start)),
                ]
            ),
            out=out,
        )

    cmap = (
        quantize(pixels, colours, debug=args.debug, out=out)
        if pixels.shape[0]
        else None
    )
    t_quantized = time.perf_counter()

    if cmap is None:
        log("No colours available", out=out)
        return False

    log(f"Palette ({cmap.size()} of {colours} requested):", out=out)
    for hex_str, rgb, hsl in palette_report(cmap.palette()):
        log(
            f"  {format_palette_row(hex_str, rgb, hsl)}  text={readable_text_colour(rgb)}",
            out=out,
        )

    if args.dominant:
        dominant = get_dominant_colour(rgba, quality)
        if dominant is not None:
            log(f"Dominant: {rgb_to_hex(dominant)}", out=out)
    if args.average:
        average = get_average_colour(rgba, quality)
        if average is not None:
            log(f"Average: {rgb_to_hex(average)}", out=out)
    for hex_str in args.map_hex:
        mapped = cmap.map(hex_to_rgb(hex_str))
        log(f"Map: {hex_str.lower()} -> {rgb_to_hex(mapped)}", out=out)

    if args.debug:
        debug_log(
            f"Total {format_total_duration_compact(time.perf_counter() - t_start)}  "
            f"(quantize={format_seconds_compact(t_quantized - t_loaded)})",
            out=out,
        )
    return True


def _process_one_live(
    path: Path, args: argparse.Namespace, out: Optional[TextIO] = None
) -> bool:
    """Process a single file; errors go to stderr and count as a failure."""
    try:
        return _process_single_image(path, args, out=out)
    except (OSError, ValueError) as e:
        error(f"{path.name}: {e}")
        return False


def _process_one_captured(path: Path, args: argparse.Namespace) -> Tuple[bool, str]:
    """
    Process a single file into a private buffer.

    Worker threads never touch sys.stdout; the caller prints the returned
    text in file order.
    """
    buf = io.StringIO()
    ok = _process_one_live(path, args, out=buf)
    return ok, buf.getvalue()


def _list_images(folder: Path) -> List[Path]:
    files = [
        p
        for p in folder.iterdir()
        if p.is_file() and p.suffix.lower() in IMAGE_EXTENSIONS
    ]
    files.sort(key=lambda p: p.name.lower())
    return files


# Entry point


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entry point.

    Handles single file or folder. In folder mode supports --jobs parallelism
    while preserving readable output ordering. Returns 1 when any file
    produced no palette.
    """
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    print_config_line(
        "run",
        [("Colours", args.colours), ("Quality", args.quality), ("Jobs", args.jobs)],
        debug=False,
    )

    src: Path = args.src
    if not src.exists():
        error(f"not found: {src}")
        return 2

    if not src.is_dir():
        return 0 if _process_one_live(src, args) else 1

    files = _list_images(src)
    if args.debug:
        debug_log(key_value_pairs_to_string([("Images", len(files)), ("Jobs", args.jobs)]))
    if not files:
        warn(f"no images in {src}")
        return 1

    if args.jobs <= 1:
        results = [_process_one_live(p, args) for p in files]
    else:
        with ThreadPoolExecutor(max_workers=args.jobs) as ex:
            futures = [ex.submit(_process_one_captured, p, args) for p in files]
            outcomes = [f.result() for f in futures]
        results = [ok for ok, _ in outcomes]
        print("".join(text for _, text in outcomes), end="", flush=True)
    return 0 if all(results) else 1


if __name__ == "__main__":
    sys.exit(main())
