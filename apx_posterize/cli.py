"""Command-line interface for apx-posterize."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

from .color import hex_to_rgb
from .pipeline import process_image
from .raster_ingest import DEFAULT_MAX_SIZE
from .types import MAX_COLORS, MIN_COLORS, PosterizeConfig, PosterizeError


def parse_point(value: str) -> Tuple[int, int]:
    """Parse an 'X,Y' pixel coordinate."""
    try:
        x, y = (int(part) for part in value.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected X,Y coordinates, got {value!r}") from None
    return x, y


def parse_color(value: str):
    """Parse a '#rrggbb' color argument."""
    try:
        return hex_to_rgb(value)
    except PosterizeError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="apx-posterize",
        description="Reduce an image to a small palette and trace it to SVG",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  apx-posterize -i input.png -o output.svg
  apx-posterize -i input.png --colors 8 --smoothing complex --png output.png

  # Transparency edits before tracing
  apx-posterize -i input.png --erase-area 0,0 --erase-color "#ffffff"
        """,
    )

    parser.add_argument("-i", "--input", required=True, help="Input image file path")

    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output SVG file path (default: input name with .svg extension)",
    )

    parser.add_argument(
        "--png",
        default=None,
        help="Also save the recolored raster to this path",
    )

    parser.add_argument(
        "-c",
        "--colors",
        type=int,
        default=5,
        help=f"Palette size, {MIN_COLORS}-{MAX_COLORS} (default: 5)",
    )

    parser.add_argument(
        "-m",
        "--mode",
        choices=["replace", "closest"],
        default="replace",
        help="Mapping mode (default: replace)",
    )

    parser.add_argument(
        "-s",
        "--smoothing",
        choices=["simple", "complex"],
        default="simple",
        help="Path detail: simple (tolerance 2.0) or complex (tolerance 0.5) (default: simple)",
    )

    parser.add_argument(
        "--smooth-filter",
        action="store_true",
        help="Box-blur the image before mapping",
    )

    parser.add_argument(
        "--clean-edges",
        action="store_true",
        help="Snap anti-aliased pixels to neighbouring palette colors",
    )

    parser.add_argument(
        "--erase-area",
        type=parse_point,
        action="append",
        default=[],
        metavar="X,Y",
        help="Make the connected region at X,Y transparent (repeatable)",
    )

    parser.add_argument(
        "--erase-color",
        type=parse_color,
        action="append",
        default=[],
        metavar="HEX",
        help="Make every pixel near this color transparent (repeatable)",
    )

    parser.add_argument(
        "--area-tolerance",
        type=float,
        default=30.0,
        help="Color tolerance for --erase-area (default: 30)",
    )

    parser.add_argument(
        "--color-tolerance",
        type=float,
        default=10.0,
        help="Color tolerance for --erase-color (default: 10)",
    )

    parser.add_argument(
        "--max-size",
        type=int,
        default=DEFAULT_MAX_SIZE,
        help=f"Downscale so the longest side is at most this many pixels, 0 disables (default: {DEFAULT_MAX_SIZE})",
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for palette extraction",
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point for CLI.

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    input_path = Path(parsed.input)
    output_path = Path(parsed.output) if parsed.output else input_path.with_suffix(".svg")
    output_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        config = PosterizeConfig(
            n_colors=parsed.colors,
            random_state=parsed.seed,
            mapping_mode=parsed.mode,
            smooth_filter=parsed.smooth_filter,
            clean_edges=parsed.clean_edges,
            smoothing_level=parsed.smoothing,
            area_tolerance=parsed.area_tolerance,
            color_tolerance=parsed.color_tolerance,
            erase_points=parsed.erase_area,
            erase_colors=parsed.erase_color,
        )

        print(f"Processing: {input_path}")
        print(f"  Colors: {config.n_colors}")
        print(f"  Smoothing: {config.smoothing_level}")

        process_image(
            input_path,
            output_path,
            config=config,
            png_path=parsed.png,
            max_size=parsed.max_size or None,
        )

        print(f"  Output saved: {output_path}")
        if parsed.png:
            print(f"  Raster saved: {parsed.png}")
        return 0

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except PosterizeError as e:
        print(f"Error processing image: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
