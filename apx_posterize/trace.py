"""Vectorization of palette-mapped buffers into per-color path groups."""

import logging
from typing import List, Tuple

from .contour import find_contours
from .extract import create_color_mask
from .simplify import simplify_contour, tolerance_for_level
from .smooth import smooth_path
from .svg import paths_to_svg
from .types import Color, Palette, PathData, PixelBuffer, validate_palette

logger = logging.getLogger(__name__)


def trace_color(buffer: PixelBuffer, color: Color, tolerance: float) -> List[PathData]:
    """Trace one palette color into closed path strings.

    Mask, contour walk, simplification and smoothing for a single color.
    Nothing is shared between calls, so colors may be traced separately.

    Args:
        buffer: Palette-mapped pixel buffer
        color: Palette color to trace
        tolerance: RDP simplification tolerance

    Returns:
        List of SVG path data strings (empty when the color is absent)
    """
    mask = create_color_mask(buffer, color)
    if not mask.any():
        return []

    paths = []
    for contour in find_contours(mask):
        path = smooth_path(simplify_contour(contour, tolerance))
        if path:
            paths.append(path)
    return paths


def trace_layers(
    buffer: PixelBuffer,
    palette: Palette,
    smoothing_level: str = "simple",
) -> List[Tuple[Color, List[PathData]]]:
    """Trace every palette color.

    A color repeated in the palette is traced once, at its first slot;
    mapping never assigns pixels to the later copy.

    Returns:
        List of (color, paths) for colors that produced at least one path
    """
    tolerance = tolerance_for_level(smoothing_level)
    palette = validate_palette(palette)

    layers = []
    seen = set()
    for color in palette:
        if color in seen:
            logger.debug(f"Skipping repeated palette color {color}")
            continue
        seen.add(color)

        paths = trace_color(buffer, color, tolerance)
        if paths:
            layers.append((color, paths))
    return layers


def trace(buffer: PixelBuffer, palette: Palette, smoothing_level: str = "simple") -> str:
    """Vectorize a palette-mapped buffer into an SVG document.

    Args:
        buffer: Palette-mapped pixel buffer
        palette: Palette used for the mapping
        smoothing_level: "simple" (tolerance 2.0) or "complex" (tolerance 0.5)

    Returns:
        SVG document sized to the buffer

    Raises:
        ConfigurationError: If smoothing_level is unknown
    """
    layers = trace_layers(buffer, palette, smoothing_level)
    logger.info(
        f"Traced {sum(len(paths) for _, paths in layers)} paths in {len(layers)} color groups"
    )
    return paths_to_svg(layers, buffer.width, buffer.height)
