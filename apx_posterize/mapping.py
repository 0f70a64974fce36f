"""Palette mapping, transparency editing and edge cleanup on pixel buffers."""

import logging
from typing import Sequence

import numpy as np
from scipy import ndimage

from .color import nearest_palette_index, squared_distances
from .types import (
    ALPHA_THRESHOLD,
    MAPPING_MODES,
    ConfigurationError,
    Palette,
    PixelBuffer,
    validate_palette,
)

logger = logging.getLogger(__name__)

DEFAULT_AREA_TOLERANCE = 30.0
DEFAULT_COLOR_TOLERANCE = 10.0

# Pixels farther than this from every palette color are treated as anti-aliasing
EDGE_ARTIFACT_DISTANCE = 5.0

# 4-connectivity for flood fill
_FOUR_CONNECTED = np.array([[0, 1, 0], [1, 1, 1], [0, 1, 0]], dtype=bool)


def map_to_palette(buffer: PixelBuffer, palette: Palette) -> PixelBuffer:
    """Replace every opaque pixel with its nearest palette color.

    Pixels with alpha < 128 pass through unchanged, color included.
    Ties between equally distant palette colors go to the earlier entry.

    Args:
        buffer: Input pixel buffer
        palette: Palette of RGB tuples

    Returns:
        New buffer of the same size
    """
    palette = validate_palette(palette)
    colors = np.asarray(palette, dtype=np.uint8)

    indices = nearest_palette_index(buffer.rgb, palette)
    opaque = buffer.alpha >= ALPHA_THRESHOLD

    result = buffer.to_array()
    result[opaque, :3] = colors[indices[opaque]]
    return PixelBuffer(result)


def posterize(
    buffer: PixelBuffer,
    palette: Palette,
    mode: str = "replace",
    smooth_filter: bool = False,
) -> PixelBuffer:
    """Map a source image onto a palette, optionally box-blurring it first.

    "replace" and "closest" are both nearest-color mapping; the mode is
    only validated.
    """
    if mode not in MAPPING_MODES:
        raise ConfigurationError(f"mode must be one of {MAPPING_MODES}, got {mode!r}")

    source = smooth_image(buffer) if smooth_filter else buffer
    return map_to_palette(source, palette)


def _within_tolerance(rgb: np.ndarray, color: Sequence[int], tolerance: float) -> np.ndarray:
    if tolerance < 0:
        raise ConfigurationError(f"tolerance must be >= 0, got {tolerance}")
    distances = squared_distances(rgb, [tuple(int(c) for c in color[:3])])[..., 0]
    return distances <= tolerance * tolerance


def erase_region(
    buffer: PixelBuffer,
    x: int,
    y: int,
    tolerance: float = DEFAULT_AREA_TOLERANCE,
) -> PixelBuffer:
    """Make the 4-connected region around (x, y) transparent.

    A pixel joins the region when its color is within ``tolerance`` of the
    start pixel's color. Connected components are labelled iteratively,
    so region size is not limited by recursion depth.

    Args:
        buffer: Mapped pixel buffer
        x: Start column
        y: Start row
        tolerance: Maximum Euclidean RGB distance from the start color

    Returns:
        New buffer with alpha 0 over the region

    Raises:
        InvalidBufferError: If (x, y) is outside the buffer
    """
    buffer.check_bounds(x, y)
    start_color = buffer.rgb[y, x]

    similar = _within_tolerance(buffer.rgb, start_color, tolerance)
    labels, _ = ndimage.label(similar, structure=_FOUR_CONNECTED)
    region = labels == labels[y, x]

    result = buffer.to_array()
    result[region, 3] = 0
    logger.debug(f"Erased {int(region.sum())} pixels around ({x}, {y})")
    return PixelBuffer(result)


def erase_color(
    buffer: PixelBuffer,
    target_color: Sequence[int],
    tolerance: float = DEFAULT_COLOR_TOLERANCE,
) -> PixelBuffer:
    """Make every pixel within ``tolerance`` of ``target_color`` transparent."""
    target = validate_palette([target_color])[0]
    matches = _within_tolerance(buffer.rgb, target, tolerance)

    result = buffer.to_array()
    result[matches, 3] = 0
    logger.debug(f"Erased {int(matches.sum())} pixels matching {target}")
    return PixelBuffer(result)


def clean_edges(buffer: PixelBuffer, palette: Palette) -> PixelBuffer:
    """Snap anti-aliased pixels to the dominant neighbouring palette color.

    A pixel farther than 5 from every palette color takes the palette
    color that is most often nearest among its 8 neighbours. Ties go to
    the color met first scanning the neighbourhood row by row. Alpha is
    left alone.

    Border pixels are cleaned as well, voting over their in-bounds
    neighbours only. This differs from an interior-only scan, which
    leaves the outermost ring of pixels exactly as mapped.
    """
    palette = validate_palette(palette)
    distances = squared_distances(buffer.rgb, palette)
    nearest = np.argmin(distances, axis=-1)
    artifacts = np.min(distances, axis=-1) > EDGE_ARTIFACT_DISTANCE ** 2

    height, width = nearest.shape
    result = buffer.to_array()
    ys, xs = np.nonzero(artifacts)

    for y, x in zip(ys.tolist(), xs.tolist()):
        votes = {}
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                ny, nx = y + dy, x + dx
                if 0 <= ny < height and 0 <= nx < width:
                    index = int(nearest[ny, nx])
                    votes[index] = votes.get(index, 0) + 1

        # dicts keep insertion order, so max() returns the first-seen winner
        best = max(votes, key=votes.get) if votes else int(nearest[y, x])
        result[y, x, :3] = palette[best]

    if len(ys):
        logger.debug(f"Cleaned {len(ys)} edge pixels")
    return PixelBuffer(result)


def smooth_image(buffer: PixelBuffer) -> PixelBuffer:
    """3x3 box blur on the color channels.

    Border rows and columns are copied unchanged, as is the alpha channel.
    """
    result = buffer.to_array()
    if buffer.height < 3 or buffer.width < 3:
        return PixelBuffer(result)

    blurred = ndimage.uniform_filter(buffer.rgb.astype(np.float64), size=(3, 3, 1))
    interior = np.floor(blurred[1:-1, 1:-1] + 0.5)
    result[1:-1, 1:-1, :3] = np.clip(interior, 0, 255).astype(np.uint8)
    return PixelBuffer(result)
