"""Layer extraction: one binary mask per palette color."""

from typing import List, Tuple

import numpy as np

from .types import ALPHA_THRESHOLD, Color, Palette, PixelBuffer, validate_palette

# Per-channel difference below which a pixel counts as the target color
MASK_CHANNEL_TOLERANCE = 5


def create_color_mask(buffer: PixelBuffer, color: Color) -> np.ndarray:
    """Create a binary mask for pixels matching the given color.

    A pixel matches when it is opaque (alpha > 128) and every channel is
    within 5 of the target.

    Args:
        buffer: Mapped pixel buffer
        color: RGB color to match

    Returns:
        Boolean mask (H, W)
    """
    target = np.asarray(color[:3], dtype=np.int16)
    diff = np.abs(buffer.rgb.astype(np.int16) - target)
    close = np.all(diff < MASK_CHANNEL_TOLERANCE, axis=2)
    return close & (buffer.alpha > ALPHA_THRESHOLD)


def extract_color_layers(buffer: PixelBuffer, palette: Palette) -> List[Tuple[Color, np.ndarray]]:
    """Extract binary masks for each color in the palette.

    Returns:
        List of (color, mask) tuples in palette order
    """
    return [(color, create_color_mask(buffer, color)) for color in validate_palette(palette)]
