"""Color helpers: distance metric, nearest-color search, hex and HSL conversion."""

import re
from typing import Sequence, Tuple

import numpy as np

from .types import Color, ConfigurationError, InvalidColorError, Palette, validate_palette

# Fallback palette parameters (HSL, percent)
FALLBACK_SATURATION = 70
FALLBACK_LIGHTNESS = 50

_HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")


def color_distance(c1: Sequence[float], c2: Sequence[float]) -> float:
    """Euclidean distance between two colors in raw RGB space."""
    return float(np.sqrt(sum((float(a) - float(b)) ** 2 for a, b in zip(c1[:3], c2[:3]))))


def squared_distances(pixels: np.ndarray, palette: Sequence[Sequence[float]]) -> np.ndarray:
    """Squared RGB distance from every pixel to every palette color.

    Args:
        pixels: Array of shape (..., 3)
        palette: K colors

    Returns:
        Array of shape (..., K). Integer input gives exact integer distances.
    """
    colors = np.asarray(palette)
    if np.issubdtype(colors.dtype, np.integer) and np.issubdtype(pixels.dtype, np.integer):
        pixels = pixels.astype(np.int64)
        colors = colors.astype(np.int64)
    else:
        pixels = pixels.astype(np.float64)
        colors = colors.astype(np.float64)

    diff = pixels[..., np.newaxis, :] - colors
    return np.sum(diff * diff, axis=-1)


def nearest_palette_index(pixels: np.ndarray, palette: Sequence[Sequence[float]]) -> np.ndarray:
    """Index of the nearest palette color for every pixel.

    Ties go to the earliest palette entry (argmin returns the first minimum).

    Args:
        pixels: Array of shape (..., 3)
        palette: K colors

    Returns:
        Integer array of shape (...)
    """
    return np.argmin(squared_distances(pixels, palette), axis=-1)


def nearest_color(color: Sequence[int], palette: Palette) -> Color:
    """Nearest palette color to a single color."""
    index = int(nearest_palette_index(np.asarray([color[:3]]), palette)[0])
    return palette[index]


def rgb_to_hex(rgb: Sequence[float]) -> str:
    """Format a color as a lowercase 6-digit hex string, e.g. '#0a0bff'."""
    r, g, b = (int(round(c)) for c in rgb[:3])
    return f"#{r:02x}{g:02x}{b:02x}"


def hex_to_rgb(hex_color: str) -> Color:
    """Parse '#rrggbb' (the '#' is optional).

    Raises:
        InvalidColorError: If the string is not a 6-digit hex color
    """
    match = _HEX_PATTERN.match(hex_color.strip()) if isinstance(hex_color, str) else None
    if match is None:
        raise InvalidColorError(f"Invalid hex color: {hex_color!r}")
    return tuple(int(part, 16) for part in match.groups())


def hsl_to_rgb(h: float, s: float, l: float) -> Color:
    """Convert HSL (hue in degrees, saturation/lightness in percent) to RGB."""
    h = h % 360
    s /= 100.0
    l /= 100.0

    c = (1 - abs(2 * l - 1)) * s
    x = c * (1 - abs((h / 60) % 2 - 1))
    m = l - c / 2

    if h < 60:
        r, g, b = c, x, 0.0
    elif h < 120:
        r, g, b = x, c, 0.0
    elif h < 180:
        r, g, b = 0.0, c, x
    elif h < 240:
        r, g, b = 0.0, x, c
    elif h < 300:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x

    # Round half up, like the usual display conversion
    return tuple(int(np.floor((v + m) * 255 + 0.5)) for v in (r, g, b))


def default_palette(k: int) -> Palette:
    """k colors evenly spaced around the hue wheel at 70% saturation, 50% lightness."""
    return [hsl_to_rgb(i * 360.0 / k, FALLBACK_SATURATION, FALLBACK_LIGHTNESS) for i in range(k)]


def replace_color(palette: Palette, index: int, color: Sequence[int]) -> Palette:
    """Return a copy of the palette with one slot replaced.

    Raises:
        ConfigurationError: If index is out of range
        InvalidColorError: If color is not a valid RGB triple
    """
    if not 0 <= index < len(palette):
        raise ConfigurationError(f"Palette index {index} out of range for {len(palette)} colors")
    new_color = validate_palette([color])[0]
    result = list(palette)
    result[index] = new_color
    return result


def palette_to_hex(palette: Palette) -> Tuple[str, ...]:
    return tuple(rgb_to_hex(c) for c in palette)
