"""apx-posterize: palette extraction, posterization and contour vectorization.

Reduces a raster image to a small editable palette, re-renders it with
only those colors, and traces the flat color regions into an SVG.
"""

from apx_posterize.types import (
    Color,
    Palette,
    PixelBuffer,
    PosterizeConfig,
    PosterizeError,
    ConfigurationError,
    InvalidBufferError,
    InvalidColorError,
)
from apx_posterize.quantize import extract_palette
from apx_posterize.mapping import (
    map_to_palette,
    posterize,
    erase_region,
    erase_color,
    clean_edges,
    smooth_image,
)
from apx_posterize.trace import trace, trace_color
from apx_posterize.pipeline import PosterizeSession, process_image

__version__ = "0.1.0"
__all__ = [
    "Color",
    "Palette",
    "PixelBuffer",
    "PosterizeConfig",
    "PosterizeError",
    "ConfigurationError",
    "InvalidBufferError",
    "InvalidColorError",
    "extract_palette",
    "map_to_palette",
    "posterize",
    "erase_region",
    "erase_color",
    "clean_edges",
    "smooth_image",
    "trace",
    "trace_color",
    "PosterizeSession",
    "process_image",
]
