"""Main pipeline orchestrator for apx-posterize."""

import logging
from pathlib import Path
from typing import Optional, Sequence, Union

from .color import palette_to_hex
from .color import replace_color as replace_palette_color
from .mapping import clean_edges, erase_color, erase_region, posterize
from .quantize import extract_palette
from .raster_ingest import load_image, save_image
from .svg import save_svg
from .trace import trace
from .types import ConfigurationError, Palette, PixelBuffer, PosterizeConfig, validate_n_colors

logger = logging.getLogger(__name__)


class PosterizeSession:
    """Editing state for one source image.

    Holds the decoded original, the current palette and two mapped
    buffers: ``pristine`` (the last full posterization) and ``current``
    (pristine plus any transparency edits). Every stage call returns a new
    buffer; the session only swaps references.
    """

    def __init__(self, original: PixelBuffer, config: Optional[PosterizeConfig] = None):
        """Initialize the session and run the first extraction.

        Args:
            original: Decoded source image
            config: Settings. Uses defaults if None.
        """
        self.config = config or PosterizeConfig()
        self.original = original
        self.palette: Palette = []
        self.pristine: Optional[PixelBuffer] = None
        self.current: Optional[PixelBuffer] = None
        self.extract()

    @property
    def has_transparency(self) -> bool:
        """True when the working copy carries edits not in the pristine snapshot."""
        return self.current is not None and self.current != self.pristine

    def extract(self) -> Palette:
        """Re-extract the palette from the original and re-posterize."""
        self.palette = extract_palette(
            self.original,
            self.config.n_colors,
            random_state=self.config.random_state,
        )
        logger.info(f"Palette: {' '.join(palette_to_hex(self.palette))}")
        self.posterize()
        return self.palette

    def set_palette_size(self, n_colors: int) -> Palette:
        """Change K, then re-extract."""
        self.config.n_colors = validate_n_colors(n_colors)
        return self.extract()

    def replace_color(self, index: int, color: Sequence[int]) -> Palette:
        """Replace one palette slot and re-posterize."""
        self.palette = replace_palette_color(self.palette, index, color)
        self.posterize()
        return self.palette

    def posterize(self) -> PixelBuffer:
        """Map the original onto the palette, discarding transparency edits."""
        mapped = posterize(
            self.original,
            self.palette,
            mode=self.config.mapping_mode,
            smooth_filter=self.config.smooth_filter,
        )
        if self.config.clean_edges:
            mapped = clean_edges(mapped, self.palette)

        self.pristine = mapped
        self.current = mapped
        return mapped

    def erase_at(self, x: int, y: int, method: Optional[str] = None) -> PixelBuffer:
        """Apply the transparency tool at (x, y) on the working copy.

        Args:
            x: Column
            y: Row
            method: "area" (flood fill) or "color" (global match).
                    Defaults to the configured method.
        """
        method = method or self.config.transparency_method
        if method == "area":
            self.current = erase_region(self.current, x, y, self.config.area_tolerance)
        elif method == "color":
            color, _ = self.current.pixel(x, y)
            self.current = erase_color(self.current, color, self.config.color_tolerance)
        else:
            raise ConfigurationError(f"Unknown transparency method: {method!r}")
        return self.current

    def erase_color(self, color: Sequence[int]) -> PixelBuffer:
        """Erase every pixel near ``color`` on the working copy."""
        self.current = erase_color(self.current, color, self.config.color_tolerance)
        return self.current

    def reset(self) -> PixelBuffer:
        """Restore the working copy from the pristine snapshot."""
        self.current = self.pristine
        return self.current

    def clear_transparency(self) -> PixelBuffer:
        """Drop all transparency edits by re-posterizing from the original."""
        return self.posterize()

    def to_svg(self, smoothing_level: Optional[str] = None) -> str:
        """Vectorize the working copy."""
        return trace(self.current, self.palette, smoothing_level or self.config.smoothing_level)


def process_image(
    image_path: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
    config: Optional[PosterizeConfig] = None,
    png_path: Optional[Union[str, Path]] = None,
    max_size: Optional[int] = None,
) -> str:
    """Posterize and vectorize an image file.

    Convenience function for one-off processing. Configured erase points
    and colors are applied to the working copy in order before tracing.

    Args:
        image_path: Path to input image
        output_path: Optional path to save SVG output
        config: Optional configuration object
        png_path: Optional path to save the recolored raster
        max_size: Optional bound on the image's longest side

    Returns:
        SVG string

    Example:
        >>> svg = process_image("input.png", "output.svg")
        >>> svg = process_image("input.png", config=PosterizeConfig(n_colors=8))
    """
    config = config or PosterizeConfig()
    image = load_image(image_path, max_size=max_size)
    logger.info(f"Loaded {image_path} ({image.width}x{image.height})")

    session = PosterizeSession(image, config)
    for x, y in config.erase_points:
        session.erase_at(x, y, method="area")
    for color in config.erase_colors:
        session.erase_color(color)

    svg = session.to_svg()

    if output_path:
        save_svg(svg, output_path)
    if png_path:
        save_image(session.current, png_path)

    return svg
