"""Raster image loading and saving at the host boundary."""

from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image, ImageOps

from .types import PixelBuffer, PosterizeError

# Longest side used when the caller does not choose one
DEFAULT_MAX_SIZE = 1200

# Output formats that cannot store an alpha channel
OPAQUE_SUFFIXES = (".jpg", ".jpeg")


def load_image(path: Union[str, Path], max_size: Optional[int] = None) -> PixelBuffer:
    """
    Load a raster image file as an RGBA pixel buffer.

    Applies the EXIF orientation and, when ``max_size`` is given, shrinks
    the image so neither side exceeds it.

    Args:
        path: Path to image file
        max_size: Optional bound on width and height

    Returns:
        PixelBuffer

    Raises:
        FileNotFoundError: If file doesn't exist
        PosterizeError: If file cannot be loaded
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")

    if not path.is_file():
        raise PosterizeError(f"Path is not a file: {path}")

    try:
        with Image.open(path) as img:
            img = ImageOps.exif_transpose(img)
            if img.mode != "RGBA":
                img = img.convert("RGBA")
            if max_size is not None and max(img.size) > max_size:
                img.thumbnail((max_size, max_size), Image.LANCZOS)
            return PixelBuffer(np.array(img, dtype=np.uint8))
    except (IOError, OSError) as e:
        raise PosterizeError(f"Failed to load image {path}: {e}") from e


def save_image(buffer: PixelBuffer, output_path: Union[str, Path]) -> None:
    """
    Write a pixel buffer as an image, format taken from the file suffix.

    Formats without alpha (JPEG) get the image composited on white.

    Raises:
        PosterizeError: If the image cannot be written
    """
    output_path = Path(output_path)
    img = Image.fromarray(buffer.to_array())

    if output_path.suffix.lower() in OPAQUE_SUFFIXES:
        # Composite on white background
        background = Image.new("RGB", img.size, (255, 255, 255))
        background.paste(img, mask=img.split()[3])
        img = background

    try:
        img.save(output_path)
    except (ValueError, OSError) as e:
        raise PosterizeError(f"Failed to save image {output_path}: {e}") from e
