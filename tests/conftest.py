"""Pytest configuration and fixtures."""

import numpy as np
import pytest

from apx_posterize.types import PixelBuffer


def solid(width, height, color, alpha=255):
    """Opaque (or uniformly translucent) single-color buffer."""
    array = np.zeros((height, width, 4), dtype=np.uint8)
    array[..., :3] = color
    array[..., 3] = alpha
    return PixelBuffer(array)


@pytest.fixture
def make_solid():
    """Factory for single-color buffers."""
    return solid


@pytest.fixture
def red_green_buffer():
    """10x10 image, left half pure red, right half pure green."""
    array = np.zeros((10, 10, 3), dtype=np.uint8)
    array[:, :5] = [255, 0, 0]
    array[:, 5:] = [0, 255, 0]
    return PixelBuffer.from_array(array)


@pytest.fixture
def noisy_buffer():
    """32x32 image of seeded random colors."""
    rng = np.random.default_rng(7)
    return PixelBuffer.from_array(rng.integers(0, 256, (32, 32, 3), dtype=np.uint8))


@pytest.fixture
def image_file(tmp_path):
    """PNG on disk with a blue square on a white background."""
    from PIL import Image

    array = np.full((24, 24, 3), 255, dtype=np.uint8)
    array[6:18, 6:18] = [0, 0, 255]
    path = tmp_path / "input.png"
    Image.fromarray(array).save(path)
    return path
