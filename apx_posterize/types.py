"""Common types, configuration and exceptions for apx-posterize."""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

# Type aliases
Color = Tuple[int, int, int]
Palette = List[Color]
Point = Tuple[float, float]
Contour = List[Point]
PathData = str

# Palette size bounds
MIN_COLORS = 2
MAX_COLORS = 16

# Pixels below this alpha are treated as transparent
ALPHA_THRESHOLD = 128

MAPPING_MODES = ("replace", "closest")
SMOOTHING_TOLERANCES = {"simple": 2.0, "complex": 0.5}
TRANSPARENCY_METHODS = ("area", "color")


class PosterizeError(Exception):
    """Base exception for posterization errors."""

    pass


class ConfigurationError(PosterizeError, ValueError):
    """Raised when a caller passes an out-of-range setting."""

    pass


class InvalidBufferError(PosterizeError, ValueError):
    """Raised for malformed pixel buffers or out-of-bounds coordinates."""

    pass


class InvalidColorError(PosterizeError, ValueError):
    """Raised when a color cannot be parsed or is not an RGB triple."""

    pass


def validate_n_colors(n_colors: int) -> int:
    """Reject palette sizes outside [MIN_COLORS, MAX_COLORS]."""
    if isinstance(n_colors, bool) or not isinstance(n_colors, (int, np.integer)):
        raise ConfigurationError(f"n_colors must be an integer, got {n_colors!r}")
    if not MIN_COLORS <= n_colors <= MAX_COLORS:
        raise ConfigurationError(
            f"n_colors must be between {MIN_COLORS} and {MAX_COLORS}, got {n_colors}"
        )
    return int(n_colors)


def validate_palette(palette: Sequence[Sequence[int]]) -> Palette:
    """Normalize a palette to a list of integer RGB tuples.

    Raises:
        InvalidColorError: If any entry is not three integers in [0, 255]
    """
    if len(palette) == 0:
        raise InvalidColorError("Palette must contain at least one color")

    result = []
    for color in palette:
        if len(color) != 3:
            raise InvalidColorError(f"Expected an RGB triple, got {color!r}")
        channels = tuple(int(c) for c in color)
        if any(c != float(o) for c, o in zip(channels, color)):
            raise InvalidColorError(f"Color channels must be integers, got {color!r}")
        if any(c < 0 or c > 255 for c in channels):
            raise InvalidColorError(f"Color channels must be in [0, 255], got {color!r}")
        result.append(channels)
    return result


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Immutable RGBA pixel buffer.

    Wraps an (H, W, 4) uint8 array, row-major. The array is flagged
    read-only; stages build a new array and wrap it instead of editing
    their input.
    """

    rgba: np.ndarray

    def __post_init__(self):
        rgba = self.rgba
        if not isinstance(rgba, np.ndarray) or rgba.ndim != 3 or rgba.shape[2] != 4:
            shape = getattr(rgba, "shape", None)
            raise InvalidBufferError(f"Expected (H, W, 4) array, got shape {shape}")
        if rgba.shape[0] < 1 or rgba.shape[1] < 1:
            raise InvalidBufferError(f"Buffer must be at least 1x1, got {rgba.shape[1]}x{rgba.shape[0]}")
        if rgba.dtype != np.uint8:
            if rgba.min() < 0 or rgba.max() > 255:
                raise InvalidBufferError("Channel values must be in [0, 255]")
            rgba = rgba.astype(np.uint8)
        else:
            rgba = rgba.copy()
        rgba.setflags(write=False)
        object.__setattr__(self, "rgba", rgba)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """Create a buffer from an (H, W, 3) or (H, W, 4) array.

        RGB input is given full opacity.
        """
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise InvalidBufferError(f"Expected (H, W, 3) or (H, W, 4) array, got shape {array.shape}")
        if np.any(array < 0) or np.any(array > 255):
            raise InvalidBufferError("Channel values must be in [0, 255]")

        if array.shape[2] == 3:
            alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
            array = np.concatenate([array.astype(np.uint8), alpha], axis=2)
        return cls(array.astype(np.uint8))

    @classmethod
    def from_rgba(cls, width: int, height: int, data: Union[bytes, Sequence[int]]) -> "PixelBuffer":
        """Create a buffer from a flat row-major RGBA sequence."""
        if width < 1 or height < 1:
            raise InvalidBufferError(f"Buffer must be at least 1x1, got {width}x{height}")
        if isinstance(data, (bytes, bytearray)):
            flat = np.frombuffer(bytes(data), dtype=np.uint8)
        else:
            flat = np.asarray(data, dtype=np.int64)
        if flat.size != width * height * 4:
            raise InvalidBufferError(
                f"Expected {width * height * 4} channel values for {width}x{height}, got {flat.size}"
            )
        return cls.from_array(flat.reshape(height, width, 4))

    @property
    def width(self) -> int:
        return self.rgba.shape[1]

    @property
    def height(self) -> int:
        return self.rgba.shape[0]

    @property
    def rgb(self) -> np.ndarray:
        """Color channels as an (H, W, 3) view."""
        return self.rgba[..., :3]

    @property
    def alpha(self) -> np.ndarray:
        """Alpha channel as an (H, W) view."""
        return self.rgba[..., 3]

    def pixel(self, x: int, y: int) -> Tuple[Color, int]:
        """Return ((r, g, b), alpha) at column x, row y."""
        self.check_bounds(x, y)
        r, g, b, a = (int(v) for v in self.rgba[y, x])
        return (r, g, b), a

    def check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise InvalidBufferError(
                f"Pixel ({x}, {y}) is outside the {self.width}x{self.height} buffer"
            )

    def to_array(self) -> np.ndarray:
        """Writable copy of the RGBA data."""
        return self.rgba.copy()

    def __eq__(self, other):
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self.rgba.shape == other.rgba.shape and bool(np.array_equal(self.rgba, other.rgba))

    __hash__ = None


@dataclass
class PosterizeConfig:
    """Settings for a posterize/vectorize run."""

    # Palette extraction
    n_colors: int = 5
    random_state: Optional[Union[int, np.random.RandomState]] = None

    # Mapping
    mapping_mode: str = "replace"
    smooth_filter: bool = False
    clean_edges: bool = False

    # Vector output
    smoothing_level: str = "simple"

    # Transparency tool
    transparency_method: str = "area"
    area_tolerance: float = 30.0
    color_tolerance: float = 10.0

    # Edits applied by the CLI, as (x, y) points and RGB colors
    erase_points: List[Tuple[int, int]] = field(default_factory=list)
    erase_colors: List[Color] = field(default_factory=list)

    def __post_init__(self):
        validate_n_colors(self.n_colors)
        if self.mapping_mode not in MAPPING_MODES:
            raise ConfigurationError(
                f"mapping_mode must be one of {MAPPING_MODES}, got {self.mapping_mode!r}"
            )
        if self.smoothing_level not in SMOOTHING_TOLERANCES:
            raise ConfigurationError(
                f"smoothing_level must be one of {tuple(SMOOTHING_TOLERANCES)}, got {self.smoothing_level!r}"
            )
        if self.transparency_method not in TRANSPARENCY_METHODS:
            raise ConfigurationError(
                f"transparency_method must be one of {TRANSPARENCY_METHODS}, "
                f"got {self.transparency_method!r}"
            )
        if self.area_tolerance < 0 or self.color_tolerance < 0:
            raise ConfigurationError("Tolerances must be >= 0")

    @property
    def simplify_tolerance(self) -> float:
        return SMOOTHING_TOLERANCES[self.smoothing_level]
