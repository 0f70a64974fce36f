"""Tests for color helpers."""

import numpy as np
import pytest

from apx_posterize.color import (
    color_distance,
    default_palette,
    hex_to_rgb,
    hsl_to_rgb,
    nearest_color,
    nearest_palette_index,
    replace_color,
    rgb_to_hex,
)
from apx_posterize.types import ConfigurationError, InvalidColorError


class TestDistance:
    """Test cases for the RGB distance metric."""

    def test_euclidean(self):
        """Test plain Euclidean distance in RGB space."""
        assert color_distance((0, 0, 0), (3, 4, 0)) == 5.0
        assert color_distance((10, 10, 10), (10, 10, 10)) == 0.0

    def test_nearest_index_ties_go_to_first(self):
        """Test that equidistant palette colors resolve to the earlier entry."""
        palette = [(0, 255, 0), (0, 0, 255)]
        pixels = np.array([[255, 0, 0]], dtype=np.uint8)

        assert nearest_palette_index(pixels, palette)[0] == 0
        assert nearest_palette_index(pixels, palette[::-1])[0] == 0

    def test_nearest_color(self):
        """Test nearest color lookup for a single color."""
        palette = [(0, 0, 0), (255, 255, 255), (200, 0, 0)]

        assert nearest_color((180, 20, 10), palette) == (200, 0, 0)
        assert nearest_color((240, 240, 240), palette) == (255, 255, 255)


class TestHexConversion:
    """Test cases for hex conversion."""

    def test_rgb_to_hex_zero_padded(self):
        """Test that hex output always has two digits per channel."""
        assert rgb_to_hex((0, 10, 255)) == "#000aff"
        assert rgb_to_hex((255, 0, 0)) == "#ff0000"

    def test_hex_to_rgb(self):
        """Test parsing with and without '#', any case."""
        assert hex_to_rgb("#ff8000") == (255, 128, 0)
        assert hex_to_rgb("00FF7f") == (0, 255, 127)

    @pytest.mark.parametrize("value", ["", "#fff", "#gg0000", "#12345678", "red", None])
    def test_invalid_hex_rejected(self, value):
        """Test that unparsable colors raise instead of defaulting."""
        with pytest.raises(InvalidColorError):
            hex_to_rgb(value)


class TestHsl:
    """Test cases for HSL conversion and the fallback palette."""

    def test_primary_hues(self):
        """Test fully saturated primaries."""
        assert hsl_to_rgb(0, 100, 50) == (255, 0, 0)
        assert hsl_to_rgb(120, 100, 50) == (0, 255, 0)
        assert hsl_to_rgb(240, 100, 50) == (0, 0, 255)

    def test_fallback_saturation(self):
        """Test 70% saturation / 50% lightness red."""
        assert hsl_to_rgb(0, 70, 50) == (217, 38, 38)

    def test_default_palette(self):
        """Test evenly spaced hues."""
        palette = default_palette(2)

        assert palette == [(217, 38, 38), (38, 217, 217)]
        assert len(set(default_palette(16))) == 16


class TestReplaceColor:
    """Test cases for single-slot palette edits."""

    def test_replace_keeps_order(self):
        """Test that only the chosen slot changes."""
        palette = [(1, 1, 1), (2, 2, 2), (3, 3, 3)]

        updated = replace_color(palette, 1, (9, 9, 9))

        assert updated == [(1, 1, 1), (9, 9, 9), (3, 3, 3)]
        assert palette[1] == (2, 2, 2)

    def test_index_out_of_range(self):
        """Test that a bad slot index is rejected."""
        with pytest.raises(ConfigurationError):
            replace_color([(0, 0, 0), (1, 1, 1)], 2, (5, 5, 5))

    def test_invalid_color(self):
        """Test that out-of-range channels are rejected."""
        with pytest.raises(InvalidColorError):
            replace_color([(0, 0, 0), (1, 1, 1)], 0, (256, 0, 0))
