"""Tests for curve simplification module."""

import numpy as np
import pytest

from apx_posterize.simplify import (
    perpendicular_distance,
    simplify_contour,
    simplify_contours,
    tolerance_for_level,
)
from apx_posterize.types import ConfigurationError


class TestSimplifyContour:
    """Test cases for simplify_contour function."""

    def test_simplify_straight_line(self):
        """Test that a straight line reduces to its endpoints."""
        contour = [(float(i), 10.0) for i in range(100)]

        simplified = simplify_contour(contour, 0.5)

        assert simplified == [(0.0, 10.0), (99.0, 10.0)]

    def test_keeps_corner(self):
        """Test that an L shape keeps its corner."""
        contour = [(float(i), 0.0) for i in range(11)] + [(10.0, float(i)) for i in range(1, 11)]

        simplified = simplify_contour(contour, 2.0)

        assert simplified == [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0)]

    def test_tolerance_controls_detail(self):
        """Test that the finer tolerance keeps at least as many points."""
        angles = np.linspace(0, 2 * np.pi, 200, endpoint=False)
        contour = [(50 + 30 * np.cos(a), 50 + 30 * np.sin(a)) for a in angles]

        coarse = simplify_contour(contour, tolerance_for_level("simple"))
        fine = simplify_contour(contour, tolerance_for_level("complex"))

        assert len(coarse) <= len(fine) < len(contour)

    @pytest.mark.parametrize("seed", range(5))
    def test_never_grows_and_keeps_ends(self, seed):
        """Test point count never increases and endpoints survive."""
        rng = np.random.default_rng(seed)
        contour = [tuple(p) for p in rng.uniform(0, 50, (60, 2))]

        simplified = simplify_contour(contour, 1.0)

        assert len(simplified) <= len(contour)
        assert simplified[0] == contour[0]
        assert simplified[-1] == contour[-1]

    def test_closed_loop_collapses(self):
        """Test that a zero-length chord gives zero distances, not an error."""
        contour = [(0.0, 0.0), (5.0, 0.0), (5.0, 5.0), (0.0, 0.0)]

        assert simplify_contour(contour, 1.0) == [(0.0, 0.0), (0.0, 0.0)]

    def test_short_contour_unchanged(self):
        """Test that two points or fewer come back as-is."""
        assert simplify_contour([(1.0, 2.0), (3.0, 4.0)], 2.0) == [(1.0, 2.0), (3.0, 4.0)]
        assert simplify_contour([], 2.0) == []

    def test_long_contour(self):
        """Test a contour long enough to overflow recursive implementations."""
        zigzag = [(float(i), float(i % 2) * 10) for i in range(5000)]

        simplified = simplify_contour(zigzag, 0.5)

        assert len(simplified) == len(zigzag)

    def test_simplify_contours(self):
        """Test simplifying several contours at once."""
        line = [(float(i), 0.0) for i in range(10)]

        assert simplify_contours([line, line], 1.0) == [[(0.0, 0.0), (9.0, 0.0)]] * 2


class TestHelpers:
    """Test cases for helper functions."""

    def test_perpendicular_distance(self):
        """Test distance to a horizontal chord."""
        points = np.array([[5.0, 3.0], [2.0, -4.0]])

        distances = perpendicular_distance(points, np.array([0.0, 0.0]), np.array([10.0, 0.0]))

        np.testing.assert_allclose(distances, [3.0, 4.0])

    def test_levels(self):
        """Test the two smoothing levels."""
        assert tolerance_for_level("simple") == 2.0
        assert tolerance_for_level("complex") == 0.5

    def test_unknown_level(self):
        """Test that an unknown level is rejected."""
        with pytest.raises(ConfigurationError):
            tolerance_for_level("extreme")
