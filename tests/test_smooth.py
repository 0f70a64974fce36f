"""Tests for path smoothing module."""

import re

import pytest

from apx_posterize.smooth import format_number, smooth_path


class TestSmoothPath:
    """Test cases for smooth_path function."""

    def test_two_points(self):
        """Test that two points give a move, a line and a close."""
        assert smooth_path([(0.0, 0.0), (4.5, 2.0)]) == "M0,0 L4.5,2 Z"

    def test_quadratic_through_midpoints(self):
        """Test control points at interior points and endpoints at midpoints."""
        path = smooth_path([(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)])

        assert path == "M0,0 Q10,0 10,5 Q10,10 5,10 L0,10 Z"

    @pytest.mark.parametrize("n", [1, 2, 3, 7, 25])
    def test_starts_with_m_ends_with_z(self, n):
        """Test the path is always an M ... Z sequence."""
        points = [(float(i), float(i * i % 7)) for i in range(n)]

        path = smooth_path(points)

        assert path.startswith("M")
        assert path.endswith("Z")
        assert path.count("Q") == max(0, n - 2)

    def test_only_allowed_commands(self):
        """Test that only M, Q, L and Z appear."""
        path = smooth_path([(0.25, 1.0), (3.0, 4.5), (6.0, 1.0), (2.0, 0.0)])

        assert set(re.findall(r"[A-Za-z]", path)) <= {"M", "Q", "L", "Z"}

    def test_empty(self):
        """Test that no points give no path."""
        assert smooth_path([]) == ""


class TestFormatNumber:
    """Test cases for format_number function."""

    def test_plain_decimals(self):
        """Test trailing zeros are dropped."""
        assert format_number(3.0) == "3"
        assert format_number(3.5) == "3.5"
        assert format_number(0.125) == "0.125"
        assert format_number(-0.0) == "0"
        assert format_number(1 / 3) == "0.333"
