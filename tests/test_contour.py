"""Tests for contour tracing module."""

import numpy as np

from apx_posterize.contour import (
    MARCHING_SQUARES_SEGMENTS,
    cell_configuration,
    find_contours,
    trace_contour,
)


class TestCellConfiguration:
    """Test cases for the 2x2 encoding."""

    def test_corner_weights(self):
        """Test TL=8, TR=4, BR=2, BL=1."""
        assert cell_configuration([[1, 0], [0, 0]], 0, 0) == 8
        assert cell_configuration([[0, 1], [0, 0]], 0, 0) == 4
        assert cell_configuration([[0, 0], [0, 1]], 0, 0) == 2
        assert cell_configuration([[0, 0], [1, 0]], 0, 0) == 1
        assert cell_configuration([[1, 1], [0, 1]], 0, 0) == 14

    def test_outside_counts_as_empty(self):
        """Test that cells hanging off the grid read zeros."""
        assert cell_configuration([[1, 1], [1, 1]], 1, 1) == 8

    def test_lookup_table(self):
        """Test the table has 16 entries with saddles split in two."""
        assert len(MARCHING_SQUARES_SEGMENTS) == 16
        assert MARCHING_SQUARES_SEGMENTS[0] == ()
        assert MARCHING_SQUARES_SEGMENTS[15] == ()
        assert len(MARCHING_SQUARES_SEGMENTS[5]) == 2
        assert len(MARCHING_SQUARES_SEGMENTS[10]) == 2
        for code in set(range(1, 15)) - {5, 10}:
            assert len(MARCHING_SQUARES_SEGMENTS[code]) == 1


class TestFindContours:
    """Test cases for find_contours function."""

    def test_empty_mask(self):
        """Test that an empty mask yields no contours."""
        assert find_contours(np.zeros((10, 10), dtype=bool)) == []

    def test_full_mask_traces_canvas_edge(self):
        """Test that a mask covering the canvas still produces a contour."""
        contours = find_contours(np.ones((4, 4), dtype=bool))

        assert len(contours) >= 1
        assert all(len(c) > 2 for c in contours)

    def test_square(self):
        """Test that a filled square gives sub-pixel boundary points around it."""
        mask = np.zeros((20, 20), dtype=bool)
        mask[5:15, 5:15] = True

        contours = find_contours(mask)

        assert len(contours) >= 1
        points = np.array([p for c in contours for p in c])
        assert np.all((points * 2) == np.round(points * 2))
        assert points.min() >= 4.5
        assert points.max() <= 15.0

    def test_single_pixel_is_degenerate(self):
        """Test that an isolated pixel gives too few points and is dropped."""
        mask = np.zeros((3, 3), dtype=bool)
        mask[0, 0] = True

        assert find_contours(mask) == []

    def test_saddle_emits_both_segments(self):
        """Test that a diagonal pair produces the two saddle segments."""
        mask = np.array([[True, False], [False, True]])

        contours = find_contours(mask)

        assert contours == [[(0.5, 0.0), (1.0, 0.5), (0.5, 1.0), (0.0, 0.5)]]


class TestTraceContour:
    """Test cases for a single walk."""

    def test_step_budget(self):
        """Test that max_steps stops the walk."""
        grid = np.ones((6, 6), dtype=bool).tolist()
        visited = [[False] * 6 for _ in range(6)]

        trace_contour(grid, 0, 0, visited, max_steps=2)

        assert sum(map(sum, visited)) == 2

    def test_marks_visited(self):
        """Test that a walk along a row marks each cell."""
        grid = [[True, True, True]]
        visited = [[False, False, False]]

        contour = trace_contour(grid, 0, 0, visited)

        assert visited == [[True, True, True]]
        assert len(contour) > 2
