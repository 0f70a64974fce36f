"""Contour tracing over binary masks with a marching-squares walk."""

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .types import Contour

logger = logging.getLogger(__name__)

# Boundary segments for each 2x2 configuration, as (start, end) offsets
# from the cell's top-left pixel. Corner weights: TL=8, TR=4, BR=2, BL=1.
# The saddles (5 and 10) emit both segments; no diagonal is chosen, which
# can leave a pinched join where two regions touch at a corner.
MARCHING_SQUARES_SEGMENTS: Tuple[Tuple[Tuple[Tuple[float, float], Tuple[float, float]], ...], ...] = (
    (),
    (((0, 0.5), (0.5, 1)),),
    (((0.5, 1), (1, 0.5)),),
    (((0, 0.5), (1, 0.5)),),
    (((1, 0.5), (0.5, 0)),),
    (((0, 0.5), (0.5, 0)), ((1, 0.5), (0.5, 1))),
    (((0.5, 1), (0.5, 0)),),
    (((0, 0.5), (0.5, 0)),),
    (((0.5, 0), (0, 0.5)),),
    (((0.5, 0), (0.5, 1)),),
    (((0.5, 0), (1, 0.5)), ((0.5, 1), (0, 0.5))),
    (((0.5, 0), (1, 0.5)),),
    (((1, 0.5), (0, 0.5)),),
    (((1, 0.5), (0.5, 1)),),
    (((0.5, 1), (0, 0.5)),),
    (),
)

# Walk directions in preference order: right, down, left, up
DIRECTIONS = ((1, 0), (0, 1), (-1, 0), (0, -1))


def cell_configuration(grid: Sequence[Sequence[bool]], x: int, y: int) -> int:
    """Encode the 2x2 neighbourhood anchored at (x, y) as a 4-bit value.

    Pixels outside the grid count as empty.
    """
    height = len(grid)
    width = len(grid[0])

    def value(px, py):
        return 1 if 0 <= px < width and 0 <= py < height and grid[py][px] else 0

    return value(x, y) * 8 + value(x + 1, y) * 4 + value(x + 1, y + 1) * 2 + value(x, y + 1)


def _next_cell(grid, x, y, direction, width, height):
    """First adjacent true cell that does not reverse the incoming direction."""
    reverse = None if direction is None else (direction + 2) % 4
    for index, (dx, dy) in enumerate(DIRECTIONS):
        if index == reverse:
            continue
        nx, ny = x + dx, y + dy
        if 0 <= nx < width and 0 <= ny < height and grid[ny][nx]:
            return nx, ny, index
    return None


def trace_contour(
    grid: Sequence[Sequence[bool]],
    start_x: int,
    start_y: int,
    visited: List[List[bool]],
    max_steps: Optional[int] = None,
) -> Contour:
    """Walk the mask from a start pixel, collecting boundary segment points.

    The walk stops when it returns to the start cell, when no further
    cell can be entered, or after ``max_steps`` moves (default W*H).
    Every cell whose segments are collected is marked in ``visited``.

    Args:
        grid: Mask as nested rows of booleans
        start_x: Start column (must be a true pixel)
        start_y: Start row
        visited: Grid of visited flags, updated in place
        max_steps: Step budget

    Returns:
        List of (x, y) points at cell corners and edge midpoints
    """
    height = len(grid)
    width = len(grid[0])
    if max_steps is None:
        max_steps = width * height

    contour: Contour = []
    x, y = start_x, start_y
    direction = None
    steps = 0

    while True:
        visited[y][x] = True
        for (ax, ay), (bx, by) in MARCHING_SQUARES_SEGMENTS[cell_configuration(grid, x, y)]:
            contour.append((float(x + ax), float(y + ay)))
            contour.append((float(x + bx), float(y + by)))

        step = _next_cell(grid, x, y, direction, width, height)
        if step is None:
            break
        x, y, direction = step
        steps += 1

        if (x == start_x and y == start_y) or steps >= max_steps:
            break

    return contour


def find_contours(mask: np.ndarray, max_steps: Optional[int] = None) -> List[Contour]:
    """Trace contours for every unvisited true pixel of a mask.

    Pixels are scanned in raster order. The visited grid belongs to this
    call only, so masks for different colors can be traced independently.

    Args:
        mask: Boolean mask (H, W)
        max_steps: Step budget per walk (default W*H)

    Returns:
        List of contours with more than two points
    """
    if mask.ndim != 2 or mask.size == 0:
        return []

    grid = mask.astype(bool).tolist()
    height, width = mask.shape
    visited = [[False] * width for _ in range(height)]

    contours = []
    discarded = 0
    for y in range(height):
        row = grid[y]
        for x in range(width):
            if row[x] and not visited[y][x]:
                contour = trace_contour(grid, x, y, visited, max_steps)
                if len(contour) > 2:
                    contours.append(contour)
                else:
                    discarded += 1

    if discarded:
        logger.debug(f"Discarded {discarded} degenerate contours")
    return contours
