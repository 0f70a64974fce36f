"""Curve simplification module using the Douglas-Peucker algorithm."""

from typing import List, Sequence

import numpy as np

from .types import SMOOTHING_TOLERANCES, ConfigurationError, Contour, Point


def tolerance_for_level(smoothing_level: str) -> float:
    """Map a smoothing level ("simple" or "complex") to an RDP tolerance."""
    try:
        return SMOOTHING_TOLERANCES[smoothing_level]
    except KeyError:
        raise ConfigurationError(
            f"smoothing_level must be one of {tuple(SMOOTHING_TOLERANCES)}, got {smoothing_level!r}"
        ) from None


def perpendicular_distance(points: np.ndarray, start: np.ndarray, end: np.ndarray) -> np.ndarray:
    """Distance from each point to the infinite line through start and end.

    A zero-length chord gives distance 0 for every point.
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    length = np.hypot(dx, dy)
    if length == 0:
        return np.zeros(len(points))

    numerator = np.abs(dy * points[:, 0] - dx * points[:, 1] + end[0] * start[1] - end[1] * start[0])
    return numerator / length


def simplify_contour(contour: Sequence[Point], tolerance: float) -> Contour:
    """Simplify a polyline with Ramer-Douglas-Peucker.

    The point farthest from the chord between the ends of a span is kept
    when its distance exceeds ``tolerance``, and both halves are examined
    in turn; otherwise the span collapses to its ends. Spans are processed
    from an explicit stack, so long contours do not hit the recursion limit.

    Args:
        contour: Sequence of (x, y) points
        tolerance: Maximum allowed deviation

    Returns:
        Simplified points; the first and last input points are always kept
    """
    n = len(contour)
    if n <= 2:
        return [tuple(p) for p in contour]

    points = np.asarray(contour, dtype=np.float64)
    keep = np.zeros(n, dtype=bool)
    keep[0] = keep[-1] = True

    stack = [(0, n - 1)]
    while stack:
        first, last = stack.pop()
        if last - first < 2:
            continue

        distances = perpendicular_distance(points[first + 1:last], points[first], points[last])
        offset = int(np.argmax(distances))
        if distances[offset] > tolerance:
            index = first + 1 + offset
            keep[index] = True
            stack.append((first, index))
            stack.append((index, last))

    return [tuple(contour[i]) for i in np.flatnonzero(keep)]


def simplify_contours(contours: List[Contour], tolerance: float) -> List[Contour]:
    """Simplify multiple contours."""
    return [simplify_contour(c, tolerance) for c in contours]
