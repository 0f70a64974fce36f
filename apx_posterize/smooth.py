"""Curve smoothing: turn simplified contours into closed quadratic paths."""

from typing import Sequence

from .types import PathData, Point


def format_number(x: float, precision: int = 3) -> str:
    """Format a coordinate as a plain decimal without trailing zeros."""
    formatted = f"{x:.{precision}f}"
    if "." in formatted:
        formatted = formatted.rstrip("0").rstrip(".")
    if formatted == "-0":
        formatted = "0"
    return formatted


def smooth_path(points: Sequence[Point], precision: int = 3) -> PathData:
    """Build a closed SVG path through the points using quadratic curves.

    Each interior point becomes the control point of a curve ending at the
    midpoint between it and the next point. The path then runs straight to
    the last point and closes.

    Args:
        points: Simplified contour
        precision: Decimal places kept in coordinates

    Returns:
        Path data using only M, Q, L and Z; empty for an empty contour
    """
    if len(points) == 0:
        return ""

    def fmt(point):
        return f"{format_number(point[0], precision)},{format_number(point[1], precision)}"

    commands = [f"M{fmt(points[0])}"]
    for current, following in zip(points[1:-1], points[2:]):
        midpoint = ((current[0] + following[0]) / 2, (current[1] + following[1]) / 2)
        commands.append(f"Q{fmt(current)} {fmt(midpoint)}")

    if len(points) > 1:
        commands.append(f"L{fmt(points[-1])}")
    commands.append("Z")
    return " ".join(commands)
