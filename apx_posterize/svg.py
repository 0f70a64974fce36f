"""SVG document generation."""

from pathlib import Path
from typing import List, Sequence, Tuple, Union

from .color import rgb_to_hex
from .types import Color, PathData

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


def color_to_hex(color: Sequence[int]) -> str:
    """Convert an RGB (or RGBA, alpha ignored) color to '#rrggbb'."""
    return rgb_to_hex(color[:3])


def paths_to_svg(layers: List[Tuple[Color, List[PathData]]], width: int, height: int) -> str:
    """Assemble an SVG document with one filled group per color.

    Colors with no paths are left out entirely.

    Args:
        layers: List of (color, path data strings)
        width: Document width in pixels
        height: Document height in pixels

    Returns:
        SVG string
    """
    groups = []
    for color, paths in layers:
        if not paths:
            continue
        elements = "".join(f'<path d="{d}"/>' for d in paths)
        groups.append(f'<g fill="{color_to_hex(color)}">{elements}</g>')

    content = "\n  ".join(groups)
    header = f'<svg xmlns="{SVG_NAMESPACE}" viewBox="0 0 {width} {height}" width="{width}" height="{height}">'
    if not content:
        return f"{header}</svg>"
    return f"{header}\n  {content}\n</svg>"


def save_svg(svg_string: str, output_path: Union[str, Path]) -> None:
    """Save SVG string to file."""
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(svg_string)
