"""
ASCII rendering for discovered shapes.

Each exemplar becomes one text block: its points are wrapped onto the grid,
cropped to their bounding box, and drawn one row per line behind a fixed
margin, followed by a dashed separator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable

import simple_chalk as chalk  # type: ignore[import-untyped]

from shape_types import Point, Shape, wrap

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderStyle:
    """Characters used to draw a block."""

    margin: str = "    "
    mark: str = "X"
    blank: str = " "
    rule: str = "-"


DEFAULT_STYLE = RenderStyle()

# Palette cycled across blocks when colorizing
PALETTE: list[Callable[[str], str]] = [
    chalk.red,
    chalk.green,
    chalk.yellow,
    chalk.blue,
    chalk.magenta,
    chalk.cyan,
    chalk.redBright,
    chalk.greenBright,
    chalk.yellowBright,
    chalk.blueBright,
]


def shape_bounds(points: Iterable[Point], rows: int, cols: int) -> tuple[int, int, int, int]:
    """
    Bounding box of already-wrapped points.

    Returns:
        Tuple of (low_x, high_x, low_y, high_y). Seeded at (cols, 0, rows, 0),
        so no points gives a degenerate box with no area.
    """
    low_x, high_x, low_y, high_y = cols, 0, rows, 0
    for p in points:
        low_x = min(low_x, p.x)
        high_x = max(high_x, p.x)
        low_y = min(low_y, p.y)
        high_y = max(high_y, p.y)
    return low_x, high_x, low_y, high_y


def normalize_shape(shape: Shape, rows: int, cols: int) -> tuple[list[Point], int, int]:
    """
    Wrap a shape's raw points onto the grid and move them to the origin.

    Duplicate points (a shape overlapping itself on the torus) are kept.

    Returns:
        Tuple of (translated points, height, width)
    """
    wrapped = [Point(wrap(p.x, cols), wrap(p.y, rows)) for p in shape.points]
    low_x, high_x, low_y, high_y = shape_bounds(wrapped, rows, cols)
    translated = [Point(p.x - low_x, p.y - low_y) for p in wrapped]
    return translated, high_y - low_y + 1, high_x - low_x + 1


def render_shape(
    shape: Shape,
    rows: int,
    cols: int,
    style: RenderStyle | None = None,
    colorize: Callable[[str], str] | None = None,
) -> str:
    """
    Render a single shape as a text block.

    Args:
        shape: The shape to draw
        rows: Row count of the grid it was found in
        cols: Column count of the grid it was found in
        style: Drawing characters (default RenderStyle())
        colorize: Optional colorizer applied to each row's cells

    Returns:
        The block, every line (separator included) ending in a newline
    """
    if style is None:
        style = DEFAULT_STYLE
    if colorize is None:
        colorize = lambda s: s

    points, height, width = normalize_shape(shape, rows, cols)
    occupied = set(points)

    lines: list[str] = []
    for row in range(height):
        cells = "".join(
            style.mark if Point(col, row) in occupied else style.blank for col in range(width)
        )
        lines.append(style.margin + colorize(cells) + "\n")
    lines.append(style.rule * (width + len(style.margin)) + "\n")
    return "".join(lines)


def render_shapes(
    shapes: Iterable[Shape],
    rows: int,
    cols: int,
    style: RenderStyle | None = None,
    colorize: bool = False,
) -> str:
    """
    Render every shape, in the given order, as consecutive blocks.

    With colorize set, each block's cells take the next color of PALETTE;
    the layout is the same as the plain rendering.
    """
    blocks: list[str] = []
    for i, shape in enumerate(shapes):
        colorizer = PALETTE[i % len(PALETTE)] if colorize else None
        blocks.append(render_shape(shape, rows, cols, style, colorizer))
    logger.debug("rendered %d blocks", len(blocks))
    return "".join(blocks)


__all__ = [
    "DEFAULT_STYLE",
    "PALETTE",
    "RenderStyle",
    "normalize_shape",
    "render_shape",
    "render_shapes",
    "shape_bounds",
]
