"""
Shape discovery on a toroidal occupancy grid.

Three phases: scan (row-major seeds) -> discover (flood fill from a seed,
recording raw points in visit order) -> classify (keep one exemplar per
congruence class). Rendering of the exemplars lives in ascii_render.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Sequence

from ascii_render import RenderStyle, render_shape, render_shapes
from shape_types import (
    EXPANSION_ORDER,
    CellState,
    ConsistencyError,
    Direction,
    InvalidDimensions,
    Point,
    Shape,
    direction_between,
    wrap,
)

logger = logging.getLogger(__name__)

_INPUT_STATES = {0: CellState.EMPTY, 1: CellState.OCCUPIED}


# =============================================================================
# Grid Model
# =============================================================================


class TorusGrid:
    """
    Mutable grid of cell states whose edges wrap in both directions.

    Every accessor takes a logical point, which may be negative or past the
    last row/column, and normalizes it before indexing.
    Coordinate convention: Point(x, y) for the API, [y][x] for storage.
    """

    def __init__(self, cells: Sequence[Sequence[int]]):
        rows = len(cells)
        if rows == 0:
            raise InvalidDimensions("no rows in grid")
        cols = len(cells[0])
        if cols == 0:
            raise InvalidDimensions("no columns in grid")

        mismatched = [(i, len(row)) for i, row in enumerate(cells) if len(row) != cols]
        if mismatched:
            error_msg = (
                f"Inconsistent row lengths in grid\n"
                f"  Expected: {cols} columns (from row 0)\n"
                f"  Mismatched rows:\n"
            )
            for row_idx, actual_cols in mismatched:
                error_msg += f"    Row {row_idx}: {actual_cols} columns\n"
            error_msg += "  All rows must have the same number of cells"
            raise ValueError(error_msg)

        self.rows = rows
        self.cols = cols
        # Own copy; the caller's rows are never touched
        self._cells: list[list[CellState]] = [
            [self._to_state(value, r, c) for c, value in enumerate(row)]
            for r, row in enumerate(cells)
        ]

    @classmethod
    def empty(cls, rows: int, cols: int) -> TorusGrid:
        """Create a rows x cols grid with every cell empty."""
        if rows <= 0:
            raise InvalidDimensions("no rows in grid")
        if cols <= 0:
            raise InvalidDimensions("no columns in grid")
        return cls([[0] * cols for _ in range(rows)])

    @staticmethod
    def _to_state(value: int, row: int, col: int) -> CellState:
        try:
            return _INPUT_STATES[value]
        except KeyError:
            raise ValueError(
                f"Invalid cell value {value!r} at row {row}, column {col}\n"
                f"  Cells must be 0 (empty) or 1 (occupied)"
            ) from None

    def normalize(self, point: Point) -> Point:
        """Map a logical point to its in-range equivalent."""
        return Point(wrap(point.x, self.cols), wrap(point.y, self.rows))

    def state_at(self, point: Point) -> CellState:
        p = self.normalize(point)
        return self._cells[p.y][p.x]

    def visited(self, point: Point) -> bool:
        return self.state_at(point) is CellState.VISITED

    def mark_visited(self, point: Point) -> CellState:
        """
        Mark a cell visited and return the state it had before.

        Empty cells are marked too; callers decide what to do from the
        returned prior state.

        Raises:
            ConsistencyError: If the cell was already visited
        """
        p = self.normalize(point)
        prior = self._cells[p.y][p.x]
        if prior is CellState.VISITED:
            raise ConsistencyError(f"cell {p} (reached as {point}) visited twice")
        self._cells[p.y][p.x] = CellState.VISITED
        return prior


# =============================================================================
# Traversal
# =============================================================================


def discover(grid: TorusGrid, seed: Point) -> Shape | None:
    """
    Flood fill one connected component starting at seed.

    Neighbours are explored depth-first in UP, RIGHT, DOWN, LEFT order using
    raw coordinates; points are recorded in pre-order, so a component that
    wraps an edge keeps its true geometry. The explicit stack checks the
    visited state when a point is popped, which gives exactly the order a
    recursive fill would.

    Returns None if the seed was already visited or was not occupied. In the
    latter case the seed is still marked visited.
    """
    if grid.visited(seed):
        return None

    points: list[Point] = []
    stack = [seed]
    while stack:
        current = stack.pop()
        if grid.visited(current):
            continue
        if grid.mark_visited(current) is not CellState.OCCUPIED:
            continue
        points.append(current)
        stack.extend(current.step(d) for d in reversed(EXPANSION_ORDER))

    if not points:
        return None
    return Shape(tuple(points))


def iter_components(grid: TorusGrid) -> Iterator[Shape]:
    """Scan the grid row-major, yielding every component as it is discovered."""
    for y in range(grid.rows):
        for x in range(grid.cols):
            shape = discover(grid, Point(x, y))
            if shape is not None:
                logger.debug(
                    "discovered %d-cell component at %s: [%s]", len(shape), shape.points[0], shape
                )
                yield shape


# =============================================================================
# Registry
# =============================================================================


class ShapeRegistry:
    """Exemplar shapes, one per congruence class, in first-discovery order."""

    def __init__(self) -> None:
        self._exemplars: list[Shape] = []

    @property
    def exemplars(self) -> tuple[Shape, ...]:
        return tuple(self._exemplars)

    def __len__(self) -> int:
        return len(self._exemplars)

    def __iter__(self) -> Iterator[Shape]:
        return iter(self._exemplars)

    def has_shape(self, shape: Shape) -> bool:
        return any(existing.matches(shape) for existing in self._exemplars)

    def classify(self, shape: Shape) -> bool:
        """Record shape as a new exemplar unless one already matches. True if recorded."""
        if self.has_shape(shape):
            return False
        self._exemplars.append(shape)
        return True


# =============================================================================
# Search
# =============================================================================


@dataclass(frozen=True)
class ShapeSearch:
    """Outcome of a scan: grid dimensions and the exemplars found."""

    rows: int
    cols: int
    shapes: tuple[Shape, ...]

    def blocks(self, style: RenderStyle | None = None) -> list[str]:
        """One rendered text block per exemplar, in discovery order."""
        return [render_shape(shape, self.rows, self.cols, style) for shape in self.shapes]

    def render(self, style: RenderStyle | None = None, colorize: bool = False) -> str:
        return render_shapes(self.shapes, self.rows, self.cols, style, colorize=colorize)


def find_shapes(cells: Sequence[Sequence[int]]) -> ShapeSearch:
    """
    Find one exemplar per congruence class in a binary grid.

    Args:
        cells: Rows of 0 (empty) / 1 (occupied) values

    Returns:
        ShapeSearch with the exemplars in first-discovery order

    Raises:
        InvalidDimensions: If the grid has no rows or no columns
    """
    grid = TorusGrid(cells)
    logger.info("scanning %dx%d grid", grid.rows, grid.cols)

    registry = ShapeRegistry()
    found = 0
    for shape in iter_components(grid):
        found += 1
        registry.classify(shape)

    logger.info("scan complete: %d components, %d distinct shapes", found, len(registry))
    return ShapeSearch(grid.rows, grid.cols, registry.exemplars)


__all__ = [
    "CellState",
    "ConsistencyError",
    "Direction",
    "InvalidDimensions",
    "Point",
    "Shape",
    "ShapeRegistry",
    "ShapeSearch",
    "TorusGrid",
    "direction_between",
    "discover",
    "find_shapes",
    "iter_components",
    "wrap",
]
