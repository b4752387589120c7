"""
Shared type definitions for the shape finder.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CellState(Enum):
    """State of a single grid cell."""

    EMPTY = 0
    OCCUPIED = 1
    VISITED = 2  # Overwrites OCCUPIED (or EMPTY) during traversal, never reverts


class Direction(Enum):
    """Cardinal direction between two adjacent points."""

    UP = "up"  # Decreasing y
    DOWN = "down"  # Increasing y
    LEFT = "left"  # Decreasing x
    RIGHT = "right"  # Increasing x


# Order in which neighbours are explored during discovery
EXPANSION_ORDER = (Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT)

_OFFSETS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


def wrap(i: int, dim: int) -> int:
    """Wrap i into [0, dim). Multiples of dim (negative ones too) map to 0."""
    # Python's % is floored, so negative i already lands in range
    return i % dim


# =============================================================================
# Errors
# =============================================================================


class InvalidDimensions(ValueError):
    """The grid has no rows or no columns."""


class ConsistencyError(RuntimeError):
    """An internal contract was broken (a cell visited twice, a zero-length step)."""


# =============================================================================
# Points and Shapes
# =============================================================================


@dataclass(frozen=True)
class Point:
    """
    A pair of signed coordinates.

    Points produced by traversal are raw: they are offsets accumulated from
    the seed and may lie outside the grid. Only the grid normalizes them.
    """

    x: int
    y: int

    def step(self, direction: Direction) -> Point:
        """Return the raw neighbour one unit away in the given direction."""
        dx, dy = _OFFSETS[direction]
        return Point(self.x + dx, self.y + dy)

    def __str__(self) -> str:
        return f"point(x:{self.x}, y:{self.y})"


def direction_between(begin: Point, end: Point) -> Direction:
    """
    Direction of the move from begin to end, judged on y first, then x.

    Both points must be raw so the sign of a wrapped offset survives.

    Raises:
        ConsistencyError: If begin and end are the same point
    """
    if begin.y > end.y:
        return Direction.UP
    if begin.y < end.y:
        return Direction.DOWN
    if begin.x > end.x:
        return Direction.LEFT
    if begin.x < end.x:
        return Direction.RIGHT
    raise ConsistencyError(f"no direction between identical points {begin} and {end}")


@dataclass(frozen=True)
class Shape:
    """One connected component, as raw points in discovery order."""

    points: tuple[Point, ...]

    def __len__(self) -> int:
        return len(self.points)

    def signature(self) -> tuple[Direction, ...]:
        """Directions between consecutive points (empty for a single point)."""
        return tuple(
            direction_between(self.points[i], self.points[i + 1])
            for i in range(len(self.points) - 1)
        )

    def matches(self, other: Shape) -> bool:
        """
        Congruence test used for deduplication.

        Translation-invariant but sensitive to traversal order: equal point
        counts and step-by-step equal signatures. Rotations and reflections
        are never matched.
        """
        if len(self.points) != len(other.points):
            return False
        if len(other.points) == 1:
            return True
        for i in range(len(self.points) - 1):
            mine = direction_between(self.points[i], self.points[i + 1])
            theirs = direction_between(other.points[i], other.points[i + 1])
            if mine != theirs:
                return False
        return True

    def __str__(self) -> str:
        return ", ".join(d.value for d in self.signature())


__all__ = [
    "CellState",
    "Direction",
    "EXPANSION_ORDER",
    "InvalidDimensions",
    "ConsistencyError",
    "Point",
    "Shape",
    "direction_between",
    "wrap",
]
