"""Grid coordinates and cardinal directions shared by every generation phase.

Rows grow downward and columns grow to the right. NORTH/SOUTH move along the
row axis, EAST/WEST along the column axis.
"""
from __future__ import annotations

from enum import Enum
from typing import Iterator, List, NamedTuple


class GridCoordinate(NamedTuple):
    row: int
    col: int

    def step(self, direction: "Direction") -> "GridCoordinate":
        return GridCoordinate(self.row + direction.drow, self.col + direction.dcol)

    def in_bounds(self, size: int) -> bool:
        return 0 <= self.row < size and 0 <= self.col < size


class Direction(Enum):
    NORTH = (-1, 0)
    SOUTH = (1, 0)
    EAST = (0, 1)
    WEST = (0, -1)

    @property
    def drow(self) -> int:
        return self.value[0]

    @property
    def dcol(self) -> int:
        return self.value[1]

    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_OPPOSITES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}


def iter_neighbors(cell: GridCoordinate, size: int) -> Iterator[GridCoordinate]:
    """Yield in-bounds orthogonal neighbors of ``cell`` in Direction order."""
    for direction in Direction:
        nxt = cell.step(direction)
        if nxt.in_bounds(size):
            yield nxt


def neighbors(cell: GridCoordinate, size: int) -> List[GridCoordinate]:
    return list(iter_neighbors(cell, size))


Grid2D = List[List[bool]]

__all__ = ["GridCoordinate", "Direction", "iter_neighbors", "neighbors", "Grid2D"]
