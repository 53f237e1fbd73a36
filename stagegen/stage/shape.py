"""Stage shape generation: a constrained random walk over a square grid.

The walk grows a set of occupied cells from the grid center. Each step picks
an occupied pivot, then one of its in-bounds neighbors as a candidate. The
candidate joins the shape only when exactly one of its own neighbors is
already occupied, so every accepted cell hangs off the structure by a single
edge and the occupied set stays a tree.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from .cells import Grid2D, GridCoordinate, iter_neighbors, neighbors
from .errors import GenerationFailed, validate_rooms_count
from .random_source import RandomSource


def grid_size_for(rooms_count: int) -> int:
    return max(1, math.isqrt(rooms_count) * 2)


def center_of(size: int) -> GridCoordinate:
    c = (size - size % 2) // 2
    return GridCoordinate(c, c)


@dataclass
class StageShape:
    cells: Grid2D
    start: GridCoordinate
    occupied: List[GridCoordinate] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.cells)

    @property
    def rooms_count(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell)

    def is_occupied(self, cell: GridCoordinate) -> bool:
        return cell.in_bounds(self.size) and self.cells[cell.row][cell.col]

    def occupied_cells(self) -> Iterator[GridCoordinate]:
        """Yield occupied cells in row-major order."""
        for r, row in enumerate(self.cells):
            for c, cell in enumerate(row):
                if cell:
                    yield GridCoordinate(r, c)

    @classmethod
    def from_rows(cls, rows: List[str], start: GridCoordinate) -> "StageShape":
        """Build a shape from strings where '#' marks an occupied cell."""
        cells = [[ch == '#' for ch in row] for row in rows]
        shape = cls(cells=cells, start=start)
        shape.occupied = list(shape.occupied_cells())
        return shape


class ShapeGenerator:
    def __init__(self, random_source: RandomSource, stall_budget_factor: Optional[int] = 32):
        self.random = random_source
        self.stall_budget_factor = stall_budget_factor

    def _stall_budget(self, size: int) -> Optional[int]:
        if self.stall_budget_factor is None:
            return None
        return max(1, self.stall_budget_factor * size * size)

    def generate(self, rooms_count: int, metrics: Optional[Dict[str, Any]] = None) -> StageShape:
        validate_rooms_count(rooms_count)
        size = grid_size_for(rooms_count)
        cells: Grid2D = [[False] * size for _ in range(size)]
        start = center_of(size)
        cells[start.row][start.col] = True
        occupied = [start]
        remaining = rooms_count - 1

        budget = self._stall_budget(size)
        attempts = stall = max_stall = 0
        counters = {'rejected_occupied': 0, 'rejected_crowded': 0, 'rejected_isolated': 0}
        while remaining > 0:
            if budget is not None and stall >= budget:
                if metrics is not None:
                    metrics.update(counters, attempts=attempts, rooms_placed=len(occupied), max_stall=max_stall)
                raise GenerationFailed(rooms_count, len(occupied), attempts)
            attempts += 1
            pivot = self.random.choice(occupied)
            candidate = self.random.choice(neighbors(pivot, size))
            if cells[candidate.row][candidate.col]:
                counters['rejected_occupied'] += 1
                stall += 1
                continue
            touching = sum(1 for n in iter_neighbors(candidate, size) if cells[n.row][n.col])
            if touching != 1:
                counters['rejected_isolated' if touching == 0 else 'rejected_crowded'] += 1
                stall += 1
                continue
            cells[candidate.row][candidate.col] = True
            occupied.append(candidate)
            remaining -= 1
            max_stall = max(max_stall, stall)
            stall = 0

        if metrics is not None:
            metrics.update(counters, attempts=attempts, rooms_placed=len(occupied), max_stall=max(max_stall, stall))
        return StageShape(cells=cells, start=start, occupied=occupied)


__all__ = ["StageShape", "ShapeGenerator", "grid_size_for", "center_of"]
