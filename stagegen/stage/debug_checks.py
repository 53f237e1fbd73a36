"""Structural checks over a finished stage.

Used by the diagnostics script and the test suite. Every list in the result
of ``analyze`` should be empty for a well-formed stage.
"""
from __future__ import annotations

from collections import deque
from typing import Dict, List, Set

from .cells import Direction, GridCoordinate
from .rooms import RoomType
from .stage import Stage


def occupied_set(stage: Stage) -> Set[GridCoordinate]:
    return {room.position for room in stage.occupied_rooms()}


def count_edges(cells: Set[GridCoordinate]) -> int:
    """Count orthogonally adjacent occupied pairs once per pair."""
    return sum(
        1
        for cell in cells
        for d in (Direction.SOUTH, Direction.EAST)
        if cell.step(d) in cells
    )


def reachable_from(start: GridCoordinate, cells: Set[GridCoordinate]) -> Set[GridCoordinate]:
    if start not in cells:
        return set()
    seen = {start}
    q = deque([start])
    while q:
        cur = q.popleft()
        for d in Direction:
            nxt = cur.step(d)
            if nxt in cells and nxt not in seen:
                seen.add(nxt)
                q.append(nxt)
    return seen


def analyze(stage: Stage) -> Dict[str, List]:
    cells = occupied_set(stage)
    size = stage.grid_size
    issues: Dict[str, List] = {
        "wrong_room_count": [],
        "cycles": [],
        "unreachable_rooms": [],
        "door_mismatches": [],
        "start_problems": [],
        "exit_problems": [],
    }
    if len(cells) != stage.info.rooms_count:
        issues["wrong_room_count"].append((len(cells), stage.info.rooms_count))
    edges = count_edges(cells)
    if cells and edges != len(cells) - 1:
        issues["cycles"].append(edges)
    issues["unreachable_rooms"] = sorted(cells - reachable_from(stage.start, cells))

    for room in stage.iter_rooms():
        for d in Direction:
            nxt = room.position.step(d)
            expected = room.occupied and nxt.in_bounds(size) and nxt in cells
            if room.doors.has(d) != expected:
                issues["door_mismatches"].append((room.position, d.name))

    starts = stage.rooms_of_type(RoomType.START)
    if len(starts) != 1 or starts[0].position != stage.start:
        issues["start_problems"].append([r.position for r in starts])

    exits = stage.rooms_of_type(RoomType.EXIT)
    if len(exits) > 1:
        issues["exit_problems"].append(("multiple", [r.position for r in exits]))
    for room in exits:
        if room.position == stage.start or room.doors.count != 1 or room.position != stage.exit:
            issues["exit_problems"].append(("invalid", room.position))
    if len(cells) >= 2 and not exits:
        issues["exit_problems"].append(("missing", None))
    return issues


def is_healthy(stage: Stage) -> bool:
    return all(not v for v in analyze(stage).values())


__all__ = ["analyze", "is_healthy", "count_edges", "reachable_from", "occupied_set"]
