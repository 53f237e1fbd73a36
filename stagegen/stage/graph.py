"""Derive the room grid, doors, start and exit from a generated shape."""
from __future__ import annotations

import math
from typing import Iterable, List, Optional

from .cells import Direction, GridCoordinate
from .rooms import DoorSet, Room, RoomType
from .shape import StageShape
from .stage import Stage, StageInfo


def find_furthest_room(origin: GridCoordinate, candidates: Iterable[GridCoordinate]) -> Optional[GridCoordinate]:
    """Return the candidate with the largest Euclidean distance from ``origin``.

    Comparison is strict and starts at zero: the first candidate reaching the
    maximum wins and a candidate sitting on ``origin`` is never returned.
    """
    furthest = None
    furthest_distance = 0.0
    for cand in candidates:
        distance = math.hypot(origin.row - cand.row, origin.col - cand.col)
        if distance > furthest_distance:
            furthest = cand
            furthest_distance = distance
    return furthest


def doors_for(shape: StageShape, cell: GridCoordinate) -> DoorSet:
    flags = {d.name.lower(): shape.is_occupied(cell.step(d)) for d in Direction}
    return DoorSet(**flags)


class RoomGraphBuilder:
    def build(self, shape: StageShape, info: Optional[StageInfo] = None) -> Stage:
        size = shape.size
        rooms: List[List[Room]] = []
        dead_ends: List[GridCoordinate] = []
        for r in range(size):
            row: List[Room] = []
            for c in range(size):
                pos = GridCoordinate(r, c)
                room = Room(pos)
                if shape.cells[r][c]:
                    room.doors = doors_for(shape, pos)
                    room.type = RoomType.ORDINARY
                    if room.doors.count == 1:
                        dead_ends.append(pos)
                row.append(room)
            rooms.append(row)

        if info is None:
            info = StageInfo(rooms_count=shape.rooms_count)
        stage = Stage(info=info, rooms=rooms, start=shape.start)
        stage.room_at(shape.start).type = RoomType.START
        exit_cell = find_furthest_room(shape.start, dead_ends)
        if exit_cell is not None:
            stage.room_at(exit_cell).type = RoomType.EXIT
            stage.exit = exit_cell
        stage.metrics['dead_ends'] = len(dead_ends)
        return stage


__all__ = ["RoomGraphBuilder", "find_furthest_room", "doors_for"]
