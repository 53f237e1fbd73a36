from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from .cells import GridCoordinate
from .rooms import Room, RoomType


@dataclass
class StageInfo:
    rooms_count: int


@dataclass
class Stage:
    """Finished room grid handed to renderers and API consumers.

    ``rooms[row][col]`` covers the whole square grid; unoccupied cells hold
    EMPTY rooms with no doors. ``exit`` is None for a single-room stage.
    """

    info: StageInfo
    rooms: List[List[Room]]
    start: GridCoordinate
    exit: Optional[GridCoordinate] = None
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def grid_size(self) -> int:
        return len(self.rooms)

    def room_at(self, cell: GridCoordinate) -> Room:
        return self.rooms[cell.row][cell.col]

    def iter_rooms(self) -> Iterator[Room]:
        for row in self.rooms:
            yield from row

    def occupied_rooms(self) -> List[Room]:
        return [r for r in self.iter_rooms() if r.occupied]

    def rooms_of_type(self, room_type: RoomType) -> List[Room]:
        return [r for r in self.iter_rooms() if r.type is room_type]


__all__ = ["StageInfo", "Stage"]
