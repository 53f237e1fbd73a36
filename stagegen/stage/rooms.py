from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .cells import Direction, GridCoordinate


class RoomType(Enum):
    EMPTY = "empty"
    START = "start"
    ORDINARY = "ordinary"
    EXIT = "exit"


@dataclass(frozen=True)
class DoorSet:
    north: bool = False
    south: bool = False
    east: bool = False
    west: bool = False

    def has(self, direction: Direction) -> bool:
        return getattr(self, direction.name.lower())

    def open_directions(self) -> List[Direction]:
        return [d for d in Direction if self.has(d)]

    @property
    def count(self) -> int:
        return len(self.open_directions())


@dataclass
class Room:
    position: GridCoordinate
    type: RoomType = RoomType.EMPTY
    doors: DoorSet = field(default_factory=DoorSet)

    @property
    def occupied(self) -> bool:
        return self.type is not RoomType.EMPTY

    @property
    def is_dead_end(self) -> bool:
        return self.occupied and self.doors.count == 1

    def to_dict(self):
        return {
            "row": self.position.row,
            "col": self.position.col,
            "type": self.type.value,
            "doors": [d.name.lower() for d in self.doors.open_directions()],
        }


__all__ = ["RoomType", "DoorSet", "Room"]
