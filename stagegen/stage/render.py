"""Text renderers and JSON serialization for finished stages.

Renderers read ``Room.doors`` as given and never re-derive them from
neighbor occupancy. Glyph tables must name every RoomType; a missing entry is
an import-time error rather than a silent default.
"""
from __future__ import annotations

from typing import Callable, Dict, List, Optional

from .cells import Direction
from .rooms import Room, RoomType
from .stage import Stage

ROOM_GLYPHS: Dict[RoomType, str] = {
    RoomType.EMPTY: " ",
    RoomType.START: "S",
    RoomType.ORDINARY: "E",
    RoomType.EXIT: "X",
}

MINIMAL_GLYPHS: Dict[RoomType, str] = {
    RoomType.EMPTY: "#",
    RoomType.START: "S",
    RoomType.ORDINARY: ".",
    RoomType.EXIT: "X",
}

# 3x3 room frame; door openings replace the wall cell on that side.
ROOM_FRAME = (
    ("╔", "═", "╗"),
    ("║", " ", "║"),
    ("╚", "═", "╝"),
)
DOOR_SLOTS = {
    Direction.NORTH: (0, 1),
    Direction.SOUTH: (2, 1),
    Direction.EAST: (1, 2),
    Direction.WEST: (1, 0),
}


def _require_complete(table: Dict[RoomType, str], name: str) -> None:
    missing = [t.name for t in RoomType if t not in table]
    if missing:
        raise RuntimeError(f"{name} missing glyphs for: {', '.join(missing)}")


_require_complete(ROOM_GLYPHS, "ROOM_GLYPHS")
_require_complete(MINIMAL_GLYPHS, "MINIMAL_GLYPHS")

Colorizer = Callable[[RoomType, str], str]


def _plain(_type: RoomType, glyph: str) -> str:
    return glyph


def room_block(room: Room, colorize: Colorizer = _plain) -> List[List[str]]:
    if room.type is RoomType.EMPTY:
        return [[" "] * 3 for _ in range(3)]
    block = [list(row) for row in ROOM_FRAME]
    block[1][1] = colorize(room.type, ROOM_GLYPHS[room.type])
    for direction in room.doors.open_directions():
        r, c = DOOR_SLOTS[direction]
        block[r][c] = " "
    return block


def render_stage(stage: Stage, colorize: Optional[Colorizer] = None) -> str:
    """Render each room as a 3x3 box with openings where doors exist."""
    colorize = colorize or _plain
    lines: List[str] = []
    for row in stage.rooms:
        blocks = [room_block(room, colorize) for room in row]
        for sub in range(3):
            lines.append("".join("".join(b[sub]) for b in blocks))
    return "\n".join(lines)


def render_minimal(stage: Stage, colorize: Optional[Colorizer] = None) -> str:
    colorize = colorize or _plain
    return "\n".join(
        "".join(colorize(room.type, MINIMAL_GLYPHS[room.type]) for room in row) for row in stage.rooms
    )


def stage_to_dict(stage: Stage) -> dict:
    return {
        "rooms_count": stage.info.rooms_count,
        "grid_size": stage.grid_size,
        "start": [stage.start.row, stage.start.col],
        "exit": None if stage.exit is None else [stage.exit.row, stage.exit.col],
        "rooms": [room.to_dict() for room in stage.occupied_rooms()],
        "metrics": stage.metrics,
    }


__all__ = [
    "ROOM_GLYPHS",
    "MINIMAL_GLYPHS",
    "render_stage",
    "render_minimal",
    "room_block",
    "stage_to_dict",
]
