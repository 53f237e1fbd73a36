"""Public stage package interface."""

from .cells import Direction, GridCoordinate
from .config import StageConfig
from .errors import GenerationFailed, InvalidStageInfo, StageError
from .graph import RoomGraphBuilder, find_furthest_room
from .pipeline import StageFactory, generate_stage
from .random_source import RandomSource, SeededRandomSource
from .render import render_minimal, render_stage, stage_to_dict
from .rooms import DoorSet, Room, RoomType
from .shape import ShapeGenerator, StageShape
from .stage import Stage, StageInfo  # noqa: F401

__all__ = [
    "Direction",
    "GridCoordinate",
    "StageConfig",
    "StageError",
    "InvalidStageInfo",
    "GenerationFailed",
    "RoomGraphBuilder",
    "find_furthest_room",
    "StageFactory",
    "generate_stage",
    "RandomSource",
    "SeededRandomSource",
    "render_stage",
    "render_minimal",
    "stage_to_dict",
    "DoorSet",
    "Room",
    "RoomType",
    "ShapeGenerator",
    "StageShape",
    "Stage",
    "StageInfo",
]
