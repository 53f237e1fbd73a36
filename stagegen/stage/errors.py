"""Exceptions raised by stage generation."""
from __future__ import annotations


class StageError(Exception):
    """Base class for stage generation errors."""


class InvalidStageInfo(StageError, ValueError):
    """Raised when the requested room count is not a positive integer."""

    def __init__(self, rooms_count):
        self.rooms_count = rooms_count
        super().__init__(f"rooms_count must be an integer >= 1 (got {rooms_count!r})")


class GenerationFailed(StageError):
    """Raised when the random walk stalls past its retry budget."""

    def __init__(self, rooms_count: int, rooms_placed: int, attempts: int):
        self.rooms_count = rooms_count
        self.rooms_placed = rooms_placed
        self.attempts = attempts
        super().__init__(
            f"stage generation stalled after {attempts} attempts "
            f"({rooms_placed}/{rooms_count} rooms placed)"
        )


def validate_rooms_count(rooms_count) -> int:
    if isinstance(rooms_count, bool) or not isinstance(rooms_count, int):
        raise InvalidStageInfo(rooms_count)
    if rooms_count < 1:
        raise InvalidStageInfo(rooms_count)
    return rooms_count


__all__ = ["StageError", "InvalidStageInfo", "GenerationFailed", "validate_rooms_count"]
