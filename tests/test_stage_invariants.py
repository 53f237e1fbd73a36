"""Stage generation invariant tests.

Invariants covered:
1. Exactly rooms_count occupied rooms forming one tree (edges == rooms - 1).
2. Doors match in-bounds neighbor occupancy in every direction.
3. Exactly one START room; at most one EXIT, distinct from START, with one door.
4. The exit is a leaf: removing it leaves the rest of the tree connected
   and the exit itself cut off.
"""

from __future__ import annotations

import pytest

from stagegen.stage import RoomType, generate_stage
from stagegen.stage.debug_checks import analyze, occupied_set, reachable_from


@pytest.mark.parametrize("rooms", [1, 2, 3, 6, 20, 64])
def test_no_structural_issues(rooms):
    for seed in (11, 22, 33):
        stage = generate_stage(rooms, seed=seed)
        issues = analyze(stage)
        assert all(not v for v in issues.values()), f"rooms={rooms} seed={seed}: {issues}"


def test_hundred_rooms_scenario():
    stage = generate_stage(100, seed=2024)
    assert stage.grid_size == 20
    assert len(stage.occupied_rooms()) == 100
    assert stage.exit is not None
    exit_room = stage.room_at(stage.exit)
    assert exit_room.type is RoomType.EXIT
    assert exit_room.doors.count == 1


def test_single_room_scenario():
    stage = generate_stage(1, seed=5)
    assert stage.grid_size == 1
    assert stage.exit is None
    assert [r.type for r in stage.iter_rooms()] == [RoomType.START]


def test_exactly_one_start():
    for seed in range(10):
        stage = generate_stage(40, seed=seed)
        starts = stage.rooms_of_type(RoomType.START)
        assert len(starts) == 1
        assert starts[0].position == stage.start
        exits = stage.rooms_of_type(RoomType.EXIT)
        assert len(exits) == 1
        assert exits[0].position != stage.start


def test_exit_is_a_leaf():
    for seed in range(10):
        stage = generate_stage(30, seed=seed)
        cells = occupied_set(stage)
        rest = cells - {stage.exit}
        assert reachable_from(stage.start, rest) == rest
        # the exit's only neighbor is its parent; without it the exit is isolated
        parent = stage.exit.step(stage.room_at(stage.exit).doors.open_directions()[0])
        assert reachable_from(stage.exit, cells - {parent}) == {stage.exit}


def test_exit_is_furthest_dead_end():
    stage = generate_stage(50, seed=77)
    start = stage.start

    def dist(p):
        return ((p.row - start.row) ** 2 + (p.col - start.col) ** 2) ** 0.5

    dead_ends = [r.position for r in stage.occupied_rooms() if r.doors.count == 1]
    best = max(dist(p) for p in dead_ends)
    assert dist(stage.exit) == pytest.approx(best)
