"""Shape generator tests: room counts, grid sizing, tree property, retry budget."""

from __future__ import annotations

import pytest

from stagegen.stage import GenerationFailed, InvalidStageInfo, SeededRandomSource, ShapeGenerator, StageShape
from stagegen.stage.cells import GridCoordinate
from stagegen.stage.debug_checks import count_edges, reachable_from
from stagegen.stage.metrics import init_metrics
from stagegen.stage.shape import center_of, grid_size_for
from tests.stage_test_utils import FOUR_ROOM_CELLS, FOUR_ROOM_SCRIPT, ExplodingRandomSource, ScriptedRandomSource


def gen(rooms: int, seed: int = 1234) -> StageShape:
    return ShapeGenerator(SeededRandomSource(seed)).generate(rooms)


@pytest.mark.parametrize(
    "rooms,size",
    [(1, 1), (2, 2), (3, 2), (4, 4), (8, 4), (9, 6), (15, 6), (16, 8), (100, 20), (101, 20)],
)
def test_grid_size_formula(rooms, size):
    assert grid_size_for(rooms) == size


def test_center_cell():
    assert center_of(1) == GridCoordinate(0, 0)
    assert center_of(2) == GridCoordinate(1, 1)
    assert center_of(20) == GridCoordinate(10, 10)


@pytest.mark.parametrize("rooms", [1, 2, 3, 4, 5, 10, 25, 50, 100])
def test_exact_room_count(rooms):
    for seed in (1, 2, 3):
        shape = gen(rooms, seed)
        assert shape.rooms_count == rooms
        assert len(shape.occupied) == rooms
        assert shape.is_occupied(shape.start)


@pytest.mark.parametrize("rooms", [2, 7, 30, 100])
def test_occupied_cells_form_tree(rooms):
    for seed in range(5):
        shape = gen(rooms, seed)
        cells = set(shape.occupied_cells())
        assert count_edges(cells) == rooms - 1, f"seed {seed} produced a cycle"
        assert reachable_from(shape.start, cells) == cells, f"seed {seed} produced a split shape"


def test_single_room_has_no_walk():
    shape = ShapeGenerator(ExplodingRandomSource()).generate(1)
    assert shape.size == 1
    assert shape.start == GridCoordinate(0, 0)
    assert shape.cells == [[True]]


@pytest.mark.parametrize("bad", [0, -1, -100, 2.5, "4", None, True])
def test_invalid_room_count_rejected_before_work(bad):
    with pytest.raises(InvalidStageInfo):
        ShapeGenerator(ExplodingRandomSource()).generate(bad)


def test_invalid_room_count_is_value_error():
    with pytest.raises(ValueError):
        gen(0)


def test_scripted_four_room_walk():
    metrics = init_metrics()
    shape = ShapeGenerator(ScriptedRandomSource(FOUR_ROOM_SCRIPT)).generate(4, metrics)
    assert shape.size == 4
    assert shape.start == GridCoordinate(2, 2)
    assert set(shape.occupied_cells()) == FOUR_ROOM_CELLS
    assert shape.occupied == [
        GridCoordinate(2, 2),
        GridCoordinate(1, 2),
        GridCoordinate(2, 3),
        GridCoordinate(3, 3),
    ]
    assert metrics["attempts"] == 5
    assert metrics["rejected_occupied"] == 1
    assert metrics["rejected_crowded"] == 1
    assert metrics["rejected_isolated"] == 0
    assert metrics["rooms_placed"] == 4


def test_scripted_walk_is_reproducible():
    a = ShapeGenerator(ScriptedRandomSource(FOUR_ROOM_SCRIPT)).generate(4)
    b = ShapeGenerator(ScriptedRandomSource(FOUR_ROOM_SCRIPT)).generate(4)
    assert a.cells == b.cells
    assert a.occupied == b.occupied


def test_stalled_walk_raises_generation_failed():
    # Always choosing index 0 keeps re-picking the start's north neighbor once it is taken.
    generator = ShapeGenerator(ScriptedRandomSource([0]), stall_budget_factor=1)
    metrics = init_metrics()
    with pytest.raises(GenerationFailed) as exc:
        generator.generate(4, metrics)
    err = exc.value
    assert err.rooms_count == 4
    assert err.rooms_placed == 2
    # one accepted step plus a full budget (1 * 4 * 4) of rejections
    assert err.attempts == 1 + 16
    assert metrics["rejected_occupied"] == 16


def test_rejections_never_see_isolated_candidates():
    for rooms in (10, 50, 100):
        for seed in range(5):
            metrics = init_metrics()
            ShapeGenerator(SeededRandomSource(seed)).generate(rooms, metrics)
            assert metrics["rejected_isolated"] == 0
            assert metrics["attempts"] == (
                rooms - 1 + metrics["rejected_occupied"] + metrics["rejected_crowded"]
            )


def test_from_rows_round_trip():
    shape = StageShape.from_rows([".#", "##"], GridCoordinate(1, 1))
    assert shape.size == 2
    assert shape.rooms_count == 3
    assert shape.is_occupied(GridCoordinate(0, 1))
    assert not shape.is_occupied(GridCoordinate(0, 0))
    assert not shape.is_occupied(GridCoordinate(-1, 0))
    assert list(shape.occupied_cells()) == [GridCoordinate(0, 1), GridCoordinate(1, 0), GridCoordinate(1, 1)]
