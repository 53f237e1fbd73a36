import pytest

from stagegen.stage import SeededRandomSource


def test_seeded_sources_repeat():
    a = SeededRandomSource(123)
    b = SeededRandomSource(123)
    seq_a = [a.integer(0, 100) for _ in range(20)] + [a.boolean() for _ in range(20)]
    seq_b = [b.integer(0, 100) for _ in range(20)] + [b.boolean() for _ in range(20)]
    assert seq_a == seq_b


def test_integer_range_is_half_open():
    rng = SeededRandomSource(1)
    values = {rng.integer(3, 6) for _ in range(300)}
    assert values == {3, 4, 5}
    assert SeededRandomSource(2).integer(7, 8) == 7


def test_integer_empty_range():
    with pytest.raises(ValueError):
        SeededRandomSource(1).integer(5, 5)


def test_boolean_yields_both_values():
    rng = SeededRandomSource(99)
    assert {rng.boolean() for _ in range(200)} == {True, False}


def test_choice_over_sequences_and_sets():
    rng = SeededRandomSource(5)
    items = ["a", "b", "c"]
    assert {rng.choice(items) for _ in range(200)} == set(items)
    assert rng.choice({"only"}) == "only"
    assert rng.choice(frozenset({1, 2})) in {1, 2}


def test_choice_empty():
    with pytest.raises(ValueError):
        SeededRandomSource().choice([])
