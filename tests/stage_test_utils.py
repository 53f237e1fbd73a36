"""Helpers shared by the stage tests."""

from stagegen.stage.cells import GridCoordinate


class ScriptedRandomSource:
    """RandomSource fake that replays a fixed list of indices.

    ``choice`` returns ``collection[next_index]``; ``integer`` returns
    ``low + next_index``; ``boolean`` returns ``bool(next_index)``. Once the
    script runs out the last value repeats, which makes stall scenarios easy
    to build.
    """

    def __init__(self, script):
        self.script = list(script)
        self.calls = 0

    def _next(self):
        if not self.script:
            raise AssertionError("empty script")
        idx = self.script[min(self.calls, len(self.script) - 1)]
        self.calls += 1
        return idx

    def boolean(self):
        return bool(self._next())

    def integer(self, low, high_exclusive):
        return low + self._next()

    def choice(self, collection):
        items = list(collection)
        return items[self._next()]


class ExplodingRandomSource:
    """RandomSource that fails the test if any entropy is requested."""

    def boolean(self):
        raise AssertionError("random source used")

    def integer(self, low, high_exclusive):
        raise AssertionError("random source used")

    def choice(self, collection):
        raise AssertionError("random source used")


# Four-room walk on the 4x4 grid (start at (2,2)), see test_stage_shape.
FOUR_ROOM_SCRIPT = [0, 0, 1, 1, 0, 2, 1, 2, 2, 1]
FOUR_ROOM_CELLS = {
    GridCoordinate(2, 2),
    GridCoordinate(1, 2),
    GridCoordinate(2, 3),
    GridCoordinate(3, 3),
}
