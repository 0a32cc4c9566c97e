import pytest


class StubRandom:
    """Random source replaying fixed values; the last value repeats once exhausted."""

    def __init__(self, *values):
        self.set(*values)

    def set(self, *values):
        self._values = list(values) or [0.0]
        self._index = 0
        self.calls = 0

    def random(self):
        value = self._values[min(self._index, len(self._values) - 1)]
        self._index += 1
        self.calls += 1
        return value


@pytest.fixture
def stub_random():
    # 0.95 sends spawns to the last empty cell and makes them 4s
    return StubRandom(0.95)


@pytest.fixture
def empty_board(stub_random):
    from board import Board

    board = Board(4, rng=stub_random)
    board.load_values([[0] * 4 for _ in range(4)])
    stub_random.set(0.95)
    return board
