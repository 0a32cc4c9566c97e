import random

import pytest

from conftest import StubRandom
from tile import Tile


def test_create_keeps_value_and_starts_unmerged():
    tile = Tile.create(8)
    assert tile.value == 8
    assert tile.has_merged is False


def test_create_allows_display_placeholder():
    assert Tile.create(0).value == 0


@pytest.mark.parametrize("draw, expected", [(0.0, 2), (0.89, 2), (0.9, 4), (0.99, 4)])
def test_create_random_uses_ninety_percent_twos(draw, expected):
    rng = StubRandom(draw)
    assert Tile.create_random(rng).value == expected
    assert rng.calls == 1


def test_create_random_with_default_source():
    for _ in range(50):
        assert Tile.create_random().value in (2, 4)


def test_create_random_distribution_with_seeded_source():
    rng = random.Random(2048)
    fours = sum(Tile.create_random(rng).value == 4 for _ in range(5000))
    assert 350 < fours < 650
