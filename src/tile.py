# tile.py
# A single grid cell value for the 2048 board.

import random
from dataclasses import dataclass
from typing import Optional

SPAWN_TWO_PROBABILITY = 0.9


@dataclass
class Tile:
    """
    A tile holding a power-of-two value.
    The value never changes after creation; a merge builds a new Tile.
    `has_merged` is only meaningful during a single merge pass.
    """
    value: int
    has_merged: bool = False

    @classmethod
    def create(cls, value: int) -> "Tile":
        """
        Creates a tile with an explicit value (0 is allowed for display placeholders).
        Args:
            value (int): The tile value.
        Returns:
            Tile: The new tile.
        """
        return cls(value)

    @classmethod
    def create_random(cls, rng: Optional[random.Random] = None) -> "Tile":
        """
        Creates a spawn tile (90% chance of 2, 10% chance of 4).
        Args:
            rng (Optional[random.Random]): Random source; the module-level one if omitted.
        Returns:
            Tile: The new tile.
        """
        source = rng if rng is not None else random
        return cls(2 if source.random() < SPAWN_TWO_PROBABILITY else 4)
