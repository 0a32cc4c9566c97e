# board.py
# The stateful rules engine for a 2048 game: grid, moves, merges, spawns and scoring.

import logging
import random
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from settings import GameSettings
from tile import Tile

logger = logging.getLogger(__name__)

WIN_TILE = 2048

Cell = Tuple[int, int]


class GameProgressState(Enum):
    """Represents the current progress state of the game."""
    IN_PROGRESS = 1
    GAME_OVER = 2  # Lost
    GAME_WON = 3


class DIRECTION(Enum):
    """Represents the possible move directions."""
    UP = 1
    DOWN = 2
    LEFT = 3
    RIGHT = 4


class BoardSnapshot(BaseModel):
    """Read-only view of a board handed to presentation code."""
    board: List[List[int]] = Field(..., description="The N x N grid, 0 for empty cells.")
    score: int = Field(..., ge=0, description="Current score of the game.")
    best: int = Field(..., ge=0, description="Best score reached by this board.")
    progress: GameProgressState = Field(
        ...,
        description="Current progress state of the game (IN_PROGRESS, GAME_WON, GAME_OVER)."
    )
    win_tile: int = Field(..., gt=0, description="The tile value required to win.")
    board_size: int = Field(..., gt=0, description="The dimension N of the N x N board.")


def _is_tile_value(value: int) -> bool:
    return value >= 2 and value & (value - 1) == 0


class Board:
    """
    An N x N board of optional tiles.

    Every move gathers each line from the edge being moved toward, merges it
    into a fresh list and writes it back flush against that edge. A successful
    move always spawns exactly one tile.
    """

    def __init__(self, size: int = 4, rng: Optional[random.Random] = None,
                 win_tile: int = WIN_TILE):
        """
        Args:
            size (int): The dimension of the N x N board.
            rng (Optional[random.Random]): Random source for spawns; module-level if omitted.
            win_tile (int): The tile value that wins the game.
        Raises:
            ValueError: If size or win_tile is not a positive integer.
        """
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            raise ValueError("Board size must be a positive integer.")
        if isinstance(win_tile, bool) or not isinstance(win_tile, int) or win_tile <= 0:
            raise ValueError("Win tile must be a positive integer.")

        self._size = size
        self._rng = rng if rng is not None else random.Random()
        self._win_tile = win_tile
        self._grid: List[List[Optional[Tile]]] = []
        self._score = 0
        self._best = 0
        self.is_over = False
        self.has_won = False

        self._lines: Dict[DIRECTION, List[List[Cell]]] = self._build_lines(size)
        self._moves: Dict[DIRECTION, Callable[[], None]] = {
            DIRECTION.UP: self.move_up,
            DIRECTION.DOWN: self.move_down,
            DIRECTION.LEFT: self.move_left,
            DIRECTION.RIGHT: self.move_right,
        }

        self.start_new_game()

    @classmethod
    def from_settings(cls, settings: GameSettings, rng: Optional[random.Random] = None) -> "Board":
        """Creates a board sized and configured by `settings`."""
        return cls(settings.size, rng=rng, win_tile=settings.win_tile)

    @staticmethod
    def _build_lines(size: int) -> Dict[DIRECTION, List[List[Cell]]]:
        # Each line lists its cells from the edge being moved toward to the far edge.
        near_to_far = list(range(size))
        far_to_near = near_to_far[::-1]
        return {
            DIRECTION.LEFT: [[(r, c) for c in near_to_far] for r in range(size)],
            DIRECTION.RIGHT: [[(r, c) for c in far_to_near] for r in range(size)],
            DIRECTION.UP: [[(r, c) for r in near_to_far] for c in range(size)],
            DIRECTION.DOWN: [[(r, c) for r in far_to_near] for c in range(size)],
        }

    # --- Queries ---

    @property
    def size(self) -> int:
        return self._size

    @property
    def win_tile(self) -> int:
        return self._win_tile

    @property
    def score(self) -> int:
        return self._score

    @property
    def best(self) -> int:
        return self._best

    def get_score(self) -> int:
        return self._score

    def get_best(self) -> int:
        return self._best

    @property
    def progress(self) -> GameProgressState:
        if self.has_won:
            return GameProgressState.GAME_WON
        if self.is_over:
            return GameProgressState.GAME_OVER
        return GameProgressState.IN_PROGRESS

    def tile_at(self, row: int, col: int) -> Optional[Tile]:
        """
        Gets the tile at a cell.
        Args:
            row (int): Row index.
            col (int): Column index.
        Returns:
            Optional[Tile]: The tile, or None if the cell is empty.
        Raises:
            IndexError: If the cell lies outside the board.
        """
        if not (0 <= row < self._size and 0 <= col < self._size):
            raise IndexError(f"Cell ({row}, {col}) is outside a {self._size}x{self._size} board.")
        return self._grid[row][col]

    def values(self) -> List[List[int]]:
        """Returns a copy of the grid as tile values, with 0 for empty cells."""
        return [[tile.value if tile is not None else 0 for tile in row] for row in self._grid]

    def empty_cells(self) -> List[Cell]:
        """Returns (row, col) of every empty cell in row-major order."""
        return [(r, c) for r in range(self._size) for c in range(self._size)
                if self._grid[r][c] is None]

    def snapshot(self) -> BoardSnapshot:
        return BoardSnapshot(
            board=self.values(),
            score=self._score,
            best=self._best,
            progress=self.progress,
            win_tile=self._win_tile,
            board_size=self._size,
        )

    # --- Game lifecycle ---

    def start_new_game(self) -> None:
        """Clears the grid, score and terminal flags and spawns two tiles. Keeps the best score."""
        self._grid = [[None] * self._size for _ in range(self._size)]
        self._score = 0
        self.is_over = False
        self.has_won = False
        self.add_random_tile()
        self.add_random_tile()
        logger.info("New %dx%d game started (best so far: %d)", self._size, self._size, self._best)

    def load_values(self, values: List[List[int]]) -> None:
        """
        Replaces the grid with the given values without spawning. Score and flags are kept.
        Args:
            values (List[List[int]]): N x N values, 0 for empty cells.
        Raises:
            ValueError: If the shape does not match the board or a value is not a tile value.
        """
        if len(values) != self._size or not all(len(row) == self._size for row in values):
            raise ValueError(f"Grid must be a {self._size}x{self._size} matrix.")
        for row in values:
            for value in row:
                if value != 0 and not _is_tile_value(value):
                    raise ValueError(f"Invalid tile value: {value}")
        self._grid = [[Tile.create(value) if value else None for value in row] for row in values]

    def add_random_tile(self) -> bool:
        """
        Places a random tile (see Tile.create_random) in a uniformly chosen empty cell.
        Returns:
            bool: False if the board is full (nothing changes), True otherwise.
        """
        empty = self.empty_cells()
        if not empty:
            return False

        remaining = len(empty)
        target = empty[-1]  # Fallback if no draw lands
        for cell in empty:
            if self._rng.random() < 1.0 / remaining:
                target = cell
                break
            remaining -= 1

        row, col = target
        self._grid[row][col] = Tile.create_random(self._rng)
        logger.debug("Spawned %d at (%d, %d)", self._grid[row][col].value, row, col)
        return True

    # --- Moves ---

    def move(self, direction: DIRECTION) -> None:
        """
        Moves all tiles in the given direction.
        Raises:
            ValueError: If an invalid direction is specified.
        """
        if not isinstance(direction, DIRECTION):
            raise ValueError(f"Invalid direction specified for move: {direction!r}")
        self._moves[direction]()

    def move_up(self) -> None:
        self._move(DIRECTION.UP)

    def move_down(self) -> None:
        self._move(DIRECTION.DOWN)

    def move_left(self) -> None:
        self._move(DIRECTION.LEFT)

    def move_right(self) -> None:
        self._move(DIRECTION.RIGHT)

    def _move(self, direction: DIRECTION) -> None:
        if self.is_over or not self.possible(direction):
            return

        new_grid: List[List[Optional[Tile]]] = [[None] * self._size for _ in range(self._size)]
        for line in self._lines[direction]:
            tiles = [self._grid[r][c] for r, c in line if self._grid[r][c] is not None]
            for (r, c), tile in zip(line, self._merge_tiles(tiles)):
                new_grid[r][c] = tile
        self._grid = new_grid

        self.add_random_tile()
        if not self.has_won:
            self.is_game_over()

    def _merge_tiles(self, tiles: List[Tile]) -> List[Tile]:
        """
        Merges one line of tiles ordered from the near edge to the far edge.
        A merged tile is compared again with the next tile but cannot merge twice.
        Args:
            tiles (List[Tile]): The non-empty tiles of the line.
        Returns:
            List[Tile]: The merged line, merge flags cleared.
        """
        merged: List[Tile] = []
        for tile in tiles:
            last = merged[-1] if merged else None
            if (last is not None and last.value == tile.value
                    and not last.has_merged and not tile.has_merged):
                new_tile = Tile(last.value + tile.value, has_merged=True)
                merged[-1] = new_tile
                self._record_merge(new_tile.value)
            else:
                merged.append(tile)

        for tile in merged:
            tile.has_merged = False
        return merged

    def _record_merge(self, value: int) -> None:
        self._score += value
        self._best = max(self._best, self._score)
        logger.debug("Merged into %d, score is now %d", value, self._score)
        if value >= self._win_tile and not self.has_won:
            self.is_over = True
            self.has_won = True
            logger.info("Reached %d with score %d", value, self._score)

    # --- Game State Checks ---

    def possible(self, direction: DIRECTION) -> bool:
        """
        Checks whether any tile can slide or merge in the given direction.
        Args:
            direction (DIRECTION): The direction to check.
        Returns:
            bool: True if a move in that direction would change the board.
        """
        for line in self._lines[direction]:
            for (near_r, near_c), (far_r, far_c) in zip(line, line[1:]):
                near = self._grid[near_r][near_c]
                far = self._grid[far_r][far_c]
                if far is None:
                    continue
                if near is None or near.value == far.value:
                    return True
        return False

    def possible_up(self) -> bool:
        return self.possible(DIRECTION.UP)

    def possible_down(self) -> bool:
        return self.possible(DIRECTION.DOWN)

    def possible_left(self) -> bool:
        return self.possible(DIRECTION.LEFT)

    def possible_right(self) -> bool:
        return self.possible(DIRECTION.RIGHT)

    def is_game_over(self) -> bool:
        """
        Marks the game lost when no direction allows a move. A recorded win is kept.
        Returns:
            bool: The resulting is_over flag.
        """
        if self.has_won:
            return self.is_over
        if not any(self.possible(direction) for direction in DIRECTION):
            if not self.is_over:
                logger.info("No moves left, game over with score %d", self._score)
            self.is_over = True
            self.has_won = False
        return self.is_over
