# cli_driver.py
# This file is intended to be run to play the 2048 game on the CLI

import logging
from typing import Callable, List, Optional

from board import DIRECTION, Board, BoardSnapshot, GameProgressState
from settings import GameSettings, ViewSettings

logger = logging.getLogger(__name__)

KEY_BINDINGS = {'W': DIRECTION.UP, 'A': DIRECTION.LEFT, 'S': DIRECTION.DOWN, 'D': DIRECTION.RIGHT}
NEW_GAME_KEY = 'N'
QUIT_KEY = 'Q'


class TextRenderer:
    """Turns a board snapshot into printable lines."""

    def __init__(self, view: Optional[ViewSettings] = None):
        self.view = view if view is not None else ViewSettings()

    def render(self, snapshot: BoardSnapshot) -> List[str]:
        width = self.view.cell_width
        lines = [f"Score: {snapshot.score}    Best: {snapshot.best}"]
        status_message = {
            GameProgressState.IN_PROGRESS: f"Status: {snapshot.progress.name}",
            GameProgressState.GAME_WON: "YOU WIN! :)",
            GameProgressState.GAME_OVER: "YOU LOSE! :(",
        }
        lines.append(status_message[snapshot.progress])
        for row in snapshot.board:
            cells = [str(value) if value else self.view.show_empty_as for value in row]
            lines.append("".join(cell.rjust(width) for cell in cells))
        lines.append("-" * (snapshot.board_size * width))
        return lines


class CliGame:
    """
    Keyboard-driven presentation of a Board.
    Holds the board and a renderer; neither knows about the other.
    """

    def __init__(self, board: Board, renderer: TextRenderer,
                 read_key: Optional[Callable[[str], str]] = None,
                 write: Optional[Callable[[str], None]] = None):
        self.board = board
        self.renderer = renderer
        self.read_key = read_key if read_key is not None else input
        self.write = write if write is not None else print

    def display(self) -> None:
        for line in self.renderer.render(self.board.snapshot()):
            self.write(line)

    def handle_key(self, key: str) -> bool:
        """
        Applies one key press to the board.
        Args:
            key (str): The raw key text.
        Returns:
            bool: False when the player asked to quit, True otherwise.
        """
        key = key.strip().upper()
        if key == QUIT_KEY:
            return False
        if key == NEW_GAME_KEY:
            self.board.start_new_game()
            return True

        direction = KEY_BINDINGS.get(key)
        if direction is None:
            self.write("Invalid input. Use W, A, S, D (N for a new game, Q to quit).")
            return True

        if not self.board.is_over:
            self.board.move(direction)
        self.board.is_game_over()
        return True

    def run(self) -> None:
        self.display()
        while True:
            try:
                key = self.read_key("Enter move (W/A/S/D, N for new game, Q to quit): ")
            except EOFError:
                break
            if not self.handle_key(key):
                self.write("Quitting game.")
                break
            self.display()
        logger.info("Session ended with score %d, best %d", self.board.score, self.board.best)


def main(settings: Optional[GameSettings] = None, view: Optional[ViewSettings] = None):
    settings = settings if settings is not None else GameSettings.from_env()
    logging.basicConfig(level=settings.log_level,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")
    game = CliGame(Board.from_settings(settings), TextRenderer(view))
    game.run()


if __name__ == "__main__":
    main()
