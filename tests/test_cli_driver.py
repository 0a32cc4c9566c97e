import pytest

from board import Board
from cli_driver import CliGame, TextRenderer, main
from conftest import StubRandom
from settings import GameSettings, ViewSettings


@pytest.fixture
def game():
    board = Board(4, rng=StubRandom(0.95))
    board.load_values([[2, 2, 0, 0], [0] * 4, [0] * 4, [0] * 4])
    output = []
    return CliGame(board, TextRenderer(ViewSettings(cell_width=5)), write=output.append), output


def test_renderer_draws_score_status_and_grid():
    board = Board(2, rng=StubRandom(0.95))
    board.load_values([[2, 0], [0, 16]])
    lines = TextRenderer(ViewSettings(cell_width=4, show_empty_as="-")).render(board.snapshot())
    assert lines[0] == "Score: 0    Best: 0"
    assert lines[1] == "Status: IN_PROGRESS"
    assert lines[2] == "   2   -"
    assert lines[3] == "   -  16"
    assert lines[4] == "-" * 8


def test_renderer_shows_loss_banner():
    board = Board(2, rng=StubRandom(0.95))
    board.load_values([[2, 4], [4, 2]])
    board.is_game_over()
    assert TextRenderer().render(board.snapshot())[1] == "YOU LOSE! :("


def test_move_key_moves_board(game):
    cli, _ = game
    assert cli.handle_key("a")
    assert cli.board.values()[0] == [4, 0, 0, 0]
    assert cli.board.score == 4


def test_invalid_key_reports_and_continues(game):
    cli, output = game
    before = cli.board.values()
    assert cli.handle_key("x")
    assert cli.board.values() == before
    assert output and output[-1].startswith("Invalid input")


def test_quit_key_stops(game):
    cli, _ = game
    assert cli.handle_key("q") is False


def test_new_game_key_restarts(game):
    cli, _ = game
    cli.handle_key("A")
    cli.handle_key("N")
    assert cli.board.score == 0
    assert cli.board.best == 4


def test_moves_ignored_after_win(game):
    cli, _ = game
    cli.board.load_values([[1024, 1024, 0, 0], [0] * 4, [0] * 4, [0] * 4])
    cli.handle_key("A")
    before = cli.board.values()
    cli.handle_key("D")
    assert cli.board.values() == before
    assert cli.board.has_won


def test_run_plays_scripted_keys(game):
    cli, output = game
    keys = iter(["A", "Q"])
    cli.read_key = lambda prompt: next(keys)
    cli.run()
    assert cli.board.score == 4
    assert output[-1] == "Quitting game."
    assert any(line.startswith("Score: 4") for line in output)


def test_run_stops_at_end_of_input(game):
    cli, _ = game

    def no_input(prompt):
        raise EOFError

    cli.read_key = no_input
    cli.run()
    assert cli.board.score == 0


def test_main_builds_board_from_settings(monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", lambda prompt: "Q")
    main(GameSettings(size=3))
    out = capsys.readouterr().out
    assert "Quitting game." in out
    assert out.count("\n") >= 5
