from othello.engine import game
from othello.engine.board import Board, Color


def board_from_rows(*rows: str) -> Board:
    """Build a board from one string per row, ``B``/``W``/``.`` per cell."""
    return Board.from_state_string(len(rows), "".join(rows))


def state_from_rows(active: Color, *rows: str) -> game.GameState:
    return game.restore_game(board_from_rows(*rows), active)
