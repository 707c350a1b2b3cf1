from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from othello.engine import rules
from othello.engine.board import DEFAULT_BOARD_SIZE, Board, Color, Coordinate
from othello.engine.rules import Closure, InvalidMoveError, Scores

logger = logging.getLogger(__name__)


class Tie(Enum):
    TIE = "TIE"

    def __str__(self) -> str:
        return "tie"


TIE = Tie.TIE

Winner = Union[Color, Tie]


class GameOverError(ValueError):
    pass


@dataclass(frozen=True)
class MoveRecord:
    color: Color
    coord: Coordinate
    flip_count: int


@dataclass(frozen=True)
class MoveResult:
    closures: List[Closure]
    flipped: List[Coordinate]
    skipped: Optional[Color] = None
    terminal: bool = False

    @property
    def flip_count(self) -> int:
        return len(self.flipped)


@dataclass
class GameState:
    """Everything the turn controller owns for a single game."""

    board: Board
    active: Color
    scores: Scores
    terminal: bool = False
    winner: Optional[Winner] = None
    last_skipped: Optional[Color] = None
    history: List[MoveRecord] = field(default_factory=list)

    @property
    def size(self) -> int:
        return self.board.size

    def snapshot(self) -> "GameState":
        """Independent copy for readers that must not see a move half applied."""
        return GameState(
            board=self.board.clone(),
            active=self.active,
            scores=self.scores,
            terminal=self.terminal,
            winner=self.winner,
            last_skipped=self.last_skipped,
            history=list(self.history),
        )


def new_game(size: int = DEFAULT_BOARD_SIZE, rng: Optional[random.Random] = None) -> GameState:
    rng = rng or random.Random()
    board = Board(size)
    board.place_starting_pieces()

    # Pick first player at random
    active = rng.choice([Color.BLACK, Color.WHITE])
    state = GameState(board=board, active=active, scores=rules.count_pieces(board))
    _settle_turn(state, active)
    logger.debug("New %dx%d game, %s to move", size, size, state.active)
    return state


def restore_game(board: Board, active: Color) -> GameState:
    """Rebuild a state around an existing board, e.g. one received from a peer."""
    state = GameState(board=board, active=active, scores=rules.count_pieces(board))
    _settle_turn(state, active)
    return state


def _settle_turn(state: GameState, candidate: Color):
    """Hand the turn to ``candidate`` or, failing that, its opponent; otherwise end the game."""
    state.last_skipped = None
    if rules.has_legal_move(state.board, candidate):
        state.active = candidate
        return

    logger.debug("No valid moves for %s.", candidate)
    other = candidate.opponent
    if rules.has_legal_move(state.board, other):
        state.active = other
        state.last_skipped = candidate
        return

    state.active = other
    _finish(state)


def _finish(state: GameState):
    state.terminal = True
    black, white = state.scores.black, state.scores.white
    if black == white:
        state.winner = TIE
    elif black > white:
        state.winner = Color.BLACK
    else:
        state.winner = Color.WHITE
    logger.debug("Game over: black %d, white %d, winner %s", black, white, state.winner)


def apply_move(state: GameState, coord: Coordinate, color: Color) -> MoveResult:
    if state.terminal:
        raise GameOverError("The game is over, no further moves are accepted")
    if color is not state.active:
        raise InvalidMoveError(coord, InvalidMoveError.WRONG_TURN, f"It is {state.active}'s turn, not {color}'s")

    closures = rules.validate_move(state.board, coord, color)

    state.board.set(coord, color)
    flipped = rules.flip_pieces(state.board, closures, color)
    state.scores = rules.count_pieces(state.board)
    state.history.append(MoveRecord(color=color, coord=coord, flip_count=len(flipped)))

    _settle_turn(state, color.opponent)
    return MoveResult(
        closures=closures,
        flipped=flipped,
        skipped=state.last_skipped,
        terminal=state.terminal,
    )


def legal_moves(state: GameState, color: Color) -> List[Coordinate]:
    return rules.legal_moves(state.board, color)


def scores(state: GameState) -> Scores:
    return state.scores


def is_terminal(state: GameState) -> bool:
    return state.terminal


def winner(state: GameState) -> Optional[Winner]:
    """The winning color or TIE once the game is over, None while it is running."""
    return state.winner


def winning_percentage(state: GameState) -> Optional[int]:
    if not isinstance(state.winner, Color):
        return None
    return state.scores.percentage(state.winner)
