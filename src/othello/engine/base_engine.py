from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import List, Optional

from othello.protocol.constants import Command, Response
from othello.protocol.interface import EngineInterface
from othello.engine import game
from othello.engine.board import BoardSizeError, Color, Coordinate, CoordinateParseError, parse_coordinate
from othello.engine.game import GameOverError, GameState, MoveResult
from othello.engine.rules import InvalidMoveError


class BaseEngine(EngineInterface, ABC):
    """Shared command handling and game bookkeeping for engines."""

    def __init__(self, board_size: int = 8, rng_seed: int | None = None):
        super().__init__()
        self.board_size = board_size
        self._rng = random.Random(rng_seed)
        self.state: GameState = game.new_game(board_size, self._rng)
        self._running = False

    # ------------------------------------------------------------------
    # EngineInterface lifecycle
    # ------------------------------------------------------------------
    def start(self):
        self._running = True
        self._emit(Response.READY)

    def stop(self):
        self._running = False

    # ------------------------------------------------------------------
    # Command handling
    # ------------------------------------------------------------------
    def send_command(self, command: str):
        if not self._running:
            return

        parts = command.split()
        if not parts:
            return

        cmd = parts[0].upper()

        if cmd == Command.INIT:
            self._handle_init()
        elif cmd == Command.NEWGAME:
            self._handle_newgame(parts)
        elif cmd == Command.PLAY:
            self._handle_play(parts)
        elif cmd == Command.GENMOVE:
            self._handle_genmove()
        elif cmd == Command.BOARD:
            self._emit_board_update()
        elif cmd == Command.VALID_MOVES:
            self._handle_valid_moves(parts)
        elif cmd == Command.SCORE:
            self._emit_score()
        else:
            self._emit(f"{Response.ERROR} Unknown command {parts[0]}")

    # ------------------------------------------------------------------
    # Shared handlers
    # ------------------------------------------------------------------
    def _handle_init(self):
        self.state = game.new_game(self.board_size, self._rng)
        self._emit(Response.READY)

    def _handle_newgame(self, parts):
        size = self.board_size
        if len(parts) > 1:
            try:
                size = int(parts[1])
                self.state = game.new_game(size, self._rng)
            except (ValueError, BoardSizeError) as exc:
                self._emit(f"{Response.ERROR} Invalid board size: {exc}")
                return
            self.board_size = size
        else:
            self.state = game.new_game(size, self._rng)
        self._emit(Response.OK)
        self._emit_board_update()
        self._check_game_state()

    def _handle_play(self, parts):
        if len(parts) < 2:
            self._emit(f"{Response.ERROR} Missing coordinate")
            return

        try:
            coord = parse_coordinate(parts[1], self.state.size)
        except CoordinateParseError as exc:
            self._emit(f"{Response.ERROR} Invalid coordinate {parts[1]}: {exc}")
            return

        result = self._apply(coord)
        if result is not None:
            self._emit(Response.OK)
            self._after_move(result)

    def _handle_genmove(self):
        if self.state.terminal:
            self._emit(f"{Response.ERROR} Game over")
            return

        color = self.state.active
        valid_moves = game.legal_moves(self.state, color)
        move = self._pick_move(self.state.snapshot(), color, valid_moves)
        if move is None or move not in valid_moves:
            move = valid_moves[0]

        result = self._apply(move)
        if result is not None:
            self._emit(f"{Response.MOVE} {move}")
            self._after_move(result)

    def _handle_valid_moves(self, parts):
        color = self.state.active
        if len(parts) > 1:
            try:
                color = parse_color(parts[1])
            except ValueError as exc:
                self._emit(f"{Response.ERROR} {exc}")
                return
        moves = game.legal_moves(self.state, color)
        self._emit(" ".join([Response.VALID_MOVES] + [str(coord) for coord in moves]))

    def _apply(self, coord: Coordinate) -> Optional[MoveResult]:
        try:
            return game.apply_move(self.state, coord, self.state.active)
        except GameOverError:
            self._emit(f"{Response.ERROR} Game over")
        except InvalidMoveError as exc:
            self._emit(f"{Response.ERROR} Illegal move {coord}: {exc}")
        return None

    def _after_move(self, result: MoveResult):
        if result.skipped is not None:
            self._emit(f"{Response.PASS} {result.skipped.name}")
        self._emit_board_update()
        self._check_game_state()

    @abstractmethod
    def _pick_move(
        self,
        state_snapshot: GameState,
        color: Color,
        valid_moves: List[Coordinate],
    ) -> Optional[Coordinate]:
        """Return the chosen move or None to force fallback."""

    # ------------------------------------------------------------------
    # State reporting
    # ------------------------------------------------------------------
    def _check_game_state(self):
        if not self.state.terminal:
            return
        winner = game.winner(self.state)
        if isinstance(winner, Color):
            self._emit(f"{Response.RESULT} {winner.name} {game.winning_percentage(self.state)}")
        else:
            self._emit(f"{Response.RESULT} TIE")

    def _emit_score(self):
        scores = game.scores(self.state)
        self._emit(f"{Response.SCORE} {scores.black} {scores.white}")

    def _emit_board_update(self):
        state_str = self.state.board.to_state_string()
        self._emit(f"{Response.BOARD} {self.state.size} {self.state.active.name} {state_str}")


def parse_color(text: str) -> Color:
    token = text.strip().upper()
    for color in Color:
        if token in (color.name, color.abbreviation):
            return color
    raise ValueError(f"Unknown color {text}")
