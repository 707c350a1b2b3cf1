from __future__ import annotations

import random
import time
from typing import Callable, Optional

from othello.engine import game
from othello.engine.board import Color, Coordinate, CoordinateParseError, parse_coordinate
from othello.engine.game import GameState, MoveResult
from othello.engine.heuristic import choose_auto_move
from othello.engine.rules import InvalidMoveError

# Delay for dramatic effect between autopilot moves
AUTOPILOT_DELAY = 0.25

AUTO_MOVE = "-"
AUTOPILOT = "autopilot"
QUIT = "quit"


class ConsoleGame:
    """Interactive prompt loop around a single game."""

    def __init__(
        self,
        state: GameState,
        rng: random.Random | None = None,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print,
        sleep_func: Callable[[float], None] = time.sleep,
        autopilot_delay: float = AUTOPILOT_DELAY,
    ):
        self.state = state
        self.rng = rng or random.Random()
        self.read = input_func
        self.write = output_func
        self.sleep = sleep_func
        self.autopilot_delay = autopilot_delay
        self.autopilot = False

    def draw_board_and_scores(self):
        scores = game.scores(self.state)
        self.write(self.state.board.render())
        self.write(f"Black: {scores.black}, White: {scores.white}")

    def run(self):
        while not game.is_terminal(self.state):
            self.draw_board_and_scores()
            color = self.state.active

            if self.autopilot:
                self.sleep(self.autopilot_delay)
                command = AUTO_MOVE
            else:
                try:
                    command = self.read(f"Enter move for {color}: ").strip()
                except EOFError:
                    return
                if command.lower() == QUIT:
                    return
                if command.lower() == AUTOPILOT:
                    self.autopilot = True
                    command = AUTO_MOVE

            if self.take_turn(command, color) is None:
                self.write("")

        self.announce_result()

    def take_turn(self, command: str, color: Color) -> Optional[Coordinate]:
        """Apply one move from the prompt; None when the player must try again."""
        try:
            if command == AUTO_MOVE:
                coord = choose_auto_move(self.state, color, self.rng)
            else:
                coord = parse_coordinate(command, self.state.size)
            result = game.apply_move(self.state, coord, color)
        except CoordinateParseError as exc:
            self.write(f"Invalid move: {exc}")
            return None
        except InvalidMoveError as exc:
            self.write(f"Invalid move. Try again. ({exc})")
            return None

        if self.autopilot or command == AUTO_MOVE:
            self.write(f"{color} plays {coord}")
        self.report(result)
        return coord

    def report(self, result: MoveResult):
        if result.skipped is not None and not result.terminal:
            self.write(f"No valid moves for {result.skipped}.")

    def announce_result(self):
        self.draw_board_and_scores()
        self.write("No valid moves for either player.")
        winner = game.winner(self.state)
        if isinstance(winner, Color):
            percent = game.winning_percentage(self.state)
            self.write(f"{winner.name.capitalize()} wins with {percent}% of the board!")
        else:
            self.write("Tie game!")


def run_console(size: int, seed: int | None = None, autopilot: bool = False):
    rng = random.Random(seed)
    console = ConsoleGame(game.new_game(size, rng), rng=rng)
    console.autopilot = autopilot
    console.run()
