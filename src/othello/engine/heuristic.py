from __future__ import annotations

import random
from typing import List, Optional, Tuple

from othello.engine import game, rules
from othello.engine.board import Board, Color, Coordinate
from othello.engine.game import GameState, MoveResult


class NoLegalMoveError(ValueError):
    pass


def rank_moves(board: Board, color: Color) -> List[Tuple[Coordinate, int]]:
    """Return every legal move with the total number of pieces it would flip."""
    ranked = []
    for coord in rules.legal_moves(board, color):
        closures = rules.find_closures(board, coord, color)
        ranked.append((coord, sum(closure.flip_count for closure in closures)))
    return ranked


def choose_auto_move(state: GameState, color: Color, rng: Optional[random.Random] = None) -> Coordinate:
    """Greedy single-ply choice: the most flips wins, ties are broken at random."""
    rng = rng or random.Random()
    ranked = rank_moves(state.board, color)
    if not ranked:
        raise NoLegalMoveError(f"No valid moves for {color}")

    best_count = max(count for _, count in ranked)
    best_moves = [coord for coord, count in ranked if count == best_count]
    return rng.choice(best_moves)


def play_auto_move(state: GameState, rng: Optional[random.Random] = None) -> Tuple[Coordinate, MoveResult]:
    color = state.active
    coord = choose_auto_move(state, color, rng)
    return coord, game.apply_move(state, coord, color)
