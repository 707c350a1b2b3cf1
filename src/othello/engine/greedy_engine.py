from __future__ import annotations

from typing import List, Optional

from othello.engine.base_engine import BaseEngine
from othello.engine.board import Color, Coordinate
from othello.engine.game import GameState
from othello.engine.heuristic import choose_auto_move


class GreedyEngine(BaseEngine):
    """Plays the move that flips the most pieces right now."""

    def _pick_move(
        self,
        state_snapshot: GameState,
        color: Color,
        valid_moves: List[Coordinate],
    ) -> Optional[Coordinate]:
        if not valid_moves:
            return None
        return choose_auto_move(state_snapshot, color, self._rng)
