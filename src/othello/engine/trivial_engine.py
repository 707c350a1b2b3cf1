from __future__ import annotations

from typing import List, Optional

from othello.engine.base_engine import BaseEngine
from othello.engine.board import Color, Coordinate
from othello.engine.game import GameState


class RandomEngine(BaseEngine):
    """Random-move engine used for testing and baseline comparisons."""

    def _pick_move(
        self,
        state_snapshot: GameState,
        color: Color,
        valid_moves: List[Coordinate],
    ) -> Optional[Coordinate]:
        if not valid_moves:
            return None
        return self._rng.choice(valid_moves)
