from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from othello.engine import game
from othello.engine.board import Color, Coordinate
from othello.engine.game import TIE, GameState, Winner
from othello.engine.registry import ENGINE_REGISTRY, build_engine_instance


@dataclass
class EngineSpec:
    key: str
    label: str


class EnginePlayer:
    def __init__(self, spec: EngineSpec, board_size: int, rng_seed: int | None = None):
        self.spec = spec
        self.engine = build_engine_instance(spec.key, board_size=board_size, rng_seed=rng_seed)

    def choose_move(self, state: GameState, color: Color) -> Optional[Coordinate]:
        snapshot = state.snapshot()
        valid_moves = game.legal_moves(snapshot, color)
        if not valid_moves:
            return None
        move = self.engine._pick_move(snapshot, color, valid_moves)
        return move if move in valid_moves else valid_moves[0]


@dataclass
class MatchResult:
    winner: Winner
    scores: Dict[Color, int]
    moves: List[Tuple[Color, str]]
    color_to_label: Dict[Color, str]


class EngineMatch:
    def __init__(
        self,
        board_size: int,
        black_spec: EngineSpec,
        white_spec: EngineSpec,
        rng: random.Random | None = None,
    ):
        self.board_size = board_size
        self.rng = rng or random.Random()
        seed_black, seed_white = self.rng.randrange(2**32), self.rng.randrange(2**32)
        self.players = {
            Color.BLACK: EnginePlayer(black_spec, board_size, seed_black),
            Color.WHITE: EnginePlayer(white_spec, board_size, seed_white),
        }

    def play(self) -> MatchResult:
        state = game.new_game(self.board_size, self.rng)
        move_log: List[Tuple[Color, str]] = []

        while not game.is_terminal(state):
            color = state.active
            move = self.players[color].choose_move(state, color)
            if move is None:
                break
            result = game.apply_move(state, move, color)
            move_log.append((color, str(move)))
            if result.skipped is not None:
                move_log.append((result.skipped, "PASS"))

        scores = game.scores(state)
        color_to_label = {
            Color.BLACK: self.players[Color.BLACK].spec.label,
            Color.WHITE: self.players[Color.WHITE].spec.label,
        }
        return MatchResult(
            winner=game.winner(state) or TIE,
            scores={Color.BLACK: scores.black, Color.WHITE: scores.white},
            moves=move_log,
            color_to_label=color_to_label,
        )


class DuelStats:
    def __init__(self, engine_labels: List[str]):
        self.engine_labels = engine_labels
        self.wins = {label: 0 for label in engine_labels}
        self.draws = 0
        self.score_totals = {label: 0 for label in engine_labels}
        self.score_diff_totals = {label: 0 for label in engine_labels}
        self.games_played = {label: 0 for label in engine_labels}
        self.total_games = 0
        self.total_moves = 0

    def record(self, result: MatchResult):
        self.total_games += 1
        self.total_moves += sum(1 for _, move in result.moves if move != "PASS")
        for color in Color:
            label = result.color_to_label[color]
            self.games_played[label] += 1
            self.score_totals[label] += result.scores[color]
            self.score_diff_totals[label] += result.scores[color] - result.scores[color.opponent]

        if result.winner is TIE:
            self.draws += 1
        else:
            winner_label = result.color_to_label[result.winner]
            self.wins[winner_label] += 1

    def summary(self) -> Dict[str, object]:
        averages = {}
        for label in self.engine_labels:
            games = max(1, self.games_played[label])
            averages[label] = {
                "avg_score": self.score_totals[label] / games,
                "avg_margin": self.score_diff_totals[label] / games,
                "wins": self.wins[label],
                "games": self.games_played[label],
            }
        return {
            "total_games": self.total_games,
            "draws": self.draws,
            "average_moves": self.total_moves / self.total_games if self.total_games else 0.0,
            "engines": averages,
        }


def build_engine_spec(engine_name: str, suffix: str = "") -> EngineSpec:
    entry = ENGINE_REGISTRY.get(engine_name)
    if not entry:
        raise ValueError(f"Unknown engine '{engine_name}'")
    return EngineSpec(key=engine_name, label=f"{entry.label}{suffix}")


def run_duel_series(
    board_size: int,
    black_spec: EngineSpec,
    white_spec: EngineSpec,
    games: int = 1,
    swap_colors: bool = True,
    rng: random.Random | None = None,
) -> Tuple[DuelStats, List[MatchResult]]:
    rng = rng or random.Random()
    labels = list(dict.fromkeys([black_spec.label, white_spec.label]))
    stats = DuelStats(labels)
    results: List[MatchResult] = []

    for game_index in range(games):
        if swap_colors and game_index % 2 == 1:
            current_black, current_white = white_spec, black_spec
        else:
            current_black, current_white = black_spec, white_spec

        match = EngineMatch(board_size, current_black, current_white, rng)
        result = match.play()
        stats.record(result)
        results.append(result)

    return stats, results
