import random

import pytest

from othello.engine import game
from othello.engine.board import Color, parse_coordinate
from othello.engine.heuristic import NoLegalMoveError, choose_auto_move, play_auto_move, rank_moves

from helpers import state_from_rows

GREEDY_ROWS = (
    "BWW.WB..",
    "........",
    "BW......",
    "........",
    "........",
    "........",
    "........",
    "........",
)


def test_rank_moves_sums_every_closure():
    state = state_from_rows(Color.BLACK, *GREEDY_ROWS)

    assert rank_moves(state.board, Color.BLACK) == [
        (parse_coordinate("d1", 8), 3),
        (parse_coordinate("c3", 8), 1),
    ]


@pytest.mark.parametrize("seed", range(5))
def test_greedy_picks_the_most_flips(seed):
    state = state_from_rows(Color.BLACK, *GREEDY_ROWS)
    assert choose_auto_move(state, Color.BLACK, random.Random(seed)) == parse_coordinate("d1", 8)


def test_ties_are_broken_by_the_random_source():
    state = game.new_game(8, random.Random(0))
    color = state.active

    picks = [choose_auto_move(state, color, random.Random(seed)) for seed in range(40)]

    # Every opening move flips exactly one piece
    assert set(picks) == set(game.legal_moves(state, color))
    assert choose_auto_move(state, color, random.Random(7)) == choose_auto_move(state, color, random.Random(7))


def test_no_legal_moves_raises():
    state = state_from_rows(
        Color.BLACK,
        "BW..",
        "....",
        "....",
        "..WB",
    )
    with pytest.raises(NoLegalMoveError):
        choose_auto_move(state, Color.WHITE, random.Random(0))


def test_play_auto_move_applies_for_the_active_color():
    state = state_from_rows(Color.BLACK, *GREEDY_ROWS)

    coord, result = play_auto_move(state, random.Random(0))

    assert coord == parse_coordinate("d1", 8)
    assert result.flip_count == 3
    assert state.board.get(parse_coordinate("b1", 8)) is Color.BLACK
