import random

import pytest

from othello.engine import game, rules
from othello.engine.board import Color, Coordinate, parse_coordinate
from othello.engine.game import TIE, GameOverError
from othello.engine.rules import InvalidMoveError

from helpers import state_from_rows


def test_new_game_setup():
    state = game.new_game(8, random.Random(0))

    assert state.board.get(Coordinate(3, 3)) is Color.BLACK
    assert state.board.get(Coordinate(3, 4)) is Color.WHITE
    assert state.board.get(Coordinate(4, 3)) is Color.WHITE
    assert state.board.get(Coordinate(4, 4)) is Color.BLACK
    assert state.board.occupied_count() == 4
    assert (game.scores(state).black, game.scores(state).white) == (2, 2)
    assert not game.is_terminal(state)
    assert game.winner(state) is None


def test_first_player_comes_from_the_random_source():
    assert game.new_game(8, random.Random(5)).active is game.new_game(8, random.Random(5)).active
    starters = {game.new_game(8, random.Random(seed)).active for seed in range(32)}
    assert starters == {Color.BLACK, Color.WHITE}


def test_accepted_move_switches_turn():
    state = game.new_game(8, random.Random(1))
    mover = state.active
    move = game.legal_moves(state, mover)[0]

    result = game.apply_move(state, move, mover)

    assert result.flip_count == 1
    assert state.active is mover.opponent
    assert state.history[-1].coord == move


def test_rejected_move_leaves_state_untouched():
    state = game.new_game(8, random.Random(2))
    before = state.board.to_state_string()
    active = state.active

    with pytest.raises(InvalidMoveError) as info:
        game.apply_move(state, parse_coordinate("a1", 8), active)

    assert info.value.reason == InvalidMoveError.NO_CAPTURES
    assert state.board.to_state_string() == before
    assert state.active is active
    assert state.history == []


def test_move_out_of_turn_is_rejected():
    state = game.new_game(8, random.Random(3))
    other = state.active.opponent
    move = game.legal_moves(state, other)[0]

    with pytest.raises(InvalidMoveError) as info:
        game.apply_move(state, move, other)
    assert info.value.reason == InvalidMoveError.WRONG_TURN


def test_opponent_without_moves_is_skipped():
    state = state_from_rows(
        Color.BLACK,
        "BW..",
        "....",
        "....",
        "..WB",
    )

    result = game.apply_move(state, parse_coordinate("c1", 4), Color.BLACK)

    assert result.skipped is Color.WHITE
    assert not result.terminal
    assert state.active is Color.BLACK
    assert not game.is_terminal(state)
    assert game.legal_moves(state, Color.WHITE) == []
    assert game.legal_moves(state, Color.BLACK) == [parse_coordinate("b4", 4)]


def test_game_ends_when_nobody_can_move():
    state = state_from_rows(
        Color.BLACK,
        "BW..",
        "....",
        "....",
        "....",
    )

    result = game.apply_move(state, parse_coordinate("c1", 4), Color.BLACK)

    assert result.terminal
    assert game.is_terminal(state)
    assert game.winner(state) is Color.BLACK
    assert game.winning_percentage(state) == 100


def test_full_board_with_equal_counts_is_a_tie():
    state = state_from_rows(
        Color.WHITE,
        "BBWW",
        "BBWW",
        "WWBB",
        "WWBB",
    )

    assert game.is_terminal(state)
    assert game.winner(state) is TIE
    assert game.winning_percentage(state) is None


def test_blocked_board_with_equal_counts_is_a_tie():
    state = state_from_rows(
        Color.BLACK,
        "B..W",
        "....",
        "....",
        "W..B",
    )

    assert game.is_terminal(state)
    assert game.winner(state) is TIE


def test_terminal_state_accepts_no_moves():
    state = game.new_game(2, random.Random(0))

    assert game.is_terminal(state)
    assert game.winner(state) is TIE
    with pytest.raises(GameOverError):
        game.apply_move(state, Coordinate(0, 0), state.active)


def test_single_cell_board_starts_finished():
    state = game.new_game(1, random.Random(0))

    assert game.is_terminal(state)
    assert game.winner(state) is TIE
    assert game.scores(state).total == 0


def test_restore_hands_turn_over_when_active_cannot_move():
    state = state_from_rows(
        Color.WHITE,
        "BBB.",
        "....",
        "....",
        "..WB",
    )

    assert state.active is Color.BLACK
    assert state.last_skipped is Color.WHITE


def test_snapshot_is_independent():
    state = game.new_game(8, random.Random(4))
    copied = state.snapshot()
    game.apply_move(state, game.legal_moves(state, state.active)[0], state.active)

    assert copied.board.occupied_count() == 4
    assert copied.history == []


@pytest.mark.parametrize("size, seed", [(8, 11), (6, 3), (5, 9)])
def test_random_games_keep_the_invariants(size, seed):
    rng = random.Random(seed)
    state = game.new_game(size, rng)

    while not game.is_terminal(state):
        before = state.board.clone()
        color = state.active
        move = rng.choice(game.legal_moves(state, color))

        result = game.apply_move(state, move, color)

        assert state.board.occupied_count() == before.occupied_count() + 1
        changed = {c for c in state.board.coordinates() if state.board.get(c) is not before.get(c)}
        assert changed == {move} | set(result.flipped)
        assert set(result.flipped) == {cell for closure in result.closures for cell in closure.cells()}
        assert all(state.board.get(c) is color for c in changed)
        assert all(closure.flip_count >= 1 for closure in result.closures)
        assert game.scores(state) == rules.count_pieces(state.board)
        assert game.scores(state).total == state.board.occupied_count()

    assert game.legal_moves(state, Color.BLACK) == []
    assert game.legal_moves(state, Color.WHITE) == []
    final = game.scores(state)
    if final.black == final.white:
        assert game.winner(state) is TIE
    else:
        assert game.winner(state) is (Color.BLACK if final.black > final.white else Color.WHITE)
