import pytest

from othello.engine import rules
from othello.engine.board import Color, Coordinate, parse_coordinate
from othello.engine.rules import Direction, InvalidMoveError

from helpers import board_from_rows


def coords(*names):
    return {parse_coordinate(name, 8) for name in names}


CAPTURE_EXAMPLE = (
    "........",
    "........",
    "........",
    "....B...",
    ".....W..",
    ".BWWWW..",
    "........",
    "........",
)


def test_capture_example_flips_only_the_closed_runs():
    board = board_from_rows(*CAPTURE_EXAMPLE)
    before = board.clone()
    move = parse_coordinate("g6", 8)

    closures = rules.validate_move(board, move, Color.BLACK)
    board.set(move, Color.BLACK)
    flipped = rules.flip_pieces(board, closures, Color.BLACK)

    assert {c.direction for c in closures} == {Direction.LEFT, Direction.LEFT_UP}
    assert set(flipped) == coords("c6", "d6", "e6", "f5", "f6")
    for coord in board.coordinates():
        if coord in coords("c6", "d6", "e6", "f5", "f6", "g6"):
            assert board.get(coord) is Color.BLACK
        else:
            assert board.get(coord) is before.get(coord)


def test_closure_reports_ends_and_count():
    board = board_from_rows(*CAPTURE_EXAMPLE)
    closure = rules.scan(board, parse_coordinate("g6", 8), Color.BLACK, Direction.LEFT)

    assert closure is not None
    assert closure.start == parse_coordinate("g6", 8)
    assert closure.end == parse_coordinate("b6", 8)
    assert closure.flip_count == 4
    assert list(closure.cells()) == [parse_coordinate(n, 8) for n in ("f6", "e6", "d6", "c6")]


def test_adjacent_own_piece_never_closes():
    board = board_from_rows(
        "....",
        ".B..",
        "....",
        "....",
    )
    assert rules.scan(board, Coordinate(1, 2), Color.BLACK, Direction.LEFT) is None


def test_run_off_the_edge_does_not_close():
    board = board_from_rows(
        "WW..",
        "....",
        "....",
        "....",
    )
    assert rules.scan(board, Coordinate(0, 2), Color.BLACK, Direction.LEFT) is None


def test_gap_breaks_the_run():
    board = board_from_rows(
        "B.W.",
        "....",
        "....",
        "....",
    )
    assert rules.find_closures(board, Coordinate(0, 3), Color.BLACK) == []


def test_edge_breaks_only_its_own_direction():
    board = board_from_rows(
        ".W..",
        "....",
        ".W..",
        ".B..",
    )
    # Up runs off the board, down is closed by b4
    closures = rules.find_closures(board, Coordinate(1, 1), Color.BLACK)
    assert [c.direction for c in closures] == [Direction.DOWN]


@pytest.mark.parametrize("name", ["d4", "e4", "d5", "e5"])
def test_occupied_cells_are_rejected(name):
    board = board_from_rows(
        "........",
        "........",
        "........",
        "...BW...",
        "...WB...",
        "........",
        "........",
        "........",
    )
    before = board.to_state_string()
    with pytest.raises(InvalidMoveError) as info:
        rules.validate_move(board, parse_coordinate(name, 8), Color.BLACK)
    assert info.value.reason == InvalidMoveError.OCCUPIED
    assert board.to_state_string() == before


def test_move_without_captures_is_rejected():
    board = board_from_rows(
        "........",
        "........",
        "........",
        "...BW...",
        "...WB...",
        "........",
        "........",
        "........",
    )
    with pytest.raises(InvalidMoveError) as info:
        rules.validate_move(board, parse_coordinate("a1", 8), Color.BLACK)
    assert info.value.reason == InvalidMoveError.NO_CAPTURES


def test_opening_moves_for_black():
    board = board_from_rows(
        "........",
        "........",
        "........",
        "...BW...",
        "...WB...",
        "........",
        "........",
        "........",
    )
    assert rules.legal_moves(board, Color.BLACK) == [
        parse_coordinate(name, 8) for name in ("e3", "f4", "c5", "d6")
    ]


def test_count_pieces_matches_board():
    board = board_from_rows(*CAPTURE_EXAMPLE)
    scores = rules.count_pieces(board)

    assert (scores.black, scores.white) == (2, 5)
    assert scores.total == board.occupied_count()


def test_percentage_rounds_half_up():
    scores = rules.Scores(black=5, white=3)
    assert scores.percentage(Color.BLACK) == 63
    assert scores.percentage(Color.WHITE) == 38
    assert rules.Scores(black=0, white=0).percentage(Color.BLACK) == 0
