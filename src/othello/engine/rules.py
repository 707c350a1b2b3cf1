from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional

from othello.engine.board import Board, Color, Coordinate


class InvalidMoveError(ValueError):
    OCCUPIED = "occupied"
    NO_CAPTURES = "no_captures"
    WRONG_TURN = "wrong_turn"

    def __init__(self, coord: Coordinate, reason: str, message: str):
        super().__init__(message)
        self.coord = coord
        self.reason = reason


class Direction(Enum):
    LEFT = (0, -1)
    LEFT_UP = (-1, -1)
    UP = (-1, 0)
    RIGHT_UP = (-1, 1)
    RIGHT = (0, 1)
    RIGHT_DOWN = (1, 1)
    DOWN = (1, 0)
    LEFT_DOWN = (1, -1)

    def step(self, coord: Coordinate) -> Coordinate:
        dr, dc = self.value
        return Coordinate(coord.row + dr, coord.col + dc)

    def __str__(self) -> str:
        return self.name.lower().replace("_", "-")


@dataclass(frozen=True)
class Closure:
    """A run of opposing pieces between a placed piece and one of the mover's."""

    direction: Direction
    start: Coordinate
    end: Coordinate
    flip_count: int

    def cells(self) -> Iterator[Coordinate]:
        """Yield the interior cells, excluding both ends."""
        coord = self.direction.step(self.start)
        while coord != self.end:
            yield coord
            coord = self.direction.step(coord)


@dataclass(frozen=True)
class Scores:
    black: int
    white: int

    @property
    def total(self) -> int:
        return self.black + self.white

    def of(self, color: Color) -> int:
        return self.black if color is Color.BLACK else self.white

    def percentage(self, color: Color) -> int:
        if not self.total:
            return 0
        # Half rounds up, 50.5 -> 51
        return int(self.of(color) / self.total * 100 + 0.5)


def scan(board: Board, start: Coordinate, color: Color, direction: Direction) -> Optional[Closure]:
    flip_count = 0
    coord = direction.step(start)
    while board.in_bounds(coord):
        piece = board.get(coord)
        if piece is None:
            return None
        if piece is color:
            if flip_count == 0:
                return None
            return Closure(direction, start, coord, flip_count)
        flip_count += 1
        coord = direction.step(coord)
    # Ran off the edge without meeting one of our own pieces
    return None


def find_closures(board: Board, coord: Coordinate, color: Color) -> List[Closure]:
    closures = []
    for direction in Direction:
        closure = scan(board, coord, color, direction)
        if closure is not None:
            closures.append(closure)
    return closures


def validate_move(board: Board, coord: Coordinate, color: Color) -> List[Closure]:
    """Return every closure the move would make, or raise InvalidMoveError."""
    if board.get(coord) is not None:
        raise InvalidMoveError(coord, InvalidMoveError.OCCUPIED, f"{coord} is already occupied")

    closures = find_closures(board, coord, color)
    if not closures:
        raise InvalidMoveError(coord, InvalidMoveError.NO_CAPTURES, f"{coord} does not capture any pieces")
    return closures


def is_legal_move(board: Board, coord: Coordinate, color: Color) -> bool:
    return board.get(coord) is None and bool(find_closures(board, coord, color))


def legal_moves(board: Board, color: Color) -> List[Coordinate]:
    return [coord for coord in board.coordinates() if is_legal_move(board, coord, color)]


def has_legal_move(board: Board, color: Color) -> bool:
    return any(is_legal_move(board, coord, color) for coord in board.coordinates())


def flip_pieces(board: Board, closures: Iterable[Closure], color: Color) -> List[Coordinate]:
    flipped = []
    for closure in closures:
        for coord in closure.cells():
            board.set(coord, color)
            flipped.append(coord)
    return flipped


def count_pieces(board: Board) -> Scores:
    black = 0
    white = 0
    for row in board.grid:
        for piece in row:
            if piece is Color.BLACK:
                black += 1
            elif piece is Color.WHITE:
                white += 1
    return Scores(black=black, white=white)
