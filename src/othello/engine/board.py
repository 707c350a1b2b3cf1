from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional

MAX_BOARD_SIZE = 26
DEFAULT_BOARD_SIZE = 8


class BoardSizeError(ValueError):
    pass


class BoardOutOfBoundsError(IndexError):
    pass


class CoordinateParseError(ValueError):
    """Raised when a text token can't be turned into a coordinate."""

    LENGTH = "length"
    COLUMN = "column"
    ROW = "row"

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason


class Color(Enum):
    BLACK = "B"
    WHITE = "W"

    @property
    def abbreviation(self) -> str:
        return self.value

    @property
    def opponent(self) -> "Color":
        return Color.WHITE if self is Color.BLACK else Color.BLACK

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, order=True)
class Coordinate:
    row: int
    col: int

    def __str__(self) -> str:
        return f"{chr(ord('a') + self.col)}{self.row + 1}"


def parse_coordinate(text: str, size: int = DEFAULT_BOARD_SIZE) -> Coordinate:
    """Parse a column letter followed by a 1-based row number, e.g. ``d3``.

    The token is taken as is; callers trim surrounding whitespace.
    """
    token = text
    if len(token) < 2 or len(token) > 3:
        raise CoordinateParseError(CoordinateParseError.LENGTH, "Input must be length 2 or 3")

    col = ord(token[0].lower()) - ord("a") if token[0].isascii() else -1
    if col < 0 or col > size - 1:
        raise CoordinateParseError(CoordinateParseError.COLUMN, "Column out of bounds")

    digits = token[1:]
    # ASCII only, int() rejects digits like "²"
    if not (digits.isascii() and digits.isdecimal()):
        raise CoordinateParseError(CoordinateParseError.ROW, "Row must be a number")
    row = int(digits) - 1
    if row < 0 or row > size - 1:
        raise CoordinateParseError(CoordinateParseError.ROW, "Row out of bounds")
    return Coordinate(row, col)


class Board:
    EMPTY = None

    def __init__(self, size: int = DEFAULT_BOARD_SIZE):
        if size > MAX_BOARD_SIZE:
            raise BoardSizeError(f"Max board size is {MAX_BOARD_SIZE}")
        if size < 1:
            raise BoardSizeError("Board size must be at least 1")
        self.size = size
        self.grid: List[List[Optional[Color]]] = [[self.EMPTY for _ in range(size)] for _ in range(size)]

    def place_starting_pieces(self):
        """Put the four starting pieces on the centre cells."""
        if self.size < 2:
            return
        mid = self.size // 2
        self.grid[mid - 1][mid - 1] = Color.BLACK
        self.grid[mid - 1][mid] = Color.WHITE
        self.grid[mid][mid - 1] = Color.WHITE
        self.grid[mid][mid] = Color.BLACK

    def in_bounds(self, coord: Coordinate) -> bool:
        return 0 <= coord.row < self.size and 0 <= coord.col < self.size

    def _check_bounds(self, coord: Coordinate):
        if not 0 <= coord.row < self.size:
            raise BoardOutOfBoundsError(f"Row {coord.row} outside board of size {self.size}")
        if not 0 <= coord.col < self.size:
            raise BoardOutOfBoundsError(f"Column {coord.col} outside board of size {self.size}")

    def get(self, coord: Coordinate) -> Optional[Color]:
        self._check_bounds(coord)
        return self.grid[coord.row][coord.col]

    def set(self, coord: Coordinate, state: Optional[Color]):
        self._check_bounds(coord)
        self.grid[coord.row][coord.col] = state

    def coordinates(self) -> Iterator[Coordinate]:
        for r in range(self.size):
            for c in range(self.size):
                yield Coordinate(r, c)

    def occupied_count(self) -> int:
        return sum(1 for row in self.grid for cell in row if cell is not None)

    def clone(self) -> "Board":
        copied = Board(self.size)
        copied.grid = [row[:] for row in self.grid]
        return copied

    def to_state_string(self) -> str:
        # row by row, . for empty, B for Black, W for White
        return "".join(cell.abbreviation if cell else "." for row in self.grid for cell in row)

    @classmethod
    def from_state_string(cls, size: int, state: str) -> "Board":
        if len(state) != size * size:
            raise ValueError(f"Board state must have {size * size} cells, got {len(state)}")
        board = cls(size)
        for idx, piece in enumerate(state):
            r, c = divmod(idx, size)
            if piece == Color.BLACK.abbreviation:
                board.grid[r][c] = Color.BLACK
            elif piece == Color.WHITE.abbreviation:
                board.grid[r][c] = Color.WHITE
            elif piece == ".":
                board.grid[r][c] = None
            else:
                raise ValueError(f"Unknown piece {piece!r} in board state")
        return board

    def render(self) -> str:
        lines = ["   " + " ".join(chr(ord("a") + c) for c in range(self.size))]
        for r in range(self.size):
            cells = " ".join(cell.abbreviation if cell else " " for cell in self.grid[r])
            lines.append(f"{r + 1:<3}{cells}")
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render()
