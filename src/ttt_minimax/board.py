"""
Board model: cell states, sides, moves, and the 3x3 grid.
Notes:
- Cells use 0=empty, 1=X (player), 2=O (opponent), same as the digit strings.
- Storage is a flat row-major list of 9 cells; access is by (row, column).
- Speculative moves go through Board.placed(), which always restores the cell.
"""
from __future__ import annotations

from contextlib import contextmanager
from enum import Enum, IntEnum
from typing import Iterable, Iterator, List, NamedTuple, Optional, Sequence, Tuple

from .errors import InvalidBoardError, InvalidCellError

ROWS = 3
COLUMNS = 3
SIZE = ROWS * COLUMNS


class Cell(IntEnum):
    EMPTY = 0
    PLAYER = 1
    OPPONENT = 2

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS = {Cell.EMPTY: '-', Cell.PLAYER: 'X', Cell.OPPONENT: 'O'}
_TEXT_CELLS = {
    '-': Cell.EMPTY, '.': Cell.EMPTY, '_': Cell.EMPTY, '0': Cell.EMPTY,
    'X': Cell.PLAYER, 'x': Cell.PLAYER, '1': Cell.PLAYER,
    'O': Cell.OPPONENT, 'o': Cell.OPPONENT, '2': Cell.OPPONENT,
}
_SEPARATORS = set('/|, \t\r\n')


class Side(Enum):
    PLAYER = 'X'
    OPPONENT = 'O'

    @property
    def mark(self) -> Cell:
        return Cell.PLAYER if self is Side.PLAYER else Cell.OPPONENT

    @property
    def other(self) -> 'Side':
        return Side.OPPONENT if self is Side.PLAYER else Side.PLAYER

    @property
    def maximizing(self) -> bool:
        return self is Side.PLAYER

    @classmethod
    def parse(cls, text: str) -> 'Side':
        key = text.strip().lower()
        if key in ('x', 'player', '1'):
            return cls.PLAYER
        if key in ('o', 'opponent', '2'):
            return cls.OPPONENT
        raise ValueError(f"Unknown side: {text!r} (expected x/player or o/opponent)")


class Move(NamedTuple):
    row: int
    column: int

    @property
    def index(self) -> int:
        return self.row * COLUMNS + self.column


def to_cell(value) -> Cell:
    """Coerce an int-like value to a Cell, rejecting anything outside 0/1/2."""
    if isinstance(value, Cell):
        return value
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidCellError(f"Cell value must be 0, 1 or 2, got {value!r}")
    try:
        return Cell(value)
    except ValueError:
        raise InvalidCellError(f"Cell value must be 0, 1 or 2, got {value!r}") from None


def _check_coords(row: int, column: int) -> None:
    if not (0 <= row < ROWS and 0 <= column < COLUMNS):
        raise IndexError(f"Square ({row}, {column}) is off the board")


class Board:
    """A 3x3 tic-tac-toe grid.

    Accepts either 9 flat values or 3 rows of 3. Every value is validated on
    the way in; a board never holds anything but Cell members.
    """

    __slots__ = ('squares',)

    def __init__(self, cells: Optional[Iterable] = None):
        if cells is None:
            self.squares: List[Cell] = [Cell.EMPTY] * SIZE
            return
        values = list(cells)
        if len(values) == ROWS and all(isinstance(v, (list, tuple)) for v in values):
            if any(len(row) != COLUMNS for row in values):
                raise InvalidBoardError("Each row must have exactly 3 cells")
            values = [v for row in values for v in row]
        if len(values) != SIZE:
            raise InvalidBoardError(f"Board needs 9 cells, got {len(values)}")
        self.squares = [to_cell(v) for v in values]

    def __getitem__(self, pos: Tuple[int, int]) -> Cell:
        row, column = pos
        _check_coords(row, column)
        return self.squares[row * COLUMNS + column]

    def __setitem__(self, pos: Tuple[int, int], value) -> None:
        row, column = pos
        _check_coords(row, column)
        self.squares[row * COLUMNS + column] = to_cell(value)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.squares == other.squares

    def __repr__(self) -> str:
        return f"Board({serialize_board(self)!r})"

    def rows(self) -> List[List[Cell]]:
        return [self.squares[r * COLUMNS:(r + 1) * COLUMNS] for r in range(ROWS)]

    def copy(self) -> 'Board':
        b = Board()
        b.squares = self.squares[:]
        return b

    def is_empty(self, move: Tuple[int, int]) -> bool:
        return self[move] == Cell.EMPTY

    def is_full(self) -> bool:
        for row in range(ROWS):
            for column in range(COLUMNS):
                if self.squares[row * COLUMNS + column] == Cell.EMPTY:
                    return False
        return True

    def empty_cells(self) -> List[Move]:
        return [
            Move(row, column)
            for row in range(ROWS)
            for column in range(COLUMNS)
            if self.squares[row * COLUMNS + column] == Cell.EMPTY
        ]

    def count(self, cell: Cell) -> int:
        return self.squares.count(cell)

    @contextmanager
    def placed(self, move: Move, cell: Cell) -> Iterator['Board']:
        """Temporarily put `cell` on an empty square; it is emptied again on exit."""
        idx = move.index
        if self.squares[idx] != Cell.EMPTY:
            raise InvalidBoardError(f"Square {tuple(move)} is already occupied")
        self.squares[idx] = cell
        try:
            yield self
        finally:
            self.squares[idx] = Cell.EMPTY


def empty_board() -> Board:
    return Board()


def serialize_board(board: Board) -> str:
    return ''.join(str(int(cell)) for cell in board.squares)


def parse_board(text: str) -> Board:
    """Parse 'O-X/X--/XOO', 'O-X X-- XOO' or '201100122' into a Board."""
    cells: List[Cell] = []
    for ch in text.strip():
        if ch in _SEPARATORS:
            continue
        if ch not in _TEXT_CELLS:
            raise InvalidBoardError(f"Unexpected character {ch!r} in board {text!r}")
        cells.append(_TEXT_CELLS[ch])
    if len(cells) != SIZE:
        raise InvalidBoardError(f"Board needs 9 cells, got {len(cells)} in {text!r}")
    return Board(cells)


def format_board(board: Board, move: Optional[Sequence[int]] = None) -> str:
    lines = []
    for r, row in enumerate(board.rows()):
        parts = []
        for c, cell in enumerate(row):
            marker = '*' if move is not None and (r, c) == tuple(move) else ' '
            parts.append(cell.symbol + marker)
        lines.append(''.join(parts).rstrip())
    return '\n'.join(lines)
