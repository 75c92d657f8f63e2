"""ttt_minimax package.

Exhaustive minimax search for the optimal next tic-tac-toe move, plus the
board model, terminal evaluation and a small CLI.

Convenience imports are exposed for common workflows.
"""

from .board import Board, Cell, Move, Side, empty_board, format_board, parse_board
from .errors import InvalidBoardError, InvalidCellError
from .evaluation import evaluate, is_terminal
from .search import compute_next_move, search, select_best

__all__ = [
    "Board",
    "Cell",
    "Move",
    "Side",
    "empty_board",
    "parse_board",
    "format_board",
    "evaluate",
    "is_terminal",
    "search",
    "select_best",
    "compute_next_move",
    "InvalidBoardError",
    "InvalidCellError",
]
