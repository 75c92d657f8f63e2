"""
Exhaustive minimax search over the 3x3 board.
Policy:
- The player (X) maximizes, the opponent (O) minimizes.
- Candidates are generated row-major; among equal scores the first one wins.
- No pruning and no memoization: every continuation is searched.
- The chosen move is returned, never stored outside the call.
"""
from __future__ import annotations

import logging
from typing import Iterator, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .board import COLUMNS, ROWS, Board, Move, Side, format_board
from .errors import InvalidBoardError
from .evaluation import OPPONENT_WIN_SCORE, PLAYER_WIN_SCORE, evaluate, is_terminal

logger = logging.getLogger(__name__)


class SearchResult(NamedTuple):
    score: int
    move: Optional[Move]


def select_best(candidates: Sequence[Tuple[Move, int]], maximize: bool) -> int:
    """Index of the best candidate; ties go to the earliest one."""
    if not candidates:
        raise ValueError("No candidates to select from")
    best = OPPONENT_WIN_SCORE - 1 if maximize else PLAYER_WIN_SCORE + 1
    index = 0
    for i, (_, score) in enumerate(candidates):
        if maximize:
            if score > best:
                best = score
                index = i
        else:
            if score < best:
                best = score
                index = i
    return index


def _candidates(board: Board, side: Side) -> Iterator[Tuple[Move, int]]:
    mark = side.mark
    for move in board.empty_cells():
        with board.placed(move, mark):
            score = search(board, side.other).score
        yield move, score


def search(board: Board, side: Side) -> SearchResult:
    """Game value of `board` with `side` to move, and the move achieving it.

    The board is modified during the search but is back in its original state
    when this returns. `move` is None for positions that are already over.
    """
    score = evaluate(board)
    if is_terminal(score):
        return SearchResult(score, None)

    candidates: List[Tuple[Move, int]] = list(_candidates(board, side))
    move, best_score = candidates[select_best(candidates, side.maximizing)]
    return SearchResult(best_score, move)


def _require_open(board: Board) -> None:
    score = evaluate(board)
    if is_terminal(score):
        raise InvalidBoardError(f"Game is already over (score={score}); there is no next move")


def compute_next_move(board: Board, side: Side) -> Move:
    """Optimal (row, column) for `side`. The move is reported, not played."""
    _require_open(board)
    result = search(board, side)
    logger.debug("Chosen score: %d move=%s\n%s", result.score, tuple(result.move),
                 format_board(board, result.move))
    return result.move


def score_moves(board: Board, side: Side) -> np.ndarray:
    """Backed-up score of every legal move as a 3x3 grid; occupied squares are nan."""
    _require_open(board)
    grid = np.full((ROWS, COLUMNS), np.nan)
    for move, score in _candidates(board, side):
        grid[move.row, move.column] = score
    return grid


def play_out(board: Board, side: Side) -> List[Move]:
    """Let both sides play perfectly from `board` until the game ends.

    Works on a copy; the caller's board is left as it was.
    """
    b = board.copy()
    moves: List[Move] = []
    while not is_terminal(evaluate(b)):
        move = compute_next_move(b, side)
        b[move] = side.mark
        moves.append(move)
        side = side.other
    return moves
