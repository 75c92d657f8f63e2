"""
Terminal evaluation: line wins, full-board draws, and the score scale.
Notes:
- Scores are from the player's (X) point of view: win > draw > loss.
- NOT_ENDGAME lies outside the real score range and only means "keep searching".
"""
from typing import List, Tuple

from .board import Board, Cell

PLAYER_WIN_SCORE = 10
OPPONENT_WIN_SCORE = -10
DRAW_SCORE = 0
NOT_ENDGAME = 100

WIN_LINES: List[Tuple[int, int, int]] = [
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),             # diagonals
]


def has_line(board: Board, cell: Cell) -> bool:
    sq = board.squares
    for a, b, c in WIN_LINES:
        if sq[a] == cell and sq[b] == cell and sq[c] == cell:
            return True
    return False


def winner(board: Board) -> Cell:
    if has_line(board, Cell.PLAYER):
        return Cell.PLAYER
    if has_line(board, Cell.OPPONENT):
        return Cell.OPPONENT
    return Cell.EMPTY


def evaluate(board: Board) -> int:
    w = winner(board)
    if w == Cell.PLAYER:
        return PLAYER_WIN_SCORE
    if w == Cell.OPPONENT:
        return OPPONENT_WIN_SCORE
    if board.is_full():
        return DRAW_SCORE
    return NOT_ENDGAME


def is_terminal(score: int) -> bool:
    return score != NOT_ENDGAME
