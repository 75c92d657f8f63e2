"""
Sample positions with the side to move.
board1 and board6 are the worked example: X completes the anti-diagonal at (1, 1).
"""
from typing import Dict, Tuple

from .board import Board, Side, parse_board

SAMPLE_POSITIONS: Dict[str, Tuple[str, Side]] = {
    'board1': ('O-X/X--/XOO', Side.PLAYER),
    'board2': ('O-X/---/X-O', Side.PLAYER),
    'board3': ('O--/O--/X-X', Side.PLAYER),
    'board4': ('O--/---/X-X', Side.OPPONENT),
    'board5': ('XX-/-O-/---', Side.OPPONENT),
    'board6': ('O-X/X--/XOO', Side.PLAYER),
}


def sample_board(name: str) -> Tuple[Board, Side]:
    text, side = SAMPLE_POSITIONS[name]
    return parse_board(text), side
