import math
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from ttt_minimax.board import Move, Side, empty_board, parse_board
from ttt_minimax.errors import InvalidBoardError
from ttt_minimax.evaluation import (
    DRAW_SCORE,
    OPPONENT_WIN_SCORE,
    PLAYER_WIN_SCORE,
    evaluate,
    is_terminal,
)
from ttt_minimax.samples import SAMPLE_POSITIONS, sample_board
from ttt_minimax.search import compute_next_move, play_out, score_moves, search, select_best

M = Move(0, 0)


def test_select_best_all_negative_when_maximizing():
    # a running best starting at 0 would wrongly keep index 0 here
    assert select_best([(M, -10), (M, 0)], maximize=True) == 1
    assert select_best([(M, -10), (M, -10)], maximize=True) == 0


def test_select_best_all_positive_when_minimizing():
    assert select_best([(M, 10), (M, 0)], maximize=False) == 1
    assert select_best([(M, 10), (M, 10)], maximize=False) == 0


def test_select_best_first_seen_wins_ties():
    assert select_best([(M, 0), (M, 10), (M, 10)], maximize=True) == 1
    assert select_best([(M, 10), (M, -10), (M, 0), (M, -10)], maximize=False) == 1


def test_select_best_empty_raises():
    with pytest.raises(ValueError):
        select_best([], maximize=True)


def test_worked_example_completes_anti_diagonal():
    b = parse_board("O-X/X--/XOO")
    assert compute_next_move(b, Side.PLAYER) == Move(1, 1)
    assert search(b, Side.PLAYER).score == PLAYER_WIN_SCORE


def test_win_in_one_for_player():
    b = parse_board("XX-/OO-/---")
    res = search(b, Side.PLAYER)
    assert res.move == Move(0, 2)
    assert res.score == PLAYER_WIN_SCORE


def test_win_in_one_for_opponent():
    b = parse_board("OO-/XX-/X--")
    res = search(b, Side.OPPONENT)
    assert res.move == Move(0, 2)
    assert res.score == OPPONENT_WIN_SCORE


def test_player_blocks_opponent_threat():
    b = parse_board("OO-/-X-/--X")
    assert compute_next_move(b, Side.PLAYER) == Move(0, 2)


def test_opponent_blocks_player_threat():
    b, side = sample_board("board5")
    assert side is Side.OPPONENT
    res = search(b, side)
    assert res.move == Move(0, 2)
    assert res.score == DRAW_SCORE


def test_tie_break_prefers_earliest_square_for_player():
    # (0,2), (2,0) and (2,2) all win for X; row-major order picks (0,2)
    b = parse_board("XX-/XOO/-O-")
    assert compute_next_move(b, Side.PLAYER) == Move(0, 2)
    grid = score_moves(b, Side.PLAYER)
    assert grid[0, 2] == grid[2, 0] == grid[2, 2] == PLAYER_WIN_SCORE


def test_tie_break_prefers_earliest_square_for_opponent():
    b = parse_board("OO-/OXX/-X-")
    assert compute_next_move(b, Side.OPPONENT) == Move(0, 2)


def test_compute_next_move_does_not_mutate_board():
    b = parse_board("X--/-O-/---")
    before = b.copy()
    compute_next_move(b, Side.PLAYER)
    search(b, Side.PLAYER)
    score_moves(b, Side.PLAYER)
    assert b == before


def test_repeated_calls_are_deterministic():
    b = parse_board("X--/-O-/--X")
    moves = {compute_next_move(b, Side.OPPONENT) for _ in range(5)}
    assert len(moves) == 1


@pytest.mark.parametrize("text", ["XXX/OO-/---", "XOX/XOO/OXX", "OXX/-O-/X-O"])
def test_terminal_board_rejected(text):
    b = parse_board(text)
    with pytest.raises(InvalidBoardError):
        compute_next_move(b, Side.PLAYER)
    with pytest.raises(InvalidBoardError):
        score_moves(b, Side.PLAYER)


def test_search_on_terminal_board_returns_score_without_move():
    res = search(parse_board("XXX/OO-/---"), Side.OPPONENT)
    assert res.score == PLAYER_WIN_SCORE
    assert res.move is None
    res = search(parse_board("XOX/XOO/OXX"), Side.PLAYER)
    assert res == (DRAW_SCORE, None)


def test_score_moves_grid_for_worked_example():
    b = parse_board("O-X/X--/XOO")
    grid = score_moves(b, Side.PLAYER)
    assert grid.shape == (3, 3)
    assert grid[0, 1] == OPPONENT_WIN_SCORE
    assert grid[1, 1] == PLAYER_WIN_SCORE
    assert grid[1, 2] == OPPONENT_WIN_SCORE
    occupied = [(0, 0), (0, 2), (1, 0), (2, 0), (2, 1), (2, 2)]
    assert all(math.isnan(grid[r, c]) for r, c in occupied)


def test_score_moves_agrees_with_search():
    b, side = sample_board("board5")
    grid = score_moves(b, side)
    res = search(b, side)
    assert grid[res.move.row, res.move.column] == res.score
    assert np.nanmin(grid) == res.score
    assert np.nanmax(grid) == PLAYER_WIN_SCORE


def test_play_out_finishes_game_and_leaves_board_alone():
    b, side = sample_board("board5")
    before = b.copy()
    moves = play_out(b, side)
    assert b == before
    assert moves[0] == Move(0, 2)
    assert len(moves) == 6
    final = b.copy()
    for mv in moves:
        assert final.is_empty(mv)
        final[mv] = side.mark
        side = side.other
    assert evaluate(final) == DRAW_SCORE


def test_play_out_on_finished_game_is_empty():
    assert play_out(parse_board("XOX/XOO/OXX"), Side.PLAYER) == []


def test_sample_positions():
    expected = {
        'board1': Move(1, 1),
        'board2': Move(1, 1),
        'board5': Move(0, 2),
        'board6': Move(1, 1),
    }
    for name, move in expected.items():
        b, side = sample_board(name)
        assert compute_next_move(b, side) == move, name
    for name in SAMPLE_POSITIONS:
        b, side = sample_board(name)
        mv = compute_next_move(b, side)
        assert b.is_empty(mv)


def test_independent_boards_searched_concurrently():
    names = list(SAMPLE_POSITIONS)
    sequential = [compute_next_move(*sample_board(n)) for n in names]
    with ThreadPoolExecutor(max_workers=4) as pool:
        concurrent = list(pool.map(lambda n: compute_next_move(*sample_board(n)), names))
    assert concurrent == sequential


def test_empty_board_is_draw_and_opens_top_left():
    b = empty_board()
    res = search(b, Side.PLAYER)
    assert res.score == DRAW_SCORE
    assert res.move == Move(0, 0)
    assert not is_terminal(evaluate(b))
