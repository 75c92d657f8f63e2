from __future__ import annotations

import argparse
import logging
from typing import Optional, Tuple

import numpy as np

from . import config
from .board import Board, Cell, Side, format_board, parse_board, serialize_board
from .errors import InvalidBoardError, MinimaxError
from .evaluation import evaluate, is_terminal, winner
from .samples import SAMPLE_POSITIONS, sample_board
from .search import compute_next_move, play_out, score_moves, search

BOARD_HELP = "Board, e.g. O-X/X--/XOO or 201100122 (-/0=empty, X/1=player, O/2=opponent)"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt-minimax", description="Tic-tac-toe minimax move finder")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")

    p_move = sub.add_parser("move", help="Compute the optimal next move for the side to move")
    p_move.add_argument("--board", help=BOARD_HELP + " (omit with --stdin)")
    p_move.add_argument("--side", default="x", help="Side to move: x/player or o/opponent (default: x)")
    p_move.add_argument(
        "--stdin", action="store_true", help="Read BOARD[,SIDE] lines from stdin and stream CSV output"
    )
    p_move.add_argument(
        "--show", action="store_true", help="Print the board with the chosen move marked"
    )

    p_eval = sub.add_parser("evaluate", help="Score a board without searching")
    p_eval.add_argument("--board", required=True, help=BOARD_HELP)

    p_scores = sub.add_parser("scores", help="Show the backed-up score of every legal move")
    p_scores.add_argument("--board", required=True, help=BOARD_HELP)
    p_scores.add_argument("--side", default="x", help="Side to move (default: x)")

    p_self = sub.add_parser("selfplay", help="Play both sides perfectly until the game ends")
    p_self.add_argument("--board", default="---/---/---", help=BOARD_HELP + " (default: empty)")
    p_self.add_argument("--side", default="x", help="Side to move first (default: x)")

    sub.add_parser("demo", help="Solve the built-in sample positions")

    return p


def _parse_inputs(raw_board: Optional[str], raw_side: str) -> Tuple[Board, Side]:
    board = parse_board(raw_board or "")
    side = Side.parse(raw_side)
    return board, side


def _format_scores(grid: np.ndarray) -> str:
    lines = []
    for row in grid:
        lines.append(" ".join("  ." if np.isnan(v) else f"{int(v):3d}" for v in row))
    return "\n".join(lines)


def _result_label(board: Board) -> str:
    w = winner(board)
    return "draw" if w == Cell.EMPTY else f"{w.symbol} wins"


def _cmd_move_stdin() -> int:
    import csv as _csv
    import sys as _sys

    w = _csv.writer(_sys.stdout)
    w.writerow(["board", "side", "row", "column", "score"])
    for line in _sys.stdin:
        raw = line.strip()
        if not raw:
            continue
        raw_board, _, raw_side = raw.partition(",")
        try:
            board, side = _parse_inputs(raw_board, raw_side or "x")
        except ValueError:
            logging.debug("skipping malformed line: %s", raw)
            continue
        if is_terminal(evaluate(board)):
            logging.debug("skipping finished game: %s", raw)
            continue
        res = search(board, side)
        w.writerow([serialize_board(board), side.value, res.move.row, res.move.column, res.score])
    return 0


def _cmd_move(ns: argparse.Namespace) -> int:
    board, side = _parse_inputs(ns.board, ns.side)
    res = search(board, side)
    if res.move is None:
        raise InvalidBoardError(f"Game is already over (score={res.score}); there is no next move")
    logging.info("side=%s move=%s score=%d", side.value, tuple(res.move), res.score)
    if ns.show or config.show_board():
        print(format_board(board, res.move))
    return 0


def _cmd_selfplay(ns: argparse.Namespace) -> int:
    board, side = _parse_inputs(ns.board, ns.side)
    moves = play_out(board, side)
    for n, move in enumerate(moves, start=1):
        board[move] = side.mark
        print(f"MOVE {n}: {side.value} -> {tuple(move)}")
        print(format_board(board, move))
        print()
        side = side.other
    logging.info("result=%s", _result_label(board))
    return 0


def _cmd_demo() -> int:
    for name in SAMPLE_POSITIONS:
        board, side = sample_board(name)
        move = compute_next_move(board, side)
        logging.info("next move for %s (%s): %s", name, side.value, tuple(move))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else config.log_level(),
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("ttt-minimax"))
        except Exception:
            print("unknown")
        return 0

    try:
        if ns.cmd == "move":
            if ns.stdin:
                return _cmd_move_stdin()
            return _cmd_move(ns)

        if ns.cmd == "evaluate":
            board = parse_board(ns.board)
            score = evaluate(board)
            logging.info("score=%d terminal=%s winner=%s", score, is_terminal(score), winner(board).symbol)
            return 0

        if ns.cmd == "scores":
            board, side = _parse_inputs(ns.board, ns.side)
            print(_format_scores(score_moves(board, side)))
            return 0

        if ns.cmd == "selfplay":
            return _cmd_selfplay(ns)

        if ns.cmd == "demo":
            return _cmd_demo()
    except InvalidBoardError as e:
        logging.error("Invalid board: %s", e)
        return 2
    except (MinimaxError, ValueError) as e:
        logging.error("%s", e)
        return 2

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
