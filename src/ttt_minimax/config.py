"""Runtime settings.

Environment-first: each helper reads its variable at call time and falls back
to a built-in default, so tests and shells can override without reloading.
"""

from __future__ import annotations

import logging
import os

_TRUTHY = {"1", "true", "yes", "on"}


def log_level() -> int:
    """Level from TTT_MINIMAX_LOG_LEVEL (name like DEBUG or a number), default INFO."""
    raw = os.getenv("TTT_MINIMAX_LOG_LEVEL", "").strip()
    if not raw:
        return logging.INFO
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else logging.INFO


def show_board() -> bool:
    """Whether `move` prints the board with the chosen square marked."""
    return os.getenv("TTT_MINIMAX_SHOW_BOARD", "").strip().lower() in _TRUTHY
