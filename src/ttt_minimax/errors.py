"""Exceptions raised by the board model and the search."""


class MinimaxError(Exception):
    pass


class InvalidBoardError(MinimaxError, ValueError):
    """Board is unusable for the requested operation (terminal, malformed, occupied square)."""


class InvalidCellError(MinimaxError, ValueError):
    """A cell value outside EMPTY/PLAYER/OPPONENT."""
