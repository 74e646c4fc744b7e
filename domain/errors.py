"""
Exceptions raised by the game engine.
"""


class SnakeGameError(Exception):
    """Base class for all gridsnake errors."""


class BoardExhausted(SnakeGameError):
    """No free cell is left on the board to place a snake or food."""


class InvalidConfiguration(SnakeGameError, ValueError):
    """Board or speed configuration is not usable (non-positive values, board too small)."""
