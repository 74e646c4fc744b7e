"""
Domain entities for the gridsnake game engine.

This module contains the core game entities and pure helpers that are
independent of timers, rendering and input handling.
"""

from .constants import (
    Direction,
    GameStatus,
    OPPOSITE,
    VALID_MOVES,
    MINIMUM_INTERVAL_MS,
    SNAKE_SPAWN_LENGTH,
    direction_from_delta,
)
from .errors import SnakeGameError, BoardExhausted, InvalidConfiguration
from .snake import Cell, SnakeBody
from .game_state import GameState

__all__ = [
    'Direction', 'GameStatus', 'OPPOSITE', 'VALID_MOVES',
    'MINIMUM_INTERVAL_MS', 'SNAKE_SPAWN_LENGTH', 'direction_from_delta',
    'SnakeGameError', 'BoardExhausted', 'InvalidConfiguration',
    'Cell', 'SnakeBody',
    'GameState',
]
