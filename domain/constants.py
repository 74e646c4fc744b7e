"""
Game constants for gridsnake.
"""

from enum import Enum
from typing import Tuple


class Direction(str, Enum):
    """Travel direction of the snake. NONE means no move has been made yet."""

    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    NONE = ""

    @property
    def opposite(self) -> "Direction":
        return OPPOSITE[self]

    def delta(self, cell_size: int) -> Tuple[int, int]:
        """Return the (dx, dy) step for one tick. Canvas coordinates: y grows downwards."""
        dx, dy = _UNIT_STEPS[self]
        return dx * cell_size, dy * cell_size


class GameStatus(str, Enum):
    PAUSED = "Paused"
    PLAYING = "Playing"
    GAME_OVER = "Game Over"


OPPOSITE = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.NONE: Direction.NONE,
}

_UNIT_STEPS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
    Direction.NONE: (0, 0),
}

VALID_MOVES = {Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT}


def direction_from_delta(dx: int, dy: int) -> Direction:
    """
    Map a (dx, dy) step to the direction it travels in.

    Only the sign of each component matters; diagonal or zero steps map to NONE.
    """
    if dx > 0 and dy == 0:
        return Direction.RIGHT
    if dx < 0 and dy == 0:
        return Direction.LEFT
    if dx == 0 and dy < 0:
        return Direction.UP
    if dx == 0 and dy > 0:
        return Direction.DOWN
    return Direction.NONE


# Snake settings
SNAKE_SPAWN_LENGTH = 4
FIRST_MOVE = Direction.RIGHT

# Speed settings (milliseconds)
MINIMUM_INTERVAL_MS = 40

# Board defaults
DEFAULT_COLUMNS = 20
DEFAULT_ROWS = 20
DEFAULT_CELL_SIZE = 20
DEFAULT_INITIAL_INTERVAL_MS = 200
DEFAULT_SPEED_INCREMENT_MS = 20
DEFAULT_GRABS_PER_STEP = 2

# Colors
SNAKE_COLOR = "#446ceb"
FOOD_COLOR = "#676FA3"
STROKE_COLOR = "#2f2b2b"
BORDER_COLOR = "#000000"
GAME_OVER_BORDER_COLOR = "#ff0000"

# End reasons
END_WALL = "wall"
END_SELF = "self"
END_BOARD_FULL = "board_full"
