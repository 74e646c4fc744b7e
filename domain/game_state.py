"""
GameState entity - a snapshot of the game at a point in time.
"""

from typing import List, Optional, Tuple

from .constants import Direction, GameStatus
from .snake import Cell


class GameState:
    """
    A read-only snapshot of a running session, handed to renderers, players
    and tick listeners.

    Attributes:
        tick: number of ticks executed since the last reset
        snake: list of Cells, head first
        food: the food Cell
        score: food grabbed since the last reset
        status: Paused, Playing or Game Over
        travel_direction: direction driving the current (or last) timer
        forbidden_direction: direction the snake may not be turned into
        interval_ms: current tick interval
        width, height, cell_size: board dimensions in pixels
        end_reason: 'wall', 'self' or 'board_full' once the game is over
    """

    def __init__(
        self,
        tick: int,
        snake: List[Cell],
        food: Optional[Cell],
        score: int,
        status: GameStatus,
        travel_direction: Direction,
        forbidden_direction: Direction,
        interval_ms: int,
        width: int,
        height: int,
        cell_size: int,
        end_reason: Optional[str] = None,
    ):
        self.tick = tick
        self.snake = snake
        self.food = food
        self.score = score
        self.status = status
        self.travel_direction = travel_direction
        self.forbidden_direction = forbidden_direction
        self.interval_ms = interval_ms
        self.width = width
        self.height = height
        self.cell_size = cell_size
        self.end_reason = end_reason

    @property
    def columns(self) -> int:
        return self.width // self.cell_size

    @property
    def rows(self) -> int:
        return self.height // self.cell_size

    def to_grid(self, cell: Tuple[int, int]) -> Tuple[int, int]:
        """Convert a pixel cell into (column, row) indices."""
        return cell[0] // self.cell_size, cell[1] // self.cell_size

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        H = snake head
        S = snake body
        Row 0 is printed first, matching canvas coordinates.
        """
        board = [['.' for _ in range(self.columns)] for _ in range(self.rows)]

        if self.food is not None:
            fx, fy = self.to_grid(self.food)
            if 0 <= fx < self.columns and 0 <= fy < self.rows:
                board[fy][fx] = 'F'

        # Body first so the head wins when the snake crosses itself
        for pos_idx in range(len(self.snake) - 1, -1, -1):
            x, y = self.to_grid(self.snake[pos_idx])
            if 0 <= x < self.columns and 0 <= y < self.rows:
                board[y][x] = 'H' if pos_idx == 0 else 'S'

        result = [f"{y:2d} {' '.join(board[y])}" for y in range(self.rows)]
        result.append("   " + " ".join(str(i % 10) for i in range(self.columns)))
        return "\n".join(result)

    def to_dict(self) -> dict:
        return {
            "tick": self.tick,
            "score": self.score,
            "status": self.status.value,
            "travel_direction": self.travel_direction.value,
            "interval_ms": self.interval_ms,
            "snake_length": len(self.snake),
            "end_reason": self.end_reason,
        }

    def __repr__(self):
        return (
            f"<GameState tick={self.tick}, status={self.status.value}, "
            f"score={self.score}, snake={len(self.snake)} cells, food={self.food}>"
        )
