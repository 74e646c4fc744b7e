"""
Snake entities for the game engine.
"""

from typing import NamedTuple, Sequence, Tuple


class Cell(NamedTuple):
    """A grid-aligned position in pixels. Both coordinates are multiples of the cell size."""

    x: int
    y: int

    def shifted(self, dx: int, dy: int) -> "Cell":
        return Cell(self.x + dx, self.y + dy)


# Head first, tail last.
SnakeBody = Tuple[Cell, ...]


def as_snake(cells: Sequence[Tuple[int, int]]) -> SnakeBody:
    """Normalize any sequence of (x, y) pairs into a tuple of Cells."""
    return tuple(Cell(int(x), int(y)) for x, y in cells)


def is_contiguous(snake: Sequence[Cell], cell_size: int) -> bool:
    """
    True if every pair of consecutive cells is orthogonally adjacent
    by exactly one cell size.
    """
    for (ax, ay), (bx, by) in zip(snake, snake[1:]):
        if abs(ax - bx) + abs(ay - by) != cell_size or (ax != bx and ay != by):
            return False
    return True
