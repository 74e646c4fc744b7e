"""
Grid geometry and random placement helpers.

Every random helper takes an optional ``rng`` (a ``random.Random``); when it
is omitted the module-level ``random`` functions are used. Positions are
drawn as uniform grid indices and then scaled by the cell size, so every
column and row is equally likely and results always lie strictly inside the
board.
"""

import logging
import random
from typing import AbstractSet, Optional, Sequence

from .constants import Direction, SNAKE_SPAWN_LENGTH
from .errors import BoardExhausted, InvalidConfiguration
from .snake import Cell, SnakeBody

logger = logging.getLogger(__name__)


def _grid_size(width: int, height: int, cell_size: int):
    if cell_size <= 0:
        raise InvalidConfiguration(f"Cell size must be positive, got {cell_size}")
    columns, rows = width // cell_size, height // cell_size
    if columns <= 0 or rows <= 0:
        raise InvalidConfiguration(
            f"Board {width}x{height} holds no {cell_size}px cell"
        )
    return columns, rows


def random_cell(width: int, height: int, cell_size: int, rng: Optional[random.Random] = None) -> Cell:
    """Return a uniformly chosen grid-aligned cell inside [0, width) x [0, height)."""
    rng = rng or random
    columns, rows = _grid_size(width, height, cell_size)
    return Cell(rng.randrange(columns) * cell_size, rng.randrange(rows) * cell_size)


def random_free_cell(
    width: int,
    height: int,
    cell_size: int,
    occupied: AbstractSet[Cell],
    rng: Optional[random.Random] = None,
) -> Cell:
    """
    Return a random cell that is not in ``occupied``.

    Raises:
        BoardExhausted: if ``occupied`` covers every cell of the grid.
    """
    columns, rows = _grid_size(width, height, cell_size)
    on_board = {
        cell for cell in occupied
        if 0 <= cell[0] < columns * cell_size
        and 0 <= cell[1] < rows * cell_size
        and cell[0] % cell_size == 0
        and cell[1] % cell_size == 0
    }
    if len(on_board) >= columns * rows:
        raise BoardExhausted(f"All {columns * rows} cells of the board are occupied")

    while True:
        cell = random_cell(width, height, cell_size, rng)
        if cell not in on_board:
            return cell


def random_snake(
    width: int,
    height: int,
    cell_size: int,
    avoid: Optional[Cell] = None,
    rng: Optional[random.Random] = None,
) -> SnakeBody:
    """
    Generate a horizontal snake of SNAKE_SPAWN_LENGTH cells with its head on the right.

    The snake keeps a one-cell margin from the board edges when the board is
    large enough; on smaller boards the margin is dropped. The anchor (tail)
    is drawn uniformly among the positions where no snake cell equals ``avoid``.

    Raises:
        InvalidConfiguration: if a row cannot hold the snake.
        BoardExhausted: if every anchor position touches ``avoid``.
    """
    rng = rng or random
    columns, rows = _grid_size(width, height, cell_size)
    length = SNAKE_SPAWN_LENGTH
    if columns < length:
        raise InvalidConfiguration(
            f"Board needs at least {length} columns to spawn a snake, got {columns}"
        )

    margin = 1 if columns >= length + 2 and rows >= 3 else 0
    anchors = [
        (column, row)
        for column in range(margin, columns - length - margin + 1)
        for row in range(margin, rows - margin)
    ]
    if avoid is not None:
        anchors = [
            (column, row) for column, row in anchors
            if not (avoid[1] == row * cell_size
                    and column * cell_size <= avoid[0] < (column + length) * cell_size)
        ]
    if not anchors:
        raise BoardExhausted(f"No room to spawn a snake away from {avoid}")

    column, row = rng.choice(anchors)
    x, y = column * cell_size, row * cell_size
    return tuple(Cell(x + offset * cell_size, y) for offset in range(length - 1, -1, -1))


def has_self_collision(snake: Sequence[Cell]) -> bool:
    """
    True if the snake overlaps itself: the head lies on a body cell, or any
    cell is listed twice. On a snake built by advance() only the head can
    land on another cell, so both checks agree during play.
    """
    if not snake:
        return False
    head = snake[0]
    if any(cell == head for cell in snake[1:]):
        return True
    return len(set(snake)) != len(snake)


def has_boundary_collision(
    head: Cell,
    direction: Direction,
    width: int,
    height: int,
    cell_size: int,
) -> bool:
    """
    True if the (already moved) head left the board on the axis it travels along.

    A head cell counts as outside once any part of it lies beyond the edge,
    so ``RIGHT`` checks ``x + cell_size > width``.
    """
    x, y = head
    if direction == Direction.UP:
        return y < 0
    if direction == Direction.DOWN:
        return y + cell_size > height
    if direction == Direction.LEFT:
        return x < 0
    if direction == Direction.RIGHT:
        return x + cell_size > width
    return False


def grow_tail(snake: Sequence[Cell], cell_size: int) -> SnakeBody:
    """
    Return the snake extended by one cell past its tail.

    The new cell continues the direction of the last segment (tail minus the
    cell before it). A single-cell snake grows to the left.
    """
    tail = snake[-1]
    if len(snake) < 2:
        return tuple(snake) + (Cell(tail.x - cell_size, tail.y),)

    before = snake[-2]
    if abs(tail.x - before.x) == cell_size:
        step = cell_size if tail.x > before.x else -cell_size
        extra = Cell(tail.x + step, tail.y)
    else:
        step = cell_size if tail.y > before.y else -cell_size
        extra = Cell(tail.x, tail.y + step)
    logger.debug("Growing snake tail %s -> %s", tail, extra)
    return tuple(snake) + (extra,)
