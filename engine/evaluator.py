"""
Collision & consumption evaluator - inspects the state right after each move.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from domain.constants import Direction, END_SELF, END_WALL
from domain.geometry import (
    grow_tail,
    has_boundary_collision,
    has_self_collision,
    random_free_cell,
)
from domain.snake import Cell
from .store import GameStore

logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    MOVED = "moved"
    ATE = "ate"
    COLLISION = "collision"


@dataclass(frozen=True)
class Evaluation:
    outcome: Outcome
    food: Cell
    end_reason: Optional[str] = None


class CollisionEvaluator:
    """
    Runs once per tick on the post-move state:

    1. self or boundary collision ends the game
    2. otherwise, a head on the food grows the snake, scores and relocates the food
    3. otherwise nothing happens
    """

    def __init__(self, width: int, height: int, cell_size: int,
                 rng: Optional[random.Random] = None):
        self.width = width
        self.height = height
        self.cell_size = cell_size
        self.rng = rng

    def evaluate(self, store: GameStore, food: Cell, travel_direction: Direction) -> Evaluation:
        """
        Args:
            store: the game store, already advanced for this tick
            food: current food cell
            travel_direction: direction of the move that produced the current head

        Raises:
            BoardExhausted: if the snake ate and no free cell is left for new
                food; the store is not modified in that case
        """
        snake = store.ensure_snake().snake
        head = snake[0]

        if has_self_collision(snake):
            logger.debug("Self collision at %s", head)
            return Evaluation(Outcome.COLLISION, food, END_SELF)
        if has_boundary_collision(head, travel_direction, self.width, self.height, self.cell_size):
            logger.debug("Wall collision at %s travelling %s", head, travel_direction.value)
            return Evaluation(Outcome.COLLISION, food, END_WALL)

        if head == food:
            grown = grow_tail(snake, self.cell_size)
            new_food = random_free_cell(
                self.width, self.height, self.cell_size, set(grown), self.rng
            )
            store.grow(grown)
            store.increment_score()
            logger.debug("Food eaten at %s, new food at %s", head, new_food)
            return Evaluation(Outcome.ATE, new_food)

        return Evaluation(Outcome.MOVED, food)
