"""
Game State Store - the single owner of the snake, forbidden direction and score.

Every transition builds a new immutable ``StoreSnapshot``, validates it and
only then swaps it in, so a failing transition leaves the previous snapshot
untouched.
"""

import logging
from dataclasses import dataclass, replace
from typing import Callable, Sequence, Tuple

from domain.constants import Direction
from domain.snake import Cell, SnakeBody, as_snake

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreSnapshot:
    snake: SnakeBody = ()
    forbidden_direction: Direction = Direction.NONE
    score: int = 0

    @property
    def head(self) -> Cell:
        return self.snake[0]


class GameStore:
    """
    Holds the session state and exposes the only transitions allowed on it.

    ``snake_factory`` is used to heal an empty snake: any transition that
    reads the snake first installs a fresh one if none exists yet.
    """

    def __init__(self, snake_factory: Callable[[], Sequence[Tuple[int, int]]]):
        self._snake_factory = snake_factory
        self._state = StoreSnapshot()

    @property
    def state(self) -> StoreSnapshot:
        return self._state

    @property
    def snake(self) -> SnakeBody:
        return self._state.snake

    @property
    def forbidden_direction(self) -> Direction:
        return self._state.forbidden_direction

    @property
    def score(self) -> int:
        return self._state.score

    def _commit(self, state: StoreSnapshot) -> StoreSnapshot:
        self._state = state
        return state

    def ensure_snake(self) -> StoreSnapshot:
        """Install a freshly generated snake if the store holds none."""
        if not self._state.snake:
            snake = as_snake(self._snake_factory())
            if not snake:
                raise ValueError("Snake factory returned an empty snake")
            logger.debug("Store had no snake, generated %s", snake)
            self._commit(replace(self._state, snake=snake))
        return self._state

    def reset(self, new_snake: Sequence[Tuple[int, int]]) -> StoreSnapshot:
        """Replace the snake and clear the forbidden direction. The score is left alone."""
        snake = as_snake(new_snake)
        if not snake:
            raise ValueError("Cannot reset to an empty snake")
        return self._commit(replace(self._state, snake=snake, forbidden_direction=Direction.NONE))

    def reset_score(self) -> StoreSnapshot:
        return self._commit(replace(self._state, score=0))

    def increment_score(self) -> StoreSnapshot:
        return self._commit(replace(self._state, score=self._state.score + 1))

    def advance(self, dx: int, dy: int) -> StoreSnapshot:
        """Move one step: new head at head + (dx, dy), tail dropped. Length is preserved."""
        state = self.ensure_snake()
        new_head = state.head.shifted(dx, dy)
        return self._commit(replace(state, snake=(new_head,) + state.snake[:-1]))

    def grow(self, new_snake: Sequence[Tuple[int, int]]) -> StoreSnapshot:
        """Replace the snake with a strictly longer one."""
        state = self.ensure_snake()
        snake = as_snake(new_snake)
        if len(snake) <= len(state.snake):
            raise ValueError(
                f"grow() needs a longer snake: {len(snake)} cells vs {len(state.snake)}"
            )
        return self._commit(replace(state, snake=snake))

    def set_forbidden_direction(self, direction: Direction) -> StoreSnapshot:
        return self._commit(replace(self._state, forbidden_direction=Direction(direction)))
