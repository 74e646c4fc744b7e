"""
SnakeGame - wires the store, scheduler, evaluator, speed controller and
render sink into one playable session.
"""

import logging
import random
from typing import Callable, List, Optional, Tuple

from config import GameConfig
from domain.constants import (
    END_BOARD_FULL,
    FOOD_COLOR,
    SNAKE_COLOR,
    STROKE_COLOR,
    Direction,
    GameStatus,
)
from domain.errors import BoardExhausted, InvalidConfiguration
from domain.game_state import GameState
from domain.geometry import random_free_cell, random_snake
from domain.snake import Cell, SnakeBody
from .evaluator import CollisionEvaluator, Outcome
from .scheduler import MovementScheduler
from .speed import SpeedController
from .store import GameStore
from .timers import ManualTimer, TimerService

logger = logging.getLogger(__name__)

TickListener = Callable[[GameState], None]


class SnakeGame:
    """
    Manages:
      - Board (columns, rows, cell size)
      - The snake, its direction and the score (through the GameStore)
      - The food cell
      - The tick timer (through the MovementScheduler)
      - Speed progression
      - Rendering after every reset and every tick

    ``timer`` defaults to a ManualTimer, so nothing moves until the caller
    advances it. Pass an AsyncioTimer to play in real time.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_sink=None,
        timer: Optional[TimerService] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = (config or GameConfig()).validate()
        self.render_sink = render_sink
        self.timer = timer if timer is not None else ManualTimer()
        self.rng = rng

        self.food: Optional[Cell] = None
        self.end_reason: Optional[str] = None
        self.tick_count = 0
        self._listeners: List[TickListener] = []

        self.store = GameStore(self._spawn_snake)
        self.scheduler = MovementScheduler(
            self.store,
            self.timer,
            self._on_tick,
            cell_size=self.config.cell_size,
            interval_ms=self.config.initial_interval_ms,
        )
        self._build_rules(self.config)
        self.reset()

    # ------------------------------------------------------------------
    # Observables
    # ------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def cell_size(self) -> int:
        return self.config.cell_size

    @property
    def snake(self) -> SnakeBody:
        return self.store.snake

    @property
    def score(self) -> int:
        return self.store.score

    @property
    def interval_ms(self) -> int:
        return self.scheduler.interval_ms

    @property
    def status(self) -> GameStatus:
        if self.scheduler.is_ended:
            return GameStatus.GAME_OVER
        if self.scheduler.is_running:
            return GameStatus.PLAYING
        return GameStatus.PAUSED

    def state(self) -> GameState:
        """Return a snapshot of the current session as a GameState."""
        return GameState(
            tick=self.tick_count,
            snake=list(self.store.snake),
            food=self.food,
            score=self.store.score,
            status=self.status,
            travel_direction=self.scheduler.travel_direction,
            forbidden_direction=self.store.forbidden_direction,
            interval_ms=self.scheduler.interval_ms,
            width=self.width,
            height=self.height,
            cell_size=self.cell_size,
            end_reason=self.end_reason,
        )

    def add_tick_listener(self, listener: TickListener) -> None:
        """Call ``listener`` with the new GameState after every tick."""
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def _build_rules(self, config: GameConfig) -> None:
        self.evaluator = CollisionEvaluator(config.width, config.height, config.cell_size, self.rng)
        self.speed = SpeedController(
            config.initial_interval_ms, config.speed_increment_ms, config.grabs_per_step
        )

    def _spawn_snake(self) -> SnakeBody:
        return random_snake(self.width, self.height, self.cell_size, avoid=self.food, rng=self.rng)

    def _spawn(self, config: GameConfig) -> Tuple[SnakeBody, Cell]:
        snake = random_snake(config.width, config.height, config.cell_size, rng=self.rng)
        try:
            food = random_free_cell(config.width, config.height, config.cell_size, set(snake), self.rng)
        except BoardExhausted as e:
            raise InvalidConfiguration(
                f"Board {config.columns}x{config.rows} is too small for a snake and food"
            ) from e
        return snake, food

    def reset(self) -> GameState:
        """
        Start a fresh session on the current board: new snake, new food,
        score 0, no timer. Safe to call at any time, including twice in a row.
        """
        snake, food = self._spawn(self.config)
        return self._start_session(snake, food)

    def _start_session(self, snake: SnakeBody, food: Cell) -> GameState:
        self.scheduler.reset()
        self.store.reset(snake)
        self.store.reset_score()
        self.scheduler.interval_ms = self.speed.reset()
        self.food = food
        self.end_reason = None
        self.tick_count = 0

        logger.info(
            "New game on %sx%s board: snake head at %s, food at %s",
            self.config.columns, self.config.rows, snake[0], food,
        )
        self._render()
        return self.state()

    def configure(self, config: GameConfig) -> GameState:
        """
        Switch to a new board/speed configuration. Always resets the session.

        Raises:
            InvalidConfiguration: the current session is left untouched
        """
        config.validate()
        snake, food = self._spawn(config)

        self.config = config
        self.scheduler.cell_size = config.cell_size
        self._build_rules(config)
        return self._start_session(snake, food)

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    def move(self, direction: Direction) -> bool:
        return self.scheduler.move(direction)

    def request_direction(self, dx: int, dy: int) -> bool:
        return self.scheduler.request_direction(dx, dy)

    def pause(self) -> bool:
        return self.scheduler.pause()

    def resume(self) -> bool:
        return self.scheduler.resume()

    def toggle_pause(self) -> bool:
        if self.scheduler.is_running:
            return self.pause()
        return self.resume()

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def _on_tick(self, dx: int, dy: int) -> None:
        self.store.advance(dx, dy)
        self.tick_count += 1

        try:
            result = self.evaluator.evaluate(self.store, self.food, self.scheduler.travel_direction)
        except BoardExhausted as e:
            logger.warning("No room left for food: %s", e)
            self._end(END_BOARD_FULL)
        else:
            if result.outcome == Outcome.COLLISION:
                self._end(result.end_reason)
            elif result.outcome == Outcome.ATE:
                self.food = result.food
                new_interval = self.speed.update(self.store.score)
                if new_interval is not None:
                    self.scheduler.set_interval(new_interval)

        self._render()
        if self._listeners:
            state = self.state()
            for listener in list(self._listeners):
                listener(state)

    def _end(self, reason: Optional[str]) -> None:
        self.scheduler.end()
        self.end_reason = reason
        logger.info(
            "Game over (%s): score %s after %s ticks", reason, self.store.score, self.tick_count
        )

    def _render(self) -> None:
        if self.render_sink is None:
            return
        self.render_sink.clear(self.width, self.height)
        self.render_sink.draw_cells(list(self.store.snake), SNAKE_COLOR, self.cell_size, STROKE_COLOR)
        if self.food is not None:
            self.render_sink.draw_cells([self.food], FOOD_COLOR, self.cell_size, STROKE_COLOR)
        end_frame = getattr(self.render_sink, "end_frame", None)
        if end_frame is not None:
            end_frame(self.state())
