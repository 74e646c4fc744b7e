"""
Movement scheduler - owns the one repeating tick timer and gates direction changes.

States:
    IDLE     no timer (fresh game or paused)
    RUNNING  a repeating tick moves the snake in ``travel_direction``
    ENDED    a collision stopped the game; only reset() leaves this state
"""

import logging
from enum import Enum
from typing import Callable, Optional, Tuple

from domain.constants import Direction, FIRST_MOVE, direction_from_delta
from .store import GameStore
from .timers import TimerService

logger = logging.getLogger(__name__)

TickCallback = Callable[[int, int], None]


class SchedulerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    ENDED = "ended"


class MovementScheduler:
    """
    Validates direction intents against the store's forbidden direction and
    (re)starts the tick timer. Exactly one timer handle is ever live: the
    previous one is always cleared before a new one is created.
    """

    def __init__(
        self,
        store: GameStore,
        timer: TimerService,
        on_tick: TickCallback,
        cell_size: int,
        interval_ms: int,
    ):
        self.store = store
        self.timer = timer
        self.cell_size = cell_size
        self.interval_ms = interval_ms
        self.state = SchedulerState.IDLE
        self.travel_direction = Direction.NONE
        self.delta: Tuple[int, int] = (0, 0)
        self._on_tick = on_tick
        self._handle: Optional[object] = None

    @property
    def is_running(self) -> bool:
        return self.state == SchedulerState.RUNNING

    @property
    def is_ended(self) -> bool:
        return self.state == SchedulerState.ENDED

    def move(self, direction: Direction) -> bool:
        """Request travel in ``direction``, one cell per tick."""
        return self.request_direction(*Direction(direction).delta(self.cell_size))

    def request_direction(self, dx: int, dy: int) -> bool:
        """
        Handle a direction intent.

        Returns:
            True if the intent was accepted and the timer (re)started,
            False if it was ignored (game over, reversal, or the direction
            the snake is already travelling in)
        """
        direction = direction_from_delta(dx, dy)
        if direction == Direction.NONE:
            logger.debug("Ignoring intent with no direction: (%s, %s)", dx, dy)
            return False
        if self.state == SchedulerState.ENDED:
            logger.debug("Ignoring %s: game is over", direction.value)
            return False
        if direction == self.store.forbidden_direction:
            logger.debug("Rejecting %s: snake cannot reverse into itself", direction.value)
            return False
        if self.state == SchedulerState.RUNNING and direction == self.travel_direction:
            logger.debug("Rejecting %s: already travelling that way", direction.value)
            return False

        self._cancel()
        self.store.set_forbidden_direction(direction.opposite)
        self.travel_direction = direction
        self.delta = (dx, dy)
        self._handle = self.timer.set_interval(self._tick, self.interval_ms)
        self.state = SchedulerState.RUNNING
        logger.debug("Travelling %s every %sms", direction.value, self.interval_ms)
        return True

    def _tick(self) -> None:
        dx, dy = self.delta
        self._on_tick(dx, dy)

    def _cancel(self) -> None:
        if self._handle is not None:
            self.timer.clear_interval(self._handle)
            self._handle = None

    def pause(self) -> bool:
        """Stop the timer without touching the snake or the forbidden direction."""
        if self.state != SchedulerState.RUNNING:
            return False
        self._cancel()
        self.state = SchedulerState.IDLE
        logger.debug("Paused while travelling %s", self.travel_direction.value)
        return True

    def resume(self) -> bool:
        """
        Restart movement in the direction the snake is committed to, which
        is the opposite of the forbidden direction. Before the first move
        the snake sets off to the right.
        """
        forbidden = self.store.forbidden_direction
        direction = forbidden.opposite if forbidden != Direction.NONE else FIRST_MOVE
        return self.move(direction)

    def end(self) -> None:
        self._cancel()
        self.state = SchedulerState.ENDED

    def reset(self) -> None:
        self._cancel()
        self.state = SchedulerState.IDLE
        self.travel_direction = Direction.NONE
        self.delta = (0, 0)

    def set_interval(self, interval_ms: int) -> bool:
        """
        Change the tick interval. A running timer is restarted at the new
        interval in the same direction; nothing else changes.

        Returns:
            True if a running timer was restarted
        """
        if interval_ms <= 0:
            raise ValueError(f"Interval must be positive, got {interval_ms}")
        if interval_ms == self.interval_ms:
            return False
        self.interval_ms = interval_ms
        if self.state != SchedulerState.RUNNING:
            return False
        self.pause()
        return self.request_direction(*self.delta)
