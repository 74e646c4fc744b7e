"""
Speed controller - derives the tick interval from the score.
"""

import logging
from typing import Optional

from domain.constants import MINIMUM_INTERVAL_MS

logger = logging.getLogger(__name__)


def tick_interval(
    score: int,
    initial_interval: int,
    increment: int,
    grabs_per_step: int,
    floor_ms: int = MINIMUM_INTERVAL_MS,
) -> int:
    """
    Interval in milliseconds for the given score.

    Every ``grabs_per_step`` grabs shave ``increment`` ms off the initial
    interval, never going below ``floor_ms``. Before the first step the
    initial interval is used as is, even if it is already below the floor.
    """
    steps = score // grabs_per_step
    if steps > 0:
        return max(initial_interval - steps * increment, floor_ms)
    return initial_interval


class SpeedController:
    def __init__(self, initial_interval: int, increment: int, grabs_per_step: int,
                 floor_ms: int = MINIMUM_INTERVAL_MS):
        self.initial_interval = initial_interval
        self.increment = increment
        self.grabs_per_step = grabs_per_step
        self.floor_ms = floor_ms
        self.interval_ms = initial_interval

    def reset(self) -> int:
        self.interval_ms = self.initial_interval
        return self.interval_ms

    def update(self, score: int) -> Optional[int]:
        """Recompute the interval; return it only when it changed."""
        interval = tick_interval(
            score, self.initial_interval, self.increment, self.grabs_per_step, self.floor_ms
        )
        if interval == self.interval_ms:
            return None
        logger.info("Speed up: %sms -> %sms at score %s", self.interval_ms, interval, score)
        self.interval_ms = interval
        return interval
