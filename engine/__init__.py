"""
Game engine for gridsnake: state store, movement scheduler, collision
evaluator, speed controller and the SnakeGame facade that wires them.
"""

from .store import GameStore, StoreSnapshot
from .timers import ManualTimer, AsyncioTimer, TimerService
from .scheduler import MovementScheduler, SchedulerState
from .evaluator import CollisionEvaluator, Evaluation, Outcome
from .speed import SpeedController, tick_interval
from .game import SnakeGame

__all__ = [
    'GameStore', 'StoreSnapshot',
    'ManualTimer', 'AsyncioTimer', 'TimerService',
    'MovementScheduler', 'SchedulerState',
    'CollisionEvaluator', 'Evaluation', 'Outcome',
    'SpeedController', 'tick_interval',
    'SnakeGame',
]
