"""
Keyboard bindings - turns key names into direction intents and game commands.

Key names follow the browser ``KeyboardEvent.key`` values (``ArrowUp`` ...),
with WASD as an alternative. Commands: space toggles pause, ``r`` resets.
"""

import logging
from typing import Dict

from domain.constants import Direction

logger = logging.getLogger(__name__)

KEY_BINDINGS: Dict[str, Direction] = {
    "ArrowUp": Direction.UP,
    "ArrowDown": Direction.DOWN,
    "ArrowLeft": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
}

PAUSE_KEYS = {" ", "Space", "p"}
RESET_KEYS = {"r", "R"}


def handle_key(game, key: str, from_text_entry: bool = False) -> bool:
    """
    Dispatch one key press to ``game`` (a SnakeGame).

    Args:
        game: the session to drive
        key: the key name
        from_text_entry: True if the key was typed into a text field;
            such keys belong to the field and are dropped

    Returns:
        True if the key changed the game (intent accepted, paused,
        resumed or reset), False if it was ignored
    """
    if from_text_entry:
        return False

    if key in RESET_KEYS:
        game.reset()
        return True
    if key in PAUSE_KEYS:
        return game.toggle_pause()

    direction = KEY_BINDINGS.get(key)
    if direction is None:
        logger.debug("Unbound key %r", key)
        return False

    # A fresh snake spawns facing right, so LEFT before the first move would
    # run it straight into its own body.
    if direction == Direction.LEFT and game.store.forbidden_direction == Direction.NONE:
        return False
    return game.move(direction)
