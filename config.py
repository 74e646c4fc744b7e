"""
Board and speed configuration.

Values come from (highest precedence first) explicit overrides such as CLI
flags, environment variables (a local ``.env`` file is loaded with
python-dotenv), and the defaults below.
"""

import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

from dotenv import find_dotenv, load_dotenv

from domain.constants import (
    DEFAULT_CELL_SIZE,
    DEFAULT_COLUMNS,
    DEFAULT_GRABS_PER_STEP,
    DEFAULT_INITIAL_INTERVAL_MS,
    DEFAULT_ROWS,
    DEFAULT_SPEED_INCREMENT_MS,
    SNAKE_SPAWN_LENGTH,
)
from domain.errors import InvalidConfiguration

logger = logging.getLogger(__name__)

# Environment variable for each GameConfig field
ENV_VARS = {
    "columns": "SNAKE_COLUMNS",
    "rows": "SNAKE_ROWS",
    "cell_size": "SNAKE_CELL_SIZE",
    "initial_interval_ms": "SNAKE_INITIAL_INTERVAL_MS",
    "speed_increment_ms": "SNAKE_SPEED_INCREMENT_MS",
    "grabs_per_step": "SNAKE_GRABS_PER_STEP",
}


@dataclass(frozen=True)
class GameConfig:
    columns: int = DEFAULT_COLUMNS
    rows: int = DEFAULT_ROWS
    cell_size: int = DEFAULT_CELL_SIZE
    initial_interval_ms: int = DEFAULT_INITIAL_INTERVAL_MS
    speed_increment_ms: int = DEFAULT_SPEED_INCREMENT_MS
    grabs_per_step: int = DEFAULT_GRABS_PER_STEP

    @property
    def width(self) -> int:
        return self.columns * self.cell_size

    @property
    def height(self) -> int:
        return self.rows * self.cell_size

    def validate(self) -> "GameConfig":
        """
        Check that every value is a positive integer and the board can hold
        a freshly spawned snake.

        Returns:
            self, so calls can be chained

        Raises:
            InvalidConfiguration: on the first offending field
        """
        for field in fields(self):
            value = getattr(self, field.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidConfiguration(f"{field.name} must be an integer, got {value!r}")
            if value <= 0:
                raise InvalidConfiguration(f"{field.name} must be positive, got {value}")
        if self.columns < SNAKE_SPAWN_LENGTH:
            raise InvalidConfiguration(
                f"columns must be at least {SNAKE_SPAWN_LENGTH} to spawn a snake, got {self.columns}"
            )
        return self

    def with_overrides(self, **overrides: Optional[int]) -> "GameConfig":
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes) if changes else self


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise InvalidConfiguration(f"{name} must be an integer, got {raw!r}") from None


def load_config(env: Optional[Dict[str, str]] = None, **overrides: Any) -> GameConfig:
    """
    Build a validated GameConfig from the environment.

    Args:
        env: mapping to read instead of os.environ (tests); when omitted,
             a ``.env`` file in the working directory is loaded first
        **overrides: field values that win over the environment

    Raises:
        InvalidConfiguration: on unparsable or non-positive values
    """
    if env is None:
        load_dotenv(find_dotenv(usecwd=True))
        env = os.environ

    values: Dict[str, int] = {}
    for field_name, env_name in ENV_VARS.items():
        raw = env.get(env_name)
        if raw is not None and raw.strip():
            values[field_name] = _parse_int(env_name, raw)

    config = GameConfig(**values).with_overrides(**overrides)
    logger.debug("Loaded configuration: %s", config)
    return config.validate()
