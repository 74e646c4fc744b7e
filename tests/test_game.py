"""
Tests for engine/game.py - the SnakeGame facade, end to end on a virtual clock.
"""

import os
import random
import sys
from unittest.mock import Mock, call

import pytest

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import GameConfig
from domain.constants import (
    END_BOARD_FULL,
    END_WALL,
    FOOD_COLOR,
    SNAKE_COLOR,
    STROKE_COLOR,
    Direction,
    GameStatus,
)
from domain.errors import InvalidConfiguration
from domain.game_state import GameState
from domain.snake import Cell
from engine.game import SnakeGame

CONFIG = GameConfig(columns=10, rows=10, cell_size=20, initial_interval_ms=200,
                    speed_increment_ms=20, grabs_per_step=2)


@pytest.fixture
def sink():
    return Mock()


@pytest.fixture
def game(sink):
    return SnakeGame(CONFIG, render_sink=sink, rng=random.Random(12))


def place(game, snake, food):
    """Put the session into a known position."""
    game.store.reset(snake)
    game.food = Cell(*food)


class TestReset:
    """Tests for fresh sessions."""

    def test_new_game_is_paused_with_fresh_snake(self, game):
        assert game.status == GameStatus.PAUSED
        assert game.score == 0
        assert len(game.snake) == 4
        assert game.food not in game.snake
        assert game.interval_ms == 200
        assert game.timer.active_count == 0

    def test_reset_twice_gives_valid_sessions(self, game):
        game.move(Direction.RIGHT)
        game.timer.advance(400)

        for _ in range(2):
            state = game.reset()
            assert state.score == 0
            assert len(state.snake) == 4
            assert state.status == GameStatus.PAUSED
            assert state.forbidden_direction == Direction.NONE
            assert game.food not in game.snake
            assert game.timer.active_count == 0

    def test_reset_after_game_over(self, game):
        place(game, [(180, 100), (160, 100), (140, 100), (120, 100)], (0, 0))
        game.move(Direction.RIGHT)
        game.timer.advance(200)
        assert game.status == GameStatus.GAME_OVER

        game.reset()

        assert game.status == GameStatus.PAUSED
        assert game.end_reason is None
        assert game.tick_count == 0
        assert game.move(Direction.UP) is True

    def test_reset_renders_snake_and_food(self, game, sink):
        sink.reset_mock()

        game.reset()

        sink.clear.assert_called_once_with(200, 200)
        assert sink.draw_cells.call_args_list == [
            call(list(game.snake), SNAKE_COLOR, 20, STROKE_COLOR),
            call([game.food], FOOD_COLOR, 20, STROKE_COLOR),
        ]
        sink.end_frame.assert_called_once()


class TestPlay:
    """Tests for ticks, food and collisions."""

    def test_status_follows_the_timer(self, game):
        assert game.move(Direction.RIGHT) is True
        assert game.status == GameStatus.PLAYING
        game.pause()
        assert game.status == GameStatus.PAUSED
        game.resume()
        assert game.status == GameStatus.PLAYING

    def test_tick_moves_snake_one_cell(self, game):
        place(game, [(80, 100), (60, 100), (40, 100), (20, 100)], (0, 0))
        game.move(Direction.RIGHT)

        game.timer.advance(200)

        assert game.snake[0] == Cell(100, 100)
        assert len(game.snake) == 4
        assert game.tick_count == 1

    def test_eating_food_ahead(self, game):
        """Snake of length 4 moving right eats the food directly ahead."""
        place(game, [(80, 100), (60, 100), (40, 100), (20, 100)], (100, 100))
        game.move(Direction.RIGHT)

        game.timer.advance(200)

        assert len(game.snake) == 5
        assert game.score == 1
        assert game.food not in game.snake
        assert game.status == GameStatus.PLAYING

    def test_reversal_is_rejected(self, game):
        game.move(Direction.RIGHT)
        assert game.move(Direction.LEFT) is False
        assert game.state().travel_direction == Direction.RIGHT

    def test_hitting_the_wall_ends_the_game(self, game):
        place(game, [(180, 100), (160, 100), (140, 100), (120, 100)], (0, 0))
        game.move(Direction.RIGHT)

        game.timer.advance(200)

        assert game.status == GameStatus.GAME_OVER
        assert game.end_reason == END_WALL
        assert game.timer.active_count == 0
        assert game.move(Direction.UP) is False
        assert game.resume() is False

    def test_running_into_itself_ends_the_game(self, game):
        place(game, [(100, 100), (80, 100), (80, 120), (100, 120), (120, 120), (120, 100)], (0, 0))
        game.move(Direction.UP)
        game.timer.advance(200)
        game.move(Direction.LEFT)
        game.timer.advance(200)
        assert game.status == GameStatus.PLAYING

        game.move(Direction.DOWN)
        game.timer.advance(200)

        assert game.status == GameStatus.GAME_OVER
        assert game.end_reason == "self"

    def test_full_board_ends_the_game(self):
        game = SnakeGame(GameConfig(columns=5, rows=1, cell_size=20), rng=random.Random(1))
        place(game, [(60, 0), (40, 0), (20, 0), (0, 0)], (80, 0))
        game.move(Direction.RIGHT)

        game.timer.advance(game.interval_ms)

        assert game.status == GameStatus.GAME_OVER
        assert game.end_reason == END_BOARD_FULL
        assert game.score == 0

    def test_each_tick_renders_a_frame(self, game, sink):
        sink.reset_mock()
        place(game, [(80, 100), (60, 100), (40, 100), (20, 100)], (0, 0))
        game.move(Direction.RIGHT)

        game.timer.advance(600)

        assert sink.clear.call_count == 3
        assert sink.end_frame.call_count == 3
        last_state = sink.end_frame.call_args[0][0]
        assert isinstance(last_state, GameState)
        assert last_state.tick == 3

    def test_tick_listeners_receive_state(self, game):
        listener = Mock()
        game.add_tick_listener(listener)
        game.move(Direction.UP)

        game.timer.advance(200)

        listener.assert_called_once()
        state = listener.call_args[0][0]
        assert state.tick == 1
        assert state.travel_direction == Direction.UP


class TestSpeed:
    """Speed changes restart the timer without touching the session."""

    def test_interval_shrinks_after_grabs(self):
        config = GameConfig(columns=10, rows=10, cell_size=20, initial_interval_ms=200,
                            speed_increment_ms=20, grabs_per_step=1)
        game = SnakeGame(config, rng=random.Random(5))
        place(game, [(60, 100), (40, 100), (20, 100), (0, 100)], (80, 100))
        game.move(Direction.RIGHT)

        game.timer.advance(200)

        assert game.score == 1
        assert game.interval_ms == 180
        assert game.status == GameStatus.PLAYING
        assert game.state().travel_direction == Direction.RIGHT
        assert game.store.forbidden_direction == Direction.LEFT
        assert game.timer.active_count == 1

        ticks = game.tick_count
        game.timer.advance(179)
        assert game.tick_count == ticks
        game.timer.advance(1)
        assert game.tick_count == ticks + 1

    def test_reset_restores_initial_interval(self):
        config = GameConfig(columns=10, rows=10, grabs_per_step=1)
        game = SnakeGame(config, rng=random.Random(5))
        place(game, [(60, 100), (40, 100), (20, 100), (0, 100)], (80, 100))
        game.move(Direction.RIGHT)
        game.timer.advance(200)
        assert game.interval_ms == 180

        game.reset()

        assert game.interval_ms == 200


class TestConfigure:
    """Tests for board reconfiguration."""

    def test_configure_resets_on_new_board(self, game):
        game.move(Direction.RIGHT)
        game.timer.advance(200)

        state = game.configure(GameConfig(columns=30, rows=20, cell_size=10))

        assert (state.width, state.height) == (300, 200)
        assert state.score == 0
        assert state.status == GameStatus.PAUSED
        assert all(x % 10 == 0 and y % 10 == 0 for x, y in game.snake)
        assert game.timer.active_count == 0

    def test_invalid_configuration_commits_nothing(self, game):
        snake, food, config = game.snake, game.food, game.config

        with pytest.raises(InvalidConfiguration):
            game.configure(GameConfig(columns=0, rows=10))

        assert game.snake == snake
        assert game.food == food
        assert game.config is config

    def test_board_without_room_for_food_is_invalid(self):
        with pytest.raises(InvalidConfiguration):
            SnakeGame(GameConfig(columns=4, rows=1))
