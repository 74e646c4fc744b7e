"""
Tests for the autopilot players.
"""

import os
import random
import sys

import pytest

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.constants import Direction, GameStatus
from domain.game_state import GameState
from domain.snake import Cell, as_snake
from players import GreedyPlayer, RandomPlayer, get_player_class, list_variants
from players.random_player import safe_moves


def make_state(snake, food=(0, 0), travel=Direction.RIGHT, width=200, height=200):
    return GameState(
        tick=0,
        snake=list(as_snake(snake)),
        food=Cell(*food),
        score=0,
        status=GameStatus.PLAYING,
        travel_direction=travel,
        forbidden_direction=travel.opposite,
        interval_ms=200,
        width=width,
        height=height,
        cell_size=20,
    )


class TestSafeMoves:
    def test_excludes_reverse_walls_and_body(self):
        state = make_state([(0, 0), (20, 0), (40, 0), (60, 0)], travel=Direction.LEFT)
        assert safe_moves(state) == [Direction.DOWN]

    def test_tail_cell_is_safe(self):
        state = make_state([(20, 20), (40, 20), (40, 40), (20, 40)], travel=Direction.LEFT)
        assert Direction.DOWN in safe_moves(state)


class TestRandomPlayer:
    """Tests for the RandomPlayer class."""

    def test_always_picks_the_only_safe_move(self):
        player = RandomPlayer(random.Random(0))
        state = make_state([(0, 0), (20, 0), (40, 0), (60, 0)], travel=Direction.LEFT)
        for _ in range(20):
            assert player.get_move(state) == Direction.DOWN

    def test_returns_valid_move_in_open_space(self):
        player = RandomPlayer(random.Random(1))
        state = make_state([(100, 100), (80, 100), (60, 100), (40, 100)])
        for _ in range(20):
            assert player.get_move(state) in {Direction.UP, Direction.DOWN, Direction.RIGHT}

    def test_boxed_in_keeps_going(self):
        player = RandomPlayer(random.Random(2))
        state = make_state([(0, 0), (20, 0)], travel=Direction.LEFT, width=40, height=20)
        assert player.get_move(state) == Direction.LEFT


class TestGreedyPlayer:
    """Tests for the GreedyPlayer class."""

    def test_turns_toward_food(self):
        state = make_state([(100, 100), (80, 100), (60, 100), (40, 100)], food=(100, 40))
        assert GreedyPlayer().get_move(state) == Direction.UP

    def test_keeps_direction_when_food_ahead(self):
        state = make_state([(100, 100), (80, 100), (60, 100), (40, 100)], food=(160, 100))
        assert GreedyPlayer().get_move(state) == Direction.RIGHT

    def test_prefers_current_direction_on_ties(self):
        state = make_state([(100, 100), (80, 100), (60, 100), (40, 100)], food=(140, 60))
        assert GreedyPlayer().get_move(state) == Direction.RIGHT


class TestRegistry:
    def test_known_players(self):
        assert get_player_class("random") is RandomPlayer
        assert get_player_class("greedy") is GreedyPlayer
        assert get_player_class(None) is GreedyPlayer

    def test_unknown_player(self):
        with pytest.raises(ValueError):
            get_player_class("llm")

    def test_list_variants(self):
        assert {v["key"] for v in list_variants()} == {"random", "greedy"}
