"""
Tests for engine/speed.py - tick interval progression.
"""

import os
import sys

import pytest

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.constants import MINIMUM_INTERVAL_MS
from engine.speed import SpeedController, tick_interval


class TestTickInterval:
    """Tests for tick_interval."""

    @pytest.mark.parametrize("score,expected", [
        (0, 200),
        (1, 200),
        (2, 180),
        (3, 180),
        (4, 160),
        (16, 40),
        (20, 40),
        (100, 40),
    ])
    def test_progression(self, score, expected):
        assert tick_interval(score, 200, 20, 2, 40) == expected

    def test_default_floor(self):
        assert MINIMUM_INTERVAL_MS == 40
        assert tick_interval(50, 200, 20, 2) == 40

    def test_initial_interval_below_floor_is_kept_before_first_step(self):
        assert tick_interval(0, 30, 20, 2) == 30
        assert tick_interval(2, 30, 20, 2) == 40


class TestSpeedController:
    """Tests for SpeedController."""

    def test_update_reports_only_changes(self):
        controller = SpeedController(200, 20, 2)

        assert controller.update(1) is None
        assert controller.update(2) == 180
        assert controller.update(3) is None
        assert controller.interval_ms == 180

    def test_reset_restores_initial_interval(self):
        controller = SpeedController(200, 20, 1)
        controller.update(5)

        assert controller.reset() == 200
        assert controller.interval_ms == 200
