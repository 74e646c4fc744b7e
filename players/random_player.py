"""
Random player implementation - picks random safe moves.
"""

from typing import Dict, List

from domain.constants import Direction, VALID_MOVES
from domain.game_state import GameState
from domain.snake import Cell
from .base import Player


def next_heads(game_state: GameState) -> Dict[Direction, Cell]:
    """Head position after one step in each direction."""
    head = game_state.snake[0]
    return {
        direction: head.shifted(*direction.delta(game_state.cell_size))
        for direction in VALID_MOVES
    }


def safe_moves(game_state: GameState) -> List[Direction]:
    """
    Directions that neither reverse the snake, leave the board, nor run into
    the body. The tail is allowed since it moves out of the way.
    """
    body = game_state.snake[:-1]
    moves = []
    for move, (new_x, new_y) in next_heads(game_state).items():
        if move == game_state.forbidden_direction:
            continue
        # Check wall collisions
        if (new_x < 0 or new_x + game_state.cell_size > game_state.width or
                new_y < 0 or new_y + game_state.cell_size > game_state.height):
            continue
        # Check self collisions (excluding tail which will move)
        if (new_x, new_y) in body:
            continue
        moves.append(move)
    # Stable order keeps seeded runs reproducible
    return sorted(moves, key=lambda move: move.value)


class RandomPlayer(Player):
    """
    A random AI that picks a valid direction that avoids walls and self-collisions.
    """

    name = "random"

    def get_move(self, game_state: GameState) -> Direction:
        valid_moves = safe_moves(game_state)

        # If no valid moves, keep going (we'll die anyway)
        if not valid_moves:
            return game_state.travel_direction

        return self.rng.choice(valid_moves)
