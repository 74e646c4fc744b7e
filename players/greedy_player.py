"""
Greedy player implementation - heads for the food along safe moves.
"""

from domain.constants import Direction
from domain.game_state import GameState
from .base import Player
from .random_player import next_heads, safe_moves


class GreedyPlayer(Player):
    """
    Picks the safe move that brings the head closest (Manhattan distance)
    to the food, preferring to keep the current direction on ties.
    """

    name = "greedy"

    def get_move(self, game_state: GameState) -> Direction:
        valid_moves = safe_moves(game_state)
        if not valid_moves:
            return game_state.travel_direction
        if game_state.food is None:
            return valid_moves[0]

        fx, fy = game_state.food
        heads = next_heads(game_state)

        def score(move: Direction):
            x, y = heads[move]
            keep_going = 0 if move == game_state.travel_direction else 1
            return abs(x - fx) + abs(y - fy), keep_going

        return min(valid_moves, key=score)
