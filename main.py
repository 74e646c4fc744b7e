"""
Command line entry point: play one game with an autopilot player.

By default the game runs on a virtual clock and finishes instantly; with
``--realtime`` it runs on an asyncio event loop at the real tick interval.
"""

import argparse
import asyncio
import json
import logging
import os
import random
import sys
from typing import Any, Dict, List, Optional

from dotenv import find_dotenv, load_dotenv

from config import load_config
from domain.constants import GameStatus
from domain.errors import SnakeGameError
from domain.game_state import GameState
from engine.game import SnakeGame
from engine.timers import AsyncioTimer, ManualTimer
from players import AVAILABLE_VARIANTS, Player, get_player_class
from services.render import ImageRenderSink

logger = logging.getLogger(__name__)

DEFAULT_MAX_TICKS = 5000


def run_headless(game: SnakeGame, player: Player, max_ticks: int = DEFAULT_MAX_TICKS) -> SnakeGame:
    """
    Play ``game`` on its ManualTimer until it ends or ``max_ticks`` ticks ran.
    The player is asked for a move after every tick.
    """
    if not isinstance(game.timer, ManualTimer):
        raise TypeError("run_headless needs a game driven by a ManualTimer")

    def steer(state: GameState) -> None:
        if state.status == GameStatus.PLAYING:
            game.move(player.get_move(state))

    game.add_tick_listener(steer)
    game.resume()
    while game.status == GameStatus.PLAYING and game.tick_count < max_ticks:
        game.timer.advance_to_next()
    if game.status == GameStatus.PLAYING:
        game.pause()
        logger.info("Stopped after %s ticks", game.tick_count)
    return game


async def run_realtime(game: SnakeGame, player: Player, max_ticks: int = DEFAULT_MAX_TICKS) -> SnakeGame:
    """
    Play ``game`` on the running asyncio loop. Intents are queued with
    ``call_soon`` so they are handled between ticks, never during one.
    """
    loop = asyncio.get_running_loop()
    finished = loop.create_future()

    def steer(state: GameState) -> None:
        if state.status != GameStatus.PLAYING or state.tick >= max_ticks:
            if state.status == GameStatus.PLAYING:
                game.pause()
            if not finished.done():
                finished.set_result(state)
            return
        loop.call_soon(game.move, player.get_move(state))

    game.add_tick_listener(steer)
    game.resume()
    await finished
    return game


def summarize(game: SnakeGame, player: Player) -> Dict[str, Any]:
    state = game.state()
    summary = state.to_dict()
    summary["player"] = player.name
    summary["board"] = {
        "columns": game.config.columns,
        "rows": game.config.rows,
        "cell_size": game.config.cell_size,
    }
    return summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Play a game of grid snake with an autopilot player."
    )
    parser.add_argument("--columns", type=int, help="Board width in cells")
    parser.add_argument("--rows", type=int, help="Board height in cells")
    parser.add_argument("--cell-size", type=int, help="Cell size in pixels")
    parser.add_argument("--initial-interval", type=int, dest="initial_interval_ms",
                        help="Initial tick interval in ms")
    parser.add_argument("--speed-increment", type=int, dest="speed_increment_ms",
                        help="Milliseconds removed from the interval per speed step")
    parser.add_argument("--grabs", type=int, dest="grabs_per_step",
                        help="Food grabs per speed step")
    parser.add_argument("--player", choices=AVAILABLE_VARIANTS, default="greedy",
                        help="Autopilot that steers the snake (default: greedy)")
    parser.add_argument("--seed", type=int, help="Seed for food, snake and player randomness")
    parser.add_argument("--max-ticks", type=int, default=DEFAULT_MAX_TICKS,
                        help=f"Stop after this many ticks (default: {DEFAULT_MAX_TICKS})")
    parser.add_argument("--realtime", action="store_true",
                        help="Run at the real tick interval on an asyncio loop")
    parser.add_argument("--gif", help="Write the captured frames to this GIF file")
    parser.add_argument("--video", help="Write the captured frames to this MP4 file")
    parser.add_argument("--print-board", action="store_true",
                        help="Print the final board as text")
    parser.add_argument("--log-level",
                        help="Logging level (default: INFO or $LOG_LEVEL)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    load_dotenv(find_dotenv(usecwd=True))

    logging.basicConfig(
        level=(args.log_level or os.getenv("LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    try:
        config = load_config(
            columns=args.columns,
            rows=args.rows,
            cell_size=args.cell_size,
            initial_interval_ms=args.initial_interval_ms,
            speed_increment_ms=args.speed_increment_ms,
            grabs_per_step=args.grabs_per_step,
        )
        rng = random.Random(args.seed)
        player = get_player_class(args.player)(rng=random.Random(args.seed))
        sink = ImageRenderSink() if (args.gif or args.video) else None

        if args.realtime:
            async def _play() -> SnakeGame:
                game = SnakeGame(config, render_sink=sink, timer=AsyncioTimer(), rng=rng)
                return await run_realtime(game, player, args.max_ticks)
            game = asyncio.run(_play())
        else:
            game = SnakeGame(config, render_sink=sink, rng=rng)
            run_headless(game, player, args.max_ticks)
    except SnakeGameError as e:
        logger.error("Cannot play: %s", e)
        return 2

    if sink is not None and args.gif:
        sink.save_gif(args.gif, frame_ms=max(game.interval_ms // 2, 20))
    if sink is not None and args.video:
        from services.video_export import frames_to_video
        frames_to_video(sink.frames, args.video)

    if args.print_board:
        print(game.state().print_board())

    print(json.dumps(summarize(game, player), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
