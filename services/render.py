"""
Render sinks for the game board.

The engine only ever calls ``clear``, ``draw_cells`` and ``end_frame`` on a
sink. ``ImageRenderSink`` paints frames with Pillow (the same primitives the
canvas version used: filled and stroked squares) and can export them as an
animated GIF; ``TextRenderSink`` keeps a character grid for terminals.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from PIL import Image, ImageDraw

from domain.constants import (
    BORDER_COLOR,
    FOOD_COLOR,
    GAME_OVER_BORDER_COLOR,
    SNAKE_COLOR,
    STROKE_COLOR,
    GameStatus,
)
from domain.game_state import GameState

logger = logging.getLogger(__name__)

BACKGROUND = "#FFFFFF"
BORDER_WIDTH = 3


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color to RGB tuple"""
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


class RenderSink:
    """
    Base class/interface for draw-primitive sinks.

    A frame is: ``clear`` once, ``draw_cells`` for the snake and the food,
    then ``end_frame`` with the state that was drawn.
    """

    def clear(self, width: int, height: int) -> None:
        raise NotImplementedError

    def draw_cells(
        self,
        cells: Sequence[Tuple[int, int]],
        fill_color: str,
        cell_size: int,
        stroke_color: str = STROKE_COLOR,
    ) -> None:
        raise NotImplementedError

    def end_frame(self, state: GameState) -> None:
        """Called after every drawn frame. Nothing to do by default."""


class ImageRenderSink(RenderSink):
    """Paints each frame into a Pillow image and keeps the finished frames."""

    def __init__(self, max_frames: Optional[int] = None):
        self.max_frames = max_frames
        self.frames: List[Image.Image] = []
        self.image: Optional[Image.Image] = None
        self._draw: Optional[ImageDraw.ImageDraw] = None

    def clear(self, width: int, height: int) -> None:
        self.image = Image.new('RGB', (width, height), hex_to_rgb(BACKGROUND))
        self._draw = ImageDraw.Draw(self.image)

    def draw_cells(self, cells, fill_color, cell_size, stroke_color=STROKE_COLOR) -> None:
        if self._draw is None:
            return
        for x, y in cells:
            self._draw.rectangle(
                [x, y, x + cell_size - 1, y + cell_size - 1],
                fill=hex_to_rgb(fill_color),
                outline=hex_to_rgb(stroke_color),
            )

    def end_frame(self, state: GameState) -> None:
        if self.image is None:
            return
        frame = Image.new(
            'RGB',
            (self.image.width + 2 * BORDER_WIDTH, self.image.height + 2 * BORDER_WIDTH),
            hex_to_rgb(GAME_OVER_BORDER_COLOR if state.status == GameStatus.GAME_OVER else BORDER_COLOR),
        )
        frame.paste(self.image, (BORDER_WIDTH, BORDER_WIDTH))
        self.frames.append(frame)
        if self.max_frames is not None and len(self.frames) > self.max_frames:
            del self.frames[0]

    def save_gif(self, path: str, frame_ms: int = 100) -> str:
        """
        Write every captured frame to an animated GIF.

        Returns:
            the path written to

        Raises:
            ValueError: if no frame has been captured
        """
        if not self.frames:
            raise ValueError("No frames captured, nothing to save")
        first, rest = self.frames[0], self.frames[1:]
        first.save(path, save_all=True, append_images=rest, duration=frame_ms, loop=0)
        logger.info("Saved %s frames to %s", len(self.frames), path)
        return path


class TextRenderSink(RenderSink):
    """
    Keeps the last frame as a character grid.

    Fill colors map to characters through ``symbols``; unknown colors are
    drawn as ``#``. Cells outside the board are skipped.
    """

    def __init__(self, symbols: Optional[Dict[str, str]] = None):
        self.symbols = symbols or {SNAKE_COLOR: 'S', FOOD_COLOR: 'F'}
        self._width = self._height = 0
        self.grid: List[List[str]] = []

    def clear(self, width: int, height: int) -> None:
        self._width, self._height = width, height
        self.grid = []

    def draw_cells(self, cells, fill_color, cell_size, stroke_color=STROKE_COLOR) -> None:
        if not self.grid:
            self.grid = [
                ['.' for _ in range(self._width // cell_size)]
                for _ in range(self._height // cell_size)
            ]
        symbol = self.symbols.get(fill_color, '#')
        for x, y in cells:
            column, row = x // cell_size, y // cell_size
            if 0 <= row < len(self.grid) and 0 <= column < len(self.grid[row]):
                self.grid[row][column] = symbol

    def render(self) -> str:
        return "\n".join("".join(row) for row in self.grid)
