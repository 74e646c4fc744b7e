"""
Video export for captured game frames.

Frames painted by ``ImageRenderSink`` are encoded to MP4 with MoviePy/FFmpeg.
"""

import logging
from typing import List

import numpy as np
from moviepy import ImageSequenceClip
from PIL import Image

logger = logging.getLogger(__name__)

DEFAULT_FPS = 10


def frames_to_video(frames: List[Image.Image], output_path: str, fps: int = DEFAULT_FPS) -> str:
    """
    Encode frames into an MP4 video.

    Args:
        frames: Pillow images, all the same size
        output_path: where to write the video
        fps: frames per second

    Returns:
        Path to the generated video file

    Raises:
        ValueError: if there are no frames
    """
    if not frames:
        raise ValueError("No frames captured, nothing to encode")

    logger.info("Encoding %s frames at %s fps...", len(frames), fps)
    clip = ImageSequenceClip([np.array(frame) for frame in frames], fps=fps)
    clip.write_videofile(output_path, codec='libx264', audio=False, logger=None)

    logger.info("Video created successfully at %s", output_path)
    return output_path
