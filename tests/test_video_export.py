"""
Tests for services/video_export.py.
"""

import os
import sys
from unittest.mock import patch

import pytest
from PIL import Image

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from services.video_export import frames_to_video


def test_frames_are_encoded_as_arrays():
    frames = [Image.new('RGB', (16, 16), (255, 0, 0)) for _ in range(3)]

    with patch('services.video_export.ImageSequenceClip') as clip_cls:
        path = frames_to_video(frames, "out.mp4", fps=5)

    arrays = clip_cls.call_args[0][0]
    assert len(arrays) == 3
    assert arrays[0].shape == (16, 16, 3)
    assert clip_cls.call_args[1] == {"fps": 5}
    clip_cls.return_value.write_videofile.assert_called_once()
    assert path == "out.mp4"


def test_no_frames():
    with pytest.raises(ValueError):
        frames_to_video([], "out.mp4")
