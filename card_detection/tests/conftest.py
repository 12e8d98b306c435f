"""
Shared fixtures for card_detection tests
"""

import numpy as np
import pytest


# Width x height chosen for an ID card ratio (~1.58) and an area of ~20000 px
CARD_W, CARD_H = 178, 113


@pytest.fixture
def frame_factory():
    """
    Build a synthetic RGBA camera frame: black background with
    white filled rectangles given as (x, y, w, h).
    """
    def make_frame(rects=(), size=(640, 480), background=0):
        width, height = size
        frame = np.full((height, width, 4), background, dtype=np.uint8)
        frame[:, :, 3] = 255
        for x, y, w, h in rects:
            frame[y:y + h, x:x + w, :3] = 255
        return frame

    return make_frame


@pytest.fixture
def card_rect():
    """One centered ID-card sized rectangle (x, y, w, h)."""
    return ((640 - CARD_W) // 2, (480 - CARD_H) // 2, CARD_W, CARD_H)
