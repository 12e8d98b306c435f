"""
Result types of the card detection pipeline
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np


@dataclass(frozen=True)
class Quadrilateral:
    """
    A validated card outline.

    Attributes:
        corners: float32 array (4, 2) ordered top-left, top-right,
            bottom-right, bottom-left
        area: Enclosed area in pixels
        aspect_ratio: Width / height of the ordered corners
        max_cosine: Largest absolute interior angle cosine (0 = perfect rectangle)
    """
    corners: np.ndarray
    area: float
    aspect_ratio: float
    max_cosine: float


@dataclass(frozen=True)
class DetectionResult:
    """Outcome of one frame."""
    frame: np.ndarray
    quadrilaterals: Tuple[Quadrilateral, ...]
    contour_count: int
