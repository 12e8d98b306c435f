"""
Shape validation of quadrilateral candidates
"""

import math
from typing import Optional

import numpy as np

from .config import DetectionConfig
from .geometry import aspect_ratio, max_angle_cosine, order_corners, polygon_area
from .types import Quadrilateral


class ShapeValidator:
    """
    Decides whether a 4-point polygon looks like an ID card.

    Two tests must both pass:
    - rectangularity: every interior angle is close to 90 degrees
      (max absolute cosine below config.max_cosine)
    - aspect ratio: width / height strictly between
      config.min_aspect_ratio and config.max_aspect_ratio

    The validator holds no state besides its config.
    """

    def __init__(self, config: Optional[DetectionConfig] = None):
        self.config = config or DetectionConfig()

    def is_rectangle(self, points) -> bool:
        """Rectangularity test. Anything other than 4 finite, distinct corners fails."""
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        if len(pts) != 4:
            return False
        return max_angle_cosine(pts) < self.config.max_cosine

    def aspect_ratio(self, points) -> float:
        """
        Aspect ratio used for validation.

        With config.allow_portrait the ratio is long side / short side,
        so the orientation of the card does not matter.
        """
        ratio = aspect_ratio(points)
        if self.config.allow_portrait and 0 < ratio < 1:
            ratio = 1.0 / ratio
        return ratio

    def is_valid_aspect_ratio(self, ratio: float) -> bool:
        """Open interval check; the bounds themselves are rejected."""
        if not math.isfinite(ratio):
            return False
        return self.config.min_aspect_ratio < ratio < self.config.max_aspect_ratio

    def validate(self, points) -> Optional[Quadrilateral]:
        """
        Run both tests.

        Args:
            points: Polygon vertices, shape (4, 2) or (4, 1, 2)

        Returns:
            Quadrilateral with ordered corners, or None if rejected
        """
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        if len(pts) != 4:
            return None

        max_cosine = max_angle_cosine(pts)
        if not max_cosine < self.config.max_cosine:
            return None

        ratio = self.aspect_ratio(pts)
        if not self.is_valid_aspect_ratio(ratio):
            return None

        corners = order_corners(pts)
        return Quadrilateral(
            corners=corners,
            area=polygon_area(corners),
            aspect_ratio=ratio,
            max_cosine=max_cosine,
        )
