"""
Contour extraction and quadrilateral filtering
"""

import logging
from typing import List, Optional, Tuple

import cv2
import numpy as np

from .config import DetectionConfig
from .geometry import overlap_ratio
from .types import Quadrilateral
from .validator import ShapeValidator

logger = logging.getLogger(__name__)


class ContourPipeline:
    """
    Finds card-shaped quadrilaterals in an edge map.

    Every contour is approximated with a polygon (tolerance is a fraction
    of its perimeter). Polygons with exactly 4 vertices and an area inside
    (min_area, max_area_ratio * frame area) are handed to the ShapeValidator.
    Accepted quads that overlap an already accepted, smaller quad by more
    than max_overlap are dropped: both sides of one edge line trace the
    same card.
    """

    def __init__(
        self,
        config: Optional[DetectionConfig] = None,
        validator: Optional[ShapeValidator] = None
    ):
        self.config = config or DetectionConfig()
        self.validator = validator or ShapeValidator(self.config)

    def find_contours(self, edges: np.ndarray) -> List[np.ndarray]:
        contours, _hierarchy = cv2.findContours(edges, cv2.RETR_TREE, cv2.CHAIN_APPROX_SIMPLE)
        return list(contours)

    def approximate(self, contour: np.ndarray) -> np.ndarray:
        """
        Approximate a contour with a closed polygon.

        Returns:
            float32 array (N, 2)
        """
        curve = contour.astype(np.float32)
        peri = cv2.arcLength(curve, True)
        approx = cv2.approxPolyDP(curve, self.config.approx_epsilon * peri, True)
        return approx.reshape(-1, 2)

    def is_candidate(self, polygon: np.ndarray, frame_area: float) -> bool:
        """Vertex count and area filter. Both area bounds are strict."""
        if len(polygon) != 4:
            return False
        area = cv2.contourArea(np.asarray(polygon, dtype=np.float32).reshape(-1, 1, 2))
        return self.config.min_area < area < frame_area * self.config.max_area_ratio

    def suppress_overlaps(self, quads: List[Quadrilateral]) -> List[Quadrilateral]:
        """Keep the smallest of each group of overlapping quads."""
        if self.config.max_overlap >= 1.0:
            return quads

        kept = []
        for quad in sorted(quads, key=lambda q: q.area):
            if all(overlap_ratio(quad.corners, other.corners) <= self.config.max_overlap for other in kept):
                kept.append(quad)

        # Back to contour order so the output follows the scan
        return [quad for quad in quads if any(quad is k for k in kept)]

    def extract(self, edges: np.ndarray) -> Tuple[List[Quadrilateral], int]:
        """
        Run the contour stage on an edge map.

        Args:
            edges: Single-channel edge map

        Returns:
            Tuple (validated quadrilaterals, number of contours found)
        """
        frame_area = edges.shape[0] * edges.shape[1]
        contours = self.find_contours(edges)
        logger.debug("contours found: %d", len(contours))

        accepted = []
        for contour in contours:
            polygon = self.approximate(contour)
            if self.config.trace_polygons:
                logger.debug("approximated polygon vertex count: %d", len(polygon))

            if not self.is_candidate(polygon, frame_area):
                continue

            quad = self.validator.validate(polygon)
            if quad is None:
                continue

            logger.debug(
                "card candidate accepted: aspect_ratio=%.3f max_cosine=%.3f area=%.0f",
                quad.aspect_ratio, quad.max_cosine, quad.area
            )
            accepted.append(quad)

        return self.suppress_overlaps(accepted), len(contours)
