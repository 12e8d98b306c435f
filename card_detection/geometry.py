"""
Geometry helpers for quadrilaterals
"""

import math
from typing import Sequence, Tuple

import cv2
import numpy as np


# Cosine reported for angles that cannot be measured (zero-length edge, NaN).
# 1.0 is the largest possible deviation from a right angle.
DEGENERATE_COSINE = 1.0


def _as_points(points) -> np.ndarray:
    return np.asarray(points, dtype=np.float64).reshape(-1, 2)


def angle_cosine(p1: Sequence[float], vertex: Sequence[float], p2: Sequence[float]) -> float:
    """
    Cosine of the angle at vertex between the edges to p1 and p2.

    Returns DEGENERATE_COSINE when either edge has zero length or the
    result is not finite.
    """
    dx1 = float(p1[0]) - float(vertex[0])
    dy1 = float(p1[1]) - float(vertex[1])
    dx2 = float(p2[0]) - float(vertex[0])
    dy2 = float(p2[1]) - float(vertex[1])

    denominator = math.sqrt((dx1 * dx1 + dy1 * dy1) * (dx2 * dx2 + dy2 * dy2))
    if not math.isfinite(denominator) or denominator < 1e-12:
        return DEGENERATE_COSINE

    cosine = (dx1 * dx2 + dy1 * dy2) / denominator
    if not math.isfinite(cosine):
        return DEGENERATE_COSINE
    return cosine


def max_angle_cosine(points) -> float:
    """
    Largest absolute interior angle cosine of a closed polygon.

    0 means every corner is a right angle. Polygons with fewer than
    3 points are degenerate.
    """
    pts = _as_points(points)
    n = len(pts)
    if n < 3:
        return DEGENERATE_COSINE

    max_cosine = 0.0
    for i in range(n):
        cosine = abs(angle_cosine(pts[i], pts[(i + 1) % n], pts[(i + 2) % n]))
        max_cosine = max(max_cosine, cosine)
    return max_cosine


def order_corners(points) -> np.ndarray:
    """
    Order 4 corners: top-left, top-right, bottom-right, bottom-left.

    Corners are sorted clockwise (in image coordinates) by their angle
    around the centroid, then rolled so the corner with the smallest x + y
    comes first. Works for either winding of the input.

    Args:
        points: 4 points in any order, shape (4, 2) or (4, 1, 2)

    Returns:
        float32 array (4, 2)
    """
    pts = _as_points(points)
    if len(pts) != 4:
        raise ValueError(f"Expected 4 corners, got {len(pts)}")

    center = pts.mean(axis=0)
    angles = np.arctan2(pts[:, 1] - center[1], pts[:, 0] - center[0])
    clockwise = pts[np.argsort(angles, kind="stable")]

    top_left = int(np.argmin(clockwise.sum(axis=1)))
    return np.roll(clockwise, -top_left, axis=0).astype(np.float32)


def quad_dimensions(corners) -> Tuple[float, float]:
    """
    Width and height of ordered corners.

    Width is the mean of the top and bottom edge lengths, height the mean
    of the left and right edge lengths.
    """
    tl, tr, br, bl = _as_points(corners)
    width = (np.linalg.norm(tr - tl) + np.linalg.norm(br - bl)) / 2.0
    height = (np.linalg.norm(bl - tl) + np.linalg.norm(br - tr)) / 2.0
    return float(width), float(height)


def aspect_ratio(points) -> float:
    """
    Width / height of a quadrilateral, after normalizing corner order.

    Returns math.inf when the height is (near) zero or the points are not
    finite, so the value never passes a bounded range check.
    """
    width, height = quad_dimensions(order_corners(points))
    if not (math.isfinite(width) and math.isfinite(height)) or height < 1e-6:
        return math.inf
    return width / height


def polygon_area(points) -> float:
    """Enclosed area of a polygon in pixels."""
    return float(cv2.contourArea(np.asarray(points, dtype=np.float32).reshape(-1, 1, 2)))


def overlap_ratio(first, second) -> float:
    """
    Intersection over union of two polygons, measured on the pixel grid.

    Returns:
        Value in [0, 1]; 0 for disjoint polygons
    """
    poly_a = np.round(_as_points(first)).astype(np.int32)
    poly_b = np.round(_as_points(second)).astype(np.int32)

    origin = np.vstack([poly_a, poly_b]).min(axis=0)
    width, height = np.vstack([poly_a, poly_b]).max(axis=0) - origin + 1

    mask_a = np.zeros((int(height), int(width)), dtype=np.uint8)
    mask_b = np.zeros_like(mask_a)
    cv2.fillPoly(mask_a, [poly_a - origin], 1)
    cv2.fillPoly(mask_b, [poly_b - origin], 1)

    union = np.count_nonzero(mask_a | mask_b)
    if union == 0:
        return 0.0
    return np.count_nonzero(mask_a & mask_b) / union
