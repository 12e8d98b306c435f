"""
Frame preprocessing: color frame -> binary edge map
"""

from typing import Optional, Tuple

import cv2
import numpy as np

from .config import DetectionConfig, EdgeThresholdStrategy


class InvalidFrameError(ValueError):
    """Raised when a frame cannot be processed (empty, wrong shape or dtype)."""


_GRAY_CONVERSIONS = {
    3: cv2.COLOR_RGB2GRAY,
    4: cv2.COLOR_RGBA2GRAY,
}


def validate_frame(frame: np.ndarray) -> None:
    """
    Check that frame is a non-empty uint8 RGB or RGBA image.

    Raises:
        InvalidFrameError: describing the first problem found
    """
    if frame is None:
        raise InvalidFrameError("Frame is None")
    if not isinstance(frame, np.ndarray):
        raise InvalidFrameError(f"Frame must be a numpy array, got {type(frame).__name__}")
    if frame.ndim != 3:
        raise InvalidFrameError(f"Frame must have shape (rows, cols, channels), got {frame.shape}")
    if frame.shape[0] == 0 or frame.shape[1] == 0:
        raise InvalidFrameError(f"Frame has zero area: {frame.shape}")
    if frame.shape[2] not in _GRAY_CONVERSIONS:
        raise InvalidFrameError(f"Frame must have 3 or 4 channels, got {frame.shape[2]}")
    if frame.dtype != np.uint8:
        raise InvalidFrameError(f"Frame must be uint8, got {frame.dtype}")


class FramePreprocessor:
    """
    Turns one RGBA frame into a single-channel edge map.

    Steps:
    1. Grayscale
    2. Gaussian blur
    3. CLAHE followed by global histogram equalization
    4. Gaussian adaptive threshold
    5. Canny with fixed or frame-derived thresholds

    Every buffer is local to the call; nothing is kept between frames.
    """

    def __init__(self, config: Optional[DetectionConfig] = None):
        self.config = config or DetectionConfig()

    def to_grayscale(self, frame: np.ndarray) -> np.ndarray:
        return cv2.cvtColor(frame, _GRAY_CONVERSIONS[frame.shape[2]])

    def enhance(self, gray: np.ndarray) -> np.ndarray:
        """
        Blur and contrast-normalize a grayscale image in place.

        Returns:
            The same buffer, for chaining
        """
        k = self.config.blur_kernel_size
        cv2.GaussianBlur(gray, (k, k), 0, dst=gray)

        clahe = cv2.createCLAHE(
            clipLimit=self.config.clahe_clip_limit,
            tileGridSize=tuple(self.config.clahe_tile_grid)
        )
        clahe.apply(gray, dst=gray)
        cv2.equalizeHist(gray, dst=gray)
        return gray

    def binarize(self, gray: np.ndarray) -> np.ndarray:
        """Pixels brighter than their local Gaussian mean minus the constant become 255."""
        return cv2.adaptiveThreshold(
            gray,
            255,
            cv2.ADAPTIVE_THRESH_GAUSSIAN_C,
            cv2.THRESH_BINARY,
            self.config.adaptive_block_size,
            self.config.adaptive_constant
        )

    def edge_thresholds(self, gray: np.ndarray) -> Tuple[float, float]:
        """
        Canny thresholds for this frame.

        The dynamic strategy scales with the mean brightness of the
        enhanced grayscale image.

        Returns:
            Tuple (low, high)
        """
        if self.config.edge_strategy == EdgeThresholdStrategy.FIXED:
            return self.config.canny_low, self.config.canny_high

        mean, _stddev = cv2.meanStdDev(gray)
        mean_val = float(mean[0][0])
        return (
            self.config.dynamic_low_factor * mean_val,
            self.config.dynamic_high_factor * mean_val,
        )

    def detect_edges(self, binary: np.ndarray, thresholds: Tuple[float, float]) -> np.ndarray:
        low, high = thresholds
        return cv2.Canny(binary, low, high)

    def preprocess(self, frame: np.ndarray) -> np.ndarray:
        """
        Produce the edge map of a frame.

        Args:
            frame: uint8 RGBA (or RGB) image

        Returns:
            uint8 edge map with the frame's rows and cols

        Raises:
            InvalidFrameError: if the frame is empty or malformed
        """
        validate_frame(frame)

        gray = self.enhance(self.to_grayscale(frame))
        binary = self.binarize(gray)
        return self.detect_edges(binary, self.edge_thresholds(gray))
