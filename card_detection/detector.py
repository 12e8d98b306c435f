"""
Card detector for camera frames using OpenCV
"""

import logging
from typing import Iterable, Iterator, List, Optional

import numpy as np

from .config import DetectionConfig
from .contours import ContourPipeline
from .preprocessor import FramePreprocessor, InvalidFrameError
from .types import DetectionResult, Quadrilateral
from .validator import ShapeValidator
from .visualizer import CardVisualizer

logger = logging.getLogger(__name__)


class CardDetector:
    """
    Class for ID card detection in camera frames.

    Each call handles exactly one frame: the frame is turned into an edge
    map, contours are approximated and validated, and the accepted cards
    are outlined on a copy of the frame. Nothing is carried over between
    frames, so a host may drop frames or call from several threads as long
    as it does not swap the config mid-frame.
    """

    def __init__(self, config: Optional[DetectionConfig] = None):
        """
        Initialize the detector.

        Args:
            config: Detection thresholds; defaults are tuned for ID cards
        """
        self.config = config or DetectionConfig()
        self.preprocessor = FramePreprocessor(self.config)
        self.validator = ShapeValidator(self.config)
        self.contours = ContourPipeline(self.config, self.validator)
        self.visualizer = CardVisualizer(
            outline_color=self.config.outline_color,
            outline_thickness=self.config.outline_thickness
        )

    def analyze(self, frame: np.ndarray) -> DetectionResult:
        """
        Detect cards and annotate the frame.

        Args:
            frame: uint8 RGBA frame (RGB is accepted too)

        Returns:
            DetectionResult with the annotated copy, the cards and the
            number of contours found

        Raises:
            InvalidFrameError: if the frame is empty or malformed
        """
        edges = self.preprocessor.preprocess(frame)
        quads, contour_count = self.contours.extract(edges)

        annotated = self.visualizer.visualize(frame, quads)
        return DetectionResult(
            frame=annotated,
            quadrilaterals=tuple(quads),
            contour_count=contour_count
        )

    def detect(self, frame: np.ndarray) -> List[Quadrilateral]:
        """Only the validated cards of a frame."""
        edges = self.preprocessor.preprocess(frame)
        quads, _ = self.contours.extract(edges)
        return quads

    def process(self, frame: np.ndarray) -> np.ndarray:
        """Annotated copy of the frame."""
        return self.analyze(frame).frame


def process(frame: np.ndarray, config: Optional[DetectionConfig] = None) -> np.ndarray:
    """
    Outline every ID card found in frame.

    Args:
        frame: uint8 RGBA frame
        config: Detection config, defaults if omitted

    Returns:
        Copy of the frame with green outlines
    """
    return CardDetector(config).process(frame)


def annotate_stream(
    frames: Iterable[np.ndarray],
    detector: Optional[CardDetector] = None
) -> Iterator[np.ndarray]:
    """
    Annotate a sequence of frames.

    A frame that cannot be processed is yielded as it came in, so one bad
    frame only means no annotation for that frame.

    Args:
        frames: Frames from the host's source
        detector: Detector to use, a default one if omitted

    Yields:
        One output frame per input frame
    """
    detector = detector or CardDetector()

    for index, frame in enumerate(frames):
        try:
            yield detector.process(frame)
        except InvalidFrameError as e:
            logger.warning("Skipping frame %d: %s", index, e)
            yield frame
