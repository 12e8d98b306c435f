"""
Card Detection Module

Detects ID-card shaped quadrilaterals in camera frames using OpenCV
and outlines them in green.
"""

from .config import DetectionConfig, EdgeThresholdStrategy
from .detector import CardDetector, annotate_stream, process
from .preprocessor import FramePreprocessor, InvalidFrameError
from .contours import ContourPipeline
from .validator import ShapeValidator
from .visualizer import CardVisualizer
from .types import DetectionResult, Quadrilateral

__all__ = [
    'CardDetector',
    'CardVisualizer',
    'ContourPipeline',
    'DetectionConfig',
    'DetectionResult',
    'EdgeThresholdStrategy',
    'FramePreprocessor',
    'InvalidFrameError',
    'Quadrilateral',
    'ShapeValidator',
    'annotate_stream',
    'process',
]
