"""
Configuration for card detection.

All thresholds of the pipeline live here. The config is frozen so a frame
in flight always sees one consistent set of values; derive variants with
dataclasses.replace().
"""

import os
from dataclasses import dataclass, fields
from enum import Enum
from typing import Tuple

from dotenv import load_dotenv


ENV_PREFIX = "CARD_DETECTION_"

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


class EdgeThresholdStrategy(str, Enum):
    """How Canny thresholds are chosen."""
    FIXED = "fixed"
    DYNAMIC = "dynamic"


@dataclass(frozen=True)
class DetectionConfig:
    # Preprocessing
    blur_kernel_size: int = 5
    clahe_clip_limit: float = 2.0
    clahe_tile_grid: Tuple[int, int] = (8, 8)
    adaptive_block_size: int = 11
    adaptive_constant: float = 2.0

    # Edge detection
    edge_strategy: EdgeThresholdStrategy = EdgeThresholdStrategy.DYNAMIC
    canny_low: float = 50.0
    canny_high: float = 150.0
    dynamic_low_factor: float = 0.66
    dynamic_high_factor: float = 1.33

    # Contours
    approx_epsilon: float = 0.02
    min_area: float = 1000.0
    max_area_ratio: float = 0.5
    max_overlap: float = 0.5

    # Shape validation (ID card is 85.60mm x 53.98mm, ratio ~1.58)
    max_cosine: float = 0.3
    min_aspect_ratio: float = 1.4
    max_aspect_ratio: float = 1.8
    allow_portrait: bool = False

    # Output
    outline_color: Tuple[int, int, int] = (0, 255, 0)
    outline_thickness: int = 3

    # Diagnostics
    trace_polygons: bool = False

    def __post_init__(self):
        if self.blur_kernel_size < 1 or self.blur_kernel_size % 2 == 0:
            raise ValueError(f"blur_kernel_size must be a positive odd number, got {self.blur_kernel_size}")
        if self.adaptive_block_size < 3 or self.adaptive_block_size % 2 == 0:
            raise ValueError(f"adaptive_block_size must be an odd number >= 3, got {self.adaptive_block_size}")
        if self.clahe_clip_limit <= 0:
            raise ValueError(f"clahe_clip_limit must be positive, got {self.clahe_clip_limit}")
        if len(self.clahe_tile_grid) != 2 or min(self.clahe_tile_grid) < 1:
            raise ValueError(f"clahe_tile_grid must be two positive integers, got {self.clahe_tile_grid}")
        if self.canny_low < 0 or self.canny_high < self.canny_low:
            raise ValueError(f"Invalid Canny thresholds: low={self.canny_low}, high={self.canny_high}")
        if self.dynamic_low_factor < 0 or self.dynamic_high_factor < self.dynamic_low_factor:
            raise ValueError(
                f"Invalid dynamic threshold factors: low={self.dynamic_low_factor}, high={self.dynamic_high_factor}"
            )
        if self.approx_epsilon <= 0:
            raise ValueError(f"approx_epsilon must be positive, got {self.approx_epsilon}")
        if self.min_area < 0:
            raise ValueError(f"min_area must not be negative, got {self.min_area}")
        if not 0 < self.max_area_ratio <= 1:
            raise ValueError(f"max_area_ratio must be in (0, 1], got {self.max_area_ratio}")
        if not 0 <= self.max_overlap <= 1:
            raise ValueError(f"max_overlap must be in [0, 1], got {self.max_overlap}")
        if not 0 < self.max_cosine <= 1:
            raise ValueError(f"max_cosine must be in (0, 1], got {self.max_cosine}")
        if self.min_aspect_ratio < 0 or self.max_aspect_ratio <= self.min_aspect_ratio:
            raise ValueError(
                f"Invalid aspect ratio bounds: {self.min_aspect_ratio} - {self.max_aspect_ratio}"
            )
        if len(self.outline_color) != 3:
            raise ValueError(f"outline_color must have 3 components, got {self.outline_color}")
        if self.outline_thickness < 1:
            raise ValueError(f"outline_thickness must be at least 1, got {self.outline_thickness}")

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX) -> "DetectionConfig":
        """
        Build a config from environment variables (and a .env file, if any).

        Every field can be overridden with <prefix><FIELD_NAME>, e.g.
        CARD_DETECTION_EDGE_STRATEGY=fixed or CARD_DETECTION_CLAHE_TILE_GRID=4,4.
        Unset variables keep the default.

        Raises:
            ValueError: if a variable cannot be parsed
        """
        load_dotenv()

        overrides = {}
        for f in fields(cls):
            name = prefix + f.name.upper()
            raw = os.getenv(name)
            if raw is None or raw.strip() == "":
                continue
            try:
                overrides[f.name] = _parse_value(raw.strip(), f.default)
            except ValueError as e:
                raise ValueError(f"Invalid value for {name}: {raw!r} ({e})") from e

        return cls(**overrides)


def _parse_value(raw: str, default):
    """Parse raw to the type of the field's default value."""
    if isinstance(default, bool):
        lowered = raw.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ValueError("expected a boolean")
    if isinstance(default, EdgeThresholdStrategy):
        return EdgeThresholdStrategy(raw.lower())
    if isinstance(default, tuple):
        return tuple(int(part) for part in raw.split(","))
    if isinstance(default, int):
        return int(raw)
    if isinstance(default, float):
        return float(raw)
    return raw
