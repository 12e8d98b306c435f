"""
Drawing of detected cards
"""

from typing import Iterable, Optional, Tuple

import cv2
import numpy as np

from .types import Quadrilateral


class CardVisualizer:
    """
    Draws card outlines onto a copy of a frame.

    Colors are given as (R, G, B). Green sits in the middle channel for
    both RGB and BGR frames, so the default outline is green either way.
    On 4-channel frames the outline is drawn fully opaque.
    """

    def __init__(
        self,
        outline_color: Tuple[int, int, int] = (0, 255, 0),
        outline_thickness: int = 3,
        label_color: Tuple[int, int, int] = (255, 255, 255)
    ):
        """
        Initialize the visualizer.

        Args:
            outline_color: Outline color
            outline_thickness: Outline thickness in pixels
            label_color: Text color for aspect ratio labels
        """
        self.outline_color = outline_color
        self.outline_thickness = outline_thickness
        self.label_color = label_color

    def _color_for(self, frame: np.ndarray, color: Tuple[int, int, int]) -> Tuple[int, ...]:
        if frame.ndim == 3 and frame.shape[2] == 4:
            return tuple(color) + (255,)
        return tuple(color)

    def visualize(
        self,
        frame: np.ndarray,
        quads: Iterable[Quadrilateral],
        draw_labels: bool = False
    ) -> Optional[np.ndarray]:
        """
        Outline every quadrilateral.

        Args:
            frame: Input frame, left untouched
            quads: Quadrilaterals to draw
            draw_labels: Write each card's aspect ratio next to its top-left corner

        Returns:
            Annotated copy of the frame
        """
        if frame is None:
            return None

        result = frame.copy()
        quads = list(quads)
        if not quads:
            return result

        outlines = [np.round(q.corners).astype(np.int32).reshape(-1, 1, 2) for q in quads]
        cv2.drawContours(
            result,
            outlines,
            -1,
            self._color_for(result, self.outline_color),
            self.outline_thickness
        )

        if draw_labels:
            text_color = self._color_for(result, self.label_color)
            for quad in quads:
                x, y = quad.corners[0]
                cv2.putText(
                    result,
                    f"{quad.aspect_ratio:.2f}",
                    (int(x), max(int(y) - 8, 12)),
                    cv2.FONT_HERSHEY_SIMPLEX,
                    0.5,
                    text_color,
                    1,
                    cv2.LINE_AA
                )

        return result

    def create_side_by_side(
        self,
        original: np.ndarray,
        visualized: np.ndarray
    ) -> Optional[np.ndarray]:
        """
        Put the original and the annotated frame next to each other.

        Returns:
            Combined image
        """
        if original is None or visualized is None:
            return original if original is not None else visualized

        if original.shape[0] != visualized.shape[0]:
            height = original.shape[0]
            width = int(visualized.shape[1] * height / visualized.shape[0])
            visualized = cv2.resize(visualized, (width, height))

        return np.hstack([original, visualized])
