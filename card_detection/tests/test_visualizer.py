"""
Tests for CardVisualizer
"""

import numpy as np
import pytest

from card_detection import CardVisualizer, Quadrilateral


@pytest.fixture
def quad():
    corners = np.array([[100, 100], [258, 100], [258, 200], [100, 200]], dtype=np.float32)
    return Quadrilateral(corners=corners, area=15800.0, aspect_ratio=1.58, max_cosine=0.0)


@pytest.fixture
def frame():
    image = np.zeros((480, 640, 4), dtype=np.uint8)
    image[:, :, 3] = 255
    return image


class TestCardVisualizer:
    """Tests for CardVisualizer"""

    @pytest.fixture
    def visualizer(self):
        return CardVisualizer()

    def test_visualizer_init(self, visualizer):
        assert visualizer.outline_color == (0, 255, 0)
        assert visualizer.outline_thickness == 3

    def test_visualizer_custom_params(self):
        visualizer = CardVisualizer(outline_color=(255, 0, 0), outline_thickness=5)
        assert visualizer.outline_color == (255, 0, 0)
        assert visualizer.outline_thickness == 5

    def test_visualize_none_frame(self, visualizer, quad):
        assert visualizer.visualize(None, [quad]) is None

    def test_visualize_no_quads(self, visualizer, frame):
        result = visualizer.visualize(frame, [])
        assert result is not frame
        np.testing.assert_array_equal(result, frame)

    def test_outline_rgba(self, visualizer, frame, quad):
        result = visualizer.visualize(frame, [quad])

        assert result.shape == frame.shape
        np.testing.assert_array_equal(result[100, 180], [0, 255, 0, 255])
        np.testing.assert_array_equal(result[150, 100], [0, 255, 0, 255])
        # 3 px stroke: one pixel either side of the line
        np.testing.assert_array_equal(result[101, 180], [0, 255, 0, 255])
        np.testing.assert_array_equal(result[103, 180], [0, 0, 0, 255])
        # Inside untouched
        np.testing.assert_array_equal(result[150, 180], [0, 0, 0, 255])

    def test_outline_rgb(self, visualizer, quad):
        frame = np.zeros((480, 640, 3), dtype=np.uint8)
        result = visualizer.visualize(frame, [quad])
        np.testing.assert_array_equal(result[100, 180], [0, 255, 0])

    def test_original_untouched(self, visualizer, frame, quad):
        original = frame.copy()
        visualizer.visualize(frame, [quad])
        np.testing.assert_array_equal(frame, original)

    def test_several_quads(self, visualizer, frame, quad):
        other = Quadrilateral(
            corners=quad.corners + [300, 200], area=quad.area,
            aspect_ratio=quad.aspect_ratio, max_cosine=quad.max_cosine
        )
        result = visualizer.visualize(frame, [quad, other])
        np.testing.assert_array_equal(result[100, 180], [0, 255, 0, 255])
        np.testing.assert_array_equal(result[300, 480], [0, 255, 0, 255])

    def test_labels(self, visualizer, frame, quad):
        plain = visualizer.visualize(frame, [quad])
        labeled = visualizer.visualize(frame, [quad], draw_labels=True)
        assert not np.array_equal(plain, labeled)
        # Label sits above the top-left corner, the outline has no red
        assert np.any(labeled[70:99, 95:160, 0] > 0)

    def test_create_side_by_side(self, visualizer, frame, quad):
        result = visualizer.create_side_by_side(frame, visualizer.visualize(frame, [quad]))
        assert result.shape == (480, 1280, 4)

    def test_side_by_side_resizes(self, visualizer, frame):
        small = np.zeros((240, 320, 4), dtype=np.uint8)
        result = visualizer.create_side_by_side(frame, small)
        assert result.shape == (480, 1280, 4)

    def test_create_side_by_side_none_images(self, visualizer, frame):
        assert visualizer.create_side_by_side(None, None) is None
        assert visualizer.create_side_by_side(frame, None) is frame
