"""
Demo script to showcase card_detection module usage

Usage:
    python -m card_detection.demo <image_path> [output_dir]

Thresholds can be overridden with CARD_DETECTION_* environment variables
or a .env file.
"""

import sys
from pathlib import Path

import cv2

from card_detection import CardDetector, CardVisualizer, DetectionConfig, InvalidFrameError


def main():
    """Main demo function"""

    if len(sys.argv) < 2:
        print("Please provide image path as argument.")
        return 1

    image_path = Path(sys.argv[1])
    output_dir = Path(sys.argv[2]) if len(sys.argv) > 2 else Path(__file__).parent / "output"

    if not image_path.exists():
        print(f"Error: Image not found at path: {image_path}")
        return 1

    print(f"Loading image: {image_path}")
    image = cv2.imread(str(image_path))

    if image is None:
        print("Error: Failed to load image")
        return 1

    print(f"Image dimensions: {image.shape[1]}x{image.shape[0]} px")

    # Camera frames arrive as RGBA
    frame = cv2.cvtColor(image, cv2.COLOR_BGR2RGBA)

    config = DetectionConfig.from_env()
    detector = CardDetector(config)

    print("Detecting cards...")
    try:
        result = detector.analyze(frame)
    except InvalidFrameError as e:
        print(f"Frame rejected: {e}")
        return 1

    print(f"Contours found: {result.contour_count}")
    print(f"Cards detected: {len(result.quadrilaterals)}")

    corner_names = ["Top-left", "Top-right", "Bottom-right", "Bottom-left"]
    for i, quad in enumerate(result.quadrilaterals):
        print(f"\nCard {i + 1}: aspect ratio {quad.aspect_ratio:.3f}, area {int(quad.area)} px2")
        for name, corner in zip(corner_names, quad.corners):
            print(f"  {name}: ({corner[0]:.1f}, {corner[1]:.1f})")

    visualizer = CardVisualizer(config.outline_color, config.outline_thickness)
    labeled = visualizer.visualize(frame, result.quadrilaterals, draw_labels=True)
    comparison = visualizer.create_side_by_side(frame, labeled)

    output_dir.mkdir(parents=True, exist_ok=True)
    output_basic = output_dir / f"{image_path.stem}_cards.jpg"
    output_comparison = output_dir / f"{image_path.stem}_comparison.jpg"

    cv2.imwrite(str(output_basic), cv2.cvtColor(result.frame, cv2.COLOR_RGBA2BGR))
    cv2.imwrite(str(output_comparison), cv2.cvtColor(comparison, cv2.COLOR_RGBA2BGR))

    print(f"\nResults saved:")
    print(f"  {output_basic}")
    print(f"  {output_comparison}")

    try:
        print("\nDisplaying result (press any key to exit)...")
        cv2.imshow("Comparison - Original vs Detected", cv2.cvtColor(comparison, cv2.COLOR_RGBA2BGR))
        cv2.waitKey(0)
        cv2.destroyAllWindows()
    except cv2.error:
        print("\nCannot display window (running in headless mode)")

    print("\nDemo completed!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
