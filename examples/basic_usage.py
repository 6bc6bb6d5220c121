"""Basic usage example for circlehough."""

from circlehough import CircleDetector
from circlehough.preprocessing.pipeline import preprocess
from circlehough.utils.synthetic import make_circle_image
from circlehough.utils.visualization import draw_hits, side_by_side
from circlehough.utils.io_handler import save_image


def main():
    """Detect circles in a synthetic image and save an overlay."""
    # Build a test image with two outlines
    image = make_circle_image(120, 120, [(45, 50, 22), (85, 80, 25)])
    
    # Detect circles
    print("Detecting circles...")
    detector = CircleDetector(min_radius=15, max_hits=5)
    hits = detector.detect(image)
    print(f"Detected {len(hits)} circles")
    for rank, hit in enumerate(hits, start=1):
        print(f"  hit {rank}: {hit}")
    
    # Visualize results next to the preprocessed image
    print("Creating visualization...")
    output = side_by_side(draw_hits(image, hits), preprocess(image))
    
    # Save output
    output_path = "output/basic_detection.png"
    save_image(output, output_path)
    print(f"Results saved to {output_path}")


if __name__ == "__main__":
    main()
