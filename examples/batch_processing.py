"""Batch processing example for multiple images."""

from pathlib import Path
from circlehough import CircleDetector, CircleHoughError
from circlehough.config import load_config
from circlehough.utils.io_handler import JSONWriter, hits_to_dict, load_image
from circlehough.utils.logger import setup_logger


def main():
    """Detect circles in every PNG of a directory."""
    logger = setup_logger('batch_processor')
    
    # Initialize detector
    detector = CircleDetector.from_config(load_config(overrides={"peaks": {"max_hits": 10}}))
    
    # Get all images
    images_dir = Path("test_data/images")
    image_files = sorted(images_dir.glob("*.png"))
    
    logger.info(f"Processing {len(image_files)} images...")
    
    results = []
    for i, image_path in enumerate(image_files):
        logger.info(f"Processing image {i+1}/{len(image_files)}: {image_path.name}")
        
        try:
            image = load_image(str(image_path))
            hits = detector.detect(image)
        except CircleHoughError as e:
            logger.warning(f"Skipping {image_path}: {e}")
            continue
        
        results.append(hits_to_dict(hits, image_path.name))
    
    # Save results
    JSONWriter.save_results(results, "output/batch_results.json")
    logger.info("Batch processing complete!")


if __name__ == "__main__":
    main()
