"""Performance tests."""

import pytest
import numpy as np
import time
from circlehough.core import CircleDetector
from circlehough.detection.accumulator import HoughAccumulator
from circlehough.preprocessing.pipeline import preprocess
from circlehough.utils.synthetic import make_circle_image, add_salt_noise


class TestPerformance:
    """Test performance benchmarks."""
    
    def test_preprocessing_speed(self):
        """Test preprocessing performance."""
        test_image = np.random.randint(0, 256, (480, 640, 3), dtype=np.uint8)
        
        start = time.time()
        preprocess(test_image)
        duration = (time.time() - start) * 1000
        
        assert duration < 500  # Should complete in under 500ms
    
    def test_small_image_detection_speed(self):
        """Test full detection on a 100x100 image."""
        test_image = add_salt_noise(make_circle_image(100, 100, [(50, 50, 20)]), 0.002, seed=7)
        
        start = time.time()
        result = CircleDetector().detect_with_details(test_image)
        duration = (time.time() - start) * 1000
        
        assert duration < 10000  # Should complete in under 10 seconds
        assert result.timings_ms['accumulation'] <= duration
    
    def test_coarser_angle_step_fewer_votes(self):
        """Angle step trades votes for speed."""
        test_image = preprocess(make_circle_image(80, 80, [(40, 40, 15)]))
        fine = HoughAccumulator(angle_step_degrees=4).build(test_image)
        coarse = HoughAccumulator(angle_step_degrees=6).build(test_image)
        assert coarse.data.sum() < fine.data.sum()
