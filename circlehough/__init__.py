"""
circlehough - circle detection with a classical Hough transform

Blur, Laplacian edge extraction and inversion, followed by brute-force
(x, y, radius) voting and per-layer non-maximum suppression.
"""

from .core import CircleDetector, DetectionResult, detect_circles
from .detection import CircleHit, HoughAccumulator, PeakExtractor, VoteSpace, threshold_value
from .errors import AccumulatorSizeError, CircleHoughError, ConfigError, InvalidImageError
from .preprocessing import PreprocessingPipeline

__all__ = [
    'CircleDetector', 'DetectionResult', 'detect_circles',
    'CircleHit', 'HoughAccumulator', 'PeakExtractor', 'VoteSpace', 'threshold_value',
    'AccumulatorSizeError', 'CircleHoughError', 'ConfigError', 'InvalidImageError',
    'PreprocessingPipeline',
]
__version__ = '1.0.0'
