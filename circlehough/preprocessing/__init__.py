"""Image preprocessing: convolution filters and the detection pipeline."""

from .filters import (
    BLUR_KERNEL, EDGE_KERNEL, KernelFilter, IntensityInverter,
    gaussian_blur, edge_detect, negative
)
from .pipeline import PreprocessingPipeline, preprocess

__all__ = [
    'BLUR_KERNEL', 'EDGE_KERNEL', 'KernelFilter', 'IntensityInverter',
    'gaussian_blur', 'edge_detect', 'negative',
    'PreprocessingPipeline', 'preprocess',
]
