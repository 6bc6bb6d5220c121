"""Tests for preprocessing module."""

import pytest
import numpy as np
from circlehough.errors import InvalidImageError
from circlehough.preprocessing.filters import (
    BLUR_KERNEL, EDGE_KERNEL, KernelFilter, IntensityInverter,
    gaussian_blur, edge_detect, negative
)
from circlehough.preprocessing.pipeline import PreprocessingPipeline, preprocess


class TestKernels:
    """Test the standard kernels."""
    
    def test_blur_kernel_normalized(self):
        """Blur weights sum to one."""
        assert BLUR_KERNEL.shape == (3, 3)
        assert BLUR_KERNEL.sum() == pytest.approx(1.0)
        assert BLUR_KERNEL[1, 1] == pytest.approx(4 / 16)
    
    def test_edge_kernel_sums_to_zero(self):
        """Laplacian weights sum to zero."""
        assert EDGE_KERNEL.sum() == 0
        assert EDGE_KERNEL[1, 1] == 4
        assert EDGE_KERNEL[0, 0] == 0
    
    def test_kernels_read_only(self):
        """Standard kernels cannot be modified."""
        with pytest.raises(ValueError):
            BLUR_KERNEL[0, 0] = 5
    
    def test_kernel_filter_rejects_wrong_size(self):
        """Only 3x3 kernels are accepted."""
        with pytest.raises(ValueError):
            KernelFilter(np.ones((5, 5)))


class TestKernelFilter:
    """Test convolution behaviour."""
    
    def test_blur_uniform_image_unchanged(self):
        """A constant image is a fixed point of the blur."""
        test_image = np.full((20, 30, 3), 137, dtype=np.uint8)
        blurred = gaussian_blur(test_image)
        assert blurred.shape == test_image.shape
        assert blurred.dtype == np.uint8
        assert np.array_equal(blurred, test_image)
    
    def test_edge_uniform_image_zero(self):
        """A constant image has no edge response, borders included."""
        test_image = np.full((20, 30, 3), 200, dtype=np.uint8)
        edges = edge_detect(test_image)
        assert np.all(edges == 0)
    
    def test_blur_impulse_weights(self):
        """An impulse spreads according to the kernel weights."""
        test_image = np.zeros((5, 5, 3), dtype=np.uint8)
        test_image[2, 2] = 160
        blurred = gaussian_blur(test_image)
        assert blurred[2, 2, 0] == 40
        assert blurred[2, 1, 0] == 20
        assert blurred[1, 2, 0] == 20
        assert blurred[1, 1, 0] == 10
        assert blurred[0, 0, 0] == 0
    
    def test_edge_dark_pixel_on_white(self):
        """A dark dot responds on its 4-neighbours, clamped to zero at its center."""
        test_image = np.full((7, 7, 3), 255, dtype=np.uint8)
        test_image[3, 3] = 0
        edges = edge_detect(test_image)
        assert edges[3, 3, 0] == 0
        assert edges[3, 2, 0] == 255
        assert edges[2, 3, 0] == 255
        assert edges[2, 2, 0] == 0
    
    def test_channels_independent(self):
        """Each channel is filtered separately."""
        test_image = np.zeros((5, 5, 3), dtype=np.uint8)
        test_image[2, 2] = [160, 0, 80]
        blurred = gaussian_blur(test_image)
        assert list(blurred[2, 2]) == [40, 0, 20]
    
    def test_replicated_border(self):
        """Border pixels see replicated neighbours, not zeros."""
        test_image = np.full((6, 6, 3), 100, dtype=np.uint8)
        test_image[:, 0] = 200
        blurred = gaussian_blur(test_image)
        # Column 0 is replicated outward: (200*4 + 200*8 + 100*4) / 16
        assert blurred[3, 0, 0] == 175
        assert blurred[3, 1, 0] == 125
    
    def test_input_not_modified(self):
        """Filters return new arrays."""
        test_image = np.random.randint(0, 256, (10, 10, 3), dtype=np.uint8)
        original = test_image.copy()
        gaussian_blur(test_image)
        edge_detect(test_image)
        negative(test_image)
        assert np.array_equal(test_image, original)
    
    def test_rejects_invalid_image(self):
        """None and empty images fail fast."""
        with pytest.raises(InvalidImageError):
            gaussian_blur(None)
        with pytest.raises(InvalidImageError):
            gaussian_blur(np.zeros((0, 10, 3), dtype=np.uint8))


class TestIntensityInverter:
    """Test the negative filter."""
    
    def test_values(self):
        """Every value maps to 255 - v."""
        test_image = np.array([[[0, 1, 255], [128, 250, 5]]], dtype=np.uint8)
        inverted = IntensityInverter().apply(test_image)
        assert inverted.tolist() == [[[255, 254, 0], [127, 5, 250]]]
    
    def test_involution(self):
        """Inverting twice gives back the original."""
        test_image = np.random.randint(0, 256, (40, 30, 3), dtype=np.uint8)
        assert np.array_equal(negative(negative(test_image)), test_image)


class TestPreprocessingPipeline:
    """Test the blur, edge, invert pipeline."""
    
    def test_stage_order(self):
        """Pipeline equals the three filters applied in order."""
        test_image = np.random.randint(0, 256, (32, 48, 3), dtype=np.uint8)
        expected = negative(edge_detect(gaussian_blur(test_image)))
        assert np.array_equal(preprocess(test_image), expected)
    
    def test_white_image_stays_white(self):
        """No edges means every output pixel is background."""
        test_image = np.full((25, 25, 3), 255, dtype=np.uint8)
        assert np.all(preprocess(test_image) == 255)
    
    def test_edges_become_dark(self):
        """A dark line produces dark pixels after preprocessing."""
        test_image = np.full((21, 21, 3), 255, dtype=np.uint8)
        test_image[10, :] = 0
        processed = preprocess(test_image)
        # Blurred profile 255, 191, 128 gives a Laplacian peak two rows off the line
        assert processed[8, 10, 0] < 250
        assert processed[12, 10, 0] < 250
        assert processed[0, 10, 0] == 255
    
    def test_greyscale_input(self):
        """2-D input is expanded to three channels."""
        test_image = np.full((10, 12), 255, dtype=np.uint8)
        processed = preprocess(test_image)
        assert processed.shape == (10, 12, 3)
    
    def test_stage_toggles(self):
        """Disabled stages are skipped."""
        test_image = np.random.randint(0, 256, (16, 16, 3), dtype=np.uint8)
        only_invert = PreprocessingPipeline(blur=False, edge=False, invert=True)
        assert np.array_equal(only_invert.preprocess(test_image), negative(test_image))
    
    def test_from_config(self):
        """Pipeline reads its stage toggles from config."""
        pipeline = PreprocessingPipeline.from_config({"preprocessing": {"blur": False}})
        assert pipeline.blur is False
        assert pipeline.edge is True
        assert pipeline.invert is True
