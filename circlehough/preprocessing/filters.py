"""3x3 convolution filters and intensity inversion."""

import cv2
import numpy as np

from circlehough.image import PixelGrid, as_pixel_grid


def _make_kernel(weights, multiplier: float = 1.0) -> np.ndarray:
    kernel = np.asarray(weights, dtype=np.float32).reshape(3, 3) * multiplier
    kernel.setflags(write=False)
    return kernel


# Discrete Gaussian approximation
BLUR_KERNEL = _make_kernel([1, 2, 1,
                            2, 4, 2,
                            1, 2, 1], 1.0 / 16.0)

# Discrete Laplacian
EDGE_KERNEL = _make_kernel([0, -1, 0,
                            -1, 4, -1,
                            0, -1, 0])


class KernelFilter:
    """Applies a 3x3 kernel to every channel with replicated borders."""
    
    def __init__(self, kernel: np.ndarray):
        kernel = np.array(kernel, dtype=np.float32)
        if kernel.shape != (3, 3):
            raise ValueError(f"Kernel must be 3x3, got {kernel.shape}")
        self.kernel = kernel
    
    def apply(self, image: PixelGrid) -> PixelGrid:
        """
        Convolve image with the kernel.
        
        Args:
            image: Input pixel grid
            
        Returns:
            New pixel grid of identical shape, rounded and clamped to [0, 255]
        """
        image = as_pixel_grid(image)
        # filter2D correlates, flip for convolution
        flipped = np.ascontiguousarray(self.kernel[::-1, ::-1])
        response = cv2.filter2D(image.astype(np.float32), cv2.CV_32F, flipped,
                                borderType=cv2.BORDER_REPLICATE)
        return np.clip(np.rint(response), 0, 255).astype(np.uint8)


class IntensityInverter:
    """Maps every channel value v to 255 - v."""
    
    def __init__(self):
        self.table = (255 - np.arange(256)).astype(np.uint8)
    
    def apply(self, image: PixelGrid) -> PixelGrid:
        """Return the negative of an image."""
        image = as_pixel_grid(image)
        return cv2.LUT(image, self.table)


def gaussian_blur(image: PixelGrid) -> PixelGrid:
    """Smooth image with the 3x3 blur kernel."""
    return KernelFilter(BLUR_KERNEL).apply(image)


def edge_detect(image: PixelGrid) -> PixelGrid:
    """Apply the 3x3 Laplacian edge kernel."""
    return KernelFilter(EDGE_KERNEL).apply(image)


def negative(image: PixelGrid) -> PixelGrid:
    """Invert image intensities."""
    return IntensityInverter().apply(image)
