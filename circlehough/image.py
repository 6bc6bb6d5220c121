"""Pixel grid validation and conversion."""

import numpy as np

from circlehough.errors import InvalidImageError

# A pixel grid is an (H, W, 3) uint8 array; pixel (x, y) lives at grid[y, x].
PixelGrid = np.ndarray


def as_pixel_grid(image) -> PixelGrid:
    """
    Validate an image and return it as a 3-channel uint8 pixel grid.
    
    Greyscale input is replicated across three channels and a fourth
    (alpha) channel is dropped. The input array is never modified.
    
    Raises:
        InvalidImageError: if the image is None, empty or not an image array
    """
    if image is None:
        raise InvalidImageError("Image is None")
    
    if not isinstance(image, np.ndarray):
        raise InvalidImageError(f"Expected numpy array, got {type(image).__name__}")
    
    if not np.issubdtype(image.dtype, np.number):
        raise InvalidImageError(f"Unsupported image dtype {image.dtype}")
    
    if image.ndim == 2:
        image = np.repeat(image[:, :, np.newaxis], 3, axis=2)
    elif image.ndim == 3 and image.shape[2] == 4:
        image = image[:, :, :3]
    elif image.ndim != 3 or image.shape[2] != 3:
        raise InvalidImageError(f"Unsupported image shape {image.shape}")
    
    height, width = image.shape[:2]
    if width == 0 or height == 0:
        raise InvalidImageError(f"Image has zero dimension ({width}x{height})")
    
    if image.dtype != np.uint8:
        image = np.clip(np.rint(image), 0, 255).astype(np.uint8)
    
    return np.ascontiguousarray(image)


def grid_size(image: PixelGrid):
    """Return (width, height) of a pixel grid."""
    return image.shape[1], image.shape[0]


def grey_values(image: PixelGrid) -> np.ndarray:
    """Unweighted channel average per pixel, truncated to int, shape (H, W)."""
    return image.astype(np.int32).sum(axis=2) // 3
