"""Synthetic test images."""

import numpy as np
from skimage.draw import circle_perimeter
from typing import Iterable, Optional, Tuple


def make_circle_image(width: int, height: int, circles: Iterable[Tuple[int, int, int]],
                      background: int = 255, color: int = 0) -> np.ndarray:
    """
    Draw one pixel wide circle outlines on a uniform background.
    
    Args:
        width: Image width
        height: Image height
        circles: (x, y, r) triples
        background: Background grey level
        color: Outline grey level
        
    Returns:
        (height, width, 3) uint8 image
    """
    image = np.full((height, width, 3), background, dtype=np.uint8)
    for x, y, r in circles:
        rr, cc = circle_perimeter(y, x, r, shape=(height, width))
        image[rr, cc] = color
    return image


def add_salt_noise(image: np.ndarray, fraction: float = 0.01,
                   seed: Optional[int] = None) -> np.ndarray:
    """Darken a random fraction of pixels, returning a new image."""
    rng = np.random.default_rng(seed)
    noisy = image.copy()
    mask = rng.random(image.shape[:2]) < fraction
    noisy[mask] = 0
    return noisy
