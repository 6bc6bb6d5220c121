"""Visualization utilities for debugging and display."""

import cv2
import numpy as np
from typing import Iterable, Tuple

from circlehough.detection.hits import CircleHit

# BGR cyan
HIT_COLOR = (255, 255, 0)


def draw_hits(image: np.ndarray, hits: Iterable[CircleHit], 
              color: Tuple[int, int, int] = HIT_COLOR, 
              thickness: int = 3, label: bool = False) -> np.ndarray:
    """Draw detected circles on a copy of the image."""
    output = image.copy()
    if output.ndim == 2:
        output = cv2.cvtColor(output, cv2.COLOR_GRAY2BGR)
    for rank, hit in enumerate(hits, start=1):
        cv2.circle(output, (hit.x, hit.y), hit.r, color, thickness)
        if label:
            cv2.putText(output, str(rank), (hit.x + 2, hit.y - 2),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.4, color, 1)
    return output


def side_by_side(left: np.ndarray, right: np.ndarray) -> np.ndarray:
    """Stack two equally sized images horizontally, e.g. source and preprocessed."""
    if left.shape[:2] != right.shape[:2]:
        raise ValueError(f"Image sizes differ: {left.shape[:2]} vs {right.shape[:2]}")
    return np.hstack([left, right])
