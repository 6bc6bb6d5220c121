"""Vote space snapshots for visual debugging."""

import logging
from pathlib import Path
from typing import List, Optional

import numpy as np

from circlehough.detection.accumulator import VoteSpace
from circlehough.utils.io_handler import save_image

logger = logging.getLogger(__name__)


def accumulator_slice_image(vote_space: VoteSpace, r: int,
                            max_votes: Optional[int] = None) -> np.ndarray:
    """
    Render one radius layer as a white BGRA image.
    
    Alpha is 255 - round(255 * votes / max_votes), so strong centers are
    transparent when viewed over a dark background.
    
    Args:
        vote_space: Accumulated votes
        r: Radius layer to render
        max_votes: Normalization value, defaults to the global maximum
        
    Returns:
        (height, width, 4) uint8 array
    """
    if max_votes is None:
        max_votes = vote_space.max_votes()
    
    layer = vote_space.layer(r).T.astype(np.float64)
    if max_votes > 0:
        alpha = 255 - np.floor(255.0 * layer / max_votes + 0.5)
    else:
        alpha = np.full(layer.shape, 255.0)
    
    image = np.full(layer.shape + (4,), 255, dtype=np.uint8)
    image[:, :, 3] = np.clip(alpha, 0, 255).astype(np.uint8)
    return image


def write_accumulator_slices(vote_space: VoteSpace, output_dir: str,
                             stride: int = 21, prefix: str = 'hough') -> List[str]:
    """Write every stride-th radius layer to <output_dir>/<prefix>_<r>.png."""
    max_votes = vote_space.max_votes()
    paths = []
    for r in range(vote_space.min_radius, vote_space.max_radius, stride):
        path = str(Path(output_dir) / f"{prefix}_{r}.png")
        save_image(accumulator_slice_image(vote_space, r, max_votes), path)
        paths.append(path)
    logger.info(f"Hough transform images generated: {len(paths)} in {output_dir}")
    return paths
