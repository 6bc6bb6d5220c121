"""Local maximum extraction from the vote space."""

import logging
import math
from typing import Callable, List, Optional

import numpy as np
from scipy.ndimage import maximum_filter

from circlehough.detection.accumulator import VoteSpace
from circlehough.detection.hits import CircleHit

logger = logging.getLogger(__name__)


def threshold_value(r: int, min_radius: int = 6) -> int:
    """
    Minimum vote count for a circle of radius r to be accepted.
    
    Empirically calibrated: a floor from the smallest radius, a logarithmic
    term for large radii, and a flat boost below radius 15.
    """
    log_term = 13 * math.log2(r) if r > 0 else 0.0
    value = max(min_radius * math.pi * 2.5, 40, log_term)
    if r < 15:
        value += r * 2.5
    return int(math.floor(value + 0.5))


class PeakExtractor:
    """Finds above-threshold local maxima in each radius layer."""
    
    def __init__(self, min_radius: int = 6,
                 threshold_fn: Optional[Callable[[int], int]] = None):
        """
        Initialize peak extractor.
        
        Args:
            min_radius: Smallest radius, feeds the default threshold floor
            threshold_fn: Optional replacement for the radius threshold
        """
        self.min_radius = min_radius
        self.threshold_fn = threshold_fn
    
    def threshold(self, r: int) -> int:
        if self.threshold_fn is not None:
            return self.threshold_fn(r)
        return threshold_value(r, self.min_radius)
    
    def extract(self, vote_space: VoteSpace) -> List[CircleHit]:
        """
        Extract circle hypotheses.
        
        A cell is accepted when it reaches the threshold for its radius and
        none of its 8 neighbours in the same radius layer is strictly greater.
        
        Args:
            vote_space: Accumulated votes
            
        Returns:
            Unsorted hits in discovery order (radius, then x, then y)
        """
        if vote_space.is_empty():
            logger.info("Vote space is empty, no local maxima")
            return []
        
        data = vote_space.data
        thresholds = np.array([self.threshold(r) for r in vote_space.radii])
        
        # Neighbourhood spans x and y only, never adjacent radii
        neighbourhood_max = maximum_filter(data, size=(3, 3, 1), mode='constant', cval=0)
        accepted = (data >= thresholds[np.newaxis, np.newaxis, :]) & (data >= neighbourhood_max)
        
        layers, xs, ys = np.nonzero(accepted.transpose(2, 0, 1))
        hits = [
            CircleHit(int(x), int(y), int(layer) + vote_space.min_radius, int(data[x, y, layer]))
            for layer, x, y in zip(layers, xs, ys)
        ]
        
        logger.info(f"Local maxima found: {len(hits)}")
        return hits
