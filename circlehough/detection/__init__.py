"""Circle Hough transform: vote accumulation and peak extraction."""

from .accumulator import HoughAccumulator, VoteSpace
from .hits import CircleHit, sort_hits, top_hits, suppress_concentric
from .peaks import PeakExtractor, threshold_value

__all__ = [
    'HoughAccumulator', 'VoteSpace',
    'CircleHit', 'sort_hits', 'top_hits', 'suppress_concentric',
    'PeakExtractor', 'threshold_value',
]
