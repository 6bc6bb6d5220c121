"""
circlehough Core Detector
Main entry point for circle detection
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import numpy as np

from circlehough.config import DEFAULT_CONFIG, merge_config, validate_config
from circlehough.detection.accumulator import HoughAccumulator, VoteSpace
from circlehough.detection.hits import CircleHit, sort_hits, suppress_concentric
from circlehough.detection.peaks import PeakExtractor
from circlehough.image import PixelGrid, as_pixel_grid
from circlehough.preprocessing.pipeline import PreprocessingPipeline
from circlehough.utils.diagnostics import write_accumulator_slices
from circlehough.utils.io_handler import load_image
from circlehough.utils.metrics import PerformanceMetrics

logger = logging.getLogger(__name__)


@dataclass
class DetectionResult:
    """Everything one detection call produced."""
    hits: List[CircleHit]
    vote_space: VoteSpace
    preprocessed: PixelGrid
    timings_ms: Dict[str, float] = field(default_factory=dict)


class CircleDetector:
    """Detects circles with a brute-force circle Hough transform."""
    
    def __init__(self, min_radius: int = 6, edge_grey_threshold: int = 250,
                 angle_step_degrees: float = 4, max_cells: int = 64_000_000,
                 workers: int = 1, center_tolerance: int = 2,
                 radius_tolerance: Optional[int] = None,
                 max_hits: Optional[int] = None,
                 diagnostics_dir: Optional[str] = None,
                 diagnostics_stride: int = 21,
                 preprocessor: Optional[PreprocessingPipeline] = None):
        """
        Initialize circle detector
        
        Args:
            min_radius: Smallest circle radius searched
            edge_grey_threshold: Grey value below which a preprocessed pixel is an edge
            angle_step_degrees: Angular sampling step for voting
            max_cells: Vote space size limit
            workers: Voting threads
            center_tolerance: Center distance for concentric suppression
            radius_tolerance: Radius distance for concentric suppression, None disables it
            max_hits: Keep only the strongest hits, None keeps all
            diagnostics_dir: Write accumulator slices here when set
            diagnostics_stride: Radius step between written slices
            preprocessor: Custom preprocessing pipeline
        """
        self.preprocessor = preprocessor or PreprocessingPipeline()
        self.accumulator = HoughAccumulator(
            min_radius=min_radius,
            edge_grey_threshold=edge_grey_threshold,
            angle_step_degrees=angle_step_degrees,
            max_cells=max_cells,
            workers=workers
        )
        self.peak_extractor = PeakExtractor(min_radius=min_radius)
        self.center_tolerance = center_tolerance
        self.radius_tolerance = radius_tolerance
        self.max_hits = max_hits
        self.diagnostics_dir = diagnostics_dir
        self.diagnostics_stride = diagnostics_stride
    
    @classmethod
    def from_config(cls, config: Dict[str, Any] = None) -> "CircleDetector":
        """Create detector from a (partial) configuration dictionary."""
        config = validate_config(merge_config(DEFAULT_CONFIG, config or {}))
        detection = config["detection"]
        peaks = config["peaks"]
        diagnostics = config["diagnostics"]
        
        return cls(
            min_radius=detection["min_radius"],
            edge_grey_threshold=detection["edge_grey_threshold"],
            angle_step_degrees=detection["angle_step_degrees"],
            max_cells=detection["max_cells"],
            workers=detection["workers"],
            center_tolerance=peaks["center_tolerance"],
            radius_tolerance=peaks["radius_tolerance"],
            max_hits=peaks["max_hits"],
            diagnostics_dir=diagnostics["output_dir"] if diagnostics["enabled"] else None,
            diagnostics_stride=diagnostics["radius_stride"],
            preprocessor=PreprocessingPipeline.from_config(config)
        )
    
    @property
    def min_radius(self) -> int:
        return self.accumulator.min_radius
    
    def detect(self, image: Union[str, Path, np.ndarray],
               max_hits: Optional[int] = None) -> List[CircleHit]:
        """
        Detect circles in image.
        
        Args:
            image: Path to image file or pixel grid
            max_hits: Override for the number of strongest hits returned
            
        Returns:
            Hits sorted by votes, strongest first; empty when nothing is found
        """
        return self.detect_with_details(image, max_hits=max_hits).hits
    
    def detect_with_details(self, image: Union[str, Path, np.ndarray],
                            max_hits: Optional[int] = None) -> DetectionResult:
        """Detect circles and also return intermediate products and timings."""
        if isinstance(image, (str, Path)):
            image = load_image(image)
        image = as_pixel_grid(image)
        
        metrics = PerformanceMetrics()
        logger.info(f"Circle detection started on {image.shape[1]}x{image.shape[0]} image")
        
        # Step 1: Preprocess
        metrics.start_timer('preprocessing')
        preprocessed = self.preprocessor.preprocess(image)
        metrics.stop_timer('preprocessing')
        logger.info("Pre-processing complete")
        
        # Step 2: Vote
        metrics.start_timer('accumulation')
        vote_space = self.accumulator.build(preprocessed)
        metrics.stop_timer('accumulation')
        
        peak = vote_space.peak()
        if peak is None:
            logger.info("No edge votes cast")
        else:
            x, y, r, votes = peak
            logger.info(f"Maximum found: max={votes}, max_r={r}, max_x={x}, max_y={y}")
        
        if self.diagnostics_dir:
            write_accumulator_slices(vote_space, self.diagnostics_dir, self.diagnostics_stride)
        
        # Step 3: Local maxima
        metrics.start_timer('peaks')
        hits = sort_hits(self.peak_extractor.extract(vote_space))
        metrics.stop_timer('peaks')
        
        if self.radius_tolerance is not None:
            before = len(hits)
            hits = suppress_concentric(hits, self.center_tolerance, self.radius_tolerance)
            logger.debug(f"Concentric suppression removed {before - len(hits)} hits")
        
        limit = max_hits if max_hits is not None else self.max_hits
        if limit is not None:
            hits = hits[:limit]
        
        for rank, hit in enumerate(hits):
            logger.debug(f"hit {rank}: {hit}")
        
        timings = metrics.get_summary()
        logger.info(f"Detection complete: {len(hits)} circles in "
                    f"{sum(timings.values()):.1f}ms")
        
        return DetectionResult(hits=hits, vote_space=vote_space,
                               preprocessed=preprocessed, timings_ms=timings)


def detect_circles(image: Union[str, Path, np.ndarray], **params) -> List[CircleHit]:
    """Detect circles with a one-off detector built from keyword parameters."""
    return CircleDetector(**params).detect(image)
