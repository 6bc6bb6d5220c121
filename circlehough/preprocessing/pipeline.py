"""Preprocessing pipeline turning a source image into a dark-edge image."""

import logging

from circlehough.image import PixelGrid, as_pixel_grid
from circlehough.preprocessing.filters import (
    BLUR_KERNEL, EDGE_KERNEL, KernelFilter, IntensityInverter
)

logger = logging.getLogger(__name__)


class PreprocessingPipeline:
    """Blur, edge extraction and inversion, always in that order."""
    
    def __init__(self, blur: bool = True, edge: bool = True, invert: bool = True):
        """
        Initialize preprocessing pipeline.
        
        Args:
            blur: Run the smoothing stage
            edge: Run the Laplacian edge stage
            invert: Run the intensity inversion stage
        """
        self.blur = blur
        self.edge = edge
        self.invert = invert
        self.blur_filter = KernelFilter(BLUR_KERNEL)
        self.edge_filter = KernelFilter(EDGE_KERNEL)
        self.inverter = IntensityInverter()
    
    def preprocess(self, image: PixelGrid) -> PixelGrid:
        """
        Apply full preprocessing pipeline.
        
        Args:
            image: Source pixel grid
            
        Returns:
            New pixel grid where edge pixels are dark
        """
        processed = as_pixel_grid(image)
        
        # Suppress noise before edge extraction
        if self.blur:
            processed = self.blur_filter.apply(processed)
            logger.debug("Blur stage complete")
        
        if self.edge:
            processed = self.edge_filter.apply(processed)
            logger.debug("Edge stage complete")
        
        # Edges become dark pixels for the accumulator
        if self.invert:
            processed = self.inverter.apply(processed)
            logger.debug("Inversion stage complete")
        
        return processed
    
    @classmethod
    def from_config(cls, config: dict) -> "PreprocessingPipeline":
        """Build a pipeline from the 'preprocessing' config section."""
        section = config.get("preprocessing", {})
        return cls(
            blur=section.get("blur", True),
            edge=section.get("edge", True),
            invert=section.get("invert", True),
        )


def preprocess(image: PixelGrid) -> PixelGrid:
    """Run the default blur, edge and inversion pipeline."""
    return PreprocessingPipeline().preprocess(image)
