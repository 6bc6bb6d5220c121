"""Circle Hough vote accumulation."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Tuple

import numpy as np

from circlehough.errors import AccumulatorSizeError
from circlehough.image import PixelGrid, as_pixel_grid, grid_size, grey_values

logger = logging.getLogger(__name__)

# Edge pixels processed per vectorized batch
EDGE_CHUNK_SIZE = 2048


class VoteSpace:
    """
    Dense (x, y, radius) vote counts.
    
    The backing array has shape (width, height, max_radius - min_radius) and
    is indexed [x, y, r - min_radius].
    """
    
    def __init__(self, data: np.ndarray, min_radius: int):
        data = np.asarray(data)
        if data.ndim != 3:
            raise ValueError(f"Vote space must be 3-dimensional, got shape {data.shape}")
        self.data = data
        self.min_radius = int(min_radius)
        self.max_radius = self.min_radius + data.shape[2]
    
    @property
    def width(self) -> int:
        return self.data.shape[0]
    
    @property
    def height(self) -> int:
        return self.data.shape[1]
    
    @property
    def radii(self) -> range:
        return range(self.min_radius, self.max_radius)
    
    def layer(self, r: int) -> np.ndarray:
        """Return the (width, height) slice for radius r."""
        if r not in self.radii:
            raise IndexError(f"Radius {r} outside [{self.min_radius}, {self.max_radius})")
        return self.data[:, :, r - self.min_radius]
    
    def votes(self, x: int, y: int, r: int) -> int:
        return int(self.layer(r)[x, y])
    
    def max_votes(self) -> int:
        if self.data.size == 0:
            return 0
        return int(self.data.max())
    
    def peak(self) -> Optional[Tuple[int, int, int, int]]:
        """Return (x, y, r, votes) of the first global maximum, or None if empty."""
        if self.is_empty():
            return None
        x, y, layer = np.unravel_index(int(np.argmax(self.data)), self.data.shape)
        return int(x), int(y), int(layer) + self.min_radius, int(self.data[x, y, layer])
    
    def is_empty(self) -> bool:
        return self.max_votes() == 0
    
    def __repr__(self) -> str:
        return (f"VoteSpace(width={self.width}, height={self.height}, "
                f"radii=[{self.min_radius}, {self.max_radius}))")


class HoughAccumulator:
    """Builds the circle vote space from a preprocessed (dark edge) image."""
    
    def __init__(self, min_radius: int = 6, edge_grey_threshold: int = 250,
                 angle_step_degrees: float = 4, max_cells: int = 64_000_000,
                 workers: int = 1):
        """
        Initialize accumulator.
        
        Args:
            min_radius: Smallest radius voted for
            edge_grey_threshold: Pixels with grey value below this are edges
            angle_step_degrees: Angular sampling step over [0, 360]
            max_cells: Largest vote space allowed before allocation is refused
            workers: Threads used for voting; 1 disables threading
        """
        self.min_radius = min_radius
        self.edge_grey_threshold = edge_grey_threshold
        self.angle_step_degrees = angle_step_degrees
        self.max_cells = max_cells
        self.workers = workers
    
    @property
    def angles(self) -> np.ndarray:
        """Sampled angles in degrees, 0 through 360 inclusive."""
        return np.arange(0.0, 360.0 + 1e-9, self.angle_step_degrees)
    
    def edge_pixels(self, image: PixelGrid) -> Tuple[np.ndarray, np.ndarray]:
        """Return (xs, ys) of pixels darker than the edge threshold, row-major order."""
        ys, xs = np.nonzero(grey_values(image) < self.edge_grey_threshold)
        return xs, ys
    
    def build(self, image: PixelGrid) -> VoteSpace:
        """
        Cast votes for every edge pixel, radius and sampled angle.
        
        Args:
            image: Preprocessed pixel grid
            
        Returns:
            Freshly allocated VoteSpace
            
        Raises:
            AccumulatorSizeError: if the vote space exceeds max_cells
        """
        image = as_pixel_grid(image)
        width, height = grid_size(image)
        max_radius = min(width, height)
        n_radii = max(0, max_radius - self.min_radius)
        
        xs, ys = self.edge_pixels(image)
        
        # Threaded voting keeps one partial space per band alive
        threaded = self.workers > 1 and len(xs) > 0
        copies = min(self.workers, len(xs)) if threaded else 1
        if width * height * n_radii * copies > self.max_cells:
            raise AccumulatorSizeError(width, height, n_radii, self.max_cells, copies)
        
        logger.info(f"Performing hough transform on {len(xs)} edge pixels, "
                    f"radii [{self.min_radius}, {max_radius})")
        
        if threaded:
            data = self._accumulate_parallel(xs, ys, width, height, max_radius)
        else:
            data = self._accumulate(xs, ys, width, height, max_radius)
        
        logger.info("Accumulator matrix computed")
        return VoteSpace(data, self.min_radius)
    
    def _accumulate(self, xs: np.ndarray, ys: np.ndarray, width: int, height: int,
                    max_radius: int) -> np.ndarray:
        n_radii = max(0, max_radius - self.min_radius)
        data = np.zeros((width, height, n_radii), dtype=np.int32)
        if len(xs) == 0 or n_radii == 0:
            return data
        
        radians = self.angles * np.pi / 180
        cos_t = np.cos(radians)
        sin_t = np.sin(radians)
        
        for start in range(0, len(xs), EDGE_CHUNK_SIZE):
            x = xs[start:start + EDGE_CHUNK_SIZE].astype(np.float64)[:, np.newaxis]
            y = ys[start:start + EDGE_CHUNK_SIZE].astype(np.float64)[:, np.newaxis]
            
            for layer, r in enumerate(range(self.min_radius, max_radius)):
                # Round half up
                a = np.floor(x - r * cos_t + 0.5).astype(np.intp)
                b = np.floor(y - r * sin_t + 0.5).astype(np.intp)
                inside = (a >= 0) & (a < width) & (b >= 0) & (b < height)
                
                flat = a[inside] * height + b[inside]
                counts = np.bincount(flat, minlength=width * height)
                data[:, :, layer] += counts.reshape(width, height).astype(np.int32)
        
        return data
    
    def _accumulate_parallel(self, xs: np.ndarray, ys: np.ndarray, width: int,
                             height: int, max_radius: int) -> np.ndarray:
        # Edge pixels arrive in row-major order, so contiguous splits are row bands
        bands = [
            (band_xs, band_ys)
            for band_xs, band_ys in zip(np.array_split(xs, self.workers),
                                        np.array_split(ys, self.workers))
            if len(band_xs) > 0
        ]
        logger.debug(f"Voting in {len(bands)} row bands")
        
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = [
                executor.submit(self._accumulate, band_xs, band_ys, width, height, max_radius)
                for band_xs, band_ys in bands
            ]
            data = futures[0].result()
            for future in futures[1:]:
                data += future.result()
        
        return data
