"""Exception types raised by the detection pipeline."""


class CircleHoughError(Exception):
    """Base class for all circlehough errors."""


class InvalidImageError(CircleHoughError, ValueError):
    """Input image is missing, empty or has an unsupported layout."""


class AccumulatorSizeError(CircleHoughError, MemoryError):
    """Vote space would exceed the configured cell budget."""

    def __init__(self, width: int, height: int, n_radii: int, max_cells: int,
                 copies: int = 1):
        self.width = width
        self.height = height
        self.n_radii = n_radii
        self.max_cells = max_cells
        self.copies = copies
        spaces = f" x {copies} partial spaces" if copies > 1 else ""
        super().__init__(
            f"Vote space {width}x{height}x{n_radii}{spaces} "
            f"({width * height * n_radii * copies} cells) exceeds limit of {max_cells} cells"
        )


class ConfigError(CircleHoughError, ValueError):
    """Configuration file or value is invalid."""
