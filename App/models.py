"""Data models and constants for the coloring page converter."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import numpy as np

from errors import InvalidDimensions

# AIDEV-NOTE: Parameter ranges mirror the slider limits of the web converter
SMOOTH_MIN = 0
SMOOTH_MAX = 6
THRESHOLD_MIN = 30.0
THRESHOLD_MAX = 200.0

# Recommended cap on processing width, bounds the O(w*h*r^2) blur cost
MAX_PROCESSING_WIDTH = 1100  # px

RGBA_CHANNELS = 4
DEFAULT_OUTPUT_NAME = "coloring-page.png"

# Configuration file path
CONFIG_FILE = Path.home() / ".coloring_page_config.json"


class SessionState(Enum):
    """Caller-visible lifecycle of a coloring session."""

    EMPTY = "Empty"
    LOADED = "Loaded"
    PROCESSING = "Processing..."
    READY = "Ready"


@dataclass
class ProcessingParameters:
    """User-facing settings for the line-art pipeline."""

    smooth: int = 1  # Blur radius in px (0-6), 0 disables blur
    threshold: float = 90.0  # Gradient magnitude cutoff (30-200)
    invert: bool = False  # White lines on black instead of black on white


@dataclass
class PixelBuffer:
    """Rectangular grid of per-pixel channel samples.

    AIDEV-NOTE: Samples are stored flat in row-major order, pixel after
    pixel, channel after channel (the canvas ImageData layout). Stages never
    write into their input; each one returns a fresh buffer.
    """

    width: int
    height: int
    channels: int
    samples: np.ndarray

    def __post_init__(self):
        if self.width < 0 or self.height < 0 or self.channels < 1:
            raise InvalidDimensions(
                f"Invalid buffer shape {self.width}x{self.height}x{self.channels}"
            )
        self.samples = np.asarray(self.samples).reshape(-1)
        expected = self.width * self.height * self.channels
        if self.samples.size != expected:
            raise InvalidDimensions(
                f"Buffer declares {self.width}x{self.height}x{self.channels} "
                f"({expected} samples) but holds {self.samples.size}"
            )

    @classmethod
    def from_grid(cls, grid: np.ndarray) -> "PixelBuffer":
        """Build a buffer from a (height, width) or (height, width, channels) array."""
        grid = np.asarray(grid)
        if grid.ndim == 2:
            grid = grid[:, :, np.newaxis]
        if grid.ndim != 3:
            raise InvalidDimensions(f"Expected a 2D or 3D array, got {grid.ndim}D")
        height, width, channels = grid.shape
        return cls(width, height, channels, grid.copy().reshape(-1))

    @classmethod
    def blank(
        cls, width: int, height: int, channels: int = RGBA_CHANNELS, fill: int = 0
    ) -> "PixelBuffer":
        """Create a uint8 buffer with every sample set to ``fill``."""
        samples = np.full(width * height * channels, fill, dtype=np.uint8)
        return cls(width, height, channels, samples)

    @property
    def grid(self) -> np.ndarray:
        """(height, width, channels) view over the flat samples."""
        return self.samples.reshape(self.height, self.width, self.channels)

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self.width, self.height, self.channels, self.samples.copy())

    def __eq__(self, other):
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self.channels == other.channels
            and np.array_equal(self.samples, other.samples)
        )


@dataclass
class ProcessedPage:
    """Result of converting one image into a coloring page."""

    # Final opaque RGBA buffer
    buffer: PixelBuffer

    # Parameters actually applied (after clamping)
    parameters: ProcessingParameters

    # Original image dimensions (pixels)
    original_width: int = 0
    original_height: int = 0

    # Statistics
    edge_pixel_count: int = 0  # Pixels classified as edge
