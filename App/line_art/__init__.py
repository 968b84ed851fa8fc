"""Photo-to-coloring-page line-art pipeline.

AIDEV-NOTE: Organized into one module per stage plus the I/O boundary:
- luminance: Rec. 709 grayscale conversion
- blur: edge-replicated box blur
- sobel: interior Sobel gradient magnitude
- threshold: binarization into an opaque RGBA page
- pipeline: parameter clamping, validation and the pure process_image
- processor / session: file loading, PNG export and cached re-runs
"""

from errors import (
    EmptyInput,
    InvalidDimensions,
    LineArtError,
    ParameterOutOfRange,
    ProcessingCancelled,
)

from .pipeline import normalize_parameters, process_image, validate_buffer
from .processor import ColoringPageProcessor
from .session import ColoringSession

__all__ = [
    "ColoringPageProcessor",
    "ColoringSession",
    "EmptyInput",
    "InvalidDimensions",
    "LineArtError",
    "ParameterOutOfRange",
    "ProcessingCancelled",
    "normalize_parameters",
    "process_image",
    "validate_buffer",
]
