"""Stage 4: binarize gradient magnitude into an opaque RGBA page."""

import numpy as np

from models import PixelBuffer, ProcessingParameters

EDGE_VALUE = 0  # Black line
FLAT_VALUE = 255  # White page


def classify_edges(magnitude: PixelBuffer, threshold: float) -> np.ndarray:
    """Boolean (height, width) mask of pixels whose magnitude exceeds threshold."""
    return magnitude.grid[:, :, 0] > threshold


def composite(magnitude: PixelBuffer, params: ProcessingParameters) -> PixelBuffer:
    """Render the edge mask as a grayscale, fully opaque RGBA buffer.

    Args:
        magnitude: Single-channel gradient magnitude buffer
        params: Processing parameters (threshold and invert are used)

    Returns:
        RGBA PixelBuffer, R == G == B in {0, 255}, alpha 255 everywhere

    AIDEV-NOTE: Hard cutoff with no hysteresis. Edges render 0 and flat
    pixels 255; invert maps every value v to 255 - v.
    """
    edges = classify_edges(magnitude, params.threshold)
    values = np.where(edges, EDGE_VALUE, FLAT_VALUE).astype(np.uint8)
    if params.invert:
        values = 255 - values

    out = np.empty((magnitude.height, magnitude.width, 4), dtype=np.uint8)
    out[:, :, 0] = values
    out[:, :, 1] = values
    out[:, :, 2] = values
    out[:, :, 3] = 255
    return PixelBuffer.from_grid(out)
