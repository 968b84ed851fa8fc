"""Stage 2: box blur smoothing.

AIDEV-NOTE: The window sum is taken over an edge-padded snapshot of the
input, so no output pixel ever sees an already-blurred neighbor. The sum is
computed separably in integers, which gives exactly the naive
(2r+1)x(2r+1) window mean before rounding.
"""

import numpy as np

from errors import ParameterOutOfRange
from models import RGBA_CHANNELS, SMOOTH_MAX, SMOOTH_MIN, PixelBuffer

from .luminance import to_uint8


def window_sum(plane: np.ndarray, radius: int) -> np.ndarray:
    """Sum of each pixel's (2r+1)^2 neighborhood with edge replication.

    Args:
        plane: 2D integer array (height, width)
        radius: Window radius in pixels

    Returns:
        2D int64 array of the same shape
    """
    height, width = plane.shape
    padded = np.pad(plane.astype(np.int64), radius, mode="edge")
    span = 2 * radius + 1

    # Horizontal pass over every padded row, then vertical pass
    rows = np.zeros((height + 2 * radius, width), dtype=np.int64)
    for kx in range(span):
        rows += padded[:, kx : kx + width]

    total = np.zeros((height, width), dtype=np.int64)
    for ky in range(span):
        total += rows[ky : ky + height, :]
    return total


def box_blur(buffer: PixelBuffer, radius: int) -> PixelBuffer:
    """Smooth a grayscale buffer with a square mean filter.

    Args:
        buffer: RGBA buffer with R == G == B, or a single-channel buffer
        radius: Kernel radius (0-6); 0 returns an exact copy

    Returns:
        New PixelBuffer of identical shape. For RGBA input the blurred
        value is written to R, G and B and alpha is copied unchanged.
        Samples are uint8 whenever radius > 0.
    """
    if isinstance(radius, bool) or int(radius) != radius:
        raise ParameterOutOfRange(f"Blur radius must be an integer, got {radius!r}")
    radius = int(radius)
    if not SMOOTH_MIN <= radius <= SMOOTH_MAX:
        raise ParameterOutOfRange(
            f"Blur radius {radius} outside [{SMOOTH_MIN}, {SMOOTH_MAX}]"
        )

    if radius == 0 or buffer.is_empty:
        return buffer.copy()

    snapshot = buffer.grid.copy()
    kernel = (2 * radius + 1) ** 2
    # Samples are 8-bit; fractional input is rounded before summing
    plane = to_uint8(snapshot[:, :, 0])
    blurred = to_uint8(window_sum(plane, radius) / kernel)

    if buffer.channels == RGBA_CHANNELS:
        out = np.empty(snapshot.shape, dtype=np.uint8)
        out[:, :, 0] = blurred
        out[:, :, 1] = blurred
        out[:, :, 2] = blurred
        out[:, :, 3] = to_uint8(snapshot[:, :, 3])
    else:
        out = np.repeat(blurred[:, :, np.newaxis], buffer.channels, axis=2)
    return PixelBuffer.from_grid(out)
