"""Stage 3: Sobel gradient magnitude.

AIDEV-NOTE: Only interior pixels are convolved. The outermost one-pixel ring
keeps magnitude 0 and is therefore never classified as an edge. This is the
established output of the converter; do not switch to a replicated-border
convolution without flagging the behavior change.
"""

import numpy as np

from models import PixelBuffer

from .luminance import luminance_channel

SOBEL_X = np.array([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]], dtype=np.int64)
SOBEL_Y = np.array([[-1, -2, -1], [0, 0, 0], [1, 2, 1]], dtype=np.int64)


def _convolve_interior(plane: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """Apply a 3x3 kernel at every interior pixel, leaving the border at 0."""
    height, width = plane.shape
    out = np.zeros((height, width), dtype=np.float64)
    if height < 3 or width < 3:
        return out

    acc = np.zeros((height - 2, width - 2), dtype=np.float64)
    for ky in range(3):
        for kx in range(3):
            weight = kernel[ky, kx]
            if weight:
                acc += weight * plane[ky : ky + height - 2, kx : kx + width - 2]
    out[1:-1, 1:-1] = acc
    return out


def sobel_gradients(buffer: PixelBuffer) -> tuple[PixelBuffer, PixelBuffer]:
    """Horizontal and vertical Sobel responses.

    Args:
        buffer: Single-channel buffer, or grayscale RGBA (channel 0 is used)

    Returns:
        Tuple of (gx, gy) single-channel float64 buffers
    """
    plane = luminance_channel(buffer).grid[:, :, 0].astype(np.float64)
    gx = _convolve_interior(plane, SOBEL_X)
    gy = _convolve_interior(plane, SOBEL_Y)
    return PixelBuffer.from_grid(gx), PixelBuffer.from_grid(gy)


def sobel_magnitude(buffer: PixelBuffer) -> PixelBuffer:
    """Gradient magnitude sqrt(gx^2 + gy^2) as a single-channel float64 buffer."""
    gx, gy = sobel_gradients(buffer)
    sx = gx.grid[:, :, 0]
    sy = gy.grid[:, :, 0]
    magnitude = np.sqrt(sx * sx + sy * sy)
    return PixelBuffer.from_grid(magnitude)
