"""Stage 1: RGB to grayscale conversion.

AIDEV-NOTE: Rec. 709 luminance weights, stored the way a clamped 8-bit
canvas array stores them.
"""

import numpy as np

from errors import InvalidDimensions
from models import RGBA_CHANNELS, PixelBuffer

REC709_WEIGHTS = (0.2126, 0.7152, 0.0722)


def to_uint8(values: np.ndarray) -> np.ndarray:
    """Round half-to-even and clamp to the 8-bit range.

    Matches how a clamped 8-bit canvas array stores fractional values.
    """
    return np.clip(np.rint(values), 0, 255).astype(np.uint8)


def to_luminance(buffer: PixelBuffer) -> PixelBuffer:
    """Replace R, G and B of every pixel with its luminance.

    Args:
        buffer: RGBA PixelBuffer

    Returns:
        New RGBA PixelBuffer with R == G == B, alpha copied unchanged
    """
    if buffer.channels != RGBA_CHANNELS:
        raise InvalidDimensions(
            f"Luminance conversion needs RGBA input, got {buffer.channels} channels"
        )

    rgba = buffer.grid
    r_w, g_w, b_w = REC709_WEIGHTS
    rgb = rgba[:, :, :3].astype(np.float64)
    gray = to_uint8(r_w * rgb[:, :, 0] + g_w * rgb[:, :, 1] + b_w * rgb[:, :, 2])

    out = np.empty_like(rgba, dtype=np.uint8)
    out[:, :, 0] = gray
    out[:, :, 1] = gray
    out[:, :, 2] = gray
    out[:, :, 3] = rgba[:, :, 3]
    return PixelBuffer.from_grid(out)


def luminance_channel(buffer: PixelBuffer) -> PixelBuffer:
    """Extract channel 0 of a grayscale buffer as a single-channel buffer."""
    if buffer.channels == 1:
        return buffer.copy()
    return PixelBuffer.from_grid(buffer.grid[:, :, 0])
