"""Conversion and scaling helpers between Pillow images and PixelBuffers.

AIDEV-NOTE: This module is the boundary between file formats and the
pipeline. The pipeline itself never sees a PIL image.
"""

import numpy as np
from PIL import Image

from models import MAX_PROCESSING_WIDTH, RGBA_CHANNELS, PixelBuffer

from .pipeline import round_half_up


def image_to_buffer(image: Image.Image) -> PixelBuffer:
    """Convert a PIL image into an RGBA PixelBuffer.

    Args:
        image: PIL image in any mode

    Returns:
        RGBA PixelBuffer with uint8 samples
    """
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    return PixelBuffer.from_grid(np.asarray(image, dtype=np.uint8))


def buffer_to_image(buffer: PixelBuffer) -> Image.Image:
    """Convert an RGBA PixelBuffer back into a PIL image.

    Raises:
        ValueError: If the buffer is not RGBA
    """
    if buffer.channels != RGBA_CHANNELS:
        raise ValueError(f"Expected an RGBA buffer, got {buffer.channels} channels")
    grid = np.ascontiguousarray(buffer.grid, dtype=np.uint8)
    return Image.fromarray(grid)


def scale_image_to_width(
    image: Image.Image, max_width: int = MAX_PROCESSING_WIDTH
) -> tuple[Image.Image, float]:
    """Shrink an image to at most ``max_width`` pixels wide.

    Args:
        image: Input PIL image
        max_width: Maximum processing width in pixels

    Returns:
        Tuple of (scaled_image, scale_factor)

    AIDEV-NOTE: Never upscales. Each side keeps at least one pixel so that
    very thin images still produce a valid buffer.
    """
    if max_width < 1:
        raise ValueError(f"max_width must be positive, got {max_width}")

    orig_width, orig_height = image.size
    if orig_width == 0 or orig_height == 0:
        return image, 1.0

    scale = min(1.0, max_width / orig_width)
    if scale >= 1.0:
        return image, 1.0

    new_width = max(1, round_half_up(orig_width * scale))
    new_height = max(1, round_half_up(orig_height * scale))
    scaled_image = image.resize((new_width, new_height), Image.Resampling.LANCZOS)
    return scaled_image, scale


def count_edge_pixels(page: PixelBuffer, invert: bool = False) -> int:
    """Count pixels rendered as lines in a composited page."""
    line_value = 255 if invert else 0
    return int(np.count_nonzero(page.grid[:, :, 0] == line_value))
