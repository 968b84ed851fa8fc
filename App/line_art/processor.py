"""File-level orchestrator: load a photo, run the pipeline, save a page.

AIDEV-NOTE: Decoding and encoding happen here, strictly before and after
the pure pipeline. Only this module touches the filesystem.
"""

import logging
from pathlib import Path

from PIL import Image

from models import (
    DEFAULT_OUTPUT_NAME,
    MAX_PROCESSING_WIDTH,
    PixelBuffer,
    ProcessedPage,
    ProcessingParameters,
)

from .pipeline import normalize_parameters, process_image
from .utils import (
    buffer_to_image,
    count_edge_pixels,
    image_to_buffer,
    scale_image_to_width,
)

logger = logging.getLogger(__name__)


class ColoringPageProcessor:
    """Turns photographs into printable coloring pages."""

    def __init__(
        self,
        parameters: ProcessingParameters | None = None,
        max_width: int = MAX_PROCESSING_WIDTH,
    ):
        self.parameters = normalize_parameters(parameters or ProcessingParameters())
        self.max_width = max_width

    def load_image(self, file_path: str | Path) -> tuple[PixelBuffer, tuple[int, int]]:
        """Load an image file and scale it to processing size.

        Args:
            file_path: Path to image file (PNG, JPG, etc.)

        Returns:
            Tuple of (RGBA PixelBuffer, original (width, height))

        Raises:
            ValueError: If file cannot be loaded or is invalid
        """
        try:
            with Image.open(file_path) as image:
                image.load()
                original_size = image.size
                scaled, scale = scale_image_to_width(image, self.max_width)
                buffer = image_to_buffer(scaled)
        except (OSError, Image.DecompressionBombError) as e:
            raise ValueError(f"Failed to load image: {e}") from e

        if scale < 1.0:
            logger.info(
                "Scaled %dx%d image to %dx%d for processing",
                original_size[0],
                original_size[1],
                buffer.width,
                buffer.height,
            )
        return buffer, original_size

    def process_buffer(self, buffer: PixelBuffer) -> PixelBuffer:
        """Run the line-art pipeline with this processor's parameters."""
        return process_image(buffer, self.parameters)

    def save_png(self, buffer: PixelBuffer, file_path: str | Path = DEFAULT_OUTPUT_NAME) -> Path:
        """Encode a processed buffer as a PNG file.

        Returns:
            Path that was written
        """
        path = Path(file_path)
        buffer_to_image(buffer).save(path, format="PNG")
        logger.info("Saved coloring page to %s", path)
        return path

    def process(self, file_path: str | Path) -> ProcessedPage:
        """Execute the complete photo-to-coloring-page conversion.

        Args:
            file_path: Path to input image

        Returns:
            ProcessedPage with the output buffer and metadata
        """
        logger.info("Loading image %s", file_path)
        source, (orig_width, orig_height) = self.load_image(file_path)
        logger.info("Loaded image with size: %dx%d pixels", orig_width, orig_height)

        params = self.parameters
        logger.info(
            "Processing with smooth=%d threshold=%g invert=%s",
            params.smooth,
            params.threshold,
            params.invert,
        )
        page = self.process_buffer(source)

        edge_count = count_edge_pixels(page, params.invert)
        logger.info("Coloring page complete, %d edge pixels", edge_count)

        return ProcessedPage(
            buffer=page,
            parameters=params,
            original_width=orig_width,
            original_height=orig_height,
            edge_pixel_count=edge_count,
        )
