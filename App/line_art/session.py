"""Caller-side session holding a decoded source between parameter changes.

AIDEV-NOTE: The pipeline itself is stateless. This class only caches the
decoded, scaled source so that changing smooth/threshold/invert re-runs
the full pipeline from stage 1 without decoding the file again.
"""

import logging
from dataclasses import replace
from pathlib import Path

from models import PixelBuffer, ProcessingParameters, SessionState

from .pipeline import normalize_parameters, validate_buffer
from .processor import ColoringPageProcessor

logger = logging.getLogger(__name__)


class ColoringSession:
    """Tracks one source image and the page produced from it."""

    def __init__(self, processor: ColoringPageProcessor | None = None):
        self.processor = processor or ColoringPageProcessor()
        self._source: PixelBuffer | None = None
        self._result: PixelBuffer | None = None
        self._state = SessionState.EMPTY

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def parameters(self) -> ProcessingParameters:
        return self.processor.parameters

    @property
    def source(self) -> PixelBuffer | None:
        return self._source

    @property
    def result(self) -> PixelBuffer | None:
        """Last completed page, None while empty, loaded or processing."""
        return self._result

    def load(self, source: str | Path | PixelBuffer) -> PixelBuffer:
        """Replace the current source and process it.

        Args:
            source: Image file path or an already decoded RGBA buffer

        Returns:
            The processed page
        """
        if isinstance(source, PixelBuffer):
            validate_buffer(source)
            buffer = source.copy()
        else:
            buffer, _ = self.processor.load_image(source)

        self._source = buffer
        self._result = None
        self._state = SessionState.LOADED
        logger.debug("Loaded %dx%d source", buffer.width, buffer.height)
        return self.process()

    def set_params(self, **changes) -> PixelBuffer | None:
        """Update one or more parameters and re-run on the cached source.

        Args:
            **changes: Any of smooth, threshold, invert

        Returns:
            The new page, or None if no source is loaded
        """
        unknown = set(changes) - {"smooth", "threshold", "invert"}
        if unknown:
            raise TypeError(f"Unknown parameters: {', '.join(sorted(unknown))}")

        self.processor.parameters = normalize_parameters(
            replace(self.processor.parameters, **changes)
        )
        if self._source is None:
            return None
        return self.process()

    def process(self) -> PixelBuffer:
        """Run the pipeline on the cached source.

        Raises:
            RuntimeError: If no source has been loaded
        """
        if self._source is None:
            raise RuntimeError("No image loaded")

        self._state = SessionState.PROCESSING
        self._result = None
        try:
            page = self.processor.process_buffer(self._source)
        except Exception:
            self._state = SessionState.LOADED
            raise
        self._result = page
        self._state = SessionState.READY
        return page

    def save(self, file_path: str | Path | None = None) -> Path:
        """Export the current page as PNG."""
        if self._result is None:
            raise RuntimeError("No processed page to save")
        if file_path is None:
            return self.processor.save_png(self._result)
        return self.processor.save_png(self._result, file_path)

    def reset(self) -> None:
        """Drop the source and restore default parameters."""
        self._source = None
        self._result = None
        self._state = SessionState.EMPTY
        self.processor.parameters = ProcessingParameters()
