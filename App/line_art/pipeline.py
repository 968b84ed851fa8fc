"""The line-art pipeline as a single pure function.

AIDEV-NOTE: Stages run strictly in order (luminance -> blur -> Sobel ->
threshold) and each one returns a new buffer. Nothing is cached between
calls, so re-running with changed parameters starts over from the source.
"""

import logging
import math
from numbers import Real
from typing import Callable

import numpy as np

from errors import EmptyInput, InvalidDimensions, ParameterOutOfRange, ProcessingCancelled
from models import (
    RGBA_CHANNELS,
    SMOOTH_MAX,
    SMOOTH_MIN,
    THRESHOLD_MAX,
    THRESHOLD_MIN,
    PixelBuffer,
    ProcessingParameters,
)

from .blur import box_blur
from .luminance import to_luminance
from .sobel import sobel_magnitude
from .threshold import composite

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


def _as_finite_number(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ParameterOutOfRange(f"{name} must be a number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise ParameterOutOfRange(f"{name} must be finite, got {value!r}")
    return value


def _as_flag(name: str, value) -> bool:
    # np.bool_ is not registered as Real
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    return _as_finite_number(name, value) != 0


def normalize_parameters(params: ProcessingParameters) -> ProcessingParameters:
    """Clamp every parameter into its documented range.

    Args:
        params: Parameters as supplied by the caller

    Returns:
        New ProcessingParameters with smooth rounded and clamped to [0, 6],
        threshold clamped to [30, 200] and invert coerced to bool
        (non-zero numbers are True)

    Raises:
        ParameterOutOfRange: If a value is not a finite number or bool
    """
    smooth = _as_finite_number("smooth", params.smooth)
    threshold = _as_finite_number("threshold", params.threshold)

    # AIDEV-NOTE: Out-of-range values are clamped, never rejected
    clamped_smooth = max(SMOOTH_MIN, min(SMOOTH_MAX, round_half_up(smooth)))
    clamped_threshold = max(THRESHOLD_MIN, min(THRESHOLD_MAX, threshold))
    if clamped_smooth != smooth or clamped_threshold != threshold:
        logger.debug(
            "Clamped parameters smooth=%r threshold=%r to smooth=%d threshold=%g",
            params.smooth,
            params.threshold,
            clamped_smooth,
            clamped_threshold,
        )

    return ProcessingParameters(
        smooth=clamped_smooth,
        threshold=clamped_threshold,
        invert=_as_flag("invert", params.invert),
    )


def validate_buffer(buffer: PixelBuffer) -> None:
    """Reject buffers the pipeline cannot process.

    Raises:
        EmptyInput: If width or height is zero
        InvalidDimensions: If the buffer is not RGBA or its sample count
            does not match its declared size
    """
    if buffer.width == 0 or buffer.height == 0:
        raise EmptyInput(f"Cannot process an empty {buffer.width}x{buffer.height} image")
    if buffer.channels != RGBA_CHANNELS:
        raise InvalidDimensions(
            f"Expected an RGBA buffer, got {buffer.channels} channels"
        )
    expected = buffer.width * buffer.height * buffer.channels
    if buffer.samples.size != expected:
        raise InvalidDimensions(
            f"Buffer declares {expected} samples but holds {buffer.samples.size}"
        )


def process_image(
    buffer: PixelBuffer,
    params: ProcessingParameters | None = None,
    is_cancelled: Callable[[], bool] | None = None,
) -> PixelBuffer:
    """Convert an RGBA photo buffer into a coloring page buffer.

    Args:
        buffer: Decoded RGBA source
        params: Processing parameters, defaults if None
        is_cancelled: Optional poll checked between stages

    Returns:
        Opaque RGBA PixelBuffer with the same dimensions as the source

    Raises:
        EmptyInput, InvalidDimensions, ParameterOutOfRange: On invalid input
        ProcessingCancelled: If is_cancelled returns True between stages
    """
    validate_buffer(buffer)
    params = normalize_parameters(params or ProcessingParameters())

    def checkpoint(stage: str) -> None:
        if is_cancelled is not None and is_cancelled():
            raise ProcessingCancelled(f"Processing cancelled before {stage}")

    checkpoint("luminance")
    gray = to_luminance(buffer)
    checkpoint("blur")
    smoothed = box_blur(gray, params.smooth)
    checkpoint("edge detection")
    magnitude = sobel_magnitude(smoothed)
    checkpoint("thresholding")
    return composite(magnitude, params)
