"""Error taxonomy for the line-art pipeline.

AIDEV-NOTE: Every error is detected at the boundary, before any stage runs.
The stages themselves have no failure modes given a validated buffer.
"""


class LineArtError(ValueError):
    """Base class for all pipeline errors."""


class InvalidDimensions(LineArtError):
    """Declared width/height/channels do not match the sample count."""


class ParameterOutOfRange(LineArtError):
    """A processing parameter cannot be brought into its valid range."""


class EmptyInput(LineArtError):
    """Buffer has zero width or zero height."""


class ProcessingCancelled(LineArtError):
    """Caller abandoned the run before it completed."""
