"""
Exception types for handsfree2stage.

Landmark lookups never raise: a missing hand or an out-of-range index is a
normal, frequent condition and is reported as an absent (``None``) result.
Only configuration mistakes and setup failures surface as exceptions.
"""


class HandsfreeError(Exception):
    """Base class for all handsfree2stage errors."""


class InvalidModeError(HandsfreeError, ValueError):
    """Raised when a video display mode string is not one of the known modes."""

    def __init__(self, value, valid=None):
        self.value = value
        self.valid = tuple(valid or ())
        message = f"Invalid video mode: {value!r}"
        if self.valid:
            message += f" (expected one of: {', '.join(self.valid)})"
        super().__init__(message)


class ConfigError(HandsfreeError):
    """Raised when a configuration file cannot be read or parsed."""


class TrackerUnavailableError(HandsfreeError, RuntimeError):
    """Raised when MediaPipe or the capture device cannot be opened."""
