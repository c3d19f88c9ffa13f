"""Custom exception classes for yin_pitch."""

from __future__ import annotations


class YinPitchError(Exception):
    """Base exception for all yin_pitch errors."""

    pass


class ConfigError(YinPitchError):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationError(ConfigError):
    """Raised when detector parameters are out of range."""

    pass


class ConfigFileError(ConfigError):
    """Raised when a configuration file is missing or malformed."""

    pass


class DetectionError(YinPitchError):
    """Base exception for detection-related errors."""

    pass


class BufferTooShortError(DetectionError):
    """Raised when an input buffer holds fewer samples than the detector needs."""

    def __init__(self, required: int, actual: int):
        self.required = required
        self.actual = actual
        super().__init__(f"Input buffer has {actual} samples, at least {required} required")


class DegenerateInterpolationError(DetectionError):
    """Raised when three points do not define a parabola with a vertex."""

    pass
