"""
yin_pitch - Monophonic pitch detection with the YIN algorithm
"""

from .config import DetectorConfig, load_config
from .constants import (
    A4_REFERENCE,
    DEFAULT_BUFFER_SIZE,
    DEFAULT_OVERLAP,
    DEFAULT_THRESHOLD,
    NO_PITCH,
    SAMPLE_RATE,
)
from .exceptions import (
    BufferTooShortError,
    ConfigError,
    ConfigFileError,
    DegenerateInterpolationError,
    DetectionError,
    InvalidConfigurationError,
    YinPitchError,
)
from .frames import PitchTrack, iter_frames, track_pitch
from .notes import frequency_to_note, note_frequency, note_number_to_name
from .yin_detector import DetectionResult, YinPitchDetector

__version__ = "0.1.0"
__all__ = [
    "YinPitchDetector",
    "DetectionResult",
    "DetectorConfig",
    "load_config",
    "PitchTrack",
    "iter_frames",
    "track_pitch",
    "frequency_to_note",
    "note_number_to_name",
    "note_frequency",
    "SAMPLE_RATE",
    "DEFAULT_BUFFER_SIZE",
    "DEFAULT_OVERLAP",
    "DEFAULT_THRESHOLD",
    "NO_PITCH",
    "A4_REFERENCE",
    "YinPitchError",
    "ConfigError",
    "ConfigFileError",
    "InvalidConfigurationError",
    "DetectionError",
    "BufferTooShortError",
    "DegenerateInterpolationError",
]
