"""
Frame-by-frame pitch tracking of longer signals.

Splits an in-memory signal into overlapping analysis windows and runs a
detector on each one, collecting the per-frame estimates into arrays.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from numbers import Integral

import numpy as np

from .constants import DEFAULT_BUFFER_SIZE, DEFAULT_OVERLAP
from .exceptions import InvalidConfigurationError
from .yin_detector import YinPitchDetector

logger = logging.getLogger(__name__)


def iter_frames(
    signal: np.ndarray,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    overlap: int = DEFAULT_OVERLAP,
) -> Iterator[np.ndarray]:
    """
    Yield consecutive overlapping windows of a signal.

    Windows start every buffer_size - overlap samples. A trailing window
    shorter than buffer_size is dropped.

    Args:
        signal: Audio samples
        buffer_size: Samples per window
        overlap: Samples shared by two consecutive windows

    Raises:
        InvalidConfigurationError: If buffer_size or overlap is out of range
    """
    if isinstance(buffer_size, bool) or not isinstance(buffer_size, Integral):
        raise InvalidConfigurationError(f"buffer_size must be an integer, got {type(buffer_size).__name__}")
    if isinstance(overlap, bool) or not isinstance(overlap, Integral):
        raise InvalidConfigurationError(f"overlap must be an integer, got {type(overlap).__name__}")
    if buffer_size <= 0:
        raise InvalidConfigurationError(f"buffer_size must be positive, got {buffer_size}")
    if not 0 <= overlap < buffer_size:
        raise InvalidConfigurationError(f"overlap must be in [0, {buffer_size}), got {overlap}")

    hop_size = buffer_size - overlap
    for start in range(0, len(signal) - buffer_size + 1, hop_size):
        yield signal[start : start + buffer_size]


@dataclass
class PitchTrack:
    """Per-frame pitch estimates of a signal."""

    times: np.ndarray = field(default_factory=lambda: np.zeros(0))  # Frame start, seconds
    frequencies: np.ndarray = field(default_factory=lambda: np.zeros(0))  # Hz, -1 = unpitched
    probabilities: np.ndarray = field(default_factory=lambda: np.zeros(0))
    pitched: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=bool))

    def __len__(self) -> int:
        return len(self.times)

    @property
    def pitched_ratio(self) -> float:
        """Fraction of frames with a detected pitch."""
        if len(self) == 0:
            return 0.0
        return float(np.mean(self.pitched))

    def voiced_frequencies(self) -> np.ndarray:
        """Frequencies of the pitched frames only."""
        return self.frequencies[self.pitched]


def track_pitch(
    signal,
    detector: YinPitchDetector,
    overlap: int | None = None,
) -> PitchTrack:
    """
    Run a detector over every frame of a signal.

    Args:
        signal: 1-D audio samples at the detector's sample rate
        detector: Detector whose buffer_size sets the frame length
        overlap: Overlap between frames, defaults to the detector's setting

    Returns:
        PitchTrack with one entry per complete frame
    """
    samples = np.asarray(signal, dtype=np.float64)
    if overlap is None:
        overlap = detector.config.overlap

    hop_size = detector.buffer_size - overlap
    results = [detector.detect(frame) for frame in iter_frames(samples, detector.buffer_size, overlap)]
    if not results:
        logger.debug(
            f"Signal of {len(samples)} samples is shorter than one {detector.buffer_size}-sample frame"
        )
        return PitchTrack()

    track = PitchTrack(
        times=np.arange(len(results)) * hop_size / detector.sample_rate,
        frequencies=np.array([r.frequency_hz for r in results]),
        probabilities=np.array([r.probability for r in results]),
        pitched=np.array([r.is_pitched for r in results], dtype=bool),
    )
    logger.debug(f"Tracked {len(track)} frames, {track.pitched_ratio:.0%} pitched")
    return track
