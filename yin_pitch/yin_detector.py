"""
YIN fundamental frequency estimation.

Implements the time-domain YIN method for a single, fixed-size buffer of
samples:

    1. Difference function (squared differences for every lag)
    2. Cumulative mean normalized difference (CMND)
    3. Absolute threshold search (first dip below the threshold)
    4. Parabolic interpolation of the chosen lag
    5. Conversion of the refined lag to Hz

Based on:
    A. de Cheveigné and H. Kawahara, "YIN, a fundamental frequency estimator
    for speech and music," J. Acoust. Soc. Am. 111(4), 2002.
"""

import logging
from dataclasses import dataclass

import numpy as np

from .config import DetectorConfig
from .constants import DEFAULT_BUFFER_SIZE, DEFAULT_THRESHOLD, NO_PITCH, SAMPLE_RATE
from .exceptions import BufferTooShortError, DegenerateInterpolationError, DetectionError
from .notes import frequency_to_note, note_number_to_name

logger = logging.getLogger(__name__)

# Denominators smaller than this are treated as a flat parabola
_MIN_CURVATURE = 1e-10


@dataclass(frozen=True)
class DetectionResult:
    """Result of one detect() call."""

    frequency_hz: float = NO_PITCH  # -1 when no pitch was found
    probability: float = 0.0  # 1 - CMND at the chosen lag
    is_pitched: bool = False

    @classmethod
    def unpitched(cls) -> "DetectionResult":
        return cls(frequency_hz=NO_PITCH, probability=0.0, is_pitched=False)

    @property
    def note_name(self) -> str | None:
        """Nearest equal-tempered note, e.g. "A4", or None when unpitched."""
        if not self.is_pitched:
            return None
        note, _ = frequency_to_note(self.frequency_hz)
        name, octave = note_number_to_name(note)
        return f"{name}{octave}"

    @property
    def cents(self) -> float:
        """Deviation from the nearest note in cents (0.0 when unpitched)."""
        if not self.is_pitched:
            return 0.0
        _, cents = frequency_to_note(self.frequency_hz)
        return cents


def difference(audio: np.ndarray, yin_buffer: np.ndarray) -> None:
    """
    Difference function, step 2 of the YIN paper.

    Writes sum((audio[i] - audio[i + tau]) ** 2) over the first len(yin_buffer)
    samples into yin_buffer[tau] for every tau >= 1; yin_buffer[0] is 0.

    Args:
        audio: Input samples, at least 2 * len(yin_buffer) - 1 of them
        yin_buffer: Working buffer, overwritten in place
    """
    size = len(yin_buffer)
    yin_buffer[:] = 0.0
    head = audio[:size]
    for tau in range(1, size):
        delta = head - audio[tau : tau + size]
        yin_buffer[tau] = np.dot(delta, delta)


def cumulative_mean_normalized_difference(yin_buffer: np.ndarray) -> None:
    """
    Cumulative mean normalized difference, step 3 of the YIN paper.

    Divides each value by the running mean of the values up to and including
    it. yin_buffer[0] becomes 1. While the running sum is still 0 (a silent
    prefix) the normalized value is 1.
    """
    if yin_buffer.size == 0:
        return
    yin_buffer[0] = 1.0
    if yin_buffer.size < 2:
        return

    running_sum = np.cumsum(yin_buffer[1:])
    silent = running_sum == 0
    running_sum[silent] = 1.0

    tail = yin_buffer[1:]
    tail *= np.arange(1, yin_buffer.size) / running_sum
    tail[silent] = 1.0


def absolute_threshold(yin_buffer: np.ndarray, threshold: float) -> tuple[int, float]:
    """
    Absolute threshold search, step 4 of the YIN paper.

    Finds the first lag whose normalized difference is below the threshold,
    then follows the dip down to its local minimum.

    Args:
        yin_buffer: CMND values
        threshold: Proportion of aperiodic power tolerated

    Returns:
        (lag, probability), or (-1, 0.0) when no lag is below the threshold
    """
    # The first two positions are always 1, start at index 2
    below = np.flatnonzero(yin_buffer[2:] < threshold)
    if below.size == 0:
        return -1, 0.0

    tau = int(below[0]) + 2
    while tau + 1 < yin_buffer.size and yin_buffer[tau + 1] < yin_buffer[tau]:
        tau += 1

    # The threshold measures aperiodicity; report periodicity
    return tau, float(1.0 - yin_buffer[tau])


def parabolic_vertex(s0: float, s1: float, s2: float) -> float:
    """
    Offset of the vertex of the parabola through (-1, s0), (0, s1), (1, s2).

    Raises:
        DegenerateInterpolationError: If the three points are collinear
    """
    denominator = 2.0 * (2.0 * s1 - s2 - s0)
    if abs(denominator) < _MIN_CURVATURE:
        raise DegenerateInterpolationError(f"Flat parabola through ({s0}, {s1}, {s2})")
    return (s2 - s0) / denominator


def parabolic_interpolation(yin_buffer: np.ndarray, tau: int) -> float:
    """
    Parabolic interpolation, step 5 of the YIN paper.

    Refines the lag to sub-sample precision, needed for accurate estimates of
    higher frequencies. At either edge of the buffer no parabola can be
    fitted, so the smaller of the lag and its one neighbour is returned.

    Args:
        yin_buffer: CMND values
        tau: Lag chosen by the threshold search

    Returns:
        Refined lag in samples
    """
    x0 = tau if tau < 1 else tau - 1
    x2 = tau + 1 if tau + 1 < yin_buffer.size else tau

    if x0 == tau:
        return float(tau if yin_buffer[tau] <= yin_buffer[x2] else x2)
    if x2 == tau:
        return float(tau if yin_buffer[tau] <= yin_buffer[x0] else x0)

    try:
        offset = parabolic_vertex(yin_buffer[x0], yin_buffer[tau], yin_buffer[x2])
    except DegenerateInterpolationError:
        logger.debug(f"Degenerate interpolation at lag {tau}, keeping integer lag")
        return float(tau)
    return tau + float(offset)


class YinPitchDetector:
    """
    Monophonic pitch detector using the YIN algorithm.

    Each call to detect() analyses one buffer independently. The working
    buffer is allocated once and reused, so a single instance must not be
    shared between threads; create one detector per stream instead.
    """

    def __init__(
        self,
        sample_rate: float = SAMPLE_RATE,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        threshold: float = DEFAULT_THRESHOLD,
        overlap: int | None = None,
    ):
        """
        Initialize detector.

        Args:
            sample_rate: Audio sample rate in Hz
            buffer_size: Samples per analysed buffer (e.g. 2048)
            threshold: YIN threshold, lower = fewer but more reliable detections
            overlap: Overlap between frames when tracking a longer signal

        Raises:
            InvalidConfigurationError: If a parameter is out of range
        """
        self._config = DetectorConfig(
            sample_rate=sample_rate,
            buffer_size=buffer_size,
            threshold=threshold,
            overlap=overlap,
        )
        # Half the input size: lags up to len - 1 read samples up to 2 * len - 2
        self._yin_buffer = np.zeros(self._config.scratch_size, dtype=np.float64)

    @classmethod
    def from_config(cls, config: DetectorConfig) -> "YinPitchDetector":
        """Create a detector from a loaded configuration."""
        return cls(
            sample_rate=config.sample_rate,
            buffer_size=config.buffer_size,
            threshold=config.threshold,
            overlap=config.overlap,
        )

    @property
    def config(self) -> DetectorConfig:
        return self._config

    @property
    def sample_rate(self) -> float:
        return self._config.sample_rate

    @property
    def buffer_size(self) -> int:
        return self._config.buffer_size

    @property
    def threshold(self) -> float:
        return self._config.threshold

    def detect(self, buffer) -> DetectionResult:
        """
        Estimate the pitch of one buffer of samples.

        Args:
            buffer: 1-D sequence of at least buffer_size samples; extra
                samples are ignored

        Returns:
            DetectionResult; frequency_hz is -1 when no pitch was found

        Raises:
            BufferTooShortError: If fewer than buffer_size samples are given
            DetectionError: If the input is not one-dimensional
        """
        samples = np.asarray(buffer, dtype=np.float64)
        if samples.ndim != 1:
            raise DetectionError(f"Expected a 1-D buffer, got shape {samples.shape}")
        if len(samples) < self.buffer_size:
            raise BufferTooShortError(required=self.buffer_size, actual=len(samples))

        difference(samples, self._yin_buffer)
        cumulative_mean_normalized_difference(self._yin_buffer)
        tau, probability = absolute_threshold(self._yin_buffer, self.threshold)

        if tau == -1:
            logger.debug("No lag below threshold, frame is unpitched")
            return DetectionResult.unpitched()

        # TODO: add the best-local-estimate step (step 6 of the YIN paper),
        # which lowers the gross error rate from 0.77% to 0.5%
        better_tau = parabolic_interpolation(self._yin_buffer, tau)

        return DetectionResult(
            frequency_hz=float(self.sample_rate / better_tau),
            probability=probability,
            is_pitched=True,
        )
