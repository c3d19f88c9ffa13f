"""
Tests for framing and pitch tracking of longer signals.
"""

import numpy as np
import pytest

from yin_pitch import SAMPLE_RATE
from yin_pitch.exceptions import InvalidConfigurationError
from yin_pitch.frames import PitchTrack, iter_frames, track_pitch
from yin_pitch.yin_detector import YinPitchDetector


def generate_sine_wave(
    frequency: float,
    duration_samples: int,
    sample_rate: int = SAMPLE_RATE,
    amplitude: float = 0.8,
) -> np.ndarray:
    """Generate a sine wave at the given frequency."""
    t = np.arange(duration_samples) / sample_rate
    return (amplitude * np.sin(2 * np.pi * frequency * t)).astype(np.float64)


class TestIterFrames:
    """Overlapping window generation."""

    def test_default_hop(self):
        """2048-sample frames start every 512 samples."""
        signal = np.arange(10000, dtype=np.float64)
        frames = list(iter_frames(signal))

        assert len(frames) == 16
        assert all(len(f) == 2048 for f in frames)
        assert frames[0][0] == 0
        assert frames[1][0] == 512
        assert frames[-1][0] == 15 * 512

    def test_no_overlap(self):
        signal = np.arange(100, dtype=np.float64)
        frames = list(iter_frames(signal, buffer_size=25, overlap=0))

        assert len(frames) == 4
        np.testing.assert_array_equal(frames[3], np.arange(75, 100))

    def test_exact_length_single_frame(self):
        frames = list(iter_frames(np.zeros(2048)))
        assert len(frames) == 1

    def test_short_signal_no_frames(self):
        """A trailing partial window is dropped."""
        assert list(iter_frames(np.zeros(2047))) == []

    @pytest.mark.parametrize("overlap", [-1, 2048, 1.5, "512", True])
    def test_invalid_overlap(self, overlap):
        with pytest.raises(InvalidConfigurationError):
            list(iter_frames(np.zeros(4096), buffer_size=2048, overlap=overlap))

    def test_invalid_buffer_size(self):
        with pytest.raises(InvalidConfigurationError):
            list(iter_frames(np.zeros(4096), buffer_size=0, overlap=0))


class TestTrackPitch:
    """Frame-by-frame tracking with the YIN detector."""

    def setup_method(self):
        self.detector = YinPitchDetector()

    def test_steady_tone(self):
        """Every frame of a steady A4 is pitched near 440 Hz."""
        signal = generate_sine_wave(440.0, SAMPLE_RATE // 2)
        track = track_pitch(signal, self.detector)

        assert len(track) == (len(signal) - 2048) // 512 + 1
        assert track.pitched.all()
        assert track.pitched_ratio == 1.0
        assert np.median(track.frequencies) == pytest.approx(440.0, rel=0.01)

    def test_frame_times(self):
        """Frame times advance by the hop size."""
        signal = generate_sine_wave(440.0, 8192)
        track = track_pitch(signal, self.detector)

        assert track.times[0] == 0.0
        assert track.times[1] == pytest.approx(512 / SAMPLE_RATE)

    def test_tone_then_silence(self):
        """Silent frames are reported with the -1 sentinel."""
        tone = generate_sine_wave(220.0, 8192)
        signal = np.concatenate([tone, np.zeros(8192)])
        track = track_pitch(signal, self.detector)

        assert track.pitched[0]
        assert not track.pitched[-1]
        assert track.frequencies[-1] == -1
        assert track.probabilities[-1] == 0.0
        assert 0.0 < track.pitched_ratio < 1.0

        voiced = track.voiced_frequencies()
        assert len(voiced) == int(track.pitched.sum())
        assert np.all(voiced > 0)

    def test_explicit_overlap(self):
        """Overlap argument overrides the detector's setting."""
        signal = generate_sine_wave(440.0, 8192)
        track = track_pitch(signal, self.detector, overlap=0)
        assert len(track) == 4

    def test_short_signal(self):
        """Signals shorter than one frame give an empty track."""
        track = track_pitch(np.zeros(1000), self.detector)

        assert len(track) == 0
        assert track.pitched_ratio == 0.0
        assert len(track.voiced_frequencies()) == 0

    def test_empty_track_defaults(self):
        track = PitchTrack()
        assert len(track) == 0
        assert track.pitched.dtype == bool

