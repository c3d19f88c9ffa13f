"""
Shared constants for YIN pitch detection.
"""

SAMPLE_RATE = 44100  # Hz, most audio is recorded at 44.1 kHz

DEFAULT_BUFFER_SIZE = 2048  # Samples per analysis window
DEFAULT_OVERLAP = 1536  # Samples shared by two consecutive windows

# Proportion of aperiodic power tolerated in a periodic signal
DEFAULT_THRESHOLD = 0.32

# Frequency reported when no pitch is found
NO_PITCH = -1.0

A4_REFERENCE = 440.0
A4_NOTE = 69  # MIDI note number of A4
OCTAVE = 12

NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
