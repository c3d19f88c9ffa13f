"""
Note naming for detected frequencies.

Maps a frequency to the nearest equal-tempered note and its deviation in
cents, so pitch estimates can be shown the way a tuner shows them.
"""

import numpy as np

from .constants import A4_NOTE, A4_REFERENCE, NOTE_NAMES, OCTAVE


def frequency_to_note(frequency: float, reference: float = A4_REFERENCE) -> tuple[int, float]:
    """
    Convert frequency to note number and cents deviation.

    Args:
        frequency: Frequency in Hz
        reference: Reference frequency for A4 in Hz

    Returns:
        (MIDI note number, cents from that note); (0, 0.0) for non-positive input
    """
    if frequency <= 0:
        return 0, 0.0
    note = int(round(OCTAVE * np.log2(frequency / reference) + A4_NOTE))
    ref_freq = note_frequency(note, reference)
    cents = float(1200.0 * np.log2(frequency / ref_freq))
    return note, cents


def note_frequency(note: int, reference: float = A4_REFERENCE) -> float:
    """Equal-tempered frequency of a MIDI note number."""
    return reference * (2 ** ((note - A4_NOTE) / OCTAVE))


def note_number_to_name(note: int) -> tuple[str, int]:
    """Convert note number to note name and octave."""
    octave = note // OCTAVE - 1
    note_name = NOTE_NAMES[note % OCTAVE]
    return note_name, octave
