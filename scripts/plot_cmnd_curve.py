"""
Debug script: Visualize the YIN curves for a synthetic tone.

Plots the raw difference function and the cumulative mean normalized
difference (CMND) of one buffer, with the threshold and the lag the
detector picks, so threshold choices can be checked by eye.

Usage:
    python scripts/plot_cmnd_curve.py [frequency_hz] [waveform]

waveform is one of: sine, sawtooth, square (default sawtooth).
"""

import sys

import matplotlib
import numpy as np
from scipy import signal as sps

matplotlib.use('Agg')
import matplotlib.pyplot as plt

from yin_pitch.constants import DEFAULT_BUFFER_SIZE, DEFAULT_THRESHOLD, SAMPLE_RATE
from yin_pitch.yin_detector import (
    YinPitchDetector,
    absolute_threshold,
    cumulative_mean_normalized_difference,
    difference,
)


def generate_tone(frequency: float, waveform: str, num_samples: int = DEFAULT_BUFFER_SIZE) -> np.ndarray:
    """Generate a test tone with optional harmonics."""
    phase = 2 * np.pi * frequency * np.arange(num_samples) / SAMPLE_RATE
    if waveform == 'sine':
        return 0.8 * np.sin(phase)
    if waveform == 'square':
        return 0.8 * sps.square(phase)
    return 0.8 * sps.sawtooth(phase)


def plot_cmnd_curve(frequency: float, waveform: str, output_path: str):
    """Plot difference and CMND curves for one buffer."""
    audio = generate_tone(frequency, waveform)

    yin_buffer = np.zeros(DEFAULT_BUFFER_SIZE // 2)
    difference(audio, yin_buffer)
    raw = yin_buffer.copy()
    cumulative_mean_normalized_difference(yin_buffer)
    tau, probability = absolute_threshold(yin_buffer, DEFAULT_THRESHOLD)

    result = YinPitchDetector().detect(audio)

    lags = np.arange(len(yin_buffer))
    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(12, 8), sharex=True)

    ax1.plot(lags, raw, 'b-', linewidth=0.8)
    ax1.set_title(f'Difference function - {waveform} {frequency:.1f} Hz')
    ax1.set_ylabel('d(tau)')
    ax1.grid(True, alpha=0.3)

    ax2.plot(lags, yin_buffer, 'purple', linewidth=0.8)
    ax2.axhline(DEFAULT_THRESHOLD, color='gray', linestyle='--', label=f'Threshold {DEFAULT_THRESHOLD}')
    if tau != -1:
        ax2.axvline(tau, color='red', linestyle='-', alpha=0.7, label=f'Lag {tau} (p={probability:.2f})')
    ax2.axvline(SAMPLE_RATE / frequency, color='green', linestyle=':', label='True period')
    ax2.set_title(f'CMND - detected {result.frequency_hz:.2f} Hz ({result.note_name})')
    ax2.set_xlabel('Lag (samples)')
    ax2.set_ylabel("d'(tau)")
    ax2.legend(loc='upper right')
    ax2.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_path, dpi=100)
    plt.close()
    print(f'Saved: {output_path}')


if __name__ == '__main__':
    freq = float(sys.argv[1]) if len(sys.argv) > 1 else 220.0
    wave = sys.argv[2] if len(sys.argv) > 2 else 'sawtooth'
    plot_cmnd_curve(freq, wave, f'cmnd_{wave}_{freq:.0f}hz.png')
