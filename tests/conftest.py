"""Shared fixtures: synthetic audio with known pitch content."""

from pathlib import Path
from typing import List, Tuple

import numpy as np
import pytest
from scipy.io import wavfile

SR = 44100


def midi_to_freq(midi: int) -> float:
    """Convert MIDI pitch to frequency."""
    return 440.0 * (2 ** ((midi - 69) / 12.0))


def generate_sine_wave(
    freq: float, duration: float, sr: int = SR, amplitude: float = 0.5
) -> np.ndarray:
    """Generate a sine wave at given frequency."""
    t = np.arange(int(sr * duration)) / sr
    return (amplitude * np.sin(2 * np.pi * freq * t)).astype(np.float32)


def generate_note_sequence(
    notes: List[Tuple[int, float]],
    gap: float = 0.1,
    sr: int = SR,
    amplitude: float = 0.5,
) -> np.ndarray:
    """Generate (midi, duration) notes separated by silent gaps."""
    audio = []
    silence = np.zeros(int(gap * sr), dtype=np.float32)
    for midi, dur in notes:
        note = generate_sine_wave(midi_to_freq(midi), dur, sr, amplitude)
        # Apply simple envelope to avoid clicks
        envelope = np.ones_like(note)
        ramp = int(0.01 * sr)
        envelope[:ramp] = np.linspace(0, 1, ramp)
        envelope[-ramp:] = np.linspace(1, 0, ramp)
        audio.append(note * envelope)
        audio.append(silence)
    return np.concatenate(audio)


@pytest.fixture
def sr():
    return SR


@pytest.fixture
def melody():
    """A4, C5, E5: 0.4s each with 0.1s of silence after every note."""
    return generate_note_sequence([(69, 0.4), (72, 0.4), (76, 0.4)])


@pytest.fixture
def melody_wav(tmp_path: Path, melody) -> Path:
    path = tmp_path / "melody.wav"
    wavfile.write(str(path), SR, melody)
    return path
