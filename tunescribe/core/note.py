"""Note data class - the fundamental unit of musical transcription."""

import math
from dataclasses import dataclass

import numpy as np

from .constants import MIDI_MAX, MIDI_MIN, PITCH_NAMES


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +inf (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def pitch_name(midi: int) -> str:
    """Get note name for a MIDI pitch (e.g., 'C4', 'A#3')."""
    octave = (midi // 12) - 1
    return f"{PITCH_NAMES[midi % 12]}{octave}"


@dataclass(frozen=True)
class Note:
    """A single note event: [start, end) in seconds at one MIDI pitch."""

    start: float  # seconds
    end: float  # seconds, > start
    pitch: int  # MIDI pitch (0-127)
    velocity: int = 64  # MIDI velocity (1-127)

    @property
    def duration(self) -> float:
        """Note duration in seconds."""
        return self.end - self.start

    @property
    def pitch_name(self) -> str:
        """Get note name (e.g., 'C4', 'A#3')."""
        return pitch_name(self.pitch)

    @property
    def pitch_class(self) -> int:
        """Get pitch class (0-11, where 0=C)."""
        return self.pitch % 12

    @property
    def frequency(self) -> float:
        return Note.midi_to_freq(self.pitch)

    @staticmethod
    def freq_to_midi(freq: float) -> int:
        """Convert frequency (Hz) to the nearest MIDI pitch, clamped to 0-127."""
        if freq <= 0:
            return MIDI_MIN
        midi = round_half_up(69 + 12 * np.log2(freq / 440.0))
        return max(MIDI_MIN, min(MIDI_MAX, midi))

    @staticmethod
    def midi_to_freq(midi: int) -> float:
        """Convert MIDI pitch to frequency (Hz)."""
        return 440.0 * (2 ** ((midi - 69) / 12.0))
