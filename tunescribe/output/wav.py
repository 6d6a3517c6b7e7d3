"""WAV rendering - offline additive synthesis of a note sequence.

Every note becomes one oscillator voice with a linear attack/hold/release
envelope. Voices are summed, hard-clipped to [-1, 1] once, and written as a
canonical 44-byte-header mono PCM16 WAV.
"""

import logging
import math
import struct
from pathlib import Path
from typing import Optional, Sequence

import numpy as np
from scipy import signal

from ..core import Note
from ..core.config import RenderConfig
from ..core.constants import PEAK_GAIN, TAIL_PADDING
from .events import EventSchedule

logger = logging.getLogger(__name__)

WAV_HEADER_SIZE = 44
BITS_PER_SAMPLE = 16
CHANNELS = 1


def oscillator(waveform: str, phase: np.ndarray) -> np.ndarray:
    """
    Evaluate a periodic waveform.

    Args:
        waveform: sine, triangle, sawtooth or square
        phase: Phase in cycles (0 at the voice start)

    Returns:
        Samples in [-1, 1]; every shape starts at 0 (or +1 for square) and rises
    """
    radians = 2 * np.pi * phase
    if waveform == "sine":
        return np.sin(radians)
    if waveform == "square":
        return signal.square(radians)
    if waveform == "sawtooth":
        return signal.sawtooth(radians + np.pi)
    if waveform == "triangle":
        return signal.sawtooth(radians + np.pi / 2, width=0.5)
    raise ValueError(f"Unknown waveform: {waveform}")


def envelope(
    times: np.ndarray, note: Note, attack: float, release: float
) -> np.ndarray:
    """Linear attack/hold/release gain for a note at absolute sample times."""
    peak = (note.velocity / 127) * PEAK_GAIN
    attack_end = min(note.start + attack, note.end)
    level = peak if attack <= 0 else peak * (attack_end - note.start) / attack
    hold_end = max(attack_end, note.end - release)
    return np.interp(
        times,
        [note.start, attack_end, hold_end, note.end],
        [0.0, level, level, 0.0],
        left=0.0,
        right=0.0,
    )


def render_duration(notes: Sequence[Note]) -> float:
    """Rendered length in seconds: last note end (at least 1s) plus padding."""
    return max([1.0] + [note.end for note in notes]) + TAIL_PADDING


def to_pcm16(samples: np.ndarray) -> bytes:
    """Clamp float samples to [-1, 1] and convert to little-endian int16 bytes."""
    clipped = np.clip(samples, -1.0, 1.0)
    scaled = np.where(clipped < 0, clipped * 32768, clipped * 32767)
    return np.trunc(scaled).astype("<i2").tobytes()


def wav_header(num_samples: int, sample_rate: int) -> bytes:
    """Canonical RIFF/WAVE header for mono 16-bit PCM."""
    block_align = CHANNELS * BITS_PER_SAMPLE // 8
    data_size = num_samples * block_align
    return struct.pack(
        "<4sI4s4sIHHIIHH4sI",
        b"RIFF",
        36 + data_size,
        b"WAVE",
        b"fmt ",
        16,
        1,  # PCM
        CHANNELS,
        sample_rate,
        sample_rate * block_align,
        block_align,
        BITS_PER_SAMPLE,
        b"data",
        data_size,
    )


class WAVRenderer:
    """Render notes to PCM16 WAV bytes."""

    def __init__(self, config: Optional[RenderConfig] = None):
        """
        Initialize WAVRenderer.

        Args:
            config: Sample rate, waveform and envelope times
        """
        self.config = config or RenderConfig()

    def synthesize(self, notes: Sequence[Note]) -> np.ndarray:
        """
        Mix all notes into a float buffer (not yet clipped).

        Returns:
            Float64 samples covering render_duration(notes)
        """
        sr = self.config.sample_rate
        mix = np.zeros(int(math.ceil(render_duration(notes) * sr)))

        schedule: EventSchedule[Note] = EventSchedule()
        for note in notes:
            schedule.add(int(math.ceil(note.start * sr)), note)

        cursor = 0
        for delta, note in schedule.deltas():
            cursor += delta
            stop = min(len(mix), int(math.ceil(note.end * sr)))
            if stop <= cursor:
                continue
            mix[cursor:stop] += self._voice(note, cursor, stop)

        return mix

    def _voice(self, note: Note, first: int, stop: int) -> np.ndarray:
        sr = self.config.sample_rate
        times = np.arange(first, stop) / sr
        phase = Note.midi_to_freq(note.pitch) * (times - note.start)
        gain = envelope(times, note, self.config.attack, self.config.release)
        return oscillator(self.config.waveform, phase) * gain

    def render(self, notes: Sequence[Note]) -> bytes:
        """Render notes to a complete WAV file in memory."""
        mix = self.synthesize(notes)
        data = wav_header(len(mix), self.config.sample_rate) + to_pcm16(mix)
        logger.debug(
            "Rendered %d notes into %.2fs of %s audio",
            len(notes),
            len(mix) / self.config.sample_rate,
            self.config.waveform,
        )
        return data

    def export(self, notes: Sequence[Note], output_path: str) -> None:
        """
        Render notes and write them to a WAV file.

        Args:
            notes: List of Note objects
            output_path: Path to output WAV file
        """
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        Path(output_path).write_bytes(self.render(notes))


def render_wav(
    notes: Sequence[Note],
    sample_rate: int = 44100,
    waveform: str = "triangle",
    attack: float = 0.01,
    release: float = 0.05,
) -> bytes:
    """Render notes to WAV bytes with the given synthesis settings."""
    config = RenderConfig(
        sample_rate=sample_rate, waveform=waveform, attack=attack, release=release
    )
    return WAVRenderer(config).render(notes)
