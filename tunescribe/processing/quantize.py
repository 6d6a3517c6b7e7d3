"""Grid quantization of note boundaries.

The grid is measured in MIDI ticks, so every snapped time maps onto a whole
tick count when the notes are later encoded at the same tempo.
"""

from typing import List, Sequence

import numpy as np

from ..core import Note
from ..core.constants import DEFAULT_QUANTIZE_RESOLUTION, DEFAULT_TEMPO, TICKS_PER_QUARTER

WHOLE_NOTE_TICKS = 4 * TICKS_PER_QUARTER


class Quantizer:
    """Snap note starts and ends to a 1/resolution note grid."""

    def __init__(
        self,
        tempo: float = DEFAULT_TEMPO,
        quantize_resolution: int = DEFAULT_QUANTIZE_RESOLUTION,
    ):
        """
        Initialize Quantizer.

        Args:
            tempo: Tempo in BPM
            quantize_resolution: Grid subdivision of a whole note (16 for 16ths);
                must divide the whole note into a whole number of ticks
        """
        if tempo <= 0:
            raise ValueError(f"Tempo must be positive, got {tempo}")
        if quantize_resolution <= 0 or WHOLE_NOTE_TICKS % quantize_resolution:
            raise ValueError(
                f"quantize_resolution must divide {WHOLE_NOTE_TICKS} ticks, "
                f"got {quantize_resolution}"
            )
        self.tempo = tempo
        self.quantize_resolution = quantize_resolution

    @property
    def grid_ticks(self) -> int:
        return WHOLE_NOTE_TICKS // self.quantize_resolution

    @property
    def grid_duration(self) -> float:
        """Duration of one grid unit in seconds."""
        return self.grid_ticks * 60.0 / (self.tempo * TICKS_PER_QUARTER)

    def snap(self, times: Sequence[float]) -> np.ndarray:
        """Snap times (seconds) to the nearest grid line, ties rounding up."""
        units = np.floor(np.asarray(times, dtype=np.float64) / self.grid_duration + 0.5)
        return units * self.grid_duration

    def quantize(self, notes: Sequence[Note]) -> List[Note]:
        """
        Quantize note starts and ends.

        A note whose ends collapse onto the same grid line keeps one grid unit.

        Returns:
            New notes, sorted by start
        """
        if not notes:
            return []

        ordered = sorted(notes, key=lambda n: n.start)
        starts = self.snap([n.start for n in ordered])
        ends = self.snap([n.end for n in ordered])
        ends = np.where(ends <= starts, starts + self.grid_duration, ends)

        return [
            Note(start=float(start), end=float(end), pitch=note.pitch, velocity=note.velocity)
            for note, start, end in zip(ordered, starts, ends)
        ]
