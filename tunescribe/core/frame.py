"""Pitch frame - one analysis window's worth of pitch evidence."""

from dataclasses import dataclass
from typing import Optional

from .note import Note, pitch_name


@dataclass(frozen=True)
class PitchFrame:
    """Pitch estimate for a single analysis window.

    Attributes:
        time: Window start in seconds
        f0: Fundamental frequency in Hz, None when unvoiced or gated as silent
        confidence: Estimator confidence in [0, 1]
        energy: RMS amplitude of the window
    """

    time: float
    f0: Optional[float]
    confidence: float
    energy: float

    @property
    def voiced(self) -> bool:
        return self.f0 is not None

    @property
    def midi(self) -> Optional[int]:
        """Nearest MIDI pitch, or None for unvoiced frames."""
        if self.f0 is None:
            return None
        return Note.freq_to_midi(self.f0)

    @property
    def pitch_name(self) -> str:
        """Tuner-style note name ('--' when unvoiced)."""
        midi = self.midi
        return "--" if midi is None else pitch_name(midi)
