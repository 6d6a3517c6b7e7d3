"""Note segmentation - turn a pitch-frame stream into discrete notes.

Two phases:
    1. Continuity tracking: a two-state machine (Idle / InNote) walks the
       frames in time order, opening, continuing and closing notes.
    2. Gap merge: adjacent same-pitch notes separated by at most merge_gap
       seconds are joined, absorbing single-frame dropouts without look-ahead.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from ..core import Note, PitchFrame, round_half_up
from ..core.config import SegmentConfig

logger = logging.getLogger(__name__)

# RMS span above min_rms that maps onto the full velocity range
VELOCITY_RMS_SPAN = 0.2


@dataclass(frozen=True)
class Observation:
    """A frame reduced to what the state machine needs.

    pitch is None for unusable frames.
    """

    time: float
    pitch: Optional[int]
    velocity: int = 0

    @property
    def usable(self) -> bool:
        return self.pitch is not None


@dataclass(frozen=True)
class Idle:
    """No note is sounding."""


@dataclass(frozen=True)
class InNote:
    """A note is sounding since `start`."""

    pitch: int
    start: float
    velocity: int


State = Union[Idle, InNote]


def energy_to_velocity(energy: float, min_rms: float) -> int:
    """Map frame RMS to a MIDI velocity in [1, 127]."""
    level = float(np.clip((energy - min_rms) / VELOCITY_RMS_SPAN, 0.0, 1.0))
    return max(1, min(127, round_half_up(20 + 107 * level)))


def observe(frame: PitchFrame, config: SegmentConfig) -> Observation:
    """Classify one frame as usable (with pitch and velocity) or not."""
    usable = (
        frame.f0 is not None
        and frame.energy >= config.min_rms
        and frame.confidence >= config.min_conf
    )
    if not usable:
        return Observation(frame.time, None)
    return Observation(
        frame.time,
        Note.freq_to_midi(frame.f0),
        energy_to_velocity(frame.energy, config.min_rms),
    )


def _close(state: InNote, end: float, config: SegmentConfig) -> Optional[Note]:
    if end - state.start >= config.min_note_dur:
        return Note(start=state.start, end=end, pitch=state.pitch, velocity=state.velocity)
    return None


def step(
    state: State, obs: Observation, config: SegmentConfig
) -> Tuple[State, Optional[Note]]:
    """
    Advance the segmentation state machine by one frame.

    Args:
        state: Current state
        obs: The next frame, already classified
        config: Segmentation parameters

    Returns:
        Tuple of (next state, note emitted by this transition or None)
    """
    if isinstance(state, Idle):
        if obs.usable:
            return InNote(obs.pitch, obs.time, obs.velocity), None
        return state, None

    if not obs.usable:
        return Idle(), _close(state, obs.time, config)

    if abs(obs.pitch - state.pitch) > config.pitch_tolerance:
        return InNote(obs.pitch, obs.time, obs.velocity), _close(state, obs.time, config)

    velocity = round_half_up(0.8 * state.velocity + 0.2 * obs.velocity)
    return InNote(state.pitch, state.start, velocity), None


def merge_notes(notes: Iterable[Note], merge_gap: float) -> List[Note]:
    """Join same-pitch neighbours separated by at most merge_gap seconds."""
    merged: List[Note] = []
    for note in sorted(notes, key=lambda n: n.start):
        prev = merged[-1] if merged else None
        if (
            prev is not None
            and prev.pitch == note.pitch
            and note.start - prev.end <= merge_gap
        ):
            merged[-1] = Note(
                start=prev.start,
                end=note.end,
                pitch=prev.pitch,
                velocity=round_half_up((prev.velocity + note.velocity) / 2),
            )
        else:
            merged.append(note)
    return merged


class NoteSegmenter:
    """Segments pitch frames into note events."""

    def __init__(self, config: Optional[SegmentConfig] = None):
        """
        Initialize NoteSegmenter.

        Args:
            config: Usability floors, minimum duration, merge gap and tolerance
        """
        self.config = config or SegmentConfig()

    def segment(self, frames: Sequence[PitchFrame]) -> List[Note]:
        """
        Segment frames into notes.

        Args:
            frames: Pitch frames ordered by time

        Returns:
            Notes ordered by start; empty when nothing usable was found
        """
        state: State = Idle()
        notes: List[Note] = []

        for frame in frames:
            state, note = step(state, observe(frame, self.config), self.config)
            if note is not None:
                notes.append(note)

        if isinstance(state, InNote) and frames:
            note = _close(state, frames[-1].time, self.config)
            if note is not None:
                notes.append(note)

        merged = merge_notes(notes, self.config.merge_gap)
        logger.debug(
            "Segmented %d frames into %d notes (%d after merge)",
            len(frames),
            len(notes),
            len(merged),
        )
        return merged
