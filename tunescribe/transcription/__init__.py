"""Transcription layer - Note-level detection from audio.

This layer converts pitch evidence into discrete note events:
- Idle/InNote segmentation state machine with gap merging
- Monophonic pipeline (frame scanning + segmentation)
"""

from .base import Transcriber
from .segmenter import NoteSegmenter, Idle, InNote, Observation, step, merge_notes
from .monophonic import MonophonicTranscriber

__all__ = [
    "Transcriber",
    "NoteSegmenter",
    "Idle",
    "InNote",
    "Observation",
    "step",
    "merge_notes",
    "MonophonicTranscriber",
]
