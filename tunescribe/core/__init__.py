"""Core types, constants and configuration for tunescribe."""

from .note import Note, round_half_up, pitch_name
from .frame import PitchFrame
from .constants import (
    PITCH_NAMES,
    DEFAULT_SR,
    DEFAULT_FRAME_SIZE,
    DEFAULT_HOP,
    DEFAULT_TEMPO,
    TICKS_PER_QUARTER,
    WAVEFORMS,
)
from .config import (
    PitchConfig,
    ScanConfig,
    SegmentConfig,
    RenderConfig,
    TranscriptionConfig,
    DEFAULT_SEGMENT_CONFIG,
    MIC_SEGMENT_CONFIG,
    DEFAULT_CONFIG,
)

__all__ = [
    "Note",
    "PitchFrame",
    "round_half_up",
    "pitch_name",
    "PITCH_NAMES",
    "DEFAULT_SR",
    "DEFAULT_FRAME_SIZE",
    "DEFAULT_HOP",
    "DEFAULT_TEMPO",
    "TICKS_PER_QUARTER",
    "WAVEFORMS",
    "PitchConfig",
    "ScanConfig",
    "SegmentConfig",
    "RenderConfig",
    "TranscriptionConfig",
    "DEFAULT_SEGMENT_CONFIG",
    "MIC_SEGMENT_CONFIG",
    "DEFAULT_CONFIG",
]
