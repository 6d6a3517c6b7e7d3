"""tunescribe - Monophonic audio to MIDI/WAV conversion.

Architecture Layers:
    1. input/         - Audio loading and preprocessing
    2. analysis/      - Per-window pitch estimation and frame scanning
    3. transcription/ - Note segmentation and the monophonic pipeline
    4. processing/    - Note post-processing (quantize)
    5. output/        - Export (MIDI, WAV)
"""

__version__ = "0.3.0"

# Core types
from .core import Note, PitchFrame

# Configuration
from .core.config import (
    PitchConfig,
    ScanConfig,
    SegmentConfig,
    RenderConfig,
    TranscriptionConfig,
)

# Input layer
from .input import AudioLoader

# Analysis layer
from .analysis import PitchAnalyzer, FrameScanner, yin_pitch

# Transcription layer
from .transcription import MonophonicTranscriber, NoteSegmenter

# Processing layer
from .processing import Quantizer

# Output layer
from .output import MIDIExporter, WAVRenderer, encode_midi, render_wav

__all__ = [
    # Core
    "Note",
    "PitchFrame",
    # Config
    "PitchConfig",
    "ScanConfig",
    "SegmentConfig",
    "RenderConfig",
    "TranscriptionConfig",
    # Input
    "AudioLoader",
    # Analysis
    "PitchAnalyzer",
    "FrameScanner",
    "yin_pitch",
    # Transcription
    "MonophonicTranscriber",
    "NoteSegmenter",
    # Processing
    "Quantizer",
    # Output
    "MIDIExporter",
    "WAVRenderer",
    "encode_midi",
    "render_wav",
]
