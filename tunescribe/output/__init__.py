"""Output layer - Export to binary interchange formats.

This layer serializes note sequences to:
- Standard MIDI Files (single track, 480 ticks per quarter)
- Rendered PCM16 WAV audio (offline oscillator synthesis)
"""

from .events import EventSchedule, TimedEvent
from .midi import MIDIExporter, encode_midi, load_notes
from .wav import WAVRenderer, render_wav

__all__ = [
    "EventSchedule",
    "TimedEvent",
    "MIDIExporter",
    "encode_midi",
    "load_notes",
    "WAVRenderer",
    "render_wav",
]
