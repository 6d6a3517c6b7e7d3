"""MIDI export functionality.

Writes a single-track Standard MIDI File byte for byte:

    MThd  00000006  0001  0001  01E0
    MTrk  <length>  <delta><event> ... 00 FF 2F 00

Track 0 starts with a tempo meta event and a program change, followed by one
note-on/note-off pair per note. Delta times are variable-length quantities.
"""

import io
import logging
import struct
from pathlib import Path
from typing import List, Sequence, Tuple

import pretty_midi

from ..core import Note, round_half_up
from ..core.constants import DEFAULT_TEMPO, TICKS_PER_QUARTER
from .events import EventSchedule

logger = logging.getLogger(__name__)

NOTE_OFF = 0x80
NOTE_ON = 0x90
PROGRAM_CHANGE = 0xC0
META = 0xFF
META_TEMPO = 0x51
META_END_OF_TRACK = 0x2F


def encode_vlq(value: int) -> bytes:
    """Encode a non-negative integer as a MIDI variable-length quantity."""
    if value < 0:
        raise ValueError(f"VLQ value must be non-negative, got {value}")
    groups = [value & 0x7F]
    value >>= 7
    while value:
        groups.append((value & 0x7F) | 0x80)
        value >>= 7
    return bytes(reversed(groups))


def decode_vlq(data: bytes, offset: int = 0) -> Tuple[int, int]:
    """
    Decode a variable-length quantity.

    Returns:
        Tuple of (value, offset just past the quantity)
    """
    value = 0
    while True:
        byte = data[offset]
        offset += 1
        value = (value << 7) | (byte & 0x7F)
        if not byte & 0x80:
            return value, offset


def seconds_to_ticks(seconds: float, bpm: float) -> int:
    """Absolute time in seconds to ticks at a constant tempo."""
    return round_half_up(seconds * (bpm / 60.0) * TICKS_PER_QUARTER)


def tempo_to_microseconds(bpm: float) -> int:
    """Microseconds per quarter note."""
    return round_half_up(60_000_000 / bpm)


def encode_midi(notes: Sequence[Note], bpm: float = DEFAULT_TEMPO, program: int = 0) -> bytes:
    """
    Encode notes as a Standard MIDI File.

    Args:
        notes: Note events (any order)
        bpm: Tempo used both for the tempo event and the seconds-to-ticks mapping
        program: General MIDI program for channel 0

    Returns:
        Complete SMF bytes
    """
    schedule: EventSchedule[bytes] = EventSchedule()

    tempo = tempo_to_microseconds(bpm)
    schedule.add(0, bytes([META, META_TEMPO, 0x03]) + (tempo & 0xFFFFFF).to_bytes(3, "big"))
    schedule.add(0, bytes([PROGRAM_CHANGE, program & 0x7F]))

    for note in notes:
        pitch = note.pitch & 0x7F
        schedule.add(
            seconds_to_ticks(note.start, bpm),
            bytes([NOTE_ON, pitch, note.velocity & 0x7F]),
        )
        schedule.add(
            seconds_to_ticks(note.end, bpm),
            bytes([NOTE_OFF, pitch, 0x00]),
        )

    track = bytearray()
    for delta, payload in schedule.deltas():
        track += encode_vlq(delta)
        track += payload
    track += encode_vlq(0) + bytes([META, META_END_OF_TRACK, 0x00])

    header = b"MThd" + struct.pack(">IHHH", 6, 1, 1, TICKS_PER_QUARTER)
    data = header + b"MTrk" + struct.pack(">I", len(track)) + bytes(track)
    logger.debug("Encoded %d notes into %d MIDI bytes", len(notes), len(data))
    return data


class MIDIExporter:
    """Export notes to MIDI format."""

    def __init__(
        self,
        tempo: float = DEFAULT_TEMPO,
        instrument_program: int = 0,
    ):
        """
        Initialize MIDIExporter.

        Args:
            tempo: Tempo in BPM
            instrument_program: MIDI program number (0-127)
        """
        if tempo <= 0:
            raise ValueError(f"Tempo must be positive, got {tempo}")
        self.tempo = tempo
        self.instrument_program = instrument_program

    def encode(self, notes: Sequence[Note]) -> bytes:
        """Encode notes to SMF bytes."""
        return encode_midi(notes, self.tempo, self.instrument_program)

    def export(self, notes: Sequence[Note], output_path: str) -> None:
        """
        Export notes to MIDI file.

        Args:
            notes: List of Note objects
            output_path: Path to output MIDI file
        """
        # Ensure output directory exists
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        Path(output_path).write_bytes(self.encode(notes))

    def notes_to_pretty_midi(self, notes: Sequence[Note]) -> pretty_midi.PrettyMIDI:
        """Encode notes and load the result as a PrettyMIDI object without saving."""
        return pretty_midi.PrettyMIDI(io.BytesIO(self.encode(notes)))


def load_notes(path: str) -> Tuple[List[Note], float]:
    """
    Read notes back from a MIDI file.

    Returns:
        Tuple of (notes sorted by start, initial tempo in BPM)
    """
    midi = pretty_midi.PrettyMIDI(str(path))
    _, tempi = midi.get_tempo_changes()
    tempo = float(tempi[0]) if len(tempi) else DEFAULT_TEMPO

    notes = [
        Note(start=n.start, end=n.end, pitch=n.pitch, velocity=max(1, n.velocity))
        for instrument in midi.instruments
        if not instrument.is_drum
        for n in instrument.notes
        if n.end > n.start
    ]
    notes.sort(key=lambda n: n.start)
    return notes, tempo
