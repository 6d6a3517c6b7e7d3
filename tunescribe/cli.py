"""Command-line interface for tunescribe.

Provides commands for:
- transcribe: Convert a monophonic recording to MIDI (and optionally WAV)
- render: Render a MIDI file with a simple synth to WAV
- frames: Show tuner-style pitch frames
- info: Show audio file information
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

app = typer.Typer(
    name="tunescribe",
    help="Monophonic audio to MIDI/WAV converter",
    rich_markup_mode="markdown",
)
console = Console()

NO_NOTES_HINT = "No stable notes detected. Try humming louder/steadier and closer to the mic."


@dataclass
class StageTimings:
    """Track timing of processing stages."""

    stages: Dict[str, float] = field(default_factory=dict)
    _current_stage: Optional[str] = field(default=None, repr=False)
    _start_time: float = field(default=0.0, repr=False)

    def start(self, stage: str) -> None:
        """Start timing a stage."""
        self._current_stage = stage
        self._start_time = time.perf_counter()

    def stop(self) -> float:
        """Stop timing the current stage, return duration."""
        if self._current_stage is None:
            return 0.0
        duration = time.perf_counter() - self._start_time
        self.stages[self._current_stage] = duration
        self._current_stage = None
        return duration

    @property
    def total_time(self) -> float:
        """Get total time across all stages."""
        return sum(self.stages.values())

    def print_summary(self) -> None:
        """Print timing summary to console."""
        console.print("\n[bold]Timing Summary:[/bold]")
        for stage, duration in self.stages.items():
            console.print(f"  {stage}: {duration:.2f}s")
        console.print(f"  [bold]Total: {self.total_time:.2f}s[/bold]")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "stages": self.stages,
            "total_time": self.total_time,
        }


def _setup_logging(verbose: bool, quiet: bool = False) -> None:
    """Route library logging through rich; quiet keeps stdout clean for JSON."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(
        level=logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    # Third-party loggers (numba, librosa) stay at WARNING
    logging.getLogger("tunescribe").setLevel(level)


def _fail(message: str) -> None:
    console.print(f"[red]Error: {escape(message)}[/red]")
    raise typer.Exit(1)


def _load_audio(input_file: Path):
    from .input import AudioLoader

    if not input_file.exists():
        _fail(f"File not found: {input_file}")

    loader = AudioLoader()
    try:
        return loader.load(str(input_file))
    except ValueError as e:
        _fail(str(e))


@app.command()
def transcribe(
    input_file: Path = typer.Argument(..., help="Input audio file (WAV, MP3, FLAC, ...)"),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Output MIDI file path"
    ),
    wav: Optional[Path] = typer.Option(
        None, "--wav", help="Also render the notes to this WAV file"
    ),
    tempo: float = typer.Option(120.0, "-t", "--tempo", help="Tempo (BPM) for MIDI ticks"),
    quantize: bool = typer.Option(
        False, "-q", "--quantize/--no-quantize", help="Quantize notes to a 16th grid"
    ),
    waveform: str = typer.Option(
        "triangle", "--waveform", "-w", help="WAV synth: sine/triangle/sawtooth/square"
    ),
    fmin: float = typer.Option(65.0, "--fmin", help="Lowest pitch searched (Hz)"),
    fmax: float = typer.Option(1200.0, "--fmax", help="Highest pitch searched (Hz)"),
    threshold: float = typer.Option(0.12, "--threshold", help="YIN acceptance threshold"),
    gate: float = typer.Option(0.010, "--gate", help="Silence gate (RMS)"),
    min_rms: float = typer.Option(0.012, "--min-rms", help="Minimum RMS for a pitched frame"),
    min_conf: float = typer.Option(0.22, "--min-conf", help="Minimum pitch confidence"),
    min_duration: float = typer.Option(
        0.10, "--min-duration", help="Minimum note duration in seconds"
    ),
    merge_gap: float = typer.Option(
        0.06, "--merge-gap", help="Merge same-pitch notes across gaps up to this (s)"
    ),
    pitch_tolerance: float = typer.Option(
        0.5, "--pitch-tolerance", help="Semitones still treated as the same note"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output results as JSON (for scripting)"
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose output"),
):
    """Transcribe a monophonic recording to MIDI.

    **Examples:**

        tunescribe transcribe humming.wav

        tunescribe transcribe flute.mp3 -o flute.mid --wav flute.wav -w sine
    """
    from .core.config import (
        PitchConfig,
        RenderConfig,
        ScanConfig,
        SegmentConfig,
        TranscriptionConfig,
    )
    from .transcription import MonophonicTranscriber
    from .processing import Quantizer
    from .output import MIDIExporter, WAVRenderer

    _setup_logging(verbose, quiet=json_output)

    try:
        config = TranscriptionConfig(
            pitch=PitchConfig(fmin=fmin, fmax=fmax, threshold=threshold),
            scan=ScanConfig(energy_gate=gate),
            segment=SegmentConfig(
                min_rms=min_rms,
                min_conf=min_conf,
                min_note_dur=min_duration,
                merge_gap=merge_gap,
                pitch_tolerance=pitch_tolerance,
            ),
            tempo=tempo,
        )
        render_config = RenderConfig(waveform=waveform)
    except ValueError as e:
        _fail(str(e))

    if output is None:
        output = input_file.with_suffix(".mid")

    timings = StageTimings()

    if not json_output:
        console.print(f"[blue]Loading audio:[/blue] {input_file}")
    timings.start("load")
    audio, sr = _load_audio(input_file)
    timings.stop()
    duration = len(audio) / sr

    if not json_output:
        console.print("[blue]Analyzing pitch...[/blue]")
    timings.start("transcribe")
    pitch_frames, notes = MonophonicTranscriber(config).analyze(audio, sr)
    timings.stop()

    if quantize:
        timings.start("quantize")
        notes = Quantizer(tempo=tempo).quantize(notes)
        timings.stop()

    if not json_output:
        if notes:
            console.print(f"  Detected {len(notes)} notes")
        else:
            console.print(f"  [yellow]{NO_NOTES_HINT}[/yellow]")
        console.print(f"[blue]Exporting to:[/blue] {output}")

    timings.start("export")
    MIDIExporter(tempo=tempo).export(notes, str(output))
    if wav is not None:
        WAVRenderer(render_config).export(notes, str(wav))
    timings.stop()

    if json_output:
        result = {
            "input": str(input_file),
            "output": str(output),
            "wav": str(wav) if wav is not None else None,
            "duration": duration,
            "sample_rate": sr,
            "tempo": tempo,
            "frames_count": len(pitch_frames),
            "notes_count": len(notes),
            "notes": [
                {
                    "start": n.start,
                    "end": n.end,
                    "pitch": n.pitch,
                    "name": n.pitch_name,
                    "velocity": n.velocity,
                }
                for n in notes
            ],
            "timings": timings.to_dict(),
        }
        console.print_json(data=result)
        return

    console.print("[green]Transcription complete![/green]")
    if verbose:
        if notes:
            _show_notes_table(notes)
        timings.print_summary()


@app.command()
def render(
    midi_file: Path = typer.Argument(..., help="Input MIDI file"),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Output WAV file path"
    ),
    waveform: str = typer.Option(
        "triangle", "--waveform", "-w", help="Synth: sine/triangle/sawtooth/square"
    ),
    sample_rate: int = typer.Option(44100, "--sample-rate", help="Output sample rate"),
    attack: float = typer.Option(0.01, "--attack", help="Attack time in seconds"),
    release: float = typer.Option(0.05, "--release", help="Release time in seconds"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose output"),
):
    """Render the notes of a MIDI file to WAV with a simple oscillator synth."""
    from .core.config import RenderConfig
    from .output import WAVRenderer, load_notes

    _setup_logging(verbose)

    if not midi_file.exists():
        _fail(f"File not found: {midi_file}")

    try:
        config = RenderConfig(
            sample_rate=sample_rate, waveform=waveform, attack=attack, release=release
        )
    except ValueError as e:
        _fail(str(e))

    if output is None:
        output = midi_file.with_suffix(".wav")

    try:
        notes, tempo = load_notes(str(midi_file))
    except (OSError, ValueError, EOFError) as e:
        _fail(f"Could not read MIDI file {midi_file}: {e}")

    console.print(f"[blue]Rendering {len(notes)} notes ({config.waveform})...[/blue]")
    WAVRenderer(config).export(notes, str(output))
    console.print(f"[green]Wrote {output}[/green]")

    if verbose and notes:
        console.print(f"  Tempo: {tempo:.1f} BPM")
        _show_notes_table(notes)


@app.command()
def frames(
    input_file: Path = typer.Argument(..., help="Input audio file"),
    limit: int = typer.Option(0, "--limit", "-n", help="Show at most N frames (0 = all)"),
    voiced_only: bool = typer.Option(False, "--voiced", help="Only show voiced frames"),
    json_output: bool = typer.Option(False, "--json", help="Output frames as JSON"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose output"),
):
    """Show tuner-style pitch frames (f0, note, confidence, RMS)."""
    from .analysis import FrameScanner
    from .core.config import DEFAULT_CONFIG

    _setup_logging(verbose, quiet=json_output)

    audio, sr = _load_audio(input_file)
    scanned = FrameScanner(DEFAULT_CONFIG.scan, DEFAULT_CONFIG.pitch).scan(audio, sr)

    if voiced_only:
        scanned = [frame for frame in scanned if frame.voiced]
    if limit > 0:
        scanned = scanned[:limit]

    if json_output:
        console.print_json(
            data=[
                {
                    "time": frame.time,
                    "f0": frame.f0,
                    "note": frame.pitch_name,
                    "confidence": frame.confidence,
                    "rms": frame.energy,
                }
                for frame in scanned
            ]
        )
        return

    _show_frames_table(scanned)


@app.command()
def info(
    input_file: Path = typer.Argument(..., help="Input audio file"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose output"),
):
    """Show information about an audio file."""
    from .analysis import FrameScanner
    from .core.config import DEFAULT_CONFIG

    _setup_logging(verbose)

    audio, sr = _load_audio(input_file)
    scanned = FrameScanner(DEFAULT_CONFIG.scan, DEFAULT_CONFIG.pitch).scan(audio, sr)
    voiced = sum(1 for frame in scanned if frame.voiced)

    console.print(f"\n[bold]Audio Info:[/bold] {input_file.name}")
    console.print(f"  Duration: {len(audio) / sr:.2f} seconds")
    console.print(f"  Sample rate: {sr} Hz")
    console.print(f"  Samples: {len(audio):,}")
    if scanned:
        console.print(
            f"  Voiced frames: {voiced}/{len(scanned)} ({100.0 * voiced / len(scanned):.0f}%)"
        )
    else:
        console.print("  Voiced frames: 0/0 (clip shorter than one frame)")


def _show_notes_table(notes):
    """Display notes in a table."""
    table = Table(title="Detected Notes")
    table.add_column("Pitch", style="cyan")
    table.add_column("Start (s)", style="green")
    table.add_column("Duration (s)", style="yellow")
    table.add_column("Velocity", style="magenta")

    for note in notes:
        table.add_row(
            note.pitch_name,
            f"{note.start:.3f}",
            f"{note.duration:.3f}",
            str(note.velocity),
        )

    console.print(table)


def _show_frames_table(scanned: List):
    """Display pitch frames in a table."""
    table = Table(title="Pitch Frames")
    table.add_column("Time (s)", style="green")
    table.add_column("f0 (Hz)", style="cyan")
    table.add_column("Note", style="cyan")
    table.add_column("Conf", style="yellow")
    table.add_column("RMS", style="magenta")

    for frame in scanned:
        table.add_row(
            f"{frame.time:.3f}",
            f"{frame.f0:.1f}" if frame.f0 is not None else "--",
            frame.pitch_name,
            f"{frame.confidence:.2f}",
            f"{frame.energy:.3f}",
        )

    console.print(table)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
