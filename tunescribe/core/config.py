"""Configuration dataclasses for the transcription pipeline.

Each stage takes an immutable config object so standard setups can be defined
once and reused. All validation happens here; the analysis and encoding code
downstream assumes positive, finite, in-range parameters.

Example:
    >>> config = TranscriptionConfig(segment=MIC_SEGMENT_CONFIG, tempo=96.0)
    >>> transcriber = MonophonicTranscriber(config=config)
"""

from dataclasses import dataclass, field

from .constants import (
    DEFAULT_ENERGY_GATE,
    DEFAULT_FMAX,
    DEFAULT_FMIN,
    DEFAULT_FRAME_SIZE,
    DEFAULT_HOP,
    DEFAULT_SR,
    DEFAULT_TEMPO,
    DEFAULT_YIN_THRESHOLD,
    WAVEFORMS,
)


@dataclass(frozen=True)
class PitchConfig:
    """YIN pitch search parameters.

    Attributes:
        fmin: Lowest detectable frequency in Hz (sets the longest lag)
        fmax: Highest detectable frequency in Hz (sets the shortest lag)
        threshold: Acceptance ceiling for the normalized difference function
    """

    fmin: float = DEFAULT_FMIN
    fmax: float = DEFAULT_FMAX
    threshold: float = DEFAULT_YIN_THRESHOLD

    def __post_init__(self) -> None:
        if self.fmin <= 0:
            raise ValueError(f"fmin must be positive, got {self.fmin}")
        if self.fmax <= self.fmin:
            raise ValueError(
                f"fmax ({self.fmax}) must be greater than fmin ({self.fmin})"
            )
        if self.threshold <= 0:
            raise ValueError(f"threshold must be positive, got {self.threshold}")


@dataclass(frozen=True)
class ScanConfig:
    """Framing parameters for the frame scanner.

    Attributes:
        frame_size: Window length in samples
        hop: Step between window starts in samples
        energy_gate: RMS below which a window is treated as silence
    """

    frame_size: int = DEFAULT_FRAME_SIZE
    hop: int = DEFAULT_HOP
    energy_gate: float = DEFAULT_ENERGY_GATE

    def __post_init__(self) -> None:
        if self.frame_size <= 0:
            raise ValueError(f"frame_size must be positive, got {self.frame_size}")
        if self.hop <= 0:
            raise ValueError(f"hop must be positive, got {self.hop}")
        if self.energy_gate < 0:
            raise ValueError(
                f"energy_gate must be non-negative, got {self.energy_gate}"
            )


@dataclass(frozen=True)
class SegmentConfig:
    """Note segmentation parameters.

    Attributes:
        min_rms: Energy floor for a frame to count as pitched
        min_conf: Confidence floor for a frame to count as pitched
        min_note_dur: Shortest note kept, in seconds
        merge_gap: Largest gap (seconds) across which same-pitch notes merge
        pitch_tolerance: Largest deviation in semitones still the same note
    """

    min_rms: float = 0.01
    min_conf: float = 0.2
    min_note_dur: float = 0.10
    merge_gap: float = 0.06
    pitch_tolerance: float = 0.5

    def __post_init__(self) -> None:
        for name in ("min_rms", "min_conf", "min_note_dur", "merge_gap", "pitch_tolerance"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        if self.min_conf > 1:
            raise ValueError(f"min_conf must be at most 1, got {self.min_conf}")


@dataclass(frozen=True)
class RenderConfig:
    """Offline synthesis parameters for WAV rendering.

    Attributes:
        sample_rate: Output sample rate in Hz
        waveform: Oscillator shape, one of sine/triangle/sawtooth/square
        attack: Linear fade-in length in seconds
        release: Linear fade-out length in seconds
    """

    sample_rate: int = DEFAULT_SR
    waveform: str = "triangle"
    attack: float = 0.01
    release: float = 0.05

    def __post_init__(self) -> None:
        if self.sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {self.sample_rate}")
        if self.waveform not in WAVEFORMS:
            raise ValueError(
                f"Unknown waveform {self.waveform!r}, valid options: {list(WAVEFORMS)}"
            )
        if self.attack < 0 or self.release < 0:
            raise ValueError(
                f"attack and release must be non-negative, got {self.attack}/{self.release}"
            )


@dataclass(frozen=True)
class TranscriptionConfig:
    """Full audio-to-notes pipeline configuration."""

    pitch: PitchConfig = field(default_factory=PitchConfig)
    scan: ScanConfig = field(default_factory=ScanConfig)
    segment: SegmentConfig = field(default_factory=SegmentConfig)
    tempo: float = DEFAULT_TEMPO

    def __post_init__(self) -> None:
        if self.tempo <= 0:
            raise ValueError(f"tempo must be positive, got {self.tempo}")


# Pre-defined configurations

DEFAULT_SEGMENT_CONFIG = SegmentConfig()
"""Library defaults for segmentation."""

MIC_SEGMENT_CONFIG = SegmentConfig(min_rms=0.012, min_conf=0.22)
"""Slightly stricter floors for noisy microphone recordings."""

DEFAULT_CONFIG = TranscriptionConfig(segment=MIC_SEGMENT_CONFIG)
"""Pipeline defaults: 2048/512 framing, 65-1200 Hz search, mic segmentation."""
