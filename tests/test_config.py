"""Tests for configuration validation and presets."""

import pytest

from tunescribe.core import (
    DEFAULT_CONFIG,
    MIC_SEGMENT_CONFIG,
    PitchConfig,
    RenderConfig,
    ScanConfig,
    SegmentConfig,
    TranscriptionConfig,
)


class TestDefaults:
    """Default values used across the pipeline."""

    def test_pitch_defaults(self):
        config = PitchConfig()
        assert (config.fmin, config.fmax, config.threshold) == (65.0, 1200.0, 0.12)

    def test_scan_defaults(self):
        config = ScanConfig()
        assert (config.frame_size, config.hop, config.energy_gate) == (2048, 512, 0.010)

    def test_segment_defaults(self):
        config = SegmentConfig()
        assert config.min_rms == 0.01
        assert config.min_conf == 0.2
        assert config.min_note_dur == 0.10
        assert config.merge_gap == 0.06
        assert config.pitch_tolerance == 0.5

    def test_mic_preset(self):
        assert MIC_SEGMENT_CONFIG.min_rms == 0.012
        assert MIC_SEGMENT_CONFIG.min_conf == 0.22
        assert DEFAULT_CONFIG.segment == MIC_SEGMENT_CONFIG
        assert DEFAULT_CONFIG.tempo == 120.0

    def test_render_defaults(self):
        config = RenderConfig()
        assert (config.sample_rate, config.waveform) == (44100, "triangle")
        assert (config.attack, config.release) == (0.01, 0.05)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            PitchConfig().fmin = 10.0


class TestValidation:
    """Invalid configuration raises ValueError."""

    @pytest.mark.parametrize(
        "factory",
        [
            lambda: PitchConfig(fmin=0),
            lambda: PitchConfig(fmin=500, fmax=400),
            lambda: PitchConfig(threshold=0),
            lambda: ScanConfig(frame_size=0),
            lambda: ScanConfig(hop=-1),
            lambda: ScanConfig(energy_gate=-0.1),
            lambda: SegmentConfig(min_rms=-1),
            lambda: SegmentConfig(min_conf=1.5),
            lambda: SegmentConfig(merge_gap=-0.01),
            lambda: RenderConfig(sample_rate=0),
            lambda: RenderConfig(waveform="pulse"),
            lambda: RenderConfig(attack=-0.1),
            lambda: TranscriptionConfig(tempo=0),
        ],
    )
    def test_invalid(self, factory):
        with pytest.raises(ValueError):
            factory()
