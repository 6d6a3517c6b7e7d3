"""Tests for YIN pitch estimation and frame scanning."""

import numpy as np
import pytest

from tunescribe.analysis import FrameScanner, PitchAnalyzer, rms, yin_pitch
from tunescribe.analysis.pitch import cmndf, difference_function
from tunescribe.core import PitchConfig, ScanConfig

from conftest import generate_sine_wave


class TestYinPitch:
    """Tests for single-window estimation."""

    @pytest.mark.parametrize("freq", [82.41, 110.0, 220.0, 440.0, 659.26, 880.0, 1046.5])
    def test_sine_within_one_percent(self, sr, freq):
        window = generate_sine_wave(freq, 0.1, sr)[:2048]
        f0, confidence = yin_pitch(window, sr)

        assert f0 is not None
        assert f0 == pytest.approx(freq, rel=0.01)
        assert confidence > 0.8

    @pytest.mark.parametrize("threshold", [0.01, 0.12, 0.5, 1.0, 5.0])
    def test_silent_window_has_no_pitch(self, sr, threshold):
        f0, confidence = yin_pitch(np.zeros(2048), sr, threshold=threshold)
        assert f0 is None
        assert confidence == 0.0

    def test_window_too_short_for_fmin(self, sr):
        # floor(44100 / 65) = 678 lags do not fit in 512 samples
        window = generate_sine_wave(440.0, 0.05, sr)[:512]
        assert yin_pitch(window, sr, fmin=65.0) == (None, 0.0)

    def test_short_window_ok_with_higher_fmin(self, sr):
        window = generate_sine_wave(440.0, 0.05, sr)[:512]
        f0, _ = yin_pitch(window, sr, fmin=200.0)
        assert f0 == pytest.approx(440.0, rel=0.01)

    def test_white_noise_is_unvoiced(self, sr):
        rng = np.random.default_rng(0)
        window = rng.standard_normal(2048) * 0.3
        f0, confidence = yin_pitch(window, sr)
        assert f0 is None
        assert confidence == 0.0

    def test_deterministic(self, sr):
        rng = np.random.default_rng(1)
        window = generate_sine_wave(330.0, 0.05, sr)[:2048] + rng.standard_normal(2048) * 0.01
        assert yin_pitch(window, sr) == yin_pitch(window.copy(), sr)

    def test_difference_function_matches_direct_sum(self):
        rng = np.random.default_rng(2)
        x = rng.standard_normal(256)
        max_lag = 100
        direct = [0.0] + [
            float(np.sum((x[: len(x) - tau] - x[tau:]) ** 2))
            for tau in range(1, max_lag + 1)
        ]
        assert np.allclose(difference_function(x, max_lag), direct)

    def test_cmndf_starts_at_one(self):
        d = np.array([0.0, 2.0, 1.0, 0.5])
        curve = cmndf(d)
        assert curve[0] == 1.0
        assert curve[1] == pytest.approx(1.0)  # d[1] * 1 / d[1]
        assert curve[2] == pytest.approx(1.0 * 2 / 3.0)
        assert curve[3] == pytest.approx(0.5 * 3 / 3.5)


class TestPitchAnalyzer:
    """Tests for the configured estimator wrapper."""

    def test_estimate_uses_config(self, sr):
        analyzer = PitchAnalyzer(sr=sr, config=PitchConfig(fmin=100.0, fmax=1000.0))
        assert analyzer.max_lag == 441
        assert analyzer.min_window == 442

        f0, _ = analyzer.estimate(generate_sine_wave(250.0, 0.05, sr)[:1024])
        assert f0 == pytest.approx(250.0, rel=0.01)

    def test_invalid_sample_rate(self):
        with pytest.raises(ValueError, match="Sample rate"):
            PitchAnalyzer(sr=0)


class TestFrameScanner:
    """Tests for windowing and energy gating."""

    def test_rms(self):
        assert rms(np.array([1.0, -1.0, 1.0, -1.0])) == 1.0
        assert rms(np.zeros(10)) == 0.0
        assert rms(np.array([])) == 0.0

    def test_frame_count_drops_partial_window(self, sr):
        scanner = FrameScanner(ScanConfig(frame_size=2048, hop=512))
        # Starts 0, 512, ..., 7680; 8192 + 2048 > 10000
        assert len(scanner.scan(np.zeros(10000), sr)) == 16

    def test_exact_fit_window_is_kept(self, sr):
        scanner = FrameScanner(ScanConfig(frame_size=2048, hop=512))
        assert len(scanner.scan(np.zeros(2048 + 3 * 512), sr)) == 4

    def test_buffer_shorter_than_frame(self, sr):
        assert FrameScanner().scan(np.zeros(100), sr) == []

    def test_frame_times(self, sr):
        frames = FrameScanner(ScanConfig(hop=441)).scan(np.zeros(sr), sr)
        assert [f.time for f in frames[:3]] == [0.0, 0.01, 0.02]
        assert all(b.time > a.time for a, b in zip(frames, frames[1:]))

    def test_silence_frames(self, sr):
        frames = FrameScanner().scan(np.zeros(sr // 2), sr)
        assert frames
        for frame in frames:
            assert frame.f0 is None
            assert frame.confidence == 0.0
            assert frame.energy == 0.0

    def test_quiet_signal_is_gated_but_energy_kept(self, sr):
        quiet = generate_sine_wave(440.0, 0.5, sr, amplitude=0.005)
        frames = FrameScanner(ScanConfig(energy_gate=0.01)).scan(quiet, sr)
        for frame in frames:
            assert frame.f0 is None
            assert frame.confidence == 0.0
            assert frame.energy == pytest.approx(0.005 / np.sqrt(2), rel=0.05)

    def test_sine_frames_are_voiced(self, sr):
        frames = FrameScanner().scan(generate_sine_wave(440.0, 0.5, sr), sr)
        assert all(frame.voiced for frame in frames)
        assert all(frame.pitch_name == "A4" for frame in frames)
        assert np.median([frame.f0 for frame in frames]) == pytest.approx(440.0, rel=0.01)
