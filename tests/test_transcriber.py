"""Tests for core types, audio loading and the monophonic pipeline."""

import numpy as np
import pytest
from scipy.io import wavfile

from tunescribe.core import Note, PitchFrame, TranscriptionConfig, round_half_up
from tunescribe.input import AudioLoader
from tunescribe.transcription import MonophonicTranscriber

from conftest import SR, generate_note_sequence, generate_sine_wave


class TestNote:
    """Tests for Note dataclass."""

    def test_note_creation(self):
        note = Note(start=0.0, end=1.0, pitch=60, velocity=80)
        assert note.pitch == 60
        assert note.start == 0.0
        assert note.end == 1.0
        assert note.velocity == 80

    def test_note_duration(self):
        note = Note(start=0.5, end=1.5, pitch=60)
        assert note.duration == 1.0

    def test_pitch_name(self):
        assert Note(0, 1, 60).pitch_name == "C4"
        assert Note(0, 1, 69).pitch_name == "A4"
        assert Note(0, 1, 61).pitch_name == "C#4"

    def test_freq_to_midi(self):
        assert Note.freq_to_midi(440.0) == 69  # A4
        assert Note.freq_to_midi(261.63) == 60  # C4 (approx)
        assert Note.freq_to_midi(880.0) == 81  # A5
        assert Note.freq_to_midi(0.0) == 0
        assert Note.freq_to_midi(1e6) == 127

    def test_midi_to_freq(self):
        assert Note.midi_to_freq(69) == 440.0
        assert abs(Note.midi_to_freq(60) - 261.63) < 1.0

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(-2.5) == -2
        assert round_half_up(2.49) == 2


class TestPitchFrame:
    """Tests for PitchFrame helpers."""

    def test_voiced_frame(self):
        frame = PitchFrame(time=0.1, f0=440.0, confidence=0.9, energy=0.2)
        assert frame.voiced
        assert frame.midi == 69
        assert frame.pitch_name == "A4"

    def test_unvoiced_frame(self):
        frame = PitchFrame(time=0.1, f0=None, confidence=0.0, energy=0.0)
        assert not frame.voiced
        assert frame.midi is None
        assert frame.pitch_name == "--"


class TestAudioLoader:
    """Tests for AudioLoader."""

    def test_normalize(self):
        loader = AudioLoader()
        audio = np.array([0.5, -0.5, 0.25, -0.25])
        normalized = loader._normalize(audio)

        assert np.abs(normalized).max() == 1.0

    def test_unsupported_format(self, tmp_path):
        # Create a dummy file with unsupported extension
        dummy_file = tmp_path / "test.xyz"
        dummy_file.write_text("dummy content")

        loader = AudioLoader()
        with pytest.raises(ValueError, match="Unsupported format"):
            loader.load(str(dummy_file))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AudioLoader().load(str(tmp_path / "missing.wav"))

    def test_load_resamples_to_target(self, tmp_path):
        path = tmp_path / "tone.wav"
        wavfile.write(str(path), 22050, generate_sine_wave(440.0, 1.0, 22050))

        loader = AudioLoader(target_sr=SR)
        audio, sr = loader.load(str(path))
        assert sr == SR
        assert loader.get_duration(audio, sr) == pytest.approx(1.0, rel=0.01)


class TestMonophonicTranscriber:
    """Tests for the full audio-to-notes pipeline."""

    def test_melody(self, sr, melody):
        notes = MonophonicTranscriber().transcribe(melody, sr)

        assert [n.pitch for n in notes] == [69, 72, 76]
        for i, note in enumerate(notes):
            assert note.start == pytest.approx(i * 0.5, abs=0.06)
            assert note.duration == pytest.approx(0.4, abs=0.08)
            assert 1 <= note.velocity <= 127

    def test_analyze_returns_frames(self, sr, melody):
        frames, notes = MonophonicTranscriber().analyze(melody, sr)
        assert len(frames) == (len(melody) - 2048) // 512 + 1
        assert any(frame.voiced for frame in frames)
        assert len(notes) == 3

    def test_silence(self, sr):
        assert MonophonicTranscriber().transcribe(np.zeros(sr), sr) == []

    def test_quiet_audio_is_ignored(self, sr):
        quiet = generate_note_sequence([(69, 0.5)], amplitude=0.005)
        assert MonophonicTranscriber().transcribe(quiet, sr) == []

    def test_repeated_note_with_long_gap(self, sr):
        audio = generate_note_sequence([(64, 0.3), (64, 0.3)], gap=0.2)
        notes = MonophonicTranscriber().transcribe(audio, sr)
        assert [n.pitch for n in notes] == [64, 64]

    def test_custom_config(self, sr):
        audio = generate_sine_wave(100.0, 0.5, sr)
        config = TranscriptionConfig(tempo=90.0)
        notes = MonophonicTranscriber(config).transcribe(audio, sr)
        assert [n.pitch for n in notes] == [Note.freq_to_midi(100.0)]

    def test_invalid_sample_rate(self):
        with pytest.raises(ValueError):
            MonophonicTranscriber().transcribe(np.zeros(4096), 0)

    def test_stereo_buffer_is_rejected(self, sr):
        with pytest.raises(ValueError, match="mono"):
            MonophonicTranscriber().transcribe(np.zeros((2, sr)), sr)

    def test_integer_and_list_input_are_accepted(self, sr):
        assert MonophonicTranscriber().transcribe([0] * 4096, sr) == []
        samples = MonophonicTranscriber.prepare(np.zeros(8, dtype=np.int16), sr)
        assert samples.dtype == np.float64
