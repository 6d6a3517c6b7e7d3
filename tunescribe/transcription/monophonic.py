"""Monophonic transcription using YIN frame scanning and note segmentation."""

import logging
from typing import List, Optional, Tuple

import numpy as np

from .base import Transcriber
from .segmenter import NoteSegmenter
from ..analysis import FrameScanner
from ..core import Note, PitchFrame
from ..core.config import DEFAULT_CONFIG, TranscriptionConfig

logger = logging.getLogger(__name__)

# Clips longer than this tend to contain more than one voice
RECOMMENDED_MAX_DURATION = 30.0


class MonophonicTranscriber(Transcriber):
    """Transcribes a single melodic line, tuner style.

    Pitch is tracked frame by frame; notes begin and end where the tracked
    pitch appears, disappears or jumps.
    """

    def __init__(self, config: Optional[TranscriptionConfig] = None):
        """
        Initialize MonophonicTranscriber.

        Args:
            config: Pitch, framing and segmentation settings
                (defaults to the microphone-friendly preset)
        """
        self.config = config or DEFAULT_CONFIG
        self.scanner = FrameScanner(self.config.scan, self.config.pitch)
        self.segmenter = NoteSegmenter(self.config.segment)

    def transcribe(self, audio: np.ndarray, sr: int) -> List[Note]:
        """
        Transcribe monophonic audio to notes.

        Args:
            audio: Audio array (mono)
            sr: Sample rate

        Returns:
            List of detected notes
        """
        _, notes = self.analyze(audio, sr)
        return notes

    def analyze(
        self, audio: np.ndarray, sr: int
    ) -> Tuple[List[PitchFrame], List[Note]]:
        """
        Run the full pipeline, keeping the intermediate pitch frames.

        Returns:
            Tuple of (pitch frames, notes)
        """
        audio = self.prepare(audio, sr)

        duration = len(audio) / sr
        if duration > RECOMMENDED_MAX_DURATION:
            logger.warning(
                "Clip is %.1fs; for best results use <= %.0fs of monophonic audio",
                duration,
                RECOMMENDED_MAX_DURATION,
            )

        frames = self.scanner.scan(audio, sr)
        notes = self.segmenter.segment(frames)
        logger.info("Detected %d notes in %.2fs of audio", len(notes), duration)
        return frames, notes
