"""Audio loading and preprocessing utilities."""

import logging
from pathlib import Path
from typing import Optional, Tuple

import librosa
import numpy as np

from ..core.constants import DEFAULT_SR

logger = logging.getLogger(__name__)


class AudioLoader:
    """Decodes audio files into mono float samples at a fixed rate."""

    SUPPORTED_FORMATS = {".wav", ".mp3", ".flac", ".ogg", ".m4a", ".webm"}

    def __init__(
        self,
        target_sr: int = DEFAULT_SR,
        normalize: bool = False,
    ):
        """
        Initialize AudioLoader.

        Args:
            target_sr: Target sample rate for resampling
            normalize: Peak-normalize audio amplitude if True
        """
        if target_sr <= 0:
            raise ValueError(f"target_sr must be positive, got {target_sr}")
        self.target_sr = target_sr
        self.normalize = normalize

    def load(self, path: str) -> Tuple[np.ndarray, int]:
        """
        Load audio file, mix down to mono and resample.

        Args:
            path: Path to audio file

        Returns:
            Tuple of (audio array, sample rate)

        Raises:
            ValueError: If file format not supported
            FileNotFoundError: If file doesn't exist
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Audio file not found: {path}")

        if path.suffix.lower() not in self.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format: {path.suffix}. "
                f"Supported: {sorted(self.SUPPORTED_FORMATS)}"
            )

        # librosa averages channels and resamples in one go
        audio, sr = librosa.load(str(path), sr=self.target_sr, mono=True)
        logger.debug("Loaded %s: %d samples at %d Hz", path.name, len(audio), sr)

        if self.normalize:
            audio = self._normalize(audio)

        return audio, sr

    def _normalize(self, audio: np.ndarray) -> np.ndarray:
        """Normalize audio to [-1, 1] range using peak normalization."""
        peak = np.abs(audio).max() if len(audio) else 0.0
        if peak > 0:
            audio = audio / peak
        return audio

    def get_duration(self, audio: np.ndarray, sr: Optional[int] = None) -> float:
        """Get duration in seconds."""
        sr = sr or self.target_sr
        return len(audio) / sr
