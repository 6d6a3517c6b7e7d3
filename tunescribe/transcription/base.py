"""Transcriber interface and shared input checks."""

from abc import ABC, abstractmethod
from typing import List

import numpy as np

from ..core import Note


class Transcriber(ABC):
    """Turns a mono sample buffer into notes ordered by start."""

    @abstractmethod
    def transcribe(self, audio: np.ndarray, sr: int) -> List[Note]:
        """Transcribe mono audio sampled at sr Hz."""

    @staticmethod
    def prepare(audio: np.ndarray, sr: int) -> np.ndarray:
        """
        Validate a buffer before analysis.

        Returns:
            The samples as a 1-D float64 array

        Raises:
            ValueError: If sr is not positive or the buffer is not mono
        """
        if sr <= 0:
            raise ValueError(f"Sample rate must be positive, got {sr}")
        samples = np.asarray(audio, dtype=np.float64)
        if samples.ndim != 1:
            raise ValueError(f"Expected mono audio (1-D), got shape {samples.shape}")
        return samples
