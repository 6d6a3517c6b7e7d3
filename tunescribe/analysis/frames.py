"""Frame scanning - slide YIN over a full recording."""

import logging
from typing import List, Optional

import numpy as np

from ..core import PitchFrame
from ..core.config import PitchConfig, ScanConfig
from .pitch import PitchAnalyzer

logger = logging.getLogger(__name__)


def rms(window: np.ndarray) -> float:
    """Root-mean-square amplitude of a window."""
    window = np.asarray(window, dtype=np.float64)
    if len(window) == 0:
        return 0.0
    return float(np.sqrt(np.mean(window * window)))


class FrameScanner:
    """Produces one PitchFrame per overlapping analysis window.

    Windows are independent: each frame's decision depends only on its own
    samples. Windows whose RMS falls under the energy gate are reported as
    unvoiced without running the estimator.
    """

    def __init__(
        self,
        config: Optional[ScanConfig] = None,
        pitch_config: Optional[PitchConfig] = None,
    ):
        """
        Initialize FrameScanner.

        Args:
            config: Frame size, hop and silence gate
            pitch_config: Parameters handed to the pitch estimator
        """
        self.config = config or ScanConfig()
        self.pitch_config = pitch_config or PitchConfig()

    def scan(self, samples: np.ndarray, sr: int) -> List[PitchFrame]:
        """
        Scan a mono buffer into pitch frames.

        Args:
            samples: Mono audio in [-1, 1]
            sr: Sample rate

        Returns:
            Frames ordered by time; a trailing partial window is dropped
        """
        analyzer = PitchAnalyzer(sr=sr, config=self.pitch_config)
        samples = np.asarray(samples, dtype=np.float64)
        frame_size = self.config.frame_size
        hop = self.config.hop
        gate = self.config.energy_gate

        if len(samples) < frame_size:
            logger.debug(
                "Buffer of %d samples is shorter than one %d-sample frame",
                len(samples),
                frame_size,
            )
            return []

        windows = np.lib.stride_tricks.sliding_window_view(samples, frame_size)[::hop]
        energies = np.sqrt(np.mean(windows * windows, axis=1))

        frames = []
        for index, (window, energy) in enumerate(zip(windows, energies)):
            time = index * hop / sr
            energy = float(energy)

            if energy < gate:
                frames.append(PitchFrame(time, None, 0.0, energy))
                continue

            f0, confidence = analyzer.estimate(window)
            frames.append(PitchFrame(time, f0, confidence, energy))

        logger.debug(
            "Scanned %d frames (%d voiced)",
            len(frames),
            sum(1 for frame in frames if frame.voiced),
        )
        return frames
