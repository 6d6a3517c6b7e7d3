"""YIN fundamental frequency estimation for a single analysis window.

Implements the YIN steps that matter for tuner-style tracking:
    1. Squared difference function over candidate lags
    2. Cumulative mean normalized difference (CMNDF)
    3. Absolute threshold, then descent to the adjacent local minimum
    4. Parabolic interpolation around the chosen lag

The difference function is computed through the identity
d(tau) = sum(x[:N-tau]^2) + sum(x[tau:]^2) - 2 * r(tau), with the
autocorrelation r taken from librosa.
"""

from typing import NamedTuple, Optional

import librosa
import numpy as np

from ..core.config import PitchConfig
from ..core.constants import DEFAULT_SR

# Denominator floor for the CMNDF running sum
EPSILON = 1e-9


class PitchEstimate(NamedTuple):
    """Result of estimating one window."""

    f0: Optional[float]
    confidence: float


UNVOICED = PitchEstimate(None, 0.0)


def difference_function(window: np.ndarray, max_lag: int) -> np.ndarray:
    """Squared difference d[tau] for tau in [0, max_lag] (d[0] == 0)."""
    x = np.asarray(window, dtype=np.float64)
    n = len(x)
    power = np.concatenate(([0.0], np.cumsum(x * x)))
    acf = librosa.autocorrelate(x, max_size=max_lag + 1)

    taus = np.arange(1, max_lag + 1)
    head = power[n - taus]
    tail = power[n] - power[taus]

    d = np.zeros(max_lag + 1)
    d[1:] = np.maximum(head + tail - 2.0 * acf[1:], 0.0)
    return d


def cmndf(d: np.ndarray) -> np.ndarray:
    """Cumulative mean normalized difference of a difference function."""
    out = np.ones_like(d)
    running = np.cumsum(d[1:])
    running = np.where(running > 0, running, EPSILON)
    out[1:] = d[1:] * np.arange(1, len(d)) / running
    return out


def yin_pitch(
    window: np.ndarray,
    sr: int,
    fmin: float = 65.0,
    fmax: float = 1200.0,
    threshold: float = 0.12,
) -> PitchEstimate:
    """
    Estimate the fundamental frequency of one window.

    Args:
        window: Mono samples
        sr: Sample rate
        fmin: Lowest frequency searched (Hz)
        fmax: Highest frequency searched (Hz)
        threshold: CMNDF acceptance ceiling

    Returns:
        PitchEstimate; f0 is None when nothing passes the threshold, the
        window is silent, or it is too short for fmin.
    """
    n = len(window)
    max_lag = int(sr // fmin)
    min_lag = max(1, int(sr // fmax))

    if max_lag >= n:
        return UNVOICED

    d = difference_function(window, max_lag)
    if not np.any(d[1:] > 0):
        # Silent (or constant) window: no periodicity to measure
        return UNVOICED

    curve = cmndf(d)

    below = np.flatnonzero(curve[min_lag : max_lag + 1] < threshold)
    if len(below) == 0:
        return UNVOICED

    tau = min_lag + int(below[0])
    while tau + 1 <= max_lag and curve[tau + 1] < curve[tau]:
        tau += 1

    s0 = curve[max(1, tau - 1)]
    s1 = curve[tau]
    s2 = curve[min(max_lag, tau + 1)]
    denom = 2 * s1 - s2 - s0
    better_tau = tau + (s2 - s0) / (2 * denom) if denom != 0 else float(tau)

    f0 = sr / better_tau if better_tau > 0 else float("nan")
    confidence = float(np.clip(1.0 - s1, 0.0, 1.0))

    if not np.isfinite(f0) or f0 <= 0:
        return PitchEstimate(None, confidence)
    return PitchEstimate(float(f0), confidence)


class PitchAnalyzer:
    """Per-window YIN pitch detection with fixed search parameters."""

    def __init__(
        self,
        sr: int = DEFAULT_SR,
        config: Optional[PitchConfig] = None,
    ):
        """
        Initialize PitchAnalyzer.

        Args:
            sr: Sample rate of the windows to be analyzed
            config: Pitch search bounds and threshold
        """
        if sr <= 0:
            raise ValueError(f"Sample rate must be positive, got {sr}")
        self.sr = sr
        self.config = config or PitchConfig()

    @property
    def max_lag(self) -> int:
        return int(self.sr // self.config.fmin)

    @property
    def min_window(self) -> int:
        """Smallest window length that can resolve fmin."""
        return self.max_lag + 1

    def estimate(self, window: np.ndarray) -> PitchEstimate:
        """Estimate f0 and confidence for one window."""
        return yin_pitch(
            window,
            self.sr,
            fmin=self.config.fmin,
            fmax=self.config.fmax,
            threshold=self.config.threshold,
        )
