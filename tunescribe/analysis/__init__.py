"""Analysis layer - Low-level signal analysis.

This layer turns raw samples into per-frame pitch evidence:
- YIN fundamental frequency estimation for one window
- Frame scanning with RMS energy gating
"""

from .pitch import PitchAnalyzer, PitchEstimate, yin_pitch
from .frames import FrameScanner, rms

__all__ = [
    "PitchAnalyzer",
    "PitchEstimate",
    "yin_pitch",
    "FrameScanner",
    "rms",
]
