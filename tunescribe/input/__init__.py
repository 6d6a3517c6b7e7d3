"""Input layer - Audio loading and preprocessing."""

from .loader import AudioLoader

__all__ = ["AudioLoader"]
