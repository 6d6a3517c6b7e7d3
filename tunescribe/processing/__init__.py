"""Processing layer - Note-level post-processing.

This layer refines segmented notes:
- Quantization (snap to grid)
"""

from .quantize import Quantizer

__all__ = [
    "Quantizer",
]
