"""
Effect modules for darkroom

Includes the haze glow compositor, sharpening and grain.
"""

from .haze import apply_haze, box_blur, haze_tint
from .detail import apply_sharpen, apply_grain, sharpen_kernel

__all__ = [
    "apply_haze",
    "box_blur",
    "haze_tint",
    "apply_sharpen",
    "sharpen_kernel",
    "apply_grain",
]
