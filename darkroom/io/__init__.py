"""
File input/output for darkroom
"""

from .images import load_image, load_mask, save_image
from .presets import load_adjustments, save_adjustments

__all__ = [
    "load_image",
    "load_mask",
    "save_image",
    "load_adjustments",
    "save_adjustments",
]
