"""
Colour processing modules for darkroom

Includes RGB/HSL conversion and selective (band-wise) HSL adjustment.
"""

from .colorspace import rgb_to_hsl, hsl_to_rgb, rgb_to_hsl_array, hsl_to_rgb_array, luma
from .selective import apply_selective_hsl, band_influence

__all__ = [
    "rgb_to_hsl",
    "hsl_to_rgb",
    "rgb_to_hsl_array",
    "hsl_to_rgb_array",
    "luma",
    "apply_selective_hsl",
    "band_influence",
]
