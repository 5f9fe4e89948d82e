"""
Tone processing modules for darkroom

Includes exposure, temperature, vibrance, dehaze, shadow/highlight and
white/black operators, and the tone curve engine.
"""

from .operators import (
    apply_exposure, apply_temperature, apply_vibrance, apply_dehaze,
    apply_highlights_shadows, apply_whites_blacks
)
from .curves import build_curve_lut, apply_curves

__all__ = [
    "apply_exposure",
    "apply_temperature",
    "apply_vibrance",
    "apply_dehaze",
    "apply_highlights_shadows",
    "apply_whites_blacks",
    "build_curve_lut",
    "apply_curves",
]
