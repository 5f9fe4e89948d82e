"""
Pixel buffer helpers shared by the adjustment operators.

A pixel buffer is a ``(height, width, 4)`` uint8 RGBA array, row-major with a
top-left origin. Operators work on float copies of the RGB channels and write
back with clamped-byte semantics (clamp to 0-255, round half to even).
"""

import numpy as np


def validate_pixels(pixels: np.ndarray, name: str = "pixels") -> np.ndarray:
    """Check that *pixels* is an 8-bit RGBA buffer and return it."""
    if not isinstance(pixels, np.ndarray):
        raise ValueError(f"{name} must be a numpy array, got {type(pixels).__name__}")
    if pixels.dtype != np.uint8:
        raise ValueError(f"{name} must have dtype uint8, got {pixels.dtype}")
    if pixels.ndim != 3 or pixels.shape[2] != 4:
        raise ValueError(f"{name} must have shape (height, width, 4), got {pixels.shape}")
    if pixels.shape[0] == 0 or pixels.shape[1] == 0:
        raise ValueError(f"{name} must have non-zero dimensions, got {pixels.shape[:2]}")
    return pixels


def to_bytes(values: np.ndarray) -> np.ndarray:
    """Convert float channel values to uint8 the way a clamped byte array stores them."""
    return np.rint(np.clip(values, 0.0, 255.0)).astype(np.uint8)


def read_rgb(pixels: np.ndarray) -> np.ndarray:
    """Return the RGB channels of *pixels* as a float64 ``(H, W, 3)`` copy."""
    return pixels[:, :, :3].astype(np.float64)


def write_rgb(pixels: np.ndarray, rgb: np.ndarray) -> np.ndarray:
    """Store float RGB values into *pixels* in place, leaving alpha untouched."""
    pixels[:, :, :3] = to_bytes(rgb)
    return pixels


def js_round(values: np.ndarray) -> np.ndarray:
    """Round half up (``floor(x + 0.5)``), used when rounding to LUT indices."""
    return np.floor(values + 0.5)
