"""
Detail effects: sharpening and film grain.
"""

from typing import Optional

import numpy as np
from scipy import ndimage

from ..pixels import read_rgb, write_rgb


def sharpen_kernel(amount: float) -> np.ndarray:
    """3x3 sharpening kernel for a 0-100 amount; its weights sum to 1."""
    s = amount / 100.0
    return np.array([
        [0.0, -s, 0.0],
        [-s, 1.0 + 4.0 * s, -s],
        [0.0, -s, 0.0],
    ])


def apply_sharpen(pixels: np.ndarray, amount: float) -> np.ndarray:
    """
    Sharpen with a 3x3 kernel, in place.

    The kernel has ``1 + 4s`` at the centre and ``-s`` on the four direct
    neighbours, with ``s = amount / 100``.

    The kernel reads from a snapshot of the input so already sharpened
    neighbours are never re-read. The outermost 1px border is left as is.
    """
    height, width = pixels.shape[:2]
    if height < 3 or width < 3:
        return pixels

    kernel = sharpen_kernel(amount)
    src = read_rgb(pixels)
    sharpened = np.empty_like(src)
    for c in range(3):
        sharpened[..., c] = ndimage.convolve(src[..., c], kernel, mode='nearest')

    # Border pixels keep their snapshot values
    src[1:-1, 1:-1] = sharpened[1:-1, 1:-1]
    return write_rgb(pixels, src)


def apply_grain(pixels: np.ndarray, amount: float,
                rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Add uniform monochrome noise, in place.

    Each pixel gets one offset in ``[-amount * 2.55 / 2, amount * 2.55 / 2)``
    added to R, G and B alike.

    Args:
        pixels: RGBA uint8 buffer
        amount: Grain strength (0-100)
        rng: Random source; a fresh unseeded generator is used when omitted
    """
    rng = rng if rng is not None else np.random.default_rng()
    height, width = pixels.shape[:2]
    noise = (rng.random((height, width)) - 0.5) * (amount * 2.55)
    return write_rgb(pixels, read_rgb(pixels) + noise[..., np.newaxis])
