"""
Glow/haze compositor.

Bright regions emit a tinted glow: a glow map whose alpha is the squared
luma of the image is box blurred and laid back over the image, simulating
atmospheric haze. The blur radius grows with both the haze amount and the
image size.
"""

import logging
from typing import Tuple

import numpy as np
from scipy.ndimage import convolve1d

from ..color.colorspace import luma
from ..pixels import read_rgb, write_rgb, to_bytes

logger = logging.getLogger(__name__)

NEUTRAL_HAZE = 230.0
BLUR_SCALE = 0.05


def haze_tint(spread: float) -> Tuple[float, float, float]:
    """
    Tint colour of the haze for a warmth slider value (0-100, 50 = neutral).

    Warm tints raise red and green and lower blue; cool tints do the reverse.
    """
    warmth = (spread - 50.0) / 50.0
    r = g = b = NEUTRAL_HAZE
    if warmth > 0:
        r = min(255.0, r + 25.0 * warmth)
        g = min(255.0, g + 10.0 * warmth)
        b = max(0.0, b - 25.0 * warmth)
    else:
        r = max(0.0, r + 25.0 * warmth)
        g = max(0.0, g + 5.0 * warmth)
        b = min(255.0, b - 40.0 * warmth)
    return r, g, b


def blur_radius(amount: float, height: int, width: int) -> int:
    """Box blur radius for a haze amount on an image of the given size."""
    return int(np.floor(max(1.0, (amount / 100.0) * (min(width, height) * BLUR_SCALE))))


def _box_pass(channel: np.ndarray, radius: int, axis: int) -> np.ndarray:
    # Average over the in-bounds part of the window only
    window = np.ones(2 * radius + 1)
    sums = convolve1d(channel, window, axis=axis, mode='constant', cval=0.0)
    counts = convolve1d(np.ones_like(channel), window, axis=axis, mode='constant', cval=0.0)
    return to_bytes(sums / counts).astype(np.float64)


def box_blur(channel: np.ndarray, radius: int) -> np.ndarray:
    """
    Separable box blur of a single 8-bit channel.

    A horizontal pass is followed by a vertical pass; each pass is stored as
    bytes before the next one reads it.

    Args:
        channel: 2D array of 0-255 values
        radius: Half window size in pixels (window is ``2 * radius + 1``)

    Returns:
        Blurred channel as a uint8 array
    """
    work = np.asarray(channel, dtype=np.float64)
    work = _box_pass(work, radius, axis=1)
    work = _box_pass(work, radius, axis=0)
    return work.astype(np.uint8)


def glow_alpha(pixels: np.ndarray) -> np.ndarray:
    """Glow map alpha: squared luma rescaled to 0-255, stored as bytes."""
    lum = luma(read_rgb(pixels))
    return to_bytes(lum * lum / 255.0)


def apply_haze(pixels: np.ndarray, amount: float, spread: float) -> np.ndarray:
    """Composite a blurred, tinted glow over the image in place."""
    height, width = pixels.shape[:2]
    tint = to_bytes(np.array(haze_tint(spread))).astype(np.float64)
    radius = blur_radius(amount, height, width)

    blurred = box_blur(glow_alpha(pixels), radius).astype(np.float64)
    blend = (blurred / 255.0 * (amount / 100.0))[..., np.newaxis]

    rgb = read_rgb(pixels)
    rgb = rgb * (1.0 - blend) + tint * blend
    logger.debug(f"Haze: amount={amount}, spread={spread}, radius={radius}")
    return write_rgb(pixels, rgb)
