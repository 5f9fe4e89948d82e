"""
RGB <-> HSL conversion.

Scalar functions take and return plain floats; the ``*_array`` variants do the
same arithmetic on numpy arrays so whole images convert in one pass. Channel
values are on the 0-255 scale, hue is in degrees [0, 360), saturation and
lightness are in [0, 1].
"""

from typing import Tuple

import numpy as np

LUMA_WEIGHTS = (0.299, 0.587, 0.114)


def rgb_to_hsl(r: float, g: float, b: float) -> Tuple[float, float, float]:
    """Convert one RGB triple (0-255) to ``(h, s, l)``. Hue is 0 for grays."""
    r /= 255.0
    g /= 255.0
    b /= 255.0
    max_c = max(r, g, b)
    min_c = min(r, g, b)
    h = 0.0
    s = 0.0
    l = (max_c + min_c) / 2.0
    if max_c != min_c:
        d = max_c - min_c
        s = d / (2.0 - max_c - min_c) if l > 0.5 else d / (max_c + min_c)
        if max_c == r:
            h = (g - b) / d + (6.0 if g < b else 0.0)
        elif max_c == g:
            h = (b - r) / d + 2.0
        else:
            h = (r - g) / d + 4.0
        h /= 6.0
    return h * 360.0, s, l


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1.0
    if t > 1:
        t -= 1.0
    if t < 1.0 / 6.0:
        return p + (q - p) * 6.0 * t
    if t < 0.5:
        return q
    if t < 2.0 / 3.0:
        return p + (q - p) * (2.0 / 3.0 - t) * 6.0
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> Tuple[float, float, float]:
    """Convert ``(h, s, l)`` back to unrounded RGB floats on the 0-255 scale."""
    h /= 360.0
    if s == 0:
        r = g = b = l
    else:
        q = l * (1.0 + s) if l < 0.5 else l + s - l * s
        p = 2.0 * l - q
        r = _hue_to_channel(p, q, h + 1.0 / 3.0)
        g = _hue_to_channel(p, q, h)
        b = _hue_to_channel(p, q, h - 1.0 / 3.0)
    return r * 255.0, g * 255.0, b * 255.0


def rgb_to_hsl_array(rgb: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Vectorised :func:`rgb_to_hsl` for an ``(..., 3)`` array of 0-255 values."""
    rgb = np.asarray(rgb, dtype=np.float64) / 255.0
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
    max_c = np.maximum(np.maximum(r, g), b)
    min_c = np.minimum(np.minimum(r, g), b)
    l = (max_c + min_c) / 2.0
    d = max_c - min_c
    chromatic = d != 0

    # Denominators are only used where the pixel is chromatic
    safe_d = np.where(chromatic, d, 1.0)
    low = max_c + min_c
    high = 2.0 - max_c - min_c
    s = np.where(
        l > 0.5,
        d / np.where(chromatic, high, 1.0),
        d / np.where(chromatic, low, 1.0),
    )
    s = np.where(chromatic, s, 0.0)

    # Branch order matters when two channels tie for the maximum
    is_r = chromatic & (max_c == r)
    is_g = chromatic & ~is_r & (max_c == g)
    is_b = chromatic & ~is_r & ~is_g
    h = np.zeros_like(l)
    h = np.where(is_r, (g - b) / safe_d + np.where(g < b, 6.0, 0.0), h)
    h = np.where(is_g, (b - r) / safe_d + 2.0, h)
    h = np.where(is_b, (r - g) / safe_d + 4.0, h)
    h = h / 6.0
    return h * 360.0, s, l


def _hue_to_channel_array(p: np.ndarray, q: np.ndarray, t: np.ndarray) -> np.ndarray:
    t = np.where(t < 0, t + 1.0, t)
    t = np.where(t > 1, t - 1.0, t)
    return np.select(
        [t < 1.0 / 6.0, t < 0.5, t < 2.0 / 3.0],
        [p + (q - p) * 6.0 * t, q, p + (q - p) * (2.0 / 3.0 - t) * 6.0],
        default=p,
    )


def hsl_to_rgb_array(h: np.ndarray, s: np.ndarray, l: np.ndarray) -> np.ndarray:
    """Vectorised :func:`hsl_to_rgb`; returns an ``(..., 3)`` float array."""
    h = np.asarray(h, dtype=np.float64) / 360.0
    s = np.asarray(s, dtype=np.float64)
    l = np.asarray(l, dtype=np.float64)
    q = np.where(l < 0.5, l * (1.0 + s), l + s - l * s)
    p = 2.0 * l - q
    r = _hue_to_channel_array(p, q, h + 1.0 / 3.0)
    g = _hue_to_channel_array(p, q, h)
    b = _hue_to_channel_array(p, q, h - 1.0 / 3.0)
    gray = s == 0
    r = np.where(gray, l, r)
    g = np.where(gray, l, g)
    b = np.where(gray, l, b)
    return np.stack([r, g, b], axis=-1) * 255.0


def luma(rgb: np.ndarray) -> np.ndarray:
    """Perceptual brightness ``0.299R + 0.587G + 0.114B`` of an ``(..., 3)`` array."""
    rgb = np.asarray(rgb, dtype=np.float64)
    return rgb[..., 0] * LUMA_WEIGHTS[0] + rgb[..., 1] * LUMA_WEIGHTS[1] + rgb[..., 2] * LUMA_WEIGHTS[2]
