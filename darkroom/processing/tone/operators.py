"""
Per-pixel tonal and colour operators.

Every operator mutates the RGB channels of an RGBA uint8 buffer in place,
leaves alpha untouched, and returns the same buffer. Slider values use the
-100..100 scale with 0 as identity. Callers skip an operator when its
parameters are at identity; the operators do not check for it themselves.
"""

import numpy as np

from ..color.colorspace import rgb_to_hsl_array, hsl_to_rgb_array, luma
from ..pixels import read_rgb, write_rgb

# Atmospheric light assumed by the dehaze model
DEHAZE_AIRLIGHT = np.array([220.0, 220.0, 230.0])
DEHAZE_MIN_TRANSMISSION = 0.1


def apply_exposure(pixels: np.ndarray, amount: float) -> np.ndarray:
    """Multiply RGB by ``2 ** (amount / 100)`` (one stop per 100)."""
    multiplier = 2.0 ** (amount / 100.0)
    return write_rgb(pixels, read_rgb(pixels) * multiplier)


def apply_temperature(pixels: np.ndarray, temperature: float) -> np.ndarray:
    """Warm (positive) or cool (negative) by shifting red up and blue down."""
    shift = temperature / 2.0
    rgb = read_rgb(pixels)
    rgb[..., 0] += shift
    rgb[..., 2] -= shift
    return write_rgb(pixels, rgb)


def apply_vibrance(pixels: np.ndarray, amount: float) -> np.ndarray:
    """
    Saturation boost weighted towards muted pixels.

    Each channel moves towards (or away from) the pixel's maximum channel by
    a factor that shrinks as the pixel's saturation grows, so already vivid
    colours are left mostly alone.
    """
    adjust = amount * 1.5
    rgb = read_rgb(pixels)
    max_c = rgb.max(axis=-1)
    avg = rgb.sum(axis=-1) / 3.0
    sat = np.abs(max_c - avg)
    boost = (adjust / 255.0) * (1.0 - sat / 128.0)

    # Pixels where the boost would act against the slider are left as is
    if amount > 0:
        active = boost > 0
    else:
        active = boost < 0

    boosted = rgb + (max_c[..., np.newaxis] - rgb) * boost[..., np.newaxis]
    rgb = np.where(active[..., np.newaxis], boosted, rgb)
    return write_rgb(pixels, rgb)


def apply_dehaze(pixels: np.ndarray, amount: float) -> np.ndarray:
    """
    Remove (positive) or add (negative) haze with an atmospheric scattering model.

    Transmission is estimated from the darkest airlight-normalised channel and
    floored at ``DEHAZE_MIN_TRANSMISSION`` before inverting the haze.
    """
    strength = amount / 100.0
    rgb = read_rgb(pixels)
    dark_channel = (rgb / DEHAZE_AIRLIGHT).min(axis=-1)
    transmission = 1.0 - strength * dark_channel
    transmission = np.maximum(transmission, DEHAZE_MIN_TRANSMISSION)[..., np.newaxis]
    rgb = (rgb - DEHAZE_AIRLIGHT) / transmission + DEHAZE_AIRLIGHT
    return write_rgb(pixels, rgb)


def apply_highlights_shadows(pixels: np.ndarray, highlights: float,
                             shadows: float) -> np.ndarray:
    """
    Lift or lower shadows and highlights in HSL lightness.

    Shadows are weighted by ``cos(l * pi) ** 2`` below mid-grey and
    highlights by ``cos((1 - l) * pi) ** 2`` above it, giving a smooth
    falloff towards the midtones.
    """
    h_adj = highlights / 100.0
    s_adj = shadows / 100.0

    h, s, l = rgb_to_hsl_array(read_rgb(pixels))
    shadow_mask = np.where(l < 0.5, np.cos(l * np.pi) ** 2, 0.0)
    highlight_mask = np.where(l > 0.5, np.cos((1.0 - l) * np.pi) ** 2, 0.0)
    new_l = np.clip(l + s_adj * shadow_mask + h_adj * highlight_mask, 0.0, 1.0)

    return write_rgb(pixels, hsl_to_rgb_array(h, s, new_l))


def apply_whites_blacks(pixels: np.ndarray, whites: float, blacks: float) -> np.ndarray:
    """Push bright pixels by ``whites * luma**2`` and dark ones by ``blacks * (1 - luma)**2``."""
    whites_adj = whites / 100.0
    blacks_adj = blacks / 100.0

    rgb = read_rgb(pixels)
    lum = (luma(rgb) / 255.0)[..., np.newaxis]

    if whites_adj != 0:
        white_factor = whites_adj * lum * lum
        rgb = np.clip(rgb + white_factor * 255.0, 0.0, 255.0)

    if blacks_adj != 0:
        black_factor = blacks_adj * (1.0 - lum) * (1.0 - lum)
        rgb = np.clip(rgb - black_factor * 255.0, 0.0, 255.0)

    return write_rgb(pixels, rgb)
