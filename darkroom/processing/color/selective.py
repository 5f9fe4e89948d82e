"""
Selective (band-wise) HSL adjustment.

Each of the eight hue bands influences pixels through a squared raised-cosine
falloff around its centre. Band contributions are summed and, where bands
overlap enough that the total influence exceeds 1, normalised by that total.
"""

import logging

import numpy as np

from ..models import HSLFilters, HSL_BANDS
from ..pixels import read_rgb, write_rgb
from .colorspace import rgb_to_hsl_array, hsl_to_rgb_array

logger = logging.getLogger(__name__)


def hue_distance(hue: np.ndarray, center: float) -> np.ndarray:
    """Angular distance in degrees between *hue* and *center*."""
    diff = np.abs(hue - center)
    return np.minimum(diff, 360.0 - diff)


def band_influence(hue: np.ndarray, center: float, width: float,
                   exponent: float = 2.0) -> np.ndarray:
    """
    Raised-cosine influence of a hue band.

    Args:
        hue: Hue values in degrees
        center: Band centre in degrees
        width: Full band width in degrees; influence is zero at ``width / 2``
        exponent: Sharpening exponent applied to the raised cosine

    Returns:
        Influence in [0, 1], 1 at the centre
    """
    half = width / 2.0
    dist = hue_distance(np.asarray(hue, dtype=np.float64), center)
    raised = (np.cos((dist / half) * np.pi) + 1.0) / 2.0
    return np.where(dist < half, raised ** exponent, 0.0)


def apply_selective_hsl(pixels: np.ndarray, hsl: HSLFilters) -> np.ndarray:
    """Shift hue, saturation and lightness per colour band, in place."""
    active = [(name, color) for name, color in hsl.items() if not color.is_identity()]
    if not active:
        return pixels

    h, s, l = rgb_to_hsl_array(read_rgb(pixels))

    hue_change = np.zeros_like(h)
    sat_change = np.zeros_like(h)
    lum_change = np.zeros_like(h)
    total_influence = np.zeros_like(h)

    for name, color in active:
        center, width = HSL_BANDS[name]
        influence = band_influence(h, center, width)
        hue_change += (color.h / 100.0) * 180.0 * influence
        sat_change += (color.s / 100.0) * influence
        lum_change += (color.l / 100.0) * influence
        total_influence += influence

    overlap = total_influence > 1.0
    norm = np.where(overlap, total_influence, 1.0)
    hue_change /= norm
    sat_change /= norm
    lum_change /= norm

    h = np.mod(h + hue_change + 360.0, 360.0)
    s = np.clip(s + sat_change, 0.0, 1.0)
    l = np.clip(l + lum_change, 0.0, 1.0)

    logger.debug(f"Selective HSL applied to {len(active)} band(s)")
    return write_rgb(pixels, hsl_to_rgb_array(h, s, l))
