"""
Tone curve engine.

Curves are turned into 256-entry lookup tables with a monotone cubic Hermite
spline (Fritsch-Carlson tangents), so a curve whose control points never
decrease never produces a decreasing table. Tables are memoised on the
control points, which are immutable.

Per-channel curves only act on pixels whose hue is dominated by that channel;
the master ``rgb`` curve is applied last to every pixel. LUT indices are
taken after adding an 8x8 ordered (Bayer) dither offset to break up banding.
"""

from functools import lru_cache
from typing import Tuple

import numpy as np

from ..models import Curve, CurvesState
from ..color.colorspace import rgb_to_hsl_array
from ..color.selective import band_influence
from ..pixels import read_rgb, write_rgb, js_round

BAYER_MATRIX_8X8 = np.array([
    [0, 32, 8, 40, 2, 34, 10, 42],
    [48, 16, 56, 24, 50, 18, 58, 26],
    [12, 44, 4, 36, 14, 46, 6, 38],
    [60, 28, 52, 20, 62, 30, 54, 22],
    [3, 35, 11, 43, 1, 33, 9, 41],
    [51, 19, 59, 27, 49, 17, 57, 25],
    [15, 47, 7, 39, 13, 45, 5, 37],
    [63, 31, 55, 23, 61, 29, 53, 21],
], dtype=np.float64)

# Hue centres (degrees) of the per-channel curves
CHANNEL_HUES = {'red': 0.0, 'green': 120.0, 'blue': 240.0}
CHANNEL_HUE_WIDTH = 180.0
CHANNEL_INFLUENCE_EXPONENT = 1.5
# Pixels at or below this saturation ignore the per-channel curves
NEUTRAL_SATURATION = 0.05

_IDENTITY_LUT = np.arange(256, dtype=np.float64)
_IDENTITY_LUT.flags.writeable = False

_MIN_SEGMENT_WIDTH = 1e-7


def build_curve_lut(curve: Curve) -> np.ndarray:
    """Return the read-only 256-entry float lookup table for *curve*."""
    if curve.is_default():
        return _IDENTITY_LUT
    return _build_lut(tuple((p.x, p.y) for p in curve.points))


@lru_cache(maxsize=64)
def _build_lut(points: Tuple[Tuple[float, float], ...]) -> np.ndarray:
    # One y per x (last edit wins), ordered by x
    unique = dict(points)
    xs = np.array(sorted(unique), dtype=np.float64)
    ys = np.array([unique[x] for x in sorted(unique)], dtype=np.float64)
    n = len(xs)

    if n == 0:
        return _IDENTITY_LUT
    if n == 1:
        lut = np.full(256, np.clip(ys[0], 0.0, 255.0))
        lut.flags.writeable = False
        return lut

    dx = np.diff(xs)
    delta = np.zeros(n - 1)
    wide = dx > _MIN_SEGMENT_WIDTH
    delta[wide] = np.diff(ys)[wide] / dx[wide]

    m = np.zeros(n)
    m[0] = delta[0]
    m[n - 1] = delta[n - 2]
    m[1:n - 1] = (delta[:-1] + delta[1:]) / 2.0

    # Fritsch-Carlson: keep each segment monotone
    for i in range(n - 1):
        if delta[i] == 0:
            m[i] = 0.0
            m[i + 1] = 0.0
            continue
        alpha = m[i] / delta[i]
        beta = m[i + 1] / delta[i]
        if alpha < 0:
            m[i] = 0.0
        if beta < 0:
            m[i + 1] = 0.0
        hyp = np.hypot(alpha, beta)
        if hyp > 3.0:
            tau = 3.0 / hyp
            m[i] *= tau
            m[i + 1] *= tau

    positions = np.arange(256, dtype=np.float64)
    # Segment k covers (x[k], x[k+1]]; positions outside the knots extrapolate
    # the first or last segment before clamping
    seg = np.searchsorted(xs[1:n - 1], positions, side='left')
    h = dx[seg]
    safe_h = np.where(h > _MIN_SEGMENT_WIDTH, h, 1.0)
    t = np.where(h > _MIN_SEGMENT_WIDTH, (positions - xs[seg]) / safe_h, 0.0)
    y0 = ys[seg]
    y1 = ys[seg + 1]
    m0 = m[seg] * h
    m1 = m[seg + 1] * h

    t2 = t * t
    t3 = t2 * t
    h00 = 2 * t3 - 3 * t2 + 1
    h10 = t3 - 2 * t2 + t
    h01 = -2 * t3 + 3 * t2
    h11 = t3 - t2
    lut = np.clip(h00 * y0 + h10 * m0 + h01 * y1 + h11 * m1, 0.0, 255.0)
    lut[255] = ys[n - 1]
    lut.flags.writeable = False
    return lut


def dither_offsets(height: int, width: int) -> np.ndarray:
    """Bayer offsets in [-0.5, 0.5) tiled over an image of the given size."""
    rows = np.arange(height) % 8
    cols = np.arange(width) % 8
    return BAYER_MATRIX_8X8[rows[:, np.newaxis], cols[np.newaxis, :]] / 64.0 - 0.5


def _lookup(lut: np.ndarray, values: np.ndarray, dither: np.ndarray) -> np.ndarray:
    index = js_round(np.clip(values + dither, 0.0, 255.0)).astype(np.intp)
    return lut[index]


def apply_curves(pixels: np.ndarray, curves: CurvesState) -> np.ndarray:
    """Apply per-channel curves (hue masked) and then the master curve, in place."""
    height, width = pixels.shape[:2]
    dither = dither_offsets(height, width)
    lut_rgb = build_curve_lut(curves.rgb)

    rgb = read_rgb(pixels)
    channel_defaults = {name: curves.channel(name).is_default() for name in CHANNEL_HUES}
    processed = np.empty_like(rgb)

    if all(channel_defaults.values()):
        # Default channel curves are identity tables
        for c, name in enumerate(CHANNEL_HUES):
            processed[..., c] = _lookup(build_curve_lut(curves.channel(name)), rgb[..., c], dither)
    else:
        h, s, _ = rgb_to_hsl_array(rgb)
        chromatic = s > NEUTRAL_SATURATION
        for c, (name, center) in enumerate(CHANNEL_HUES.items()):
            original = rgb[..., c]
            if channel_defaults[name]:
                processed[..., c] = original
                continue
            adjusted = _lookup(build_curve_lut(curves.channel(name)), original, dither)
            influence = band_influence(h, center, CHANNEL_HUE_WIDTH,
                                       exponent=CHANNEL_INFLUENCE_EXPONENT)
            blended = original * (1.0 - influence) + adjusted * influence
            processed[..., c] = np.where(chromatic, blended, original)

    for c in range(3):
        rgb[..., c] = _lookup(lut_rgb, processed[..., c], dither)

    return write_rgb(pixels, rgb)
