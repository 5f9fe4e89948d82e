"""
Histogram analysis for display and diagnostics.

Computes luma, red, green and blue distributions of an RGBA buffer, each
normalised independently so its tallest bin is 255. Never modifies the
buffer it reads.
"""

from dataclasses import dataclass
from typing import Dict, List

import numpy as np

from ..processing.color.colorspace import luma
from ..processing.pixels import validate_pixels, js_round

HISTOGRAM_BINS = 256


@dataclass(frozen=True)
class HistogramData:
    """Normalised 256-bin distributions (float arrays, tallest bin = 255)."""
    rgb: np.ndarray
    red: np.ndarray
    green: np.ndarray
    blue: np.ndarray

    def to_dict(self) -> Dict[str, List[float]]:
        return {
            'rgb': self.rgb.tolist(),
            'red': self.red.tolist(),
            'green': self.green.tolist(),
            'blue': self.blue.tolist(),
        }

    def channels(self) -> Dict[str, np.ndarray]:
        return {'rgb': self.rgb, 'red': self.red, 'green': self.green, 'blue': self.blue}

    def summary(self) -> Dict[str, Dict[str, float]]:
        """
        Per-channel statistics derived from the distributions.

        ``mean`` is the average level, ``peak`` the most populated level, and
        ``shadows_clipped``/``highlights_clipped`` the percentage of pixels
        at level 0 and 255. Scaling a histogram does not change these
        ratios, so they are exact for the source image.
        """
        levels = np.arange(HISTOGRAM_BINS)
        result = {}
        for name, hist in self.channels().items():
            total = hist.sum()
            if total == 0:
                result[name] = {'mean': 0.0, 'peak': 0,
                                'shadows_clipped': 0.0, 'highlights_clipped': 0.0}
                continue
            result[name] = {
                'mean': float((hist * levels).sum() / total),
                'peak': int(hist.argmax()),
                'shadows_clipped': float(hist[0] / total * 100.0),
                'highlights_clipped': float(hist[-1] / total * 100.0),
            }
        return result


def normalize_histogram(hist: np.ndarray) -> np.ndarray:
    """Scale *hist* so its maximum is 255; an all-zero histogram is returned unchanged."""
    hist = np.asarray(hist, dtype=np.float64)
    peak = hist.max() if hist.size else 0.0
    if peak == 0:
        return hist.copy()
    return hist * (255.0 / peak)


def _counts(values: np.ndarray) -> np.ndarray:
    return np.bincount(values.ravel(), minlength=HISTOGRAM_BINS).astype(np.float64)


def compute_histogram(pixels: np.ndarray) -> HistogramData:
    """
    Compute the normalised histograms of an RGBA buffer.

    Args:
        pixels: (H, W, 4) uint8 buffer

    Returns:
        HistogramData with luma (``rgb``) and per-channel distributions
    """
    validate_pixels(pixels)
    rgb = pixels[:, :, :3]
    luma_index = js_round(luma(rgb)).astype(np.intp)

    return HistogramData(
        rgb=normalize_histogram(_counts(luma_index)),
        red=normalize_histogram(_counts(rgb[:, :, 0])),
        green=normalize_histogram(_counts(rgb[:, :, 1])),
        blue=normalize_histogram(_counts(rgb[:, :, 2])),
    )
