"""
Global brightness, contrast, saturation and sepia.

These follow the CSS filter-effects formulas and run as a single initial
pass: brightness and contrast fold into one 256-entry table, saturation and
sepia are 3x3 colour matrices. Values are clamped after every filter and the
result is quantised to bytes once at the end.
"""

import logging

import cv2
import numpy as np

from .models import BasicFilters
from .pixels import write_rgb

logger = logging.getLogger(__name__)

BASIC_FILTERS = ('brightness', 'contrast', 'saturation', 'sepia')


def saturation_matrix(amount: float) -> np.ndarray:
    """CSS ``saturate()`` matrix, *amount* is a factor (1.0 = identity)."""
    s = amount
    return np.array([
        [0.213 + 0.787 * s, 0.715 - 0.715 * s, 0.072 - 0.072 * s],
        [0.213 - 0.213 * s, 0.715 + 0.285 * s, 0.072 - 0.072 * s],
        [0.213 - 0.213 * s, 0.715 - 0.715 * s, 0.072 + 0.928 * s],
    ], dtype=np.float32)


def sepia_matrix(amount: float) -> np.ndarray:
    """CSS ``sepia()`` matrix, *amount* in [0, 1] (0 = identity)."""
    k = 1.0 - amount
    return np.array([
        [0.393 + 0.607 * k, 0.769 - 0.769 * k, 0.189 - 0.189 * k],
        [0.349 - 0.349 * k, 0.686 + 0.314 * k, 0.168 - 0.168 * k],
        [0.272 - 0.272 * k, 0.534 - 0.534 * k, 0.131 + 0.869 * k],
    ], dtype=np.float32)


def tone_lut(brightness: float, contrast: float) -> np.ndarray:
    """Combined brightness/contrast table; both arguments are factors (1.0 = identity)."""
    values = np.arange(256, dtype=np.float32)
    values = np.clip(values * brightness, 0, 255)
    values = np.clip((values - 127.5) * contrast + 127.5, 0, 255)
    return values.astype(np.float32)


def apply_basic_filters(pixels: np.ndarray, filters: BasicFilters) -> np.ndarray:
    """Apply the non-identity filters among brightness/contrast/saturation/sepia in place."""
    rgb = np.ascontiguousarray(pixels[:, :, :3])

    if filters.is_identity('brightness', 'contrast'):
        work = rgb.astype(np.float32)
    else:
        lut = tone_lut(filters.brightness / 100.0, filters.contrast / 100.0)
        work = cv2.LUT(rgb, lut)

    if not filters.is_identity('saturation'):
        work = np.clip(cv2.transform(work, saturation_matrix(filters.saturation / 100.0)), 0, 255)

    if not filters.is_identity('sepia'):
        work = np.clip(cv2.transform(work, sepia_matrix(filters.sepia / 100.0)), 0, 255)

    logger.debug(f"Basic filters: brightness={filters.brightness}, contrast={filters.contrast}, "
                 f"saturation={filters.saturation}, sepia={filters.sepia}")
    return write_rgb(pixels, work)
