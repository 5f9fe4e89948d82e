"""
Mask generation and mask coverage for layer compositing.
"""

from typing import Tuple, Iterable

import cv2
import numpy as np

from ...exceptions import DimensionMismatch
from ..pixels import to_bytes

Point = Tuple[float, float]


class MaskGenerator:
    """Builds coverage masks: from layer mask buffers and from gradient tools."""

    @staticmethod
    def coverage(mask: np.ndarray) -> np.ndarray:
        """
        Single-channel coverage (0-255) of a mask buffer.

        Grayscale and single-channel masks are their own coverage. For RGBA
        masks only luminance and alpha are read: coverage is
        ``luminance * alpha / 255``, so white strokes on a transparent
        surface select and transparent or black areas do not.

        Args:
            mask: uint8 array of shape (H, W), (H, W, 1) or (H, W, 4)

        Returns:
            uint8 array of shape (H, W)
        """
        if mask.ndim == 2:
            return mask
        if mask.shape[2] == 1:
            return mask[:, :, 0]
        gray = cv2.cvtColor(np.ascontiguousarray(mask[:, :, :3]), cv2.COLOR_RGB2GRAY)
        return to_bytes(gray.astype(np.float64) * mask[:, :, 3] / 255.0)

    @staticmethod
    def invert(coverage: np.ndarray) -> np.ndarray:
        """Complement of a coverage mask (``255 - value``)."""
        return 255 - coverage

    @staticmethod
    def combine(coverages: Iterable[np.ndarray], shape: Tuple[int, int]) -> np.ndarray:
        """
        Combine coverage masks with lighten (per-pixel maximum).

        Starts from an all-black mask, so the result depends only on the set
        of masks and not on their order.
        """
        result = np.zeros(shape, dtype=np.uint8)
        for coverage in coverages:
            if coverage.shape != tuple(shape):
                raise DimensionMismatch("Mask", shape, coverage.shape)
            np.maximum(result, coverage, out=result)
        return result

    @staticmethod
    def linear_gradient(shape: Tuple[int, int], start: Point, end: Point) -> np.ndarray:
        """
        Linear gradient mask, fully selected at *start* fading to nothing at *end*.

        Points are ``(x, y)`` in pixel coordinates. Pixels are sampled at their
        centres and projected onto the start-end axis; beyond either end the
        mask stays at the end value. A zero-length gradient selects nothing.
        """
        height, width = shape
        x1, y1 = start
        x2, y2 = end
        dx = x2 - x1
        dy = y2 - y1
        length_sq = dx * dx + dy * dy
        if length_sq < 1e-12:
            return np.zeros(shape, dtype=np.uint8)

        y, x = np.ogrid[:height, :width]
        projection = ((x + 0.5 - x1) * dx + (y + 0.5 - y1) * dy) / length_sq
        t = np.clip(projection, 0.0, 1.0)
        return to_bytes((1.0 - t) * 255.0)

    @staticmethod
    def radial_gradient(shape: Tuple[int, int], center: Point, edge: Point) -> np.ndarray:
        """
        Radial gradient mask, fully selected at *center* fading to nothing at
        the radius reaching *edge*. A zero radius selects nothing.
        """
        height, width = shape
        cx, cy = center
        radius = float(np.hypot(edge[0] - cx, edge[1] - cy))
        if radius <= 0:
            return np.zeros(shape, dtype=np.uint8)

        y, x = np.ogrid[:height, :width]
        dist = np.sqrt((x + 0.5 - cx) ** 2 + (y + 0.5 - cy) ** 2)
        t = np.clip(dist / radius, 0.0, 1.0)
        return to_bytes((1.0 - t) * 255.0)
