"""
Layer mask compositor that blends the adjusted image over the original.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

import cv2
import numpy as np

from ...exceptions import DimensionMismatch
from ..pixels import to_bytes
from .models import Layer
from .mask_generator import MaskGenerator

logger = logging.getLogger(__name__)


class LayerMaskCompositor:
    """Restricts the adjusted image to the area selected by the visible layer masks."""

    def __init__(self, save_masks: bool = False, mask_save_path: Optional[str] = None):
        """
        Initialize the compositor.

        Args:
            save_masks: Write every composite mask to *mask_save_path* for debugging
            mask_save_path: Directory for debug masks
        """
        self.save_masks = save_masks
        self.mask_save_path = mask_save_path

    @staticmethod
    def active_layers(layers: Iterable[Layer]) -> List[Layer]:
        """Visible layers that carry a mask."""
        return [layer for layer in layers if layer.contributes()]

    def validate_layers(self, layers: Iterable[Layer], shape) -> None:
        """Raise :class:`DimensionMismatch` if any active mask differs from *shape*."""
        for layer in self.active_layers(layers):
            if layer.mask.shape[:2] != tuple(shape):
                raise DimensionMismatch(f"Mask of layer '{layer.name}'", shape, layer.mask.shape[:2])

    def composite_mask(self, layers: Iterable[Layer], shape) -> Optional[np.ndarray]:
        """
        Combine the visible layer masks into one coverage mask.

        Returns:
            uint8 (H, W) mask, or None when no visible layer has a mask
        """
        active = self.active_layers(layers)
        if not active:
            return None

        self.validate_layers(active, shape)
        coverages = []
        for layer in active:
            coverage = MaskGenerator.coverage(layer.mask)
            if layer.is_mask_inverted:
                coverage = MaskGenerator.invert(coverage)
            coverages.append(coverage)

        return MaskGenerator.combine(coverages, tuple(shape))

    def composite(self, adjusted: np.ndarray, original: np.ndarray,
                  layers: Iterable[Layer]) -> np.ndarray:
        """
        Blend *adjusted* over *original* through the composite layer mask.

        Args:
            adjusted: Fully adjusted RGBA image
            original: Unadjusted RGBA image of the same size
            layers: Mask layers; hidden layers and layers without a mask are ignored

        Returns:
            *adjusted* itself when no visible layer has a mask, otherwise a new
            image that is the original where the mask is black and the adjusted
            image where it is white
        """
        if adjusted.shape != original.shape:
            raise DimensionMismatch("Adjusted image", original.shape, adjusted.shape)

        mask = self.composite_mask(layers, original.shape[:2])
        if mask is None:
            return adjusted

        if self.save_masks and self.mask_save_path:
            self._save_debug_mask(mask)

        weight = (mask.astype(np.float64) / 255.0)[..., np.newaxis]
        blended = original.astype(np.float64) * (1.0 - weight) + adjusted.astype(np.float64) * weight
        return to_bytes(blended)

    def _save_debug_mask(self, mask: np.ndarray):
        """Save the composite mask image for debugging."""
        save_dir = Path(self.mask_save_path)
        save_dir.mkdir(parents=True, exist_ok=True)
        filepath = save_dir / "composite_mask.png"
        if cv2.imwrite(str(filepath), mask):
            logger.debug(f"Saved debug mask: {filepath}")
        else:
            logger.warning(f"Failed to save debug mask: {filepath}")
