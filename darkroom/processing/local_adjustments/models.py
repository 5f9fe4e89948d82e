"""
Data models for the layer mask compositor.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional
import uuid

import numpy as np


@dataclass(eq=False)
class Layer:
    """A mask layer restricting where the adjusted image shows through."""
    name: str
    mask: Optional[np.ndarray] = None  # (H, W) gray, (H, W, 1) or (H, W, 4) RGBA, uint8
    is_visible: bool = True
    is_mask_inverted: bool = False
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def has_mask(self) -> bool:
        return self.mask is not None

    def contributes(self) -> bool:
        """True when the layer takes part in compositing."""
        return self.is_visible and self.has_mask()

    def to_dict(self) -> Dict[str, Any]:
        """Layer metadata for serialization; the mask pixels are not included."""
        return {
            'id': self.id,
            'name': self.name,
            'is_visible': self.is_visible,
            'is_mask_inverted': self.is_mask_inverted,
            'has_mask': self.has_mask(),
        }

    def __post_init__(self):
        if self.mask is not None:
            mask = np.asarray(self.mask)
            if mask.dtype != np.uint8:
                raise ValueError(f"Layer '{self.name}' mask must be uint8, got {mask.dtype}")
            if mask.ndim == 3 and mask.shape[2] not in (1, 4):
                raise ValueError(
                    f"Layer '{self.name}' mask must have 1 or 4 channels, got {mask.shape[2]}"
                )
            if mask.ndim not in (2, 3):
                raise ValueError(
                    f"Layer '{self.name}' mask must be 2D or 3D, got shape {mask.shape}"
                )
            self.mask = mask
