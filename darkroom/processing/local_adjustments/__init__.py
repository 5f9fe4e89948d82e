"""
Layer masks for darkroom

Restricts the globally adjusted image to the regions selected by one or more
mask layers, painted or generated from gradient tools.
"""

from .models import Layer
from .mask_generator import MaskGenerator
from .compositor import LayerMaskCompositor

__all__ = [
    'Layer',
    'MaskGenerator',
    'LayerMaskCompositor'
]
