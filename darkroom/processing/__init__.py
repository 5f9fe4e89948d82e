"""
Image processing modules for darkroom

Includes the adjustment models, the per-stage operators and the pipeline
that orders them, and layer mask compositing.
"""

from .models import (
    Adjustments, BasicFilters, HSLColor, HSLFilters, Curve, CurvePoint, CurvesState,
    HSL_BANDS, CURVE_CHANNELS
)
from .pipeline import AdjustmentPipeline, PipelineConfig, render

__all__ = [
    "Adjustments",
    "BasicFilters",
    "HSLColor",
    "HSLFilters",
    "Curve",
    "CurvePoint",
    "CurvesState",
    "HSL_BANDS",
    "CURVE_CHANNELS",
    "AdjustmentPipeline",
    "PipelineConfig",
    "render",
]
