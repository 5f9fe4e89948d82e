"""
darkroom: 8-bit RGBA adjustment pipeline and layer mask compositor

Global tonal and colour adjustments, tone curves, selective HSL, haze and
detail effects rendered in a fixed order, restricted by layer masks, plus
histogram analysis of the result.
"""

__version__ = "0.1.0"

# Core imports for easy access
from .config import load_config
from .exceptions import DarkroomError, DimensionMismatch, InvalidAdjustment
from .processing import Adjustments, AdjustmentPipeline, PipelineConfig, render
from .processing.local_adjustments import Layer, MaskGenerator
from .analysis import HistogramData, compute_histogram

__all__ = [
    "load_config",
    "DarkroomError",
    "DimensionMismatch",
    "InvalidAdjustment",
    "Adjustments",
    "AdjustmentPipeline",
    "PipelineConfig",
    "render",
    "Layer",
    "MaskGenerator",
    "HistogramData",
    "compute_histogram",
]
