"""
Image analysis for darkroom
"""

from .histogram import HistogramData, compute_histogram, normalize_histogram

__all__ = [
    "HistogramData",
    "compute_histogram",
    "normalize_histogram",
]
