"""
Adjustment pipeline orchestrator.

Runs the global adjustment stages over a copy of the base image in a fixed
order, then restricts the result to the area selected by the visible layer
masks. The order below is part of the output contract: changing it changes
rendered images.

    1. basic filters (brightness, contrast, saturation, sepia)
    2. exposure
    3. temperature
    4. vibrance
    5. dehaze
    6. highlights / shadows
    7. whites / blacks
    8. curves
    9. selective HSL
    10. haze
    11. sharpen
    12. grain

A stage whose parameters are all at identity is skipped, so identity
adjustments return a bit-exact copy of the input.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

import numpy as np

from ..config import get_config_value
from ..exceptions import DimensionMismatch
from ..utils.logging import StructuredLogger, RenderStats
from .basic import BASIC_FILTERS, apply_basic_filters
from .color.selective import apply_selective_hsl
from .effects.detail import apply_sharpen, apply_grain
from .effects.haze import apply_haze
from .local_adjustments import Layer, LayerMaskCompositor
from .models import Adjustments
from .pixels import validate_pixels
from .tone.curves import apply_curves
from .tone.operators import (
    apply_exposure, apply_temperature, apply_vibrance, apply_dehaze,
    apply_highlights_shadows, apply_whites_blacks
)

StageFn = Callable[[np.ndarray], np.ndarray]


@dataclass
class PipelineConfig:
    """Runtime options of the pipeline (not part of the rendered look)."""
    grain_seed: Optional[int] = None
    save_masks: bool = False
    mask_save_path: Optional[str] = None

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'PipelineConfig':
        seed = get_config_value(config, 'pipeline.grain_seed')
        return cls(
            grain_seed=int(seed) if seed is not None else None,
            save_masks=bool(get_config_value(config, 'pipeline.save_masks', False)),
            mask_save_path=get_config_value(config, 'pipeline.mask_save_path'),
        )


class AdjustmentPipeline:
    """Renders ``(base, Adjustments, layers)`` into a new RGBA buffer."""

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig()
        self.compositor = LayerMaskCompositor(
            save_masks=self.config.save_masks,
            mask_save_path=self.config.mask_save_path,
        )
        self.slog = StructuredLogger(__name__)

    def _rng(self, rng: Optional[np.random.Generator]) -> np.random.Generator:
        if rng is not None:
            return rng
        return np.random.default_rng(self.config.grain_seed)

    @staticmethod
    def stages(adjustments: Adjustments,
               rng: np.random.Generator) -> List[Tuple[str, bool, StageFn]]:
        """
        The ordered stage table for *adjustments*.

        Returns:
            ``(name, active, fn)`` triples; inactive stages are at identity
        """
        f = adjustments.filters
        return [
            ('basic', not f.is_identity(*BASIC_FILTERS),
             lambda px: apply_basic_filters(px, f)),
            ('exposure', not f.is_identity('exposure'),
             lambda px: apply_exposure(px, f.exposure)),
            ('temperature', not f.is_identity('temperature'),
             lambda px: apply_temperature(px, f.temperature)),
            ('vibrance', not f.is_identity('vibrance'),
             lambda px: apply_vibrance(px, f.vibrance)),
            ('dehaze', not f.is_identity('dehaze'),
             lambda px: apply_dehaze(px, f.dehaze)),
            ('highlights_shadows', not f.is_identity('highlights', 'shadows'),
             lambda px: apply_highlights_shadows(px, f.highlights, f.shadows)),
            ('whites_blacks', not f.is_identity('whites', 'blacks'),
             lambda px: apply_whites_blacks(px, f.whites, f.blacks)),
            ('curves', not adjustments.curves.is_default(),
             lambda px: apply_curves(px, adjustments.curves)),
            ('selective_hsl', not adjustments.hsl.is_identity(),
             lambda px: apply_selective_hsl(px, adjustments.hsl)),
            # haze_spread only tints the glow, so haze alone decides the stage
            ('haze', not f.is_identity('haze'),
             lambda px: apply_haze(px, f.haze, f.haze_spread)),
            ('sharpen', not f.is_identity('sharpen'),
             lambda px: apply_sharpen(px, f.sharpen)),
            ('grain', not f.is_identity('grain'),
             lambda px: apply_grain(px, f.grain, rng)),
        ]

    def render_with_stats(self, base: np.ndarray, adjustments: Adjustments,
                          layers: Iterable[Layer] = (),
                          out: Optional[np.ndarray] = None,
                          rng: Optional[np.random.Generator] = None
                          ) -> Tuple[np.ndarray, RenderStats]:
        """
        Render *base* through the pipeline and report which stages ran.

        Args:
            base: (H, W, 4) uint8 RGBA image; never modified
            adjustments: Global adjustment values
            layers: Mask layers restricting where the adjustments show
            out: Optional (H, W, 4) uint8 buffer receiving the result
            rng: Random source for grain; defaults to one seeded from config

        Returns:
            Tuple of (rendered image, render statistics)

        Raises:
            DimensionMismatch: A visible mask or *out* does not match *base*
        """
        validate_pixels(base, "base")
        layers = list(layers)
        self.compositor.validate_layers(layers, base.shape[:2])
        if out is not None:
            validate_pixels(out, "out")
            if out.shape != base.shape:
                raise DimensionMismatch("Output buffer", base.shape, out.shape)

        stats = RenderStats()
        working = base.copy()

        for name, active, fn in self.stages(adjustments, self._rng(rng)):
            if not active:
                stats.skip_stage(name)
                continue
            started = time.perf_counter()
            fn(working)
            duration = time.perf_counter() - started
            stats.add_stage(name, duration)
            self.slog.debug("Applied stage", stage=name, ms=round(duration * 1000.0, 3))

        result = self.compositor.composite(working, base, layers)
        stats.composited = result is not working
        stats.finish()

        if out is not None:
            np.copyto(out, result)
            result = out

        self.slog.debug("Render complete", width=base.shape[1], height=base.shape[0],
                        stages=len(stats.applied), composited=stats.composited)
        return result, stats

    def render(self, base: np.ndarray, adjustments: Adjustments,
               layers: Iterable[Layer] = (),
               out: Optional[np.ndarray] = None,
               rng: Optional[np.random.Generator] = None) -> np.ndarray:
        """Render *base* through the pipeline; see :meth:`render_with_stats`."""
        result, _ = self.render_with_stats(base, adjustments, layers, out=out, rng=rng)
        return result


def render(base: np.ndarray, adjustments: Optional[Adjustments] = None,
           layers: Iterable[Layer] = (),
           out: Optional[np.ndarray] = None,
           rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """Render with a default-configured :class:`AdjustmentPipeline`."""
    return AdjustmentPipeline().render(base, adjustments or Adjustments(), layers,
                                       out=out, rng=rng)
