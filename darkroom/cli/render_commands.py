"""
Render command: run an image through the adjustment pipeline.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple

import click
import yaml

from ..analysis import compute_histogram
from ..config import get_config_value, update_config_value
from ..exceptions import DarkroomError
from ..io import load_image, load_mask, save_image, load_adjustments
from ..processing import Adjustments, AdjustmentPipeline, PipelineConfig
from ..processing.local_adjustments import Layer

logger = logging.getLogger(__name__)


def _mask_layers(masks: Tuple[Path, ...], inverted_masks: Tuple[Path, ...]):
    layers = []
    for path in masks:
        layers.append(Layer(name=path.stem, mask=load_mask(path)))
    for path in inverted_masks:
        layers.append(Layer(name=path.stem, mask=load_mask(path), is_mask_inverted=True))
    return layers


@click.command()
@click.argument('input_path', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('output_path', type=click.Path(dir_okay=False, path_type=Path))
@click.option('--adjustments', '-a', 'adjustments_path',
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='YAML or JSON adjustments file')
@click.option('--mask', '-m', 'masks', multiple=True,
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='Mask image restricting the adjustments (repeatable)')
@click.option('--inverted-mask', '-M', 'inverted_masks', multiple=True,
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='Mask image applied inverted (repeatable)')
@click.option('--seed', type=int, help='Seed for reproducible grain')
@click.pass_context
def render(ctx, input_path: Path, output_path: Path, adjustments_path: Optional[Path],
           masks: Tuple[Path, ...], inverted_masks: Tuple[Path, ...], seed: Optional[int]):
    """
    Render an image through the adjustment pipeline.

    INPUT_PATH: Image to adjust

    OUTPUT_PATH: Where to write the result (format from the suffix)
    """
    config = ctx.obj.get('config', {})
    quiet = ctx.obj.get('quiet', False)

    if seed is not None:
        update_config_value(config, 'pipeline.grain_seed', seed)
    pipeline_config = PipelineConfig.from_config(config)

    try:
        adjustments = load_adjustments(adjustments_path) if adjustments_path else Adjustments()
        base = load_image(input_path)
        layers = _mask_layers(masks, inverted_masks)

        pipeline = AdjustmentPipeline(pipeline_config)
        result, stats = pipeline.render_with_stats(base, adjustments, layers)
        save_image(result, output_path)
    except (DarkroomError, ValueError, OSError, yaml.YAMLError) as e:
        logger.error(f"Render failed for {input_path}: {e}")
        raise click.ClickException(str(e))

    summary = stats.get_summary()
    logger.debug(f"Render summary: {summary}")

    if not quiet:
        applied = ', '.join(summary['applied_stages']) or 'none'
        click.echo(f"Rendered {input_path} -> {output_path}")
        click.echo(f"Stages: {applied} ({summary['elapsed_time'] * 1000.0:.1f} ms)")
        if summary['composited']:
            click.echo(f"Masked by {len(layers)} layer(s)")
        if get_config_value(config, 'histogram.enabled', True):
            luma = compute_histogram(result).summary()['rgb']
            click.echo(f"Luma mean {luma['mean']:.1f}, "
                       f"clipped {luma['shadows_clipped']:.2f}% / {luma['highlights_clipped']:.2f}%")
