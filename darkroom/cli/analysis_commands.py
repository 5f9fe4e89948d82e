"""
Analysis commands.
"""

import json
import logging
from pathlib import Path

import click
from tabulate import tabulate

from ..analysis import compute_histogram
from ..io import load_image

logger = logging.getLogger(__name__)


@click.command()
@click.argument('input_path', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--format', '-f', 'output_format', type=click.Choice(['table', 'json']),
              default='table', help='Output format')
def histogram(input_path: Path, output_format: str):
    """
    Show the luma and RGB histograms of an image.

    INPUT_PATH: Image to analyse
    """
    try:
        data = compute_histogram(load_image(input_path))
    except (ValueError, OSError) as e:
        logger.error(f"Histogram failed for {input_path}: {e}")
        raise click.ClickException(str(e))

    summary = data.summary()
    if output_format == 'json':
        click.echo(json.dumps({'summary': summary, 'histogram': data.to_dict()}, indent=2))
        return

    rows = [
        [name, f"{stats['mean']:.1f}", stats['peak'],
         f"{stats['shadows_clipped']:.2f}", f"{stats['highlights_clipped']:.2f}"]
        for name, stats in summary.items()
    ]
    click.echo(tabulate(rows, headers=['Channel', 'Mean', 'Peak', 'Shadows %', 'Highlights %'],
                        tablefmt='grid'))
