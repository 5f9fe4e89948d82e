"""
darkroom Command Line Interface

Renders images through the adjustment pipeline and reports histograms.
"""

from pathlib import Path
from typing import Optional

import click

from .. import __version__
from ..config import load_config, get_config_value, update_config_value
from ..utils.logging import setup_console_logging, DEFAULT_FORMAT
from .render_commands import render
from .analysis_commands import histogram


@click.group()
@click.option('--config', '-c', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='Configuration file path')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.pass_context
def main(ctx, config: Optional[Path] = None, verbose: bool = False, quiet: bool = False):
    """
    darkroom - adjustment pipeline for 8-bit RGBA images

    Applies global tonal and colour adjustments, tone curves, selective HSL,
    haze, sharpening and grain in a fixed order, optionally restricted to
    the area selected by mask images.
    """
    ctx.ensure_object(dict)

    cfg = load_config(config)

    if verbose:
        update_config_value(cfg, 'logging.level', 'DEBUG')
    elif quiet:
        update_config_value(cfg, 'logging.level', 'ERROR')
    setup_console_logging(
        level=get_config_value(cfg, 'logging.level', 'INFO'),
        color=get_config_value(cfg, 'logging.color', True),
        fmt=get_config_value(cfg, 'logging.format', DEFAULT_FORMAT),
    )

    ctx.obj['config'] = cfg
    ctx.obj['verbose'] = verbose
    ctx.obj['quiet'] = quiet


main.add_command(render)
main.add_command(histogram)


@main.command()
def version():
    """Show darkroom version information."""
    click.echo(f"darkroom v{__version__}")
    click.echo("8-bit RGBA adjustment pipeline and layer mask compositor")


if __name__ == '__main__':
    main()
