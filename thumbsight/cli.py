"""
ThumbSight Command Line Interface

Inspect which thumbnail backends the current environment supports, which
plugins are registered, and which backend a file would be served by.
"""

import sys
import click
import logging
from typing import Optional

from .capabilities import ALL, ANY, Capability
from .config import get_config_value, load_config
from .exceptions import ThumbSightError
from .factory import DEFAULT_PLUGIN_PATH, ThumbFactory
from .plugins.registry import CapabilityRegistry
from .utils.logging import setup_console_logging

logger = logging.getLogger(__name__)


@click.group()
@click.option('--config', '-c', type=click.Path(exists=True, dir_okay=False),
              help='Configuration file path')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.pass_context
def main(ctx, config: Optional[str] = None, verbose: bool = False, quiet: bool = False):
    """
    ThumbSight - thumbnail backend negotiation

    Reports the image backends usable in this environment and resolves
    which one would create a thumbnail.
    """
    if ctx.obj is None:
        ctx.obj = {}

    ctx.obj['config'] = load_config(config)

    level = get_config_value(ctx.obj['config'], 'logging.level', 'INFO')
    if verbose:
        level = 'DEBUG'
    elif quiet:
        level = 'ERROR'
    setup_console_logging(level, fmt=get_config_value(
        ctx.obj['config'], 'logging.format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    ))

    ctx.obj.setdefault('registry', None)
    ctx.obj['quiet'] = quiet


def _registry(ctx) -> CapabilityRegistry:
    registry = ctx.obj.get('registry')
    return registry if registry is not None else CapabilityRegistry.get_instance()


def _echo(ctx, message: str) -> None:
    if not ctx.obj.get('quiet'):
        click.echo(message)


def _mark(available: bool) -> str:
    return '✓' if available else '✗'


@main.command()
@click.pass_context
def backends(ctx):
    """Show which backend implementations are available"""
    registry = _registry(ctx)

    _echo(ctx, "Implementations:")
    for capability in Capability:
        _echo(ctx, f"  {_mark(registry.is_available(capability))} {capability.value}")

    _echo(ctx, f"  {_mark(registry.is_available(ALL))} {ALL}")
    _echo(ctx, f"  {_mark(registry.is_available(ANY))} {ANY}")


@main.command()
@click.option('--plugin-path', '-p', type=click.Path(file_okay=False),
              help='Plugin directory (overrides config)')
@click.pass_context
def plugins(ctx, plugin_path):
    """Load plugins and list the registered ones"""
    registry = _registry(ctx)
    plugin_path = (plugin_path
                   or get_config_value(ctx.obj['config'], 'thumbnails.plugin_path')
                   or DEFAULT_PLUGIN_PATH)

    registry.load_plugins(plugin_path)
    records = registry.get_plugins()

    if not records:
        _echo(ctx, f"No plugins registered from {plugin_path}")
        return

    for record in records:
        state = 'activated' if record.activated else 'registered'
        _echo(ctx, f"  {record.name:<24} {record.implementation:<8} {state}")


@main.command()
@click.argument('image', type=click.Path(exists=True, dir_okay=False))
@click.option('--implementation', '-i', help='Backend to request (pillow or opencv)')
@click.option('--plugin-path', '-p', type=click.Path(file_okay=False),
              help='Plugin directory (overrides config)')
@click.pass_context
def inspect(ctx, image, implementation, plugin_path):
    """Resolve a backend for IMAGE and report its dimensions"""
    logger.debug(f"Inspecting {image}")
    factory = ThumbFactory.from_config(ctx.obj['config'], registry=_registry(ctx))
    if plugin_path:
        factory.plugin_path = plugin_path

    try:
        thumb = factory.create(image, implementation)
        width, height = thumb.dimensions
    except ThumbSightError as e:
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)

    _echo(ctx, f"Backend:    {thumb.implementation}")
    _echo(ctx, f"Dimensions: {width}x{height}")
    if thumb.plugins:
        _echo(ctx, f"Plugins:    {', '.join(sorted(thumb.plugins))}")


if __name__ == '__main__':
    main()
