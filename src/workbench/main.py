"""
Main entry point for the Workbench CLI.

This module provides command-line tools for inspecting an extension setup
without a UI: the resulting manifest, settings validation and content-type
routing.
"""

import sys
from pathlib import Path
from typing import Optional

import click

from workbench.extensions import ExtensionError, create_manager
from workbench.extensions.loader import ExtensionLoader
from workbench.utils.config import get_settings
from workbench.utils.helpers import settings_with_extensions, validate_settings_or_exit
from workbench.utils.logging import configure_logging, setup_logging

logger = setup_logging(__name__)

LOAD_HELP = "Extension to register, as PATH=module:attr (repeatable)"


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Workbench - extension host for editor-style applications."""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose

    settings = get_settings()
    configure_logging(
        level="DEBUG" if verbose or settings.debug else settings.log_level.upper(),
        structured=settings.log_structured,
        log_file=settings.get_log_file_path(),
    )

    if verbose:
        logger.info("Verbose logging enabled")


@cli.command()
@click.option('--load', 'load', multiple=True, help=LOAD_HELP)
@click.option('--output', '-o', type=click.Path(path_type=Path),
              help='Write the manifest JSON to this file instead of stdout')
def manifest(load: tuple[str, ...], output: Optional[Path]) -> None:
    """Register extensions and print the resulting manifest."""
    settings = settings_with_extensions(load)
    validate_settings_or_exit(settings)

    manager = create_manager(settings)
    try:
        manager.load_auto_extensions()
        if output:
            manager.manifest.save(output)
            click.echo(f"Manifest written to {output}")
        else:
            click.echo(manager.manifest.to_json())
    except ExtensionError as e:
        logger.error(f"Manifest error: {e}")
        click.echo(f"Error: {e}")
        sys.exit(1)
    finally:
        manager.shutdown()


@cli.command()
def check() -> None:
    """Validate settings and make sure every auto-load target imports."""
    settings = get_settings()
    validate_settings_or_exit(settings)

    loader = ExtensionLoader()
    failures = 0
    for path, target in settings.extensions_auto_load.items():
        try:
            extension = loader.load(target)
        except ExtensionError as e:
            failures += 1
            click.echo(f"FAIL {path}: {e}")
            continue
        click.echo(f"ok   {path}: {extension.type.value} ({target})")

    if failures:
        click.echo(f"{failures} extension(s) could not be loaded")
        sys.exit(1)
    click.echo("Configuration is valid")


@cli.command()
@click.option('--load', 'load', multiple=True, help=LOAD_HELP)
@click.argument('content_types', nargs=-1, required=True)
def route(load: tuple[str, ...], content_types: tuple[str, ...]) -> None:
    """Show which editor extension would open each content type."""
    settings = settings_with_extensions(load)
    validate_settings_or_exit(settings)

    manager = create_manager(settings)
    try:
        manager.load_auto_extensions()
        unresolved = 0
        for content_type in content_types:
            editor = manager.resolve(content_type)
            if editor is None:
                unresolved += 1
                click.echo(f"{content_type} -> (no editor)")
            else:
                click.echo(f"{content_type} -> {editor.path}")
    except ExtensionError as e:
        logger.error(f"Route error: {e}")
        click.echo(f"Error: {e}")
        sys.exit(1)
    finally:
        manager.shutdown()

    if unresolved:
        sys.exit(1)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
