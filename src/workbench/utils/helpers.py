"""
Common utility functions for the Workbench CLI.
"""

import logging
import sys

import click

from workbench.utils.config import WorkbenchSettings, get_settings

logger = logging.getLogger(__name__)


def validate_settings_or_exit(settings: WorkbenchSettings | None = None) -> None:
    """
    Validate settings and exit with error message if invalid.
    """
    settings = settings or get_settings()
    validation_result = settings.validate_settings()

    for warning in validation_result.warnings:
        click.echo(f"Warning: {warning}")

    if not validation_result.valid:
        for error in validation_result.errors:
            click.echo(f"Error: {error}")
        sys.exit(1)


def parse_extension_specs(specs: tuple[str, ...]) -> dict[str, str]:
    """
    Parse ``PATH=module:attr`` command line values.

    Raises:
        click.BadParameter: If a value has no ``=`` or an empty side
    """
    parsed: dict[str, str] = {}
    for spec in specs:
        path, sep, target = spec.partition("=")
        if not sep or not path.strip() or not target.strip():
            raise click.BadParameter(f"expected PATH=module:attr, got {spec!r}")
        parsed[path.strip()] = target.strip()
    return parsed


def settings_with_extensions(specs: tuple[str, ...], settings: WorkbenchSettings | None = None) -> WorkbenchSettings:
    """
    Copy settings with extra auto-load entries from the command line.

    The manifest is never written on shutdown for these throwaway hosts.
    """
    settings = settings or get_settings()
    auto_load = dict(settings.extensions_auto_load)
    auto_load.update(parse_extension_specs(specs))
    return settings.model_copy(update={"extensions_auto_load": auto_load, "manifest_path": None})
