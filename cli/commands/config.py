#!/usr/bin/env python3
"""
Configuration Management Commands for the Gated Mint CLI
"""

import json
from typing import Any, Optional

import click

from ..config import PROFILES
from ..context import CLIContext, handle_cli_error, pass_context


@click.group()
@pass_context
def config(ctx: CLIContext):
    """
    Configuration management commands.

    Settings are merged from defaults, the selected profile, the first
    configuration file found and GATEDMINT_* environment variables.
    """
    ctx.logger.debug("Config command group invoked")


@config.command('show')
@click.option('--key', help='Specific configuration key to show (dot notation)')
@click.option('--sources', is_flag=True, help='Show configuration sources')
@pass_context
@handle_cli_error
def show_config(ctx: CLIContext, key: Optional[str], sources: bool):
    """Display the merged configuration."""
    manager = ctx.config_manager

    if sources:
        for i, source in enumerate(manager.get_sources(), 1):
            click.echo(f"{i}. {source}")
        return

    if key:
        value = manager.get(key)
        if value is None:
            raise click.ClickException(f"Configuration key not found: {key}")
        ctx.output({key: value})
    else:
        ctx.output(manager.load(), ctx.output_format if ctx.output_format != 'table' else 'yaml')


@config.command('get')
@click.argument('key')
@click.option('--default', help='Default value if key not found')
@pass_context
@handle_cli_error
def get_config(ctx: CLIContext, key: str, default: Optional[str]):
    """Print one configuration value."""
    value = ctx.config_manager.get(key, default)
    if value is None:
        raise click.ClickException(f"Configuration key not found: {key}")
    click.echo(json.dumps(value) if isinstance(value, (dict, list, bool)) else str(value))


@config.command('set')
@click.argument('key')
@click.argument('value')
@click.option('--save', 'save_path', type=click.Path(dir_okay=False),
              help='Save the merged configuration to this file')
@pass_context
@handle_cli_error
def set_config(ctx: CLIContext, key: str, value: str, save_path: Optional[str]):
    """Set a configuration value for this invocation, optionally saving it."""
    manager = ctx.config_manager
    manager.set(key, _parse_config_value(value))

    errors = manager.validate()
    if errors:
        raise click.ClickException("; ".join(errors))

    if save_path:
        fmt = 'json' if save_path.endswith('.json') else 'yaml'
        path = manager.save(save_path, format=fmt)
        click.echo(f"Saved configuration to {path}")
    else:
        click.echo(f"{key} = {manager.get(key)!r}")


@config.command('validate')
@pass_context
@handle_cli_error
def validate_config(ctx: CLIContext):
    """Validate the merged configuration."""
    errors = ctx.config_manager.validate()
    if errors:
        for error in errors:
            click.echo(f"- {error}", err=True)
        raise click.ClickException(f"{len(errors)} configuration error(s)")
    click.echo("Configuration is valid")


@config.command('list-profiles')
@pass_context
def list_profiles(ctx: CLIContext):
    """List the available configuration profiles."""
    ctx.output(PROFILES, 'yaml')


def _parse_config_value(value: str) -> Any:
    """Parse configuration value string to appropriate type."""
    try:
        return json.loads(value)
    except ValueError:
        pass

    if value.lower() in ['yes']:
        return True
    elif value.lower() in ['no']:
        return False

    return value
