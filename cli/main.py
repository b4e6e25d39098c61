#!/usr/bin/env python3
"""
Gated Mint - Command Line Interface

Inspect and administer a limited-supply collection deployment, dry-run
issuance requests and resolve metadata URIs.
"""

import sys
from typing import Optional

import click

from . import __version__
from .context import CLIContext, pass_context
from .commands.collection import collection
from .commands.mint import mint
from .commands.uri import uri
from .commands.config import config


@click.group(context_settings={'help_option_names': ['-h', '--help']})
@click.option('--config-file', '-c',
              help='Path to configuration file')
@click.option('--profile', '-p',
              type=click.Choice(['production', 'development']),
              help='Configuration profile')
@click.option('--output-format', '-o',
              type=click.Choice(['table', 'json', 'yaml']),
              help='Output format')
@click.option('--verbose', '-v',
              count=True,
              help='Increase verbosity (-v for INFO, -vv for DEBUG)')
@click.version_option(__version__, prog_name='gatedmint')
@pass_context
def cli(ctx: CLIContext, config_file: Optional[str], profile: Optional[str],
        output_format: Optional[str], verbose: int):
    """
    Gated Mint Command Line Interface

    Examples:
        gatedmint collection init -d drop.yml --owner alice --max-supply 100
        gatedmint collection toggle-sale -d drop.yml --caller alice
        gatedmint mint check -d drop.yml --holder bob --quantity 2 --payment 20
        gatedmint uri resolve -d drop.yml 7 --supply 10
    """
    ctx.config_file = config_file
    ctx.profile = profile
    ctx.output_format = output_format
    ctx.verbose = verbose

    try:
        ctx.load_config()
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Failed to load configuration: {e}")

    ctx.setup_logging()
    ctx.logger.debug("CLI initialized with context")


cli.add_command(collection)
cli.add_command(mint)
cli.add_command(uri)
cli.add_command(config)


def main():
    """Console script entry point."""
    return cli(prog_name='gatedmint')


if __name__ == '__main__':
    sys.exit(main())
