#!/usr/bin/env python3
"""
Metadata URI Commands for the Gated Mint CLI
"""

from typing import Optional

import click

from ..context import CLIContext, handle_cli_error, pass_context


@click.group()
@pass_context
def uri(ctx: CLIContext):
    """Metadata URI commands."""
    ctx.logger.debug("URI command group invoked")


@uri.command('resolve')
@click.option('--deployment', '-d', type=click.Path(dir_okay=False), help='Deployment file')
@click.argument('asset_id', type=int)
@click.option('--supply', type=click.IntRange(min=0), required=True,
              help='Number of assets issued so far')
@pass_context
@handle_cli_error
def resolve_uri(ctx: CLIContext, deployment: Optional[str], asset_id: int, supply: int):
    """Print the metadata URI currently exposed for ASSET_ID."""
    document = ctx.load_deployment(deployment)
    target = ctx.open_collection(document, supply=supply)
    click.echo(target.resolve_uri(asset_id))
