#!/usr/bin/env python3
"""
Collection Administration Commands for the Gated Mint CLI

Create deployment documents, inspect configuration state and run the
privileged setters and toggles.
"""

from typing import Optional

import click

from registry.manager import SETTABLE_FIELDS
from registry.schema import CollectionConfig, Deployment

from ..context import CLIContext, handle_cli_error, pass_context


deployment_option = click.option(
    '--deployment', '-d', type=click.Path(dir_okay=False),
    help='Deployment file (default: collection.deployment_file setting)'
)
caller_option = click.option('--caller', required=True, help='Identity performing the operation')


@click.group()
@pass_context
def collection(ctx: CLIContext):
    """
    Collection administration commands.

    Inspect a deployment and change its configuration. Every change is made
    on behalf of --caller, which must be the deployment owner.
    """
    ctx.logger.debug("Collection command group invoked")


@collection.command('init')
@deployment_option
@click.option('--owner', required=True, help='Privileged identity')
@click.option('--max-supply', type=click.IntRange(min=0), required=True)
@click.option('--max-per-holder', type=click.IntRange(min=0), required=True)
@click.option('--max-per-request', type=click.IntRange(min=0), required=True)
@click.option('--unit-price', type=click.IntRange(min=0), default=0, show_default=True)
@click.option('--not-revealed-uri', default='', help='Placeholder metadata URI')
@click.option('--force', is_flag=True, help='Overwrite an existing deployment file')
@pass_context
@handle_cli_error
def init_collection(ctx: CLIContext, deployment: Optional[str], owner: str, max_supply: int,
                    max_per_holder: int, max_per_request: int, unit_price: int,
                    not_revealed_uri: str, force: bool):
    """Write a new deployment file with the sale closed and metadata hidden."""
    path = ctx.deployment_path(deployment)
    if path.exists() and not force:
        raise click.ClickException(f"{path} already exists, use --force to overwrite")

    document = Deployment(
        owner=owner,
        collection=CollectionConfig(
            max_supply=max_supply,
            unit_price=unit_price,
            max_balance_per_holder=max_per_holder,
            max_per_request=max_per_request,
            not_revealed_uri=not_revealed_uri
        )
    )
    document.to_file(path)
    click.echo(f"Deployment written to {path}")


@collection.command('show')
@deployment_option
@pass_context
@handle_cli_error
def show_collection(ctx: CLIContext, deployment: Optional[str]):
    """Display the configuration state of a deployment."""
    document = ctx.load_deployment(deployment)
    ctx.output({"owner": document.owner, **document.collection.model_dump(),
                "token_uris": document.token_uris})


@collection.command('set')
@deployment_option
@click.argument('field', type=click.Choice(list(SETTABLE_FIELDS)))
@click.argument('value')
@caller_option
@pass_context
@handle_cli_error
def set_field(ctx: CLIContext, deployment: Optional[str], field: str, value: str, caller: str):
    """
    Set one configuration field.

    Examples:
        gatedmint collection set unit_price 25 --caller alice
        gatedmint collection set base_uri ipfs://cid/ --caller alice
    """
    document = ctx.load_deployment(deployment)
    target = ctx.open_collection(document)

    if not ctx.confirm_action(f"Set {field} to {value!r}?"):
        ctx.logger.info("Configuration change cancelled by user")
        return

    new_value = target.store.update(caller, field, value)
    target.store.to_deployment(document.owner).to_file(ctx.deployment_path(deployment))
    ctx.export_audit()

    click.echo(f"{field} = {new_value!r}")


def _toggle(ctx: CLIContext, deployment: Optional[str], caller: str, field: str):
    document = ctx.load_deployment(deployment)
    target = ctx.open_collection(document)

    current = getattr(target.config, field)
    if not ctx.confirm_action(f"Switch {field} from {current} to {not current}?"):
        ctx.logger.info("Toggle cancelled by user")
        return

    if field == 'sale_active':
        new_value = target.toggle_sale(caller)
    else:
        new_value = target.toggle_reveal(caller)

    target.store.to_deployment(document.owner).to_file(ctx.deployment_path(deployment))
    ctx.export_audit()
    click.echo(f"{field} = {new_value}")


@collection.command('toggle-sale')
@deployment_option
@caller_option
@pass_context
@handle_cli_error
def toggle_sale(ctx: CLIContext, deployment: Optional[str], caller: str):
    """Open or close the sale."""
    _toggle(ctx, deployment, caller, 'sale_active')


@collection.command('toggle-reveal')
@deployment_option
@caller_option
@pass_context
@handle_cli_error
def toggle_reveal(ctx: CLIContext, deployment: Optional[str], caller: str):
    """Switch between placeholder and revealed metadata."""
    _toggle(ctx, deployment, caller, 'revealed')


@collection.command('set-token-uri')
@deployment_option
@click.argument('asset_id', type=click.IntRange(min=0))
@click.argument('token_uri')
@click.option('--supply', type=click.IntRange(min=0), required=True,
              help='Number of assets issued so far')
@caller_option
@pass_context
@handle_cli_error
def set_token_uri(ctx: CLIContext, deployment: Optional[str], asset_id: int, token_uri: str,
                  supply: int, caller: str):
    """Set the metadata URI override of one issued asset (empty clears it)."""
    document = ctx.load_deployment(deployment)
    target = ctx.open_collection(document, supply=supply)

    target.set_token_uri(caller, asset_id, token_uri)
    target.store.to_deployment(document.owner).to_file(ctx.deployment_path(deployment))
    ctx.export_audit()
    click.echo(f"token_uri[{asset_id}] = {token_uri!r}")
