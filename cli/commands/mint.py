#!/usr/bin/env python3
"""
Issuance Commands for the Gated Mint CLI

Dry-run issuance requests against a deployment and a ledger snapshot.
"""

from typing import Optional

import click

from validator.exceptions import IssuanceError

from ..context import CLIContext, handle_cli_error, pass_context


@click.group()
@pass_context
def mint(ctx: CLIContext):
    """Issuance request commands."""
    ctx.logger.debug("Mint command group invoked")


@mint.command('check')
@click.option('--deployment', '-d', type=click.Path(dir_okay=False), help='Deployment file')
@click.option('--holder', required=True, help='Requesting identity')
@click.option('--quantity', type=click.IntRange(min=0), required=True)
@click.option('--payment', type=click.IntRange(min=0), required=True)
@click.option('--supply', type=click.IntRange(min=0), default=0, show_default=True,
              help='Number of assets issued so far')
@click.option('--holder-balance', type=click.IntRange(min=0), default=0, show_default=True,
              help='Assets already held by the holder')
@pass_context
@handle_cli_error
def check_mint(ctx: CLIContext, deployment: Optional[str], holder: str, quantity: int,
               payment: int, supply: int, holder_balance: int):
    """
    Check whether an issuance request would be accepted.

    Constraints are evaluated in order (supply, sale, holder cap, payment,
    request cap); the first failure is reported. Exits 1 when rejected.
    """
    document = ctx.load_deployment(deployment)
    if holder_balance > supply:
        raise click.BadParameter("cannot exceed --supply", param_hint="--holder-balance")

    target = ctx.open_collection(document, supply=supply, balances={holder: holder_balance})

    try:
        context = target.check_issuance(holder, quantity, payment)
    except IssuanceError as e:
        ctx.output({"result": "rejected", "error": e.code, "message": str(e)})
        click.get_current_context().exit(1)

    summary = context.get_summary()
    ctx.output({
        "result": "ok",
        "quantity": quantity,
        "required_payment": summary["required_payment"],
        "first_asset_id": supply,
        "warnings": summary["warnings"]
    })
