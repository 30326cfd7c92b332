"""
Theurgy Query - Read-only faucet queries.

Commands:
- allowance: Remaining daily quota for your wallet
- balance:   Faucet balance, cross-checked against the token contract
- status:    Owner, token, daily limit and last auto-mint
"""

from __future__ import annotations

from typing import Optional

import click

from ..amounts import USDC_DECIMALS
from ._common import gateway_options, run_gateway


@click.command()
@gateway_options
def allowance(rpc_url: Optional[str], faucet_address: Optional[str]) -> None:
    """Show how much you can still claim today."""
    remaining = run_gateway(
        rpc_url, faucet_address, lambda gw: gw.query_remaining_allowance()
    )
    click.echo(
        click.style("Remaining allowance: ", dim=True)
        + click.style(f"{remaining:,.{USDC_DECIMALS}f} USDC", fg="bright_white")
    )


@click.command()
@gateway_options
def balance(rpc_url: Optional[str], faucet_address: Optional[str]) -> None:
    """Show the faucet's token balance."""
    report = run_gateway(rpc_url, faucet_address, lambda gw: gw.inspect_faucet_balance())

    click.echo("=== Faucet Balance ===")
    click.echo()
    if report.error:
        click.echo(
            click.style("  Balance: ", dim=True)
            + click.style(f"{report.balance} USDC", fg="yellow")
            + click.style(f"  (unavailable: {report.error})", fg="red")
        )
        click.echo()
        return

    click.echo(
        click.style("  Balance: ", dim=True)
        + click.style(f"{report.balance:,.{USDC_DECIMALS}f} USDC", fg="green", bold=True)
    )
    click.echo(click.style("  Token:   ", dim=True) + str(report.token_address))
    if report.direct_balance is not None:
        click.echo(
            click.style("  Direct:  ", dim=True)
            + f"{report.direct_balance} ({report.token_decimals} decimals)"
        )
    if report.token_matches is False:
        click.secho(
            f"  WARNING: faucet token differs from expected {report.expected_token_address}",
            fg="red",
            bold=True,
        )
    click.echo()


@click.command()
@gateway_options
def status(rpc_url: Optional[str], faucet_address: Optional[str]) -> None:
    """Show faucet contract state."""
    info = run_gateway(rpc_url, faucet_address, lambda gw: gw.query_faucet_info())

    last_mint = info.last_auto_mint_time.isoformat() if info.last_auto_mint_time else "never"
    click.echo("=== Faucet Status ===")
    click.echo()
    click.echo(click.style("  Faucet:         ", dim=True) + info.address)
    click.echo(click.style("  Owner:          ", dim=True) + info.owner)
    click.echo(click.style("  Token:          ", dim=True) + info.token_address)
    click.echo(click.style("  Max per day:    ", dim=True) + f"{info.max_tokens_per_day} USDC")
    click.echo(click.style("  Last auto-mint: ", dim=True) + last_mint)
    click.echo()
