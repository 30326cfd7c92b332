"""
Theurgy Automint - Drive the faucet's scheduled issuance.

The faucet refills itself at most once per cooldown period. Anyone can
trigger the check; only the owner can force a mint.
"""

from __future__ import annotations

from typing import Optional

import click

from ._common import echo_confirmed, gateway_options, run_gateway


@click.command()
@gateway_options
def automint(rpc_url: Optional[str], faucet_address: Optional[str]) -> None:
    """Trigger the auto-mint check."""
    click.echo("Triggering auto-mint check...")
    result = run_gateway(rpc_url, faucet_address, lambda gw: gw.trigger_auto_mint())
    echo_confirmed("Auto-mint check completed", result)


@click.command("force-mint")
@gateway_options
def force_mint(rpc_url: Optional[str], faucet_address: Optional[str]) -> None:
    """Force an auto-mint (owner only)."""
    click.echo("Forcing auto-mint...")
    result = run_gateway(rpc_url, faucet_address, lambda gw: gw.force_auto_mint())
    echo_confirmed("Force auto-mint completed", result)


@click.command("next-mint")
@gateway_options
def next_mint(rpc_url: Optional[str], faucet_address: Optional[str]) -> None:
    """Show the time left until the next auto-mint."""
    countdown = run_gateway(
        rpc_url, faucet_address, lambda gw: gw.query_time_until_next_mint()
    )

    if countdown.error:
        click.secho(f"Next auto-mint: unavailable ({countdown.error})", fg="red")
    elif countdown.is_available_now:
        click.secho("Auto-mint is available now.", fg="green")
    else:
        click.echo(
            click.style("Next auto-mint in: ", dim=True)
            + click.style(countdown.formatted, fg="bright_white")
            + click.style(f"  ({countdown.seconds}s)", dim=True)
        )
