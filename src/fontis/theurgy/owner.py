"""
Theurgy Owner - Faucet administration.

Both commands are gated by the contract's owner check; any other signer
gets a revert.
"""

from __future__ import annotations

from typing import Optional

import click

from ._common import echo_confirmed, gateway_options, run_gateway


@click.command()
@click.option("--amount", required=True, help="Amount in USDC to withdraw")
@gateway_options
def withdraw(amount: str, rpc_url: Optional[str], faucet_address: Optional[str]) -> None:
    """Withdraw tokens from the faucet (owner only)."""
    click.echo(f"Withdrawing {amount} USDC...")
    result = run_gateway(rpc_url, faucet_address, lambda gw: gw.withdraw_tokens(amount))
    echo_confirmed("Withdrawal confirmed", result)


@click.command("set-max")
@click.option("--amount", required=True, help="New per-account daily limit in USDC")
@gateway_options
def set_max(amount: str, rpc_url: Optional[str], faucet_address: Optional[str]) -> None:
    """Change the daily limit per account (owner only)."""
    click.echo(f"Setting daily limit to {amount} USDC...")
    result = run_gateway(
        rpc_url, faucet_address, lambda gw: gw.set_max_tokens_per_day(amount)
    )
    echo_confirmed("Daily limit updated", result)
