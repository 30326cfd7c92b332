"""
Theurgy Request - Claim tokens from the faucet.

Flow:
1. Validate the amount (exact 6-decimal scaling)
2. Submit requestTokens(amount) signed by the local EOA
3. Wait for inclusion
"""

from __future__ import annotations

from typing import Optional

import click

from ._common import echo_confirmed, gateway_options, run_gateway


@click.command()
@click.option("--amount", required=True, help="Amount in USDC (e.g. 10 or 2.5)")
@gateway_options
def request(amount: str, rpc_url: Optional[str], faucet_address: Optional[str]) -> None:
    """Request USDC from the faucet.

    The faucet enforces a per-account daily limit; requests beyond the
    remaining allowance are rejected by the contract.
    """
    click.echo("=== Fontis Request ===")
    click.echo()
    click.echo(click.style("  Amount: ", dim=True) + f"{amount} USDC")
    click.echo("  Sending transaction...")

    result = run_gateway(rpc_url, faucet_address, lambda gw: gw.request_funds(amount))

    click.echo()
    echo_confirmed("Tokens received!", result)
