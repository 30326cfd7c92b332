"""
Fontis CLI

Command-line interface for the USDCAutoFaucet gateway.

Commands:
  genesis    - Create a local wallet
  request    - Request tokens from the faucet
  allowance  - Show remaining daily allowance
  balance    - Show faucet balance (with token cross-check)
  status     - Show faucet contract state
  automint   - Trigger the auto-mint check
  force-mint - Force an auto-mint (owner only)
  next-mint  - Time until the next auto-mint
  withdraw   - Withdraw tokens (owner only)
  set-max    - Change the daily limit (owner only)
  whoami     - Show current wallet address
"""

from __future__ import annotations

import logging
import sys

import click

from . import __version__
from .errors import ProviderUnavailable
from .sigil.eth import load_account


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="fontis")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Fontis - USDC faucet gateway."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ============ Top-level Commands ============

from .theurgy.automint import automint, force_mint, next_mint
from .theurgy.genesis import genesis
from .theurgy.owner import set_max, withdraw
from .theurgy.query import allowance, balance, status
from .theurgy.request import request

cli.add_command(genesis)
cli.add_command(request)
cli.add_command(allowance)
cli.add_command(balance)
cli.add_command(status)
cli.add_command(automint)
cli.add_command(force_mint)
cli.add_command(next_mint)
cli.add_command(withdraw)
cli.add_command(set_max)


# ============ Identity ============


@cli.command()
def whoami() -> None:
    """Show current wallet identity."""
    try:
        click.echo(f"Address: {load_account().address}")
    except ProviderUnavailable:
        click.echo("No wallet found.")
        click.echo("Run 'fontis genesis' to create one.")
        sys.exit(1)


# ============ Entry Points ============


def main() -> None:
    """Fontis CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
