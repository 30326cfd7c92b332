"""Shared plumbing for the faucet commands."""

from __future__ import annotations

import asyncio
import sys
from typing import Awaitable, Callable, Optional, TypeVar

import click

from ..config import FaucetConfig
from ..errors import CallReverted, FaucetError
from ..faucet import ConfirmedResult, FaucetGateway
from ..pneuma.rpc import JsonRpcClient
from ..sigil.provider import LocalWalletProvider

T = TypeVar("T")


def gateway_options(func: Callable) -> Callable:
    """Attach --rpc-url and --faucet to a command."""
    func = click.option(
        "--faucet",
        "faucet_address",
        envvar="FAUCET_ADDRESS",
        default=None,
        help="USDCAutoFaucet contract address",
    )(func)
    func = click.option(
        "--rpc-url",
        envvar="FONTIS_RPC_URL",
        default=None,
        help="JSON-RPC endpoint (default: Base Sepolia)",
    )(func)
    return func


def build_gateway(rpc_url: Optional[str], faucet_address: Optional[str]) -> FaucetGateway:
    """Build a gateway signing with the local wallet in ~/.fontis/.env."""
    config = FaucetConfig.from_env().with_overrides(
        rpc_url=rpc_url, faucet_address=faucet_address
    )
    rpc = JsonRpcClient(config.rpc_url)
    provider = LocalWalletProvider.from_env(rpc, config.chain_id)
    return FaucetGateway(config, provider)


def run_gateway(
    rpc_url: Optional[str],
    faucet_address: Optional[str],
    operation: Callable[[FaucetGateway], Awaitable[T]],
) -> T:
    """Run one gateway coroutine, turning FaucetError into a CLI exit code."""
    try:
        gateway = build_gateway(rpc_url, faucet_address)
        return asyncio.run(operation(gateway))
    except CallReverted as exc:
        click.secho(f"FAILED: {exc}", fg="red")
        if exc.tx_hash:
            click.echo(click.style("  TX: ", dim=True) + exc.tx_hash)
        sys.exit(exc.exit_code)
    except FaucetError as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(exc.exit_code)


def echo_confirmed(message: str, result: ConfirmedResult) -> None:
    click.secho(f"  {message}", fg="green", bold=True)
    click.echo(click.style("  TX:    ", dim=True) + result.tx_hash)
    if result.block_number is not None:
        click.echo(click.style("  Block: ", dim=True) + str(result.block_number))
