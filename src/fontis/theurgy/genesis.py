"""
Genesis - Create the local wallet used to sign faucet transactions.

Flow:
1. Reuse the existing key in ~/.fontis/.env, or generate a new EOA
2. Write default faucet settings that are not already present
"""

from __future__ import annotations

import os
from pathlib import Path

import click

from ..config import DEFAULT_CHAIN_ID, DEFAULT_FAUCET_ADDRESS, DEFAULT_RPC_URL, DEFAULT_TOKEN_ADDRESS
from ..errors import ProviderUnavailable
from ..sigil.eth import FONTIS_ENV, generate_eoa, load_account, read_env_file, save_private_key, write_env_file

_DEFAULTS: dict[str, str] = {
    "FAUCET_ADDRESS": DEFAULT_FAUCET_ADDRESS,
    "USDC_ADDRESS": DEFAULT_TOKEN_ADDRESS,
    "FONTIS_RPC_URL": DEFAULT_RPC_URL,
    "CHAIN_ID": str(DEFAULT_CHAIN_ID),
}


def _ensure_defaults(env_path: Path) -> None:
    """Add missing default keys to the .env file; user overrides are kept."""
    existing = read_env_file(env_path)
    missing = {k: v for k, v in _DEFAULTS.items() if k not in existing}
    if not missing:
        return

    write_env_file(missing, env_path)
    for key, value in missing.items():
        os.environ.setdefault(key, value)


@click.command()
def genesis() -> None:
    """Create (or reuse) the local faucet wallet."""
    env_path = FONTIS_ENV
    created = False
    try:
        address = load_account(env_path).address
    except ProviderUnavailable:
        private_key, address = generate_eoa()
        save_private_key(private_key, env_path)
        created = True

    _ensure_defaults(env_path)

    click.echo("=== Fontis Genesis ===")
    click.echo()
    click.echo(click.style("  Address: ", dim=True) + click.style(address, fg="bright_white"))
    click.echo(click.style("  Config:  ", dim=True) + str(env_path))
    if created:
        click.secho("  New wallet created. Fund it with gas before requesting tokens.", fg="yellow")
    else:
        click.echo("  Existing wallet kept.")
    click.echo()
