"""
The local wallet that signs faucet transactions.

Its key lives in ~/.fontis/.env as PRIVATE_KEY, next to the faucet settings
written by ``fontis genesis``. An exported PRIVATE_KEY wins over the file,
the same precedence ``FaucetConfig.from_env`` gives every other setting.
"""

from __future__ import annotations

import os
import re
import secrets
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values, set_key
from eth_account import Account
from eth_account.signers.local import LocalAccount

from ..errors import ProviderUnavailable

FONTIS_DIR = Path.home() / ".fontis"
FONTIS_ENV = FONTIS_DIR / ".env"

_PRIVATE_KEY_RE = re.compile(r"^(0x)?[0-9a-fA-F]{64}$")


def generate_eoa() -> tuple[str, str]:
    """Create a fresh signing key; returns ``(private_key_hex, address)``."""
    private_key = "0x" + secrets.token_hex(32)
    return private_key, Account.from_key(private_key).address


def read_env_file(env_path: Optional[Path] = None) -> dict[str, str]:
    """Entries of the wallet .env file; empty if the file does not exist."""
    env_path = env_path or FONTIS_ENV
    if not env_path.exists():
        return {}
    return {k: v for k, v in dotenv_values(env_path).items() if v is not None}


def write_env_file(values: dict[str, str], env_path: Optional[Path] = None) -> Path:
    """Set ``values`` in the wallet .env file, keeping every other entry.

    The file holds the signing key, so it is created owner-only.
    """
    env_path = env_path or FONTIS_ENV
    env_path.parent.mkdir(parents=True, exist_ok=True)
    env_path.touch(exist_ok=True)
    for key, value in values.items():
        set_key(env_path, key, value, quote_mode="never")
    if os.name != "nt":
        env_path.chmod(0o600)
    return env_path


def save_private_key(private_key: str, env_path: Optional[Path] = None) -> Path:
    """Store ``private_key`` as PRIVATE_KEY in the wallet .env file."""
    return write_env_file({"PRIVATE_KEY": _normalize_key(private_key, env_path)}, env_path)


def load_account(env_path: Optional[Path] = None) -> LocalAccount:
    """
    Load the signing account.

    Raises:
        ProviderUnavailable: If PRIVATE_KEY is missing or not a 32-byte hex key
    """
    env_path = env_path or FONTIS_ENV
    private_key = os.environ.get("PRIVATE_KEY") or read_env_file(env_path).get("PRIVATE_KEY")
    if not private_key:
        raise ProviderUnavailable(
            f"No wallet detected: PRIVATE_KEY not found. Run 'fontis genesis' "
            f"or set PRIVATE_KEY in {env_path}"
        )
    return Account.from_key(_normalize_key(private_key, env_path))


def _normalize_key(private_key: str, env_path: Path | None) -> str:
    private_key = private_key.strip()
    if not _PRIVATE_KEY_RE.match(private_key):
        raise ProviderUnavailable(
            f"No wallet detected: PRIVATE_KEY in {env_path or FONTIS_ENV} "
            f"is not a 32-byte hex key"
        )
    if not private_key.startswith("0x"):
        private_key = "0x" + private_key
    return private_key
