"""
Gateway configuration.

One explicit ``FaucetConfig`` per environment, passed to the gateway at
construction. ``from_env`` reads ~/.fontis/.env (python-dotenv) and the
process environment.
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from .amounts import USDC_DECIMALS
from .sigil.eth import FONTIS_ENV

# Deployed USDCAutoFaucet and the USDC token it is expected to hold
DEFAULT_FAUCET_ADDRESS = "0x2F10297555813b8706e9E0eF72fAfAb729516B65"
DEFAULT_TOKEN_ADDRESS = "0x1904f0522FC7f10517175Bd0E546430f1CF0B9Fa"

# Default RPC endpoint (Base Sepolia)
DEFAULT_RPC_URL = "https://sepolia.base.org"
DEFAULT_CHAIN_ID = 84532

DEFAULT_RECEIPT_TIMEOUT = 120


@dataclass(frozen=True)
class FaucetConfig:
    faucet_address: Optional[str] = DEFAULT_FAUCET_ADDRESS
    expected_token_address: Optional[str] = DEFAULT_TOKEN_ADDRESS
    rpc_url: str = DEFAULT_RPC_URL
    chain_id: int = DEFAULT_CHAIN_ID
    decimals: int = USDC_DECIMALS
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT
    gas_limit: Optional[int] = None

    @classmethod
    def from_env(cls, env_path: Optional[Path] = None) -> "FaucetConfig":
        """
        Load configuration from .env and environment variables.

        Variables: FAUCET_ADDRESS, USDC_ADDRESS, FONTIS_RPC_URL, CHAIN_ID,
        RECEIPT_TIMEOUT. Unset variables keep their defaults.
        """
        env_path = env_path or FONTIS_ENV
        if env_path.exists():
            load_dotenv(env_path, override=False)

        return cls(
            faucet_address=os.environ.get("FAUCET_ADDRESS", DEFAULT_FAUCET_ADDRESS),
            expected_token_address=os.environ.get("USDC_ADDRESS", DEFAULT_TOKEN_ADDRESS),
            rpc_url=os.environ.get("FONTIS_RPC_URL", DEFAULT_RPC_URL),
            chain_id=int(os.environ.get("CHAIN_ID", str(DEFAULT_CHAIN_ID))),
            receipt_timeout=float(
                os.environ.get("RECEIPT_TIMEOUT", str(DEFAULT_RECEIPT_TIMEOUT))
            ),
        )

    def with_overrides(self, **overrides: Any) -> "FaucetConfig":
        """Return a copy with the non-None overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)
