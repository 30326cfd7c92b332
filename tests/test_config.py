"""Tests for fontis.config."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

from fontis.config import (
    DEFAULT_CHAIN_ID,
    DEFAULT_FAUCET_ADDRESS,
    DEFAULT_RPC_URL,
    DEFAULT_TOKEN_ADDRESS,
    FaucetConfig,
)

_KEYS = ("FAUCET_ADDRESS", "USDC_ADDRESS", "FONTIS_RPC_URL", "CHAIN_ID", "RECEIPT_TIMEOUT")


def _clean_env() -> dict[str, str]:
    return {k: v for k, v in os.environ.items() if k not in _KEYS}


def test_defaults(tmp_path: Path) -> None:
    with patch.dict(os.environ, _clean_env(), clear=True):
        config = FaucetConfig.from_env(tmp_path / ".env")
    assert config.faucet_address == DEFAULT_FAUCET_ADDRESS
    assert config.expected_token_address == DEFAULT_TOKEN_ADDRESS
    assert config.rpc_url == DEFAULT_RPC_URL
    assert config.chain_id == DEFAULT_CHAIN_ID
    assert config.decimals == 6


def test_env_file(tmp_path: Path) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text(
        "FAUCET_ADDRESS=0x" + "11" * 20 + "\nCHAIN_ID=31337\nRECEIPT_TIMEOUT=5\n",
        encoding="utf-8",
    )
    with patch.dict(os.environ, _clean_env(), clear=True):
        config = FaucetConfig.from_env(env_path)
    assert config.faucet_address == "0x" + "11" * 20
    assert config.chain_id == 31337
    assert config.receipt_timeout == 5.0


def test_process_env_wins_over_file(tmp_path: Path) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text("FONTIS_RPC_URL=http://from-file\n", encoding="utf-8")
    env = _clean_env()
    env["FONTIS_RPC_URL"] = "http://from-env"
    with patch.dict(os.environ, env, clear=True):
        config = FaucetConfig.from_env(env_path)
    assert config.rpc_url == "http://from-env"


def test_with_overrides_ignores_none() -> None:
    config = FaucetConfig().with_overrides(rpc_url="http://localhost:8545", faucet_address=None)
    assert config.rpc_url == "http://localhost:8545"
    assert config.faucet_address == DEFAULT_FAUCET_ADDRESS
