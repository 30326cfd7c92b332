"""Shared fixtures: an in-memory wallet provider standing in for a real node."""

from __future__ import annotations

from typing import Any, Optional

import pytest
from eth_abi import decode, encode

from fontis.config import FaucetConfig
from fontis.faucet import FaucetGateway
from fontis.pneuma.abi import ERC20_ABI, FAUCET_ABI
from fontis.pneuma.rpc import function_selector

FAUCET = "0x" + "11" * 20
TOKEN = "0x" + "33" * 20
USER = "0x" + "22" * 20
TX_HASH = "0x" + "ab" * 32

# Sentinel telling the fake to answer an eth_call with empty data
EMPTY = object()


def _selectors() -> dict[str, dict[str, Any]]:
    table = {}
    for abi in (FAUCET_ABI, ERC20_ABI):
        for entry in abi:
            table["0x" + function_selector(abi, entry["name"]).hex()] = entry
    return table


_SELECTORS = _selectors()


def _decode_call(data: str) -> tuple[str, list]:
    entry = _SELECTORS[data[:10]]
    input_types = [i["type"] for i in entry["inputs"]]
    args = list(decode(input_types, bytes.fromhex(data[10:]))) if input_types else []
    return entry["name"], args


class FakeWalletProvider:
    """WalletProvider double answering faucet and ERC-20 calls from a dict."""

    def __init__(
        self,
        reads: Optional[dict[str, Any]] = None,
        accounts: Optional[list[str]] = None,
        receipt_status: int = 1,
        send_error: Optional[Exception] = None,
    ) -> None:
        self.reads = reads if reads is not None else {}
        self.accounts = accounts if accounts is not None else [USER]
        self.receipt_status = receipt_status
        self.send_error = send_error
        self.account_requests = 0
        self.calls: list[tuple[str, str, list]] = []
        self.sent: list[tuple[str, str, list]] = []
        self.awaited: list[str] = []

    async def request_accounts(self) -> list[str]:
        self.account_requests += 1
        return list(self.accounts)

    async def call(self, to: str, data: str) -> str:
        name, args = _decode_call(data)
        self.calls.append((to.lower(), name, args))
        value = self.reads[name]
        if isinstance(value, Exception):
            raise value
        if value is EMPTY:
            return "0x"
        output_types = [o["type"] for o in _SELECTORS[data[:10]]["outputs"]]
        return "0x" + encode(output_types, [value]).hex()

    async def send_transaction(self, to: str, data: str, gas_limit: Optional[int] = None) -> str:
        name, args = _decode_call(data)
        self.sent.append((to.lower(), name, args))
        if self.send_error is not None:
            raise self.send_error
        return TX_HASH

    async def wait_for_receipt(self, tx_hash: str, timeout: float = 120) -> dict:
        self.awaited.append(tx_hash)
        return {
            "transactionHash": tx_hash,
            "status": hex(self.receipt_status),
            "blockNumber": "0x10",
            "gasUsed": "0x5208",
        }

    @property
    def touched(self) -> bool:
        return bool(self.account_requests or self.calls or self.sent)


@pytest.fixture()
def config() -> FaucetConfig:
    return FaucetConfig(faucet_address=FAUCET, expected_token_address=TOKEN)


@pytest.fixture()
def provider() -> FakeWalletProvider:
    return FakeWalletProvider(
        reads={
            "getRemainingAllowance": 12_500_000,
            "getFaucetBalance": 1_000_000_000,
            "usdcToken": TOKEN,
            "decimals": 6,
            "balanceOf": 1_000_000_000,
            "timeUntilNextAutoMint": 90061,
            "lastAutoMintTime": 1_700_000_000,
            "owner": USER,
            "maxTokensPerDay": 100_000_000,
        }
    )


@pytest.fixture()
def gateway(config: FaucetConfig, provider: FakeWalletProvider) -> FaucetGateway:
    return FaucetGateway(config, provider)
