"""
Wallet providers.

A provider owns the caller's identity and signing capability. The gateway
only ever talks to the ``WalletProvider`` protocol, so a local-key signer and
an in-memory test double are interchangeable.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol

from eth_account.signers.local import LocalAccount

from ..errors import ConfigurationError
from ..pneuma.rpc import JsonRpcClient
from ..pneuma.tx import build_contract_tx, sign_transaction
from .eth import load_account

logger = logging.getLogger(__name__)


class WalletProvider(Protocol):
    async def request_accounts(self) -> list[str]:
        ...

    async def call(self, to: str, data: str) -> str:
        ...

    async def send_transaction(
        self, to: str, data: str, gas_limit: Optional[int] = None
    ) -> str:
        ...

    async def wait_for_receipt(self, tx_hash: str, timeout: float = 120) -> dict:
        ...


class LocalWalletProvider:
    """Signs with a local EOA key and submits through a JSON-RPC node.

    Before the first transaction the node's chain id is compared with the
    configured one, so a misrouted RPC URL fails without broadcasting.
    """

    def __init__(self, rpc: JsonRpcClient, account: LocalAccount, chain_id: int) -> None:
        self.rpc = rpc
        self.account = account
        self.chain_id = chain_id
        self._chain_verified = False

    @classmethod
    def from_env(
        cls,
        rpc: JsonRpcClient,
        chain_id: int,
        env_path: Optional[Path] = None,
    ) -> "LocalWalletProvider":
        """
        Build a provider from PRIVATE_KEY in ~/.fontis/.env or the environment.

        Raises:
            ProviderUnavailable: If no usable key is configured
        """
        return cls(rpc, load_account(env_path), chain_id)

    @property
    def address(self) -> str:
        return self.account.address

    async def request_accounts(self) -> list[str]:
        return [self.account.address]

    async def call(self, to: str, data: str) -> str:
        return await self.rpc.call(to, data, from_address=self.account.address)

    async def verify_chain(self) -> None:
        """
        Raises:
            ConfigurationError: If the node serves a different chain
        """
        if self._chain_verified:
            return
        node_chain_id = await self.rpc.get_chain_id()
        if node_chain_id != self.chain_id:
            raise ConfigurationError(
                f"RPC node is on chain {node_chain_id}, expected {self.chain_id}"
            )
        self._chain_verified = True

    async def send_transaction(
        self, to: str, data: str, gas_limit: Optional[int] = None
    ) -> str:
        await self.verify_chain()
        tx = await build_contract_tx(
            self.rpc,
            self.account,
            contract_address=to,
            calldata=data,
            chain_id=self.chain_id,
            gas_limit=gas_limit,
        )
        raw_tx = sign_transaction(self.account, tx)
        tx_hash = await self.rpc.send_raw_transaction(raw_tx)
        logger.debug("Broadcast %s (nonce=%s, gas=%s)", tx_hash, tx["nonce"], tx["gas"])
        return tx_hash

    async def wait_for_receipt(self, tx_hash: str, timeout: float = 120) -> dict:
        return await self.rpc.wait_for_receipt(tx_hash, timeout=timeout)
