"""
Transaction Builder - Build and sign Ethereum transactions.

Uses eth-account for signing and the async JSON-RPC client for nonce,
gas and fee lookups. All gas is paid by the signing EOA.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from eth_account.signers.local import LocalAccount

from .rpc import JsonRpcClient, keccak256

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")

# Headroom applied on top of eth_estimateGas
GAS_MARGIN_NUMERATOR = 12
GAS_MARGIN_DENOMINATOR = 10


def is_address(value: Any) -> bool:
    """True if ``value`` is a 0x-prefixed 20-byte hex address."""
    return isinstance(value, str) and bool(_ADDRESS_RE.match(value))


def to_checksum_address(address: str) -> str:
    """Convert an address to EIP-55 checksummed format.

    eth-account requires checksummed addresses in transaction fields.
    """
    if not is_address(address):
        raise ValueError(f"Not an address: {address!r}")
    addr = address[2:].lower()
    addr_hash = keccak256(addr.encode("utf-8")).hex()
    result = "0x"
    for i, c in enumerate(addr):
        if c in "abcdef":
            result += c.upper() if int(addr_hash[i], 16) >= 8 else c
        else:
            result += c
    return result


def same_address(a: Optional[str], b: Optional[str]) -> bool:
    """Case-insensitive address comparison."""
    if not a or not b:
        return False
    return str(a).lower() == str(b).lower()


async def build_contract_tx(
    rpc: JsonRpcClient,
    account: LocalAccount,
    contract_address: str,
    calldata: str,
    chain_id: int,
    value: int = 0,
    gas_limit: Optional[int] = None,
) -> dict:
    """
    Build a contract call transaction (unsigned).

    Args:
        rpc: JSON-RPC client
        account: Signing account (nonce owner)
        contract_address: 0x-prefixed contract address
        calldata: 0x-prefixed ABI-encoded call
        chain_id: EIP-155 chain ID
        value: ETH value in wei (default: 0)
        gas_limit: Gas limit (default: estimate + 20%)

    Returns:
        Unsigned legacy transaction dict
    """
    to = to_checksum_address(contract_address)

    if gas_limit is None:
        # Reverts surface here, before anything is signed or broadcast.
        estimate = await rpc.estimate_gas(
            {"from": account.address, "to": to, "data": calldata, "value": hex(value)}
        )
        gas_limit = estimate * GAS_MARGIN_NUMERATOR // GAS_MARGIN_DENOMINATOR

    nonce = await rpc.get_nonce(account.address)
    gas_price = await rpc.get_gas_price()

    return {
        "to": to,
        "data": calldata,
        "value": value,
        "nonce": nonce,
        "gas": gas_limit,
        "gasPrice": gas_price,
        "chainId": chain_id,
    }


def sign_transaction(account: LocalAccount, tx: dict) -> str:
    """Sign a transaction and return the 0x-prefixed raw bytes."""
    signed = account.sign_transaction(tx)
    raw = signed.raw_transaction.hex()
    return raw if raw.startswith("0x") else "0x" + raw
