"""
Async JSON-RPC client.

Lightweight alternative to web3.py: uses httpx for HTTP + eth-abi for encoding.
Supports read-only contract calls, gas/nonce queries, raw transaction
submission and receipt polling.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import time
from typing import Any, Optional

import httpx
from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_hash.auto import keccak

from ..errors import CallReverted, DecodeError, ProviderUnavailable, RpcError, TransactionTimeout
from .abi import Abi, find_function, function_signature

logger = logging.getLogger(__name__)

# Error(string) and Panic(uint256) selectors
_ERROR_SELECTOR = "08c379a0"
_PANIC_SELECTOR = "4e487b71"


# ---------------------------------------------------------------------------
# ABI helpers
# ---------------------------------------------------------------------------

def keccak256(data: bytes) -> bytes:
    """Compute Keccak-256 (NOT the same as hashlib.sha3_256 / NIST SHA-3)."""
    return keccak(data)


def function_selector(abi: Abi, function_name: str) -> bytes:
    """First 4 bytes of keccak256 of the canonical function signature."""
    return keccak256(function_signature(find_function(abi, function_name)).encode("utf-8"))[:4]


def encode_function_call(abi: Abi, function_name: str, args: list) -> str:
    """
    ABI-encode a function call.

    Args:
        abi: Contract ABI
        function_name: Function name to call
        args: Function arguments

    Returns:
        0x-prefixed hex encoded calldata
    """
    func = find_function(abi, function_name)
    input_types = [inp["type"] for inp in func.get("inputs", [])]
    if len(args) != len(input_types):
        raise ValueError(
            f"{function_name} expects {len(input_types)} argument(s), got {len(args)}"
        )

    selector = function_selector(abi, function_name)
    encoded_args = encode(input_types, args) if args else b""
    return "0x" + selector.hex() + encoded_args.hex()


def decode_function_result(abi: Abi, function_name: str, data: str) -> Any:
    """
    ABI-decode a function call result.

    Returns:
        Decoded result (single value, tuple, or None for no outputs)

    Raises:
        DecodeError: If the data does not match the declared output types
    """
    func = find_function(abi, function_name)
    output_types = [out["type"] for out in func.get("outputs", [])]
    if not output_types:
        return None

    if not data or data == "0x":
        raise DecodeError(
            f"{function_name} returned no data; check the contract address and ABI"
        )

    try:
        raw = bytes.fromhex(data[2:] if data.startswith("0x") else data)
        decoded = decode(output_types, raw)
    except (DecodingError, ValueError) as exc:
        raise DecodeError(f"Cannot decode {function_name} result: {exc}") from exc

    if len(decoded) == 1:
        return decoded[0]
    return decoded


def decode_revert_reason(data: Any) -> Optional[str]:
    """Extract a human-readable reason from revert data, if there is one."""
    if isinstance(data, dict):
        data = data.get("data")
    if not isinstance(data, str) or not data.startswith("0x") or len(data) < 10:
        return None

    selector, payload = data[2:10].lower(), data[10:]
    try:
        if selector == _ERROR_SELECTOR:
            return decode(["string"], bytes.fromhex(payload))[0]
        if selector == _PANIC_SELECTOR:
            code = decode(["uint256"], bytes.fromhex(payload))[0]
            return f"Panic(0x{code:02x})"
    except (DecodingError, ValueError):
        return None
    return None


def _is_revert(error: dict) -> bool:
    message = str(error.get("message", "")).lower()
    return error.get("code") == 3 or "revert" in message


def _raise_rpc_error(method: str, error: dict) -> None:
    message = str(error.get("message", error))
    if _is_revert(error):
        reason = decode_revert_reason(error.get("data"))
        if reason is None and ":" in message:
            reason = message.split(":", 1)[1].strip() or None
        raise CallReverted(f"Call reverted: {reason or message}", reason=reason)
    raise RpcError(f"RPC error ({method}): {message}", code=error.get("code"), data=error.get("data"))


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class JsonRpcClient:
    """Async JSON-RPC 2.0 client bound to one node endpoint."""

    def __init__(
        self,
        rpc_url: str,
        timeout: float = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.rpc_url = rpc_url
        self._timeout = timeout
        self._transport = transport
        self._ids = itertools.count(1)

    async def request(self, method: str, params: list) -> Any:
        """
        Make a JSON-RPC call.

        Args:
            method: RPC method name (e.g., "eth_call")
            params: RPC parameters

        Returns:
            Result field from the RPC response

        Raises:
            ProviderUnavailable: If the node cannot be reached
            CallReverted: If the node reports an execution revert
            RpcError: For any other JSON-RPC error
        """
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": next(self._ids),
        }
        logger.debug("RPC %s %s", method, params)

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(self.rpc_url, json=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as exc:
            raise ProviderUnavailable(f"RPC node unreachable ({self.rpc_url}): {exc}") from exc
        except ValueError as exc:
            raise RpcError(f"RPC returned invalid JSON for {method}") from exc

        if "error" in data:
            _raise_rpc_error(method, data["error"])

        return data.get("result")

    async def call(self, to: str, data: str, from_address: Optional[str] = None) -> str:
        tx: dict[str, Any] = {"to": to, "data": data}
        if from_address:
            tx["from"] = from_address
        return await self.request("eth_call", [tx, "latest"])

    async def get_chain_id(self) -> int:
        return int(await self.request("eth_chainId", []), 16)

    async def get_nonce(self, address: str) -> int:
        """Get the next nonce for an address, counting pending transactions."""
        result = await self.request("eth_getTransactionCount", [address, "pending"])
        return int(result, 16)

    async def get_gas_price(self) -> int:
        return int(await self.request("eth_gasPrice", []), 16)

    async def estimate_gas(self, tx: dict) -> int:
        """Estimate gas; a reverting call raises CallReverted here."""
        return int(await self.request("eth_estimateGas", [tx]), 16)

    async def send_raw_transaction(self, raw_tx: str) -> str:
        """
        Send a signed raw transaction.

        Returns:
            Transaction hash (0x-prefixed hex)
        """
        return await self.request("eth_sendRawTransaction", [raw_tx])

    async def get_transaction_receipt(self, tx_hash: str) -> Optional[dict]:
        return await self.request("eth_getTransactionReceipt", [tx_hash])

    async def wait_for_receipt(
        self,
        tx_hash: str,
        timeout: float = 120,
        poll_interval: float = 2.0,
    ) -> dict:
        """
        Wait for a transaction receipt.

        Args:
            tx_hash: Transaction hash
            timeout: Maximum wait time in seconds
            poll_interval: Polling interval in seconds

        Returns:
            Transaction receipt dict

        Raises:
            TransactionTimeout: If receipt not found within timeout
        """
        deadline = time.monotonic() + timeout
        while True:
            receipt = await self.get_transaction_receipt(tx_hash)
            if receipt is not None:
                return receipt
            if time.monotonic() >= deadline:
                break
            await asyncio.sleep(poll_interval)

        raise TransactionTimeout(
            f"Transaction {tx_hash} not confirmed within {timeout}s", tx_hash=tx_hash
        )
