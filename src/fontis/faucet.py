"""
Faucet Gateway - typed access to the deployed USDCAutoFaucet contract.

Each operation rebuilds its own contract handle, encodes the call, hands it
to the wallet provider and decodes the answer into display units.

Failure policy: every operation propagates its errors, except the two
informational queries ``query_faucet_balance`` (and ``inspect_faucet_balance``)
and ``query_time_until_next_mint``. Those log the failure and return a
sentinel result whose ``error`` field is set.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from .amounts import AmountLike, format_duration, from_base_units, to_base_units
from .config import FaucetConfig
from .errors import CallReverted, ConfigurationError, DecodeError, ProviderUnavailable
from .pneuma.abi import Abi, ERC20_ABI, FAUCET_ABI
from .pneuma.rpc import decode_function_result, encode_function_call
from .pneuma.tx import is_address, same_address, to_checksum_address
from .sigil.provider import WalletProvider


# ============ Result Types ============


@dataclass(frozen=True)
class ContractHandle:
    """Per-operation reference to the faucet, bound to the caller's account."""

    address: str
    account: str
    chain_id: int
    rpc_url: str
    abi: Abi = field(default=FAUCET_ABI, repr=False)


@dataclass(frozen=True)
class ConfirmedResult:
    tx_hash: str
    status: int
    block_number: Optional[int] = None
    gas_used: Optional[int] = None
    receipt: dict = field(default_factory=dict, repr=False)


@dataclass(frozen=True)
class MintCountdown:
    seconds: int
    formatted: str
    is_available_now: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class FaucetBalanceReport:
    """Faucet balance plus the token cross-check behind it."""

    balance: Decimal
    token_address: Optional[str] = None
    expected_token_address: Optional[str] = None
    token_matches: Optional[bool] = None
    token_decimals: Optional[int] = None
    direct_balance: Optional[Decimal] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class FaucetInfo:
    address: str
    owner: str
    token_address: str
    max_tokens_per_day: Decimal
    last_auto_mint_time: Optional[datetime]


def _hex_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, int):
        return value
    return int(str(value), 16)


class PendingTransaction:
    """A submitted transaction that has not been awaited yet.

    ``wait()`` may be called once; the result is not cached.
    """

    def __init__(
        self,
        tx_hash: str,
        provider: WalletProvider,
        function_name: str,
        timeout: float = 120,
    ) -> None:
        self.tx_hash = tx_hash
        self.function_name = function_name
        self._provider = provider
        self._timeout = timeout
        self._consumed = False

    def __repr__(self) -> str:
        return f"PendingTransaction({self.function_name}, {self.tx_hash})"

    async def wait(self) -> ConfirmedResult:
        """
        Await inclusion.

        Raises:
            CallReverted: If the transaction was mined with status 0
            TransactionTimeout: If no receipt appears within the timeout
            RuntimeError: If this transaction was already awaited
        """
        if self._consumed:
            raise RuntimeError(f"Transaction {self.tx_hash} was already awaited")
        self._consumed = True

        receipt = await self._provider.wait_for_receipt(self.tx_hash, timeout=self._timeout)
        status = _hex_int(receipt.get("status")) or 0
        if status != 1:
            raise CallReverted(
                f"{self.function_name} reverted on-chain (tx {self.tx_hash})",
                tx_hash=self.tx_hash,
            )

        return ConfirmedResult(
            tx_hash=self.tx_hash,
            status=status,
            block_number=_hex_int(receipt.get("blockNumber")),
            gas_used=_hex_int(receipt.get("gasUsed")),
            receipt=receipt,
        )


# ============ Gateway ============


class FaucetGateway:
    def __init__(
        self,
        config: FaucetConfig,
        provider: Optional[WalletProvider],
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.config = config
        self.provider = provider
        self._log = logger if logger is not None else logging.getLogger(__name__)

    # ---- plumbing ----

    def _require_provider(self) -> WalletProvider:
        if self.provider is None:
            raise ProviderUnavailable("No wallet provider detected")
        return self.provider

    async def connect(self) -> ContractHandle:
        """
        Bind to the faucet with the provider's active account.

        Raises:
            ProviderUnavailable: No provider, or the provider exposes no account
            ConfigurationError: Faucet address unset or malformed
        """
        provider = self._require_provider()

        address = self.config.faucet_address
        if not address:
            raise ConfigurationError("Faucet contract address is undefined")
        if not is_address(address):
            raise ConfigurationError(f"Malformed faucet contract address: {address!r}")

        accounts = await provider.request_accounts()
        if not accounts:
            raise ProviderUnavailable("Wallet provider exposes no accounts")

        return ContractHandle(
            address=to_checksum_address(address),
            account=accounts[0],
            chain_id=self.config.chain_id,
            rpc_url=self.config.rpc_url,
        )

    async def _read(
        self,
        handle: ContractHandle,
        function_name: str,
        args: Optional[list] = None,
        abi: Optional[Abi] = None,
        address: Optional[str] = None,
    ) -> Any:
        abi = abi if abi is not None else handle.abi
        calldata = encode_function_call(abi, function_name, args or [])
        result = await self._require_provider().call(address or handle.address, calldata)
        return decode_function_result(abi, function_name, result)

    async def _submit(
        self, handle: ContractHandle, function_name: str, args: Optional[list] = None
    ) -> PendingTransaction:
        calldata = encode_function_call(handle.abi, function_name, args or [])
        tx_hash = await self._require_provider().send_transaction(
            handle.address, calldata, gas_limit=self.config.gas_limit
        )
        self._log.info("%s transaction sent: %s", function_name, tx_hash)
        return PendingTransaction(
            tx_hash,
            self._require_provider(),
            function_name=function_name,
            timeout=self.config.receipt_timeout,
        )

    async def _transact(
        self, function_name: str, args: Optional[list] = None
    ) -> ConfirmedResult:
        handle = await self.connect()
        pending = await self._submit(handle, function_name, args)
        result = await pending.wait()
        self._log.info("%s confirmed in block %s", function_name, result.block_number)
        return result

    def _scale(self, amount: AmountLike | None) -> int:
        return to_base_units(amount, self.config.decimals)

    def _unscale(self, raw: int) -> Decimal:
        return from_base_units(raw, self.config.decimals)

    # ---- user operations ----

    async def submit_request_funds(self, amount: AmountLike | None) -> PendingTransaction:
        """Validate ``amount`` and submit ``requestTokens`` without waiting."""
        raw_amount = self._scale(amount)
        handle = await self.connect()
        self._log.info("Requesting %s USDC from faucet", self._unscale(raw_amount))
        return await self._submit(handle, "requestTokens", [raw_amount])

    async def request_funds(self, amount: AmountLike | None) -> ConfirmedResult:
        """
        Request ``amount`` tokens (display units) from the faucet.

        Raises:
            InvalidAmount: Before any provider call, for a bad amount
            CallReverted: The faucet rejected the request (e.g. daily limit)
            ProviderUnavailable: No wallet, or the node dropped
        """
        pending = await self.submit_request_funds(amount)
        result = await pending.wait()
        self._log.info("Received tokens from faucet (tx %s)", result.tx_hash)
        return result

    async def query_remaining_allowance(self) -> Decimal:
        """Unused quota of the first provider account for the current period."""
        handle = await self.connect()
        accounts = await self._require_provider().request_accounts()
        if not accounts:
            raise ProviderUnavailable("Wallet provider exposes no accounts")
        user = accounts[0]

        self._log.debug("Getting allowance for %s", user)
        raw = await self._read(handle, "getRemainingAllowance", [user])
        allowance = self._unscale(raw)
        self._log.debug("Remaining allowance: %s", allowance)
        return allowance

    async def inspect_faucet_balance(self) -> FaucetBalanceReport:
        """Faucet balance cross-checked against the token contract.

        Never raises: on failure the report carries a zero balance and the
        error message.
        """
        expected = self.config.expected_token_address
        try:
            handle = await self.connect()

            token_address = await self._read(handle, "usdcToken")
            token_matches = None
            if expected:
                token_matches = same_address(token_address, expected)
                if not token_matches:
                    self._log.error(
                        "Token address mismatch: faucet %s uses %s, expected %s",
                        handle.address,
                        token_address,
                        expected,
                    )

            raw = await self._read(handle, "getFaucetBalance")
            balance = self._unscale(raw)
            self._log.debug("Faucet balance raw=%s formatted=%s", raw, balance)

            token_decimals = int(
                await self._read(handle, "decimals", abi=ERC20_ABI, address=token_address)
            )
            direct_raw = await self._read(
                handle, "balanceOf", [handle.address], abi=ERC20_ABI, address=token_address
            )
            direct_balance = from_base_units(direct_raw, token_decimals)
            if direct_balance != balance:
                self._log.warning(
                    "Faucet reports %s but token balanceOf shows %s",
                    balance,
                    direct_balance,
                )

            return FaucetBalanceReport(
                balance=balance,
                token_address=token_address,
                expected_token_address=expected,
                token_matches=token_matches,
                token_decimals=token_decimals,
                direct_balance=direct_balance,
            )
        except Exception as exc:
            self._log.exception("Failed to get faucet balance")
            return FaucetBalanceReport(
                balance=Decimal(0),
                expected_token_address=expected,
                error=str(exc) or type(exc).__name__,
            )

    async def query_faucet_balance(self) -> Decimal:
        """Tokens held by the faucet; ``Decimal(0)`` if the query fails."""
        report = await self.inspect_faucet_balance()
        return report.balance

    # ---- auto-mint ----

    async def trigger_auto_mint(self) -> ConfirmedResult:
        self._log.info("Triggering auto-mint check")
        return await self._transact("tryAutoMint")

    async def force_auto_mint(self) -> ConfirmedResult:
        """Owner only; other callers get CallReverted."""
        self._log.info("Forcing auto-mint")
        return await self._transact("forceAutoMint")

    async def query_time_until_next_mint(self) -> MintCountdown:
        try:
            handle = await self.connect()
            seconds = int(await self._read(handle, "timeUntilNextAutoMint"))
        except Exception as exc:
            self._log.exception("Failed to get time until next auto-mint")
            return MintCountdown(
                seconds=0,
                formatted="Error",
                is_available_now=False,
                error=str(exc) or type(exc).__name__,
            )

        formatted = format_duration(seconds)
        self._log.debug("Next auto-mint in %ss (%s)", seconds, formatted)
        return MintCountdown(
            seconds=seconds,
            formatted=formatted,
            is_available_now=seconds == 0,
        )

    async def query_last_auto_mint_time(self) -> Optional[datetime]:
        """UTC time of the last auto-mint, or None if it never ran."""
        handle = await self.connect()
        timestamp = int(await self._read(handle, "lastAutoMintTime"))
        if timestamp == 0:
            return None
        return datetime.fromtimestamp(timestamp, tz=timezone.utc)

    # ---- contract state / owner operations ----

    async def query_faucet_info(self) -> FaucetInfo:
        handle = await self.connect()
        owner = await self._read(handle, "owner")
        token_address = await self._read(handle, "usdcToken")
        max_per_day = await self._read(handle, "maxTokensPerDay")
        last_mint = int(await self._read(handle, "lastAutoMintTime"))

        if not is_address(owner) or not is_address(token_address):
            raise DecodeError(f"Unexpected address values: owner={owner!r} token={token_address!r}")

        return FaucetInfo(
            address=handle.address,
            owner=owner,
            token_address=token_address,
            max_tokens_per_day=self._unscale(max_per_day),
            last_auto_mint_time=(
                datetime.fromtimestamp(last_mint, tz=timezone.utc) if last_mint else None
            ),
        )

    async def withdraw_tokens(self, amount: AmountLike | None) -> ConfirmedResult:
        """Owner only: move ``amount`` tokens out of the faucet."""
        raw_amount = self._scale(amount)
        return await self._transact("withdrawTokens", [raw_amount])

    async def set_max_tokens_per_day(self, amount: AmountLike | None) -> ConfirmedResult:
        """Owner only: change the per-account daily quota."""
        raw_amount = self._scale(amount)
        return await self._transact("setMaxTokensPerDay", [raw_amount])
