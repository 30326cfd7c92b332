"""
Error taxonomy for the Fontis faucet gateway.

Every error carries an ``exit_code`` so the CLI can map failures to
distinct process exit statuses.
"""

from __future__ import annotations

from typing import Any, Optional


class FaucetError(RuntimeError):
    exit_code: int = 1


class ProviderUnavailable(FaucetError):
    """No wallet/signing capability, or the node could not be reached."""

    exit_code = 2


class ConfigurationError(FaucetError):
    exit_code = 3


class InvalidAmount(FaucetError, ValueError):
    exit_code = 4


class CallReverted(FaucetError):
    """The remote contract rejected the call."""

    exit_code = 5

    def __init__(
        self,
        message: str,
        reason: Optional[str] = None,
        tx_hash: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.reason = reason
        self.tx_hash = tx_hash


class DecodeError(FaucetError):
    exit_code = 6


class TransactionTimeout(FaucetError):
    exit_code = 7

    def __init__(self, message: str, tx_hash: Optional[str] = None) -> None:
        super().__init__(message)
        self.tx_hash = tx_hash


class RpcError(FaucetError):
    exit_code = 8

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        data: Any = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.data = data
