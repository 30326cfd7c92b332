__version__ = "0.1.0"

__all__ = [
    # Gateway
    "FaucetGateway",
    "ContractHandle",
    "PendingTransaction",
    "ConfirmedResult",
    "MintCountdown",
    "FaucetBalanceReport",
    "FaucetInfo",
    # Config
    "FaucetConfig",
    # Providers
    "WalletProvider",
    "LocalWalletProvider",
    "JsonRpcClient",
    # Amounts
    "to_base_units",
    "from_base_units",
    "format_duration",
    # Errors
    "FaucetError",
    "ProviderUnavailable",
    "ConfigurationError",
    "InvalidAmount",
    "CallReverted",
    "DecodeError",
    "TransactionTimeout",
    "RpcError",
]

from .amounts import format_duration, from_base_units, to_base_units
from .config import FaucetConfig
from .errors import (
    CallReverted,
    ConfigurationError,
    DecodeError,
    FaucetError,
    InvalidAmount,
    ProviderUnavailable,
    RpcError,
    TransactionTimeout,
)
from .faucet import (
    ConfirmedResult,
    ContractHandle,
    FaucetBalanceReport,
    FaucetGateway,
    FaucetInfo,
    MintCountdown,
    PendingTransaction,
)
from .pneuma.rpc import JsonRpcClient
from .sigil.provider import LocalWalletProvider, WalletProvider
