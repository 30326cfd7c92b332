"""
ABI definitions for the USDCAutoFaucet contract and its ERC-20 token.

The faucet is a pre-deployed contract, so its ABI is pinned here rather than
loaded from a build artifact. Function names and argument types must match the
deployed bytecode exactly; any drift shows up as decode failures.
"""

from __future__ import annotations

from typing import Any, Sequence

Abi = Sequence[dict[str, Any]]


def _fn(
    name: str,
    inputs: list[tuple[str, str]] | None = None,
    outputs: list[str] | None = None,
    mutability: str = "view",
) -> dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "inputs": [{"name": n, "type": t} for n, t in (inputs or [])],
        "outputs": [{"name": "", "type": t} for t in (outputs or [])],
        "stateMutability": mutability,
    }


# ---------------------------------------------------------------------------
# USDCAutoFaucet
# ---------------------------------------------------------------------------
FAUCET_ABI: Abi = (
    # User functions
    _fn("requestTokens", [("amount", "uint256")], mutability="nonpayable"),
    _fn("getRemainingAllowance", [("user", "address")], ["uint256"]),
    _fn("getFaucetBalance", outputs=["uint256"]),
    # Auto-mint
    _fn("tryAutoMint", mutability="nonpayable"),
    _fn("timeUntilNextAutoMint", outputs=["uint256"]),
    _fn("lastAutoMintTime", outputs=["uint256"]),
    # Owner only
    _fn("forceAutoMint", mutability="nonpayable"),
    _fn("withdrawTokens", [("amount", "uint256")], mutability="nonpayable"),
    _fn(
        "setMaxTokensPerDay",
        [("_maxTokensPerDay", "uint256")],
        mutability="nonpayable",
    ),
    # Public state
    _fn("usdcToken", outputs=["address"]),
    _fn("owner", outputs=["address"]),
    _fn("maxTokensPerDay", outputs=["uint256"]),
)

# ---------------------------------------------------------------------------
# Minimal ERC-20 ABI (balanceOf, decimals)
# ---------------------------------------------------------------------------
ERC20_ABI: Abi = (
    _fn("balanceOf", [("account", "address")], ["uint256"]),
    _fn("decimals", outputs=["uint8"]),
)


def find_function(abi: Abi, function_name: str) -> dict[str, Any]:
    """
    Look up a function entry by name.

    Raises:
        ValueError: If the function is not in the ABI
    """
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == function_name:
            return entry
    raise ValueError(f"Function {function_name} not found in ABI")


def function_signature(entry: dict[str, Any]) -> str:
    """Canonical signature used for the selector, e.g. ``requestTokens(uint256)``."""
    input_types = [inp["type"] for inp in entry.get("inputs", [])]
    return f"{entry['name']}({','.join(input_types)})"
