"""
Fixed-point amount handling.

On-chain token quantities are integers scaled by ``10 ** decimals``.
Display quantities are ``decimal.Decimal``; conversion between the two is
exact and never goes through binary floating point.
"""

from __future__ import annotations

from decimal import Decimal, Inexact, InvalidOperation, localcontext
from typing import Union

from .errors import InvalidAmount

USDC_DECIMALS = 6
UINT256_MAX = 2**256 - 1

# uint256 has 78 decimal digits; leave room for the fractional part.
_PRECISION = 100
_UINT256_MAX_EXPONENT = len(str(UINT256_MAX)) - 1

AmountLike = Union[Decimal, int, str, float]


def parse_amount(amount: AmountLike | None) -> Decimal:
    """Parse a caller-supplied amount into a Decimal.

    Raises:
        InvalidAmount: If the amount is missing, not numeric or not finite.
    """
    if amount is None:
        raise InvalidAmount("Amount is required")
    if isinstance(amount, bool):
        raise InvalidAmount(f"Amount must be numeric, got {amount!r}")

    try:
        if isinstance(amount, Decimal):
            value = amount
        elif isinstance(amount, float):
            # repr() gives the shortest string that round-trips, so 0.1 -> "0.1"
            value = Decimal(repr(amount))
        else:
            value = Decimal(str(amount).strip())
    except (InvalidOperation, ValueError):
        raise InvalidAmount(f"Amount must be numeric, got {amount!r}") from None

    if not value.is_finite():
        raise InvalidAmount(f"Amount must be finite, got {amount!r}")
    return value


def to_base_units(amount: AmountLike | None, decimals: int = USDC_DECIMALS) -> int:
    """
    Convert a display amount into the on-chain scaled integer.

    Args:
        amount: Positive amount in display units (e.g. ``"1.5"`` USDC)
        decimals: Token decimals (default: 6)

    Returns:
        ``amount * 10 ** decimals`` as an int

    Raises:
        InvalidAmount: If the amount is missing, non-positive, carries more
            fractional digits than ``decimals`` or overflows uint256.
    """
    value = parse_amount(amount)
    if value <= 0:
        raise InvalidAmount(f"Amount must be positive, got {value}")
    # Reject by magnitude first so scaleb() never leaves the exponent range.
    if value.adjusted() + decimals > _UINT256_MAX_EXPONENT:
        raise InvalidAmount(f"Amount {value} does not fit in uint256")
    if value.adjusted() < -decimals:
        raise InvalidAmount(f"Amount {value} has more than {decimals} decimal places")

    with localcontext() as ctx:
        ctx.prec = _PRECISION
        ctx.traps[Inexact] = True
        try:
            scaled = value.scaleb(decimals)
        except Inexact:
            raise InvalidAmount(
                f"Amount {value} has more than {decimals} decimal places"
            ) from None
        if scaled != scaled.to_integral_value():
            raise InvalidAmount(
                f"Amount {value} has more than {decimals} decimal places"
            )
        raw = int(scaled)

    if raw > UINT256_MAX:
        raise InvalidAmount(f"Amount {value} does not fit in uint256")
    return raw


def from_base_units(raw: int, decimals: int = USDC_DECIMALS) -> Decimal:
    """Convert an on-chain scaled integer into a display Decimal."""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return Decimal(int(raw)).scaleb(-decimals)


def format_duration(seconds: int) -> str:
    """Break a duration down into days, hours and minutes.

    >>> format_duration(90061)
    '1 days, 1 hours, 1 minutes'
    """
    seconds = int(seconds)
    days = seconds // 86400
    hours = (seconds % 86400) // 3600
    minutes = (seconds % 3600) // 60
    return f"{days} days, {hours} hours, {minutes} minutes"
