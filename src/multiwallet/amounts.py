"""
Conversion between human decimal amounts and chain base units.

All arithmetic uses Decimal with a wide context so that 18-decimal amounts
survive exactly. Display helpers never raise: malformed input renders as zero.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, Inexact, InvalidOperation, Overflow, localcontext
from typing import Any

from multiwallet.constants import CHAIN_DECIMALS, CHAIN_SYMBOLS, DISPLAY_PRECISION
from multiwallet.errors import AmountError, UnsupportedChainError
from multiwallet.models import ChainId, parse_chain

# Enough digits for any uint256 wei amount
_PRECISION = 80
# Integer digits beyond this render as "0" rather than as a huge string
_MAX_DISPLAY_DIGITS = 1000


def _parse_decimal(value: Any) -> Decimal | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, (int, str)):
        try:
            parsed = Decimal(str(value).strip())
        except InvalidOperation:
            return None
    else:
        return None
    if not parsed.is_finite():
        return None
    return parsed


def _plain(value: Decimal) -> str:
    """Render a Decimal without exponent notation or trailing zeros."""
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("", "-0"):
        return "0"
    return text


def chain_decimals(chain: ChainId | str) -> int:
    """Number of fractional digits between one coin and its base unit."""
    return CHAIN_DECIMALS[parse_chain(chain)]


def to_base_units(amount: str, chain: ChainId | str) -> int:
    """
    Convert a decimal amount string into the chain's smallest unit.

    Examples:
        to_base_units("1.5", "bitcoin") == 150_000_000
        to_base_units("0.000000001", "solana") == 1

    Raises:
        AmountError: If the amount is malformed, negative, or has more
            fractional digits than the chain supports
        UnsupportedChainError: If the chain is unknown
    """
    decimals = chain_decimals(chain)
    parsed = _parse_decimal(amount)
    if parsed is None:
        raise AmountError(f"Invalid amount: {amount!r}")
    if parsed < 0:
        raise AmountError(f"Amount must not be negative: {amount!r}")
    if not parsed.is_zero() and parsed.adjusted() + decimals >= _PRECISION:
        raise AmountError(f"Amount too large: {amount!r}")

    with localcontext() as ctx:
        ctx.prec = _PRECISION
        # Lossy scaling (too many digits, or below the smallest exponent) must not round
        ctx.traps[Inexact] = True
        try:
            scaled = parsed.scaleb(decimals)
        except (Inexact, Overflow, InvalidOperation) as e:
            raise AmountError(f"Amount cannot be represented exactly: {amount!r}") from e
        if scaled != scaled.to_integral_value():
            raise AmountError(
                f"Amount {amount!r} has more than {decimals} decimal places "
                f"for {parse_chain(chain).value}"
            )
        return int(scaled)


def from_base_units(units: int, chain: ChainId | str) -> str:
    """Convert an integer base-unit amount into a plain decimal string."""
    decimals = chain_decimals(chain)
    if isinstance(units, bool) or not isinstance(units, int):
        raise AmountError(f"Base units must be an integer, got {units!r}")
    if units < 0:
        raise AmountError(f"Base units must not be negative: {units}")

    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return _plain(Decimal(units).scaleb(-decimals))


def format_for_display(balance: Any, precision: int = DISPLAY_PRECISION) -> str:
    """
    Render a balance with exactly ``precision`` fractional digits.

    Returns "0" for anything that does not parse as a finite number, or that
    has more than a thousand integer digits, so the caller can render it
    without error handling.
    """
    parsed = _parse_decimal(balance)
    if parsed is None:
        return "0"
    if not parsed.is_zero() and parsed.adjusted() >= _MAX_DISPLAY_DIGITS:
        return "0"
    with localcontext() as ctx:
        # Room for every integer digit plus the requested fraction
        ctx.prec = max(_PRECISION, parsed.adjusted() + precision + 2)
        try:
            quantized = parsed.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)
        except InvalidOperation:
            return "0"
        if quantized.is_zero():
            quantized = abs(quantized)
        return format(quantized, "f")


def chain_symbol(chain: ChainId | str) -> str:
    """Ticker for the chain's native asset, or "" for unknown chains."""
    try:
        return CHAIN_SYMBOLS[parse_chain(chain)]
    except UnsupportedChainError:
        return ""


def format_currency(amount: Any, chain: ChainId | str) -> str:
    """Display amount followed by the chain ticker, e.g. "1.500000 ETH"."""
    symbol = chain_symbol(chain)
    if _parse_decimal(amount) is None:
        return f"0 {symbol}"
    return f"{format_for_display(amount)} {symbol}"


def shorten_address(address: str, chars: int = 4) -> str:
    """Abbreviate an address as prefix...suffix for compact display."""
    if not address:
        return ""
    if len(address) <= 2 * chars + 2:
        return address
    return f"{address[: chars + 2]}...{address[-chars:]}"
