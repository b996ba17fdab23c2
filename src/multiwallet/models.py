"""
Core data models using Pydantic for validation and serialization.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from multiwallet.errors import UnsupportedChainError


class ChainId(str, Enum):
    BITCOIN = "bitcoin"
    ETHEREUM = "ethereum"
    SOLANA = "solana"


def parse_chain(value: Any) -> ChainId:
    """
    Coerce an external chain identifier into a ChainId.

    Accepts ChainId members and strings (case-insensitive, surrounding
    whitespace ignored). Anything else raises UnsupportedChainError, since
    chain identifiers can arrive from untrusted input such as scanned QR codes.
    """
    if isinstance(value, ChainId):
        return value
    if isinstance(value, str):
        try:
            return ChainId(value.strip().lower())
        except ValueError:
            pass
    raise UnsupportedChainError(f"Unsupported chain: {value!r}")


class WalletRecord(BaseModel):
    """A connected wallet: one per chain in a session."""

    address: str = Field(..., min_length=1)
    balance: str = "0"
    chain: ChainId


class TransactionRequest(BaseModel):
    """A single native-asset transfer, constructed per send."""

    model_config = ConfigDict(frozen=True)

    to: str
    amount: str
    chain: ChainId


class QRPayload(BaseModel):
    """Receive request encoded into a QR code. ``amount`` is optional."""

    model_config = ConfigDict(frozen=True)

    address: str = Field(..., min_length=1)
    chain: ChainId
    amount: str | None = None
