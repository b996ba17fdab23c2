"""
QR receive-request payloads.

The payload is a compact JSON object ``{"address", "chain", "amount"?}``.
Rendering it as an image is left to the presentation layer.
"""

from __future__ import annotations

import json
from typing import Any

from loguru import logger
from pydantic import ValidationError

from multiwallet.errors import UnsupportedChainError
from multiwallet.models import ChainId, QRPayload, parse_chain


def build_payload(address: str, chain: ChainId | str, amount: str | None = None) -> QRPayload:
    """Create a payload, treating an empty amount as "no amount requested"."""
    return QRPayload(address=address, chain=chain, amount=amount or None)


def encode_payload(payload: QRPayload) -> str:
    """
    Serialize a payload for QR encoding.

    An unset amount is left out entirely rather than written as null or "".
    """
    data: dict[str, Any] = {"address": payload.address, "chain": payload.chain.value}
    if payload.amount:
        data["amount"] = payload.amount
    return json.dumps(data, separators=(",", ":"))


def decode_payload(text: str) -> QRPayload | None:
    """
    Parse scanned QR text into a payload.

    Returns None for anything that is not a JSON object carrying an address
    and a supported chain.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning(f"QR data is not valid JSON: {e}")
        return None

    if not isinstance(data, dict) or not data.get("address") or not data.get("chain"):
        logger.warning("QR data missing address or chain")
        return None

    try:
        chain = parse_chain(data["chain"])
    except UnsupportedChainError as e:
        logger.warning(f"QR data rejected: {e}")
        return None

    amount = data.get("amount")
    try:
        return QRPayload(
            address=data["address"],
            chain=chain,
            amount=str(amount) if amount not in (None, "") else None,
        )
    except ValidationError as e:
        logger.warning(f"QR data rejected: {e.error_count()} validation error(s)")
        return None
