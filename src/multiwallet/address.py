"""
Lexical address validation per chain.

Only the shape of an address is checked (prefix, length, alphabet). No
checksum is verified, so a well-formed address that does not exist on chain
still passes.
"""

from __future__ import annotations

import re
from typing import Any

from multiwallet.errors import UnsupportedChainError
from multiwallet.models import ChainId, parse_chain

BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"

_BASE58 = "[1-9A-HJ-NP-Za-km-z]"

_ETHEREUM_RE = re.compile(r"0x[0-9a-fA-F]{40}")
_SOLANA_RE = re.compile(_BASE58 + r"{32,44}")
# Legacy P2PKH (1...) / P2SH (3...) or bech32 segwit (bc1...)
_BITCOIN_BASE58_RE = re.compile(r"[13]" + _BASE58 + r"{25,34}")
_BITCOIN_SEGWIT_RE = re.compile(r"bc1[a-z0-9]{39,59}")


def _is_valid_bitcoin(address: str) -> bool:
    return bool(_BITCOIN_BASE58_RE.fullmatch(address) or _BITCOIN_SEGWIT_RE.fullmatch(address))


def _is_valid_ethereum(address: str) -> bool:
    return _ETHEREUM_RE.fullmatch(address) is not None


def _is_valid_solana(address: str) -> bool:
    return _SOLANA_RE.fullmatch(address) is not None


_VALIDATORS = {
    ChainId.BITCOIN: _is_valid_bitcoin,
    ChainId.ETHEREUM: _is_valid_ethereum,
    ChainId.SOLANA: _is_valid_solana,
}


def is_valid_address(address: Any, chain: ChainId | str) -> bool:
    """
    Check whether ``address`` has the lexical shape of an address on ``chain``.

    Unknown chains and non-string addresses are always invalid.
    """
    if not isinstance(address, str) or not address:
        return False
    try:
        chain_id = parse_chain(chain)
    except UnsupportedChainError:
        return False
    return _VALIDATORS[chain_id](address)
