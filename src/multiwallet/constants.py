"""
Chain and application constants.

Base-unit exponents are protocol facts:
- Bitcoin: 1 BTC = 10^8 satoshi
- Ethereum: 1 ETH = 10^18 wei
- Solana: 1 SOL = 10^9 lamports
"""

from __future__ import annotations

from multiwallet.models import ChainId

SATOSHI_DECIMALS = 8
WEI_DECIMALS = 18
LAMPORT_DECIMALS = 9

CHAIN_DECIMALS: dict[ChainId, int] = {
    ChainId.BITCOIN: SATOSHI_DECIMALS,
    ChainId.ETHEREUM: WEI_DECIMALS,
    ChainId.SOLANA: LAMPORT_DECIMALS,
}

CHAIN_SYMBOLS: dict[ChainId, str] = {
    ChainId.BITCOIN: "BTC",
    ChainId.ETHEREUM: "ETH",
    ChainId.SOLANA: "SOL",
}

# Names under which browser wallet extensions inject themselves
INJECTED_GLOBALS: dict[ChainId, str] = {
    ChainId.BITCOIN: "unisat",
    ChainId.ETHEREUM: "ethereum",
    ChainId.SOLANA: "solana",
}

# EIP-1193 provider error codes
EIP1193_USER_REJECTED = 4001
EIP1193_UNAUTHORIZED = 4100

# Persisted session state
STORAGE_KEY = "multiwallet.wallets"
STATE_SCHEMA_VERSION = 1

DISPLAY_PRECISION = 6
