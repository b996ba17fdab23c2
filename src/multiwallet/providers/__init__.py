"""
Chain provider implementations.

Available providers:
- BitcoinProvider: Unisat-style extension, extension-side coin selection
- EthereumProvider: EIP-1193 wallet plus JSON-RPC balance lookups
- SolanaProvider: Phantom-style wallet plus JSON-RPC balance/blockhash lookups
"""

from multiwallet.providers.base import ChainProvider
from multiwallet.providers.bitcoin import BitcoinProvider
from multiwallet.providers.ethereum import EthereumProvider
from multiwallet.providers.solana import SolanaProvider, build_transfer_transaction

__all__ = [
    "BitcoinProvider",
    "ChainProvider",
    "EthereumProvider",
    "SolanaProvider",
    "build_transfer_transaction",
]
