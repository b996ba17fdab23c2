"""
multiwallet - Bitcoin, Ethereum and Solana wallets behind one interface

Provides address validation, amount conversion, chain providers wrapping
injected wallet capabilities, and a persisted wallet session.
"""

__version__ = "0.1.0"

from multiwallet.address import is_valid_address
from multiwallet.amounts import (
    format_currency,
    format_for_display,
    from_base_units,
    shorten_address,
    to_base_units,
)
from multiwallet.capabilities import CapabilityProbe, InjectedCapabilityProbe, ProviderRpcError
from multiwallet.errors import (
    AmountError,
    ConnectionRejectedError,
    InsufficientFundsError,
    InvalidRecipientError,
    MultiWalletError,
    RejectedBySignerError,
    RpcError,
    TransactionFailedError,
    UnsupportedChainError,
    WalletNotConnectedError,
    WalletNotFoundError,
)
from multiwallet.models import ChainId, QRPayload, TransactionRequest, WalletRecord, parse_chain
from multiwallet.qr import decode_payload, encode_payload
from multiwallet.service import WalletService
from multiwallet.session import WalletSession
from multiwallet.storage import JsonFileStore, KeyValueStore, MemoryStore

__all__ = [
    "AmountError",
    "CapabilityProbe",
    "ChainId",
    "ConnectionRejectedError",
    "InjectedCapabilityProbe",
    "InsufficientFundsError",
    "InvalidRecipientError",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "MultiWalletError",
    "ProviderRpcError",
    "QRPayload",
    "RejectedBySignerError",
    "RpcError",
    "TransactionFailedError",
    "TransactionRequest",
    "UnsupportedChainError",
    "WalletNotConnectedError",
    "WalletNotFoundError",
    "WalletRecord",
    "WalletService",
    "WalletSession",
    "decode_payload",
    "encode_payload",
    "format_currency",
    "format_for_display",
    "from_base_units",
    "is_valid_address",
    "parse_chain",
    "shorten_address",
    "to_base_units",
]
