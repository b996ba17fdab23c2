"""
Contracts for externally injected wallet capabilities.

Each chain's wallet extension is a black box exposing connect, balance and
sign-and-send primitives. Providers never look for them directly: a
CapabilityProbe reports whether one is present, which keeps detection
replaceable in tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from multiwallet.constants import INJECTED_GLOBALS
from multiwallet.models import ChainId


class ProviderRpcError(Exception):
    """
    Error raised by a wallet capability (EIP-1193 shape).

    Well-known codes: 4001 user rejected, 4100 unauthorized.
    """

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


@runtime_checkable
class BitcoinWalletCapability(Protocol):
    """Unisat-style Bitcoin wallet."""

    async def request_accounts(self) -> list[str]: ...

    async def get_balance(self) -> dict[str, int]:
        """Balance of the connected account in satoshis: confirmed/unconfirmed/total."""
        ...

    async def send_bitcoin(self, to: str, satoshis: int) -> str:
        """Select coins, sign and broadcast. Returns the txid."""
        ...


@runtime_checkable
class EthereumWalletCapability(Protocol):
    """EIP-1193 provider."""

    async def request(self, method: str, params: list | None = None) -> Any: ...


@runtime_checkable
class SolanaWalletCapability(Protocol):
    """Phantom-style Solana wallet."""

    is_phantom: bool
    public_key: str | None

    async def connect(self) -> str:
        """Request access. Returns the base58 public key."""
        ...

    async def sign_and_send_transaction(self, transaction: Any) -> dict[str, str]:
        """Sign and submit an unsigned transaction. Returns {"signature": ...}."""
        ...


class CapabilityProbe(ABC):
    """Reports whether a chain's wallet capability is available."""

    @abstractmethod
    def probe(self, chain: ChainId) -> Any | None:
        """Return the capability for ``chain``, or None if it is absent."""


class InjectedCapabilityProbe(CapabilityProbe):
    """
    Probe backed by a namespace of injected globals.

    The namespace maps well-known global names (``unisat``, ``ethereum``,
    ``solana``) to capability objects, mirroring what wallet extensions inject
    into a page. It is consulted on every probe, so capabilities added after
    construction are picked up.
    """

    def __init__(self, namespace: Mapping[str, Any] | None = None):
        self.namespace: Mapping[str, Any] = namespace if namespace is not None else {}

    def probe(self, chain: ChainId) -> Any | None:
        capability = self.namespace.get(INJECTED_GLOBALS[chain])
        if capability is None:
            return None
        # Other Solana wallets inject under the same name; only Phantom is supported
        if chain == ChainId.SOLANA and not getattr(capability, "is_phantom", False):
            return None
        return capability
