"""
Base chain provider interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from loguru import logger

from multiwallet.address import is_valid_address
from multiwallet.amounts import chain_decimals, shorten_address, to_base_units
from multiwallet.capabilities import CapabilityProbe, ProviderRpcError
from multiwallet.constants import EIP1193_UNAUTHORIZED, EIP1193_USER_REJECTED
from multiwallet.errors import (
    AmountError,
    ConnectionRejectedError,
    InsufficientFundsError,
    InvalidRecipientError,
    MultiWalletError,
    RejectedBySignerError,
    RpcError,
    TransactionFailedError,
    WalletNotFoundError,
)
from multiwallet.models import ChainId

_REJECTION_MARKERS = (
    "user rejected",
    "user denied",
    "user canceled",
    "user cancelled",
    "rejected by user",
    "rejected by the user",
)
_INSUFFICIENT_MARKERS = ("insufficient funds", "insufficient balance", "insufficient lamports")


def _is_rejection(error: Exception) -> bool:
    if isinstance(error, ProviderRpcError) and error.code in (
        EIP1193_USER_REJECTED,
        EIP1193_UNAUTHORIZED,
    ):
        return True
    text = str(error).lower()
    return any(marker in text for marker in _REJECTION_MARKERS)


def _is_insufficient_funds(error: Exception) -> bool:
    text = str(error).lower()
    return any(marker in text for marker in _INSUFFICIENT_MARKERS)


class ChainProvider(ABC):
    """
    Adapter between one chain's wallet capability and the uniform contract:

    - connect() -> address
    - get_balance(address) -> decimal string, never raises
    - send(to, amount) -> transaction hash

    Subclasses implement the chain-specific ``_connect``, ``_fetch_balance``
    and ``_send``; input checks and error translation live here.
    """

    chain: ChainId
    wallet_name: str = "wallet"

    def __init__(self, probe: CapabilityProbe):
        self.probe = probe

    @property
    def decimals(self) -> int:
        return chain_decimals(self.chain)

    def capability(self) -> Any:
        """Look up the injected capability, failing if it is not installed."""
        capability = self.probe.probe(self.chain)
        if capability is None:
            raise WalletNotFoundError(
                f"{self.wallet_name} not found. Please install the {self.wallet_name} extension."
            )
        return capability

    async def connect(self) -> str:
        """
        Request account access from the wallet.

        Raises:
            WalletNotFoundError: If the capability is absent
            ConnectionRejectedError: If the user or extension declines
        """
        capability = self.capability()
        try:
            address = await self._connect(capability)
        except MultiWalletError:
            raise
        except Exception as e:
            logger.error(f"Failed to connect {self.chain.value} wallet: {e}")
            raise ConnectionRejectedError(
                f"Failed to connect {self.chain.value} wallet: {e}"
            ) from e

        if not address:
            raise ConnectionRejectedError(f"{self.wallet_name} returned no account")
        logger.info(f"Connected {self.chain.value} wallet {shorten_address(address)}")
        return address

    async def get_balance(self, address: str) -> str:
        """
        Balance of ``address`` in display units.

        Lookup errors are logged and reported as "0" so that a failing
        endpoint degrades the display instead of failing the caller.
        """
        try:
            return await self._fetch_balance(address)
        except Exception as e:
            logger.warning(
                f"Error getting {self.chain.value} balance for {shorten_address(address)}: {e}"
            )
            return "0"

    async def send(self, to: str, amount: str) -> str:
        """
        Transfer ``amount`` of the native asset to ``to``.

        Raises:
            InvalidRecipientError: If ``to`` is not a valid address for this chain
            AmountError: If ``amount`` is malformed or zero
            WalletNotFoundError: If the capability is absent
            InsufficientFundsError, RejectedBySignerError, TransactionFailedError:
                On chain or signer failures
        """
        if not is_valid_address(to, self.chain):
            raise InvalidRecipientError(f"Invalid {self.chain.value} address: {to!r}")
        units = to_base_units(amount, self.chain)
        if units == 0:
            raise AmountError("Amount must be greater than zero")

        capability = self.capability()
        logger.info(f"Sending {amount} on {self.chain.value} to {shorten_address(to)}")
        try:
            tx_hash = await self._send(capability, to, units)
        except Exception as e:
            raise self._translate_send_error(e) from e

        logger.info(f"{self.chain.value} transaction submitted: {tx_hash}")
        return tx_hash

    def _translate_send_error(self, error: Exception) -> Exception:
        if isinstance(error, MultiWalletError) and not isinstance(error, RpcError):
            return error
        logger.error(f"{self.chain.value} transaction failed: {error}")
        if _is_insufficient_funds(error):
            return InsufficientFundsError(f"{self.chain.value} transaction failed: {error}")
        if _is_rejection(error):
            return RejectedBySignerError(f"{self.chain.value} transaction rejected: {error}")
        return TransactionFailedError(f"{self.chain.value} transaction failed: {error}")

    @abstractmethod
    async def _connect(self, capability: Any) -> str:
        """Request accounts from the capability, returning the primary address"""

    @abstractmethod
    async def _fetch_balance(self, address: str) -> str:
        """Look up a balance in display units; may raise"""

    @abstractmethod
    async def _send(self, capability: Any, to: str, units: int) -> str:
        """Build and submit a transfer of ``units`` base units, returning its hash"""

    async def close(self) -> None:
        """Release network resources"""
        pass
