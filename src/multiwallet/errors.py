"""
Error taxonomy for wallet operations.

Connect and send failures propagate to the caller as one of these types.
Balance lookups never raise them (see ChainProvider.get_balance).
"""

from __future__ import annotations


class MultiWalletError(Exception):
    """Base class for all wallet aggregator errors."""


class WalletNotFoundError(MultiWalletError):
    """The wallet capability for a chain is not installed/injected."""


class ConnectionRejectedError(MultiWalletError):
    """The user or the wallet extension declined the connection request."""


class UnsupportedChainError(MultiWalletError, ValueError):
    """A chain identifier outside the supported set was supplied."""


class InvalidRecipientError(MultiWalletError, ValueError):
    """Recipient address does not match the chain's address format."""


class AmountError(MultiWalletError, ValueError):
    """Amount string is malformed, negative or too precise for the chain."""


class InsufficientFundsError(MultiWalletError):
    """The wallet does not hold enough funds to cover the transfer."""


class RejectedBySignerError(MultiWalletError):
    """The signer (user or extension) refused to sign the transaction."""


class TransactionFailedError(MultiWalletError):
    """Transaction construction or broadcast failed for another reason."""


class WalletNotConnectedError(MultiWalletError):
    """Operation refers to a chain that has no connected wallet."""


class RpcError(MultiWalletError):
    """JSON-RPC endpoint returned an error object."""

    def __init__(self, code: int | str, message: str):
        super().__init__(f"RPC error {code}: {message}")
        self.code = code
        self.message = message
