"""
Wallet session: the set of connected wallets and the active selection.

The session owns every WalletRecord. It holds at most one record per chain,
and whenever the set is non-empty the active selection names one of its
members. The record set is persisted after every change.
"""

from __future__ import annotations

import asyncio
from typing import Any

from loguru import logger
from pydantic import ValidationError

from multiwallet.address import is_valid_address
from multiwallet.amounts import shorten_address, to_base_units
from multiwallet.constants import STATE_SCHEMA_VERSION, STORAGE_KEY
from multiwallet.errors import AmountError, InvalidRecipientError, WalletNotConnectedError
from multiwallet.models import ChainId, QRPayload, TransactionRequest, WalletRecord, parse_chain
from multiwallet.qr import build_payload
from multiwallet.service import WalletService
from multiwallet.storage import KeyValueStore, MemoryStore


def decode_state(raw: Any) -> list[WalletRecord]:
    """
    Decode a persisted state document into wallet records.

    Version 1 documents are ``{"version": 1, "wallets": [...]}``. A bare list
    is the older unversioned layout and is read as-is. Unknown versions and
    invalid records are dropped; duplicate chains keep the last record.
    """
    if raw is None:
        return []

    if isinstance(raw, list):
        logger.info("Migrating unversioned wallet state")
        items = raw
    elif isinstance(raw, dict):
        version = raw.get("version")
        if version != STATE_SCHEMA_VERSION:
            logger.warning(f"Discarding wallet state with unknown version {version!r}")
            return []
        items = raw.get("wallets") or []
        if not isinstance(items, list):
            logger.warning("Discarding wallet state: 'wallets' is not a list")
            return []
    else:
        logger.warning(f"Discarding wallet state of type {type(raw).__name__}")
        return []

    records: list[WalletRecord] = []
    for item in items:
        try:
            record = WalletRecord.model_validate(item)
        except ValidationError as e:
            logger.warning(f"Skipping invalid persisted wallet: {e.error_count()} error(s)")
            continue
        records = [r for r in records if r.chain != record.chain]
        records.append(record)
    return records


def encode_state(wallets: list[WalletRecord]) -> dict[str, Any]:
    """Encode wallet records as a version 1 state document."""
    return {
        "version": STATE_SCHEMA_VERSION,
        "wallets": [w.model_dump(mode="json") for w in wallets],
    }


class WalletSession:
    """
    Long-lived session over connected wallets.

    Concurrent connects for different chains run independently. A connect for
    a chain that already has one in flight joins the pending attempt instead
    of issuing a second request to the wallet.
    """

    def __init__(self, service: WalletService, store: KeyValueStore | None = None):
        self.service = service
        self.store = store if store is not None else MemoryStore()
        self._wallets: list[WalletRecord] = []
        self._active_chain: ChainId | None = None
        self._pending: dict[ChainId, asyncio.Task[WalletRecord]] = {}
        self._loaded = False

    @property
    def wallets(self) -> list[WalletRecord]:
        return list(self._wallets)

    @property
    def active_wallet(self) -> WalletRecord | None:
        if self._active_chain is None:
            return None
        return self.get(self._active_chain)

    @property
    def is_connecting(self) -> bool:
        return bool(self._pending)

    def get(self, chain: ChainId | str) -> WalletRecord | None:
        """Get the connected wallet for a chain, if any"""
        chain_id = parse_chain(chain)
        for wallet in self._wallets:
            if wallet.chain == chain_id:
                return wallet
        return None

    def load(self) -> list[WalletRecord]:
        """
        Rehydrate wallets from the store. Only the first call reads.

        Every operation that reads or changes the wallet set calls this first,
        so a session used without an explicit load never overwrites saved
        wallets.
        """
        if self._loaded:
            return self.wallets
        self._loaded = True
        self._wallets = decode_state(self.store.get(STORAGE_KEY))
        self._active_chain = self._wallets[0].chain if self._wallets else None
        logger.info(f"Loaded {len(self._wallets)} saved wallet(s)")
        return self.wallets

    def _persist(self) -> None:
        self.store.set(STORAGE_KEY, encode_state(self._wallets))

    async def connect(self, chain: ChainId | str) -> WalletRecord:
        """
        Connect the wallet for ``chain`` and make it active.

        Any existing record for the chain is replaced.

        Raises:
            UnsupportedChainError, WalletNotFoundError, ConnectionRejectedError
        """
        chain_id = parse_chain(chain)
        self.load()
        task = self._pending.get(chain_id)
        if task is None:
            task = asyncio.create_task(self._connect(chain_id))
            self._pending[chain_id] = task
            task.add_done_callback(lambda t, c=chain_id: self._clear_pending(c, t))
        else:
            logger.debug(f"Joining in-flight {chain_id.value} connect")
        return await asyncio.shield(task)

    def _clear_pending(self, chain: ChainId, task: asyncio.Task) -> None:
        if self._pending.get(chain) is task:
            del self._pending[chain]

    async def _connect(self, chain: ChainId) -> WalletRecord:
        address = await self.service.connect(chain)
        balance = await self.service.get_balance(address, chain)

        record = WalletRecord(address=address, balance=balance, chain=chain)
        self._wallets = [w for w in self._wallets if w.chain != chain]
        self._wallets.append(record)
        self._active_chain = chain
        self._persist()

        logger.info(f"Wallet {shorten_address(address)} on {chain.value} added ({balance})")
        return record

    async def disconnect(self, chain: ChainId | str) -> bool:
        """
        Forget the wallet for ``chain``.

        If it was active, the first remaining wallet becomes active.
        Returns False if no wallet was connected for the chain.
        """
        chain_id = parse_chain(chain)
        self.load()
        if self.get(chain_id) is None:
            logger.debug(f"No {chain_id.value} wallet to disconnect")
            return False

        self._wallets = [w for w in self._wallets if w.chain != chain_id]
        if self._active_chain == chain_id:
            self._active_chain = self._wallets[0].chain if self._wallets else None
        self._persist()

        logger.info(f"Disconnected {chain_id.value} wallet")
        return True

    async def set_active(self, wallet: WalletRecord | ChainId | str) -> WalletRecord:
        """
        Make a connected wallet the active one.

        Raises:
            WalletNotConnectedError: If the chain has no connected wallet
        """
        chain_id = wallet.chain if isinstance(wallet, WalletRecord) else parse_chain(wallet)
        self.load()
        record = self.get(chain_id)
        if record is None:
            raise WalletNotConnectedError(f"No {chain_id.value} wallet connected")
        self._active_chain = chain_id
        return record

    async def refresh_balances(self) -> list[WalletRecord]:
        """
        Re-fetch every wallet's balance concurrently.

        A failing lookup leaves that wallet's previous balance in place and
        does not affect the others.
        """
        self.load()
        wallets = list(self._wallets)
        if not wallets:
            return []

        results = await asyncio.gather(
            *(self.service.get_balance(w.address, w.chain) for w in wallets),
            return_exceptions=True,
        )

        for wallet, result in zip(wallets, results):
            if isinstance(result, BaseException):
                logger.warning(f"Error refreshing balance for {wallet.chain.value}: {result}")
                continue
            wallet.balance = result

        self._persist()
        return self.wallets

    async def send(self, request: TransactionRequest) -> str:
        """
        Send funds from the connected wallet on ``request.chain``.

        Recipient and amount are checked before anything is dispatched, and
        session state is never modified.

        Raises:
            InvalidRecipientError: If the recipient is not a valid address
            AmountError: If the amount is malformed or zero
            WalletNotConnectedError: If no wallet is connected for the chain
        """
        if not is_valid_address(request.to, request.chain):
            raise InvalidRecipientError(
                f"Invalid {request.chain.value} address: {request.to!r}"
            )
        if to_base_units(request.amount, request.chain) == 0:
            raise AmountError("Amount must be greater than zero")
        self.load()
        if self.get(request.chain) is None:
            raise WalletNotConnectedError(f"No {request.chain.value} wallet connected")

        return await self.service.send(request)

    def receive_payload(self, amount: str | None = None) -> QRPayload:
        """Payment request for the active wallet, for rendering as a QR code."""
        self.load()
        wallet = self.active_wallet
        if wallet is None:
            raise WalletNotConnectedError("No active wallet")
        if amount:
            to_base_units(amount, wallet.chain)
        return build_payload(wallet.address, wallet.chain, amount)

    async def close(self) -> None:
        await self.service.close()
