"""
Bitcoin provider backed by a Unisat-style wallet extension.

The extension owns coin selection, script construction, signing and
broadcast; this provider only converts amounts and forwards calls.
"""

from __future__ import annotations

from typing import Any

from multiwallet.amounts import from_base_units
from multiwallet.capabilities import BitcoinWalletCapability
from multiwallet.models import ChainId
from multiwallet.providers.base import ChainProvider


class BitcoinProvider(ChainProvider):
    chain = ChainId.BITCOIN
    wallet_name = "Bitcoin wallet (Unisat)"

    async def _connect(self, capability: BitcoinWalletCapability) -> str:
        accounts = await capability.request_accounts()
        return accounts[0] if accounts else ""

    async def _fetch_balance(self, address: str) -> str:
        # The extension reports the balance of its connected account; ``address``
        # is the one returned by connect().
        capability: BitcoinWalletCapability = self.capability()
        balance: dict[str, Any] = await capability.get_balance()
        return from_base_units(int(balance["total"]), self.chain)

    async def _send(self, capability: BitcoinWalletCapability, to: str, units: int) -> str:
        return await capability.send_bitcoin(to, units)
