"""
Chain-unification layer: one interface over the three chain providers.
"""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from multiwallet.capabilities import CapabilityProbe
from multiwallet.config import Settings
from multiwallet.errors import UnsupportedChainError
from multiwallet.models import ChainId, TransactionRequest, parse_chain
from multiwallet.providers import (
    BitcoinProvider,
    ChainProvider,
    EthereumProvider,
    SolanaProvider,
)
from multiwallet.rpc import JsonRpcClient


class WalletService:
    """
    Dispatches wallet operations to the provider for a chain.

    The service is constructed explicitly and handed to its consumers; there is
    no module-level instance. Provider failures are forwarded unchanged.
    """

    def __init__(self, providers: Iterable[ChainProvider]):
        self.providers: dict[ChainId, ChainProvider] = {}
        for provider in providers:
            if provider.chain in self.providers:
                raise ValueError(f"Duplicate provider for chain {provider.chain.value}")
            self.providers[provider.chain] = provider

        missing = [chain.value for chain in ChainId if chain not in self.providers]
        if missing:
            raise ValueError(f"No provider registered for: {', '.join(missing)}")

        logger.debug(f"Wallet service ready with {len(self.providers)} providers")

    @classmethod
    def from_settings(cls, settings: Settings, probe: CapabilityProbe) -> WalletService:
        """Build the default Bitcoin/Ethereum/Solana providers from configuration."""
        return cls(
            [
                BitcoinProvider(probe),
                EthereumProvider(
                    probe, JsonRpcClient(settings.ethereum_rpc_url, timeout=settings.rpc_timeout)
                ),
                SolanaProvider(
                    probe,
                    JsonRpcClient(settings.solana_rpc_url, timeout=settings.rpc_timeout),
                    commitment=settings.solana_commitment,
                ),
            ]
        )

    def provider(self, chain: ChainId | str) -> ChainProvider:
        """
        Get the provider for a chain.

        Raises:
            UnsupportedChainError: If ``chain`` is not a supported chain
        """
        chain_id = parse_chain(chain)
        provider = self.providers.get(chain_id)
        if provider is None:
            raise UnsupportedChainError(f"Unsupported chain: {chain_id.value}")
        return provider

    async def connect(self, chain: ChainId | str) -> str:
        """Connect the wallet for ``chain`` and return its address"""
        return await self.provider(chain).connect()

    async def get_balance(self, address: str, chain: ChainId | str) -> str:
        """Balance in display units; "0" if the lookup fails"""
        return await self.provider(chain).get_balance(address)

    async def send(self, request: TransactionRequest) -> str:
        """Submit a transfer and return its transaction hash"""
        return await self.provider(request.chain).send(request.to, request.amount)

    async def close(self) -> None:
        """Close all provider connections"""
        for provider in self.providers.values():
            await provider.close()
