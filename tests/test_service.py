"""
Tests for WalletService dispatch.
"""

from __future__ import annotations

import pytest

from multiwallet.capabilities import InjectedCapabilityProbe
from multiwallet.config import Settings
from multiwallet.errors import ConnectionRejectedError, UnsupportedChainError
from multiwallet.models import ChainId, TransactionRequest
from multiwallet.providers import BitcoinProvider, EthereumProvider, SolanaProvider
from multiwallet.service import WalletService
from tests.fakes import BTC_ADDRESS, ETH_ADDRESS, ETH_RECIPIENT, SOL_ADDRESS, StubProvider


def test_requires_provider_for_every_chain(stub_providers):
    del stub_providers[ChainId.SOLANA]
    with pytest.raises(ValueError, match="solana"):
        WalletService(stub_providers.values())


def test_rejects_duplicate_provider(stub_providers):
    providers = [*stub_providers.values(), StubProvider(ChainId.BITCOIN, BTC_ADDRESS)]
    with pytest.raises(ValueError, match="Duplicate"):
        WalletService(providers)


def test_from_settings_builds_default_providers():
    settings = Settings(solana_commitment="finalized", rpc_timeout=5.0)
    service = WalletService.from_settings(settings, InjectedCapabilityProbe())

    assert isinstance(service.provider(ChainId.BITCOIN), BitcoinProvider)
    ethereum = service.provider("ethereum")
    assert isinstance(ethereum, EthereumProvider)
    assert ethereum.rpc.url == settings.ethereum_rpc_url
    solana = service.provider(ChainId.SOLANA)
    assert isinstance(solana, SolanaProvider)
    assert solana.commitment == "finalized"
    assert solana.rpc.timeout == 5.0


@pytest.mark.asyncio
async def test_dispatches_by_chain(stub_providers):
    service = WalletService(stub_providers.values())

    assert await service.connect(ChainId.ETHEREUM) == ETH_ADDRESS
    assert await service.connect("solana") == SOL_ADDRESS
    assert await service.get_balance(BTC_ADDRESS, ChainId.BITCOIN) == "0.5"

    assert stub_providers[ChainId.ETHEREUM].connect_calls == 1
    assert stub_providers[ChainId.SOLANA].connect_calls == 1
    assert stub_providers[ChainId.BITCOIN].connect_calls == 0


@pytest.mark.asyncio
async def test_send_forwards_request(stub_providers):
    service = WalletService(stub_providers.values())
    request = TransactionRequest(to=ETH_RECIPIENT, amount="2", chain=ChainId.ETHEREUM)

    assert await service.send(request) == "tx-ethereum-1"
    assert stub_providers[ChainId.ETHEREUM].sent == [(ETH_RECIPIENT, str(2 * 10**18))]


@pytest.mark.asyncio
async def test_unknown_chain_raises(stub_providers):
    service = WalletService(stub_providers.values())
    with pytest.raises(UnsupportedChainError):
        await service.connect("dogecoin")
    with pytest.raises(UnsupportedChainError):
        await service.get_balance(ETH_ADDRESS, "evm-chain")


@pytest.mark.asyncio
async def test_provider_errors_are_forwarded_verbatim(stub_providers):
    error = ConnectionRejectedError("declined")
    stub_providers[ChainId.BITCOIN].connect_error = error
    service = WalletService(stub_providers.values())

    with pytest.raises(ConnectionRejectedError) as exc_info:
        await service.connect(ChainId.BITCOIN)
    assert exc_info.value is error
