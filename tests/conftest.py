"""
Test configuration for multiwallet tests.
"""

from __future__ import annotations

import pytest

from multiwallet.models import ChainId
from tests.fakes import BTC_ADDRESS, ETH_ADDRESS, SOL_ADDRESS, StubProvider


@pytest.fixture
def stub_providers() -> dict[ChainId, StubProvider]:
    return {
        ChainId.BITCOIN: StubProvider(ChainId.BITCOIN, BTC_ADDRESS, "0.5"),
        ChainId.ETHEREUM: StubProvider(ChainId.ETHEREUM, ETH_ADDRESS, "1.5"),
        ChainId.SOLANA: StubProvider(ChainId.SOLANA, SOL_ADDRESS, "12"),
    }
