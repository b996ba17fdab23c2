"""
Tests for multiwallet.models
"""

import pytest
from pydantic import ValidationError

from multiwallet.errors import UnsupportedChainError
from multiwallet.models import ChainId, QRPayload, TransactionRequest, WalletRecord, parse_chain
from tests.fakes import ETH_ADDRESS


def test_chain_values():
    assert [c.value for c in ChainId] == ["bitcoin", "ethereum", "solana"]


def test_parse_chain_normalizes():
    assert parse_chain(ChainId.SOLANA) is ChainId.SOLANA
    assert parse_chain(" Ethereum ") == ChainId.ETHEREUM
    assert parse_chain("BITCOIN") == ChainId.BITCOIN


@pytest.mark.parametrize("value", ["dogecoin", "", None, 1, "evm"])
def test_parse_chain_rejects_unknown(value):
    with pytest.raises(UnsupportedChainError):
        parse_chain(value)


def test_unsupported_chain_is_value_error():
    with pytest.raises(ValueError):
        parse_chain("dogecoin")


def test_wallet_record_serialization():
    record = WalletRecord(address=ETH_ADDRESS, balance="1.5", chain="ethereum")
    assert record.chain is ChainId.ETHEREUM
    assert record.model_dump(mode="json") == {
        "address": ETH_ADDRESS,
        "balance": "1.5",
        "chain": "ethereum",
    }


def test_wallet_record_requires_address():
    with pytest.raises(ValidationError):
        WalletRecord(address="", balance="0", chain=ChainId.BITCOIN)


def test_wallet_record_rejects_unknown_chain():
    with pytest.raises(ValidationError):
        WalletRecord(address=ETH_ADDRESS, balance="0", chain="dogecoin")


def test_transaction_request_is_immutable():
    request = TransactionRequest(to=ETH_ADDRESS, amount="1", chain=ChainId.ETHEREUM)
    with pytest.raises(ValidationError):
        request.amount = "2"


def test_qr_payload_amount_optional():
    payload = QRPayload(address=ETH_ADDRESS, chain=ChainId.ETHEREUM)
    assert payload.amount is None
