"""
Tests for multiwallet.qr
"""

import json

from multiwallet.models import ChainId
from multiwallet.qr import build_payload, decode_payload, encode_payload
from tests.fakes import BTC_ADDRESS, ETH_ADDRESS


def test_encode_without_amount_omits_key():
    text = encode_payload(build_payload(ETH_ADDRESS, ChainId.ETHEREUM))
    data = json.loads(text)
    assert data == {"address": ETH_ADDRESS, "chain": "ethereum"}
    assert "amount" not in text


def test_empty_amount_treated_as_unset():
    payload = build_payload(ETH_ADDRESS, "ethereum", "")
    assert payload.amount is None
    assert "amount" not in json.loads(encode_payload(payload))


def test_decode_without_amount():
    payload = decode_payload(encode_payload(build_payload(BTC_ADDRESS, ChainId.BITCOIN)))
    assert payload is not None
    assert payload.chain is ChainId.BITCOIN
    assert payload.address == BTC_ADDRESS
    assert payload.amount is None
    assert "amount" not in payload.model_dump(exclude_none=True)


def test_encode_decode_with_amount():
    text = encode_payload(build_payload(ETH_ADDRESS, ChainId.ETHEREUM, "0.25"))
    assert json.loads(text)["amount"] == "0.25"
    payload = decode_payload(text)
    assert payload is not None
    assert payload.amount == "0.25"


def test_decode_numeric_amount_kept_as_string():
    payload = decode_payload(json.dumps({"address": BTC_ADDRESS, "chain": "bitcoin", "amount": 1}))
    assert payload is not None
    assert payload.amount == "1"


def test_decode_rejects_garbage():
    assert decode_payload("not json") is None
    assert decode_payload("[1, 2]") is None
    assert decode_payload(json.dumps({"chain": "bitcoin"})) is None
    assert decode_payload(json.dumps({"address": BTC_ADDRESS})) is None


def test_decode_rejects_unknown_chain():
    assert decode_payload(json.dumps({"address": BTC_ADDRESS, "chain": "dogecoin"})) is None


def test_decode_chain_is_case_insensitive():
    payload = decode_payload(json.dumps({"address": BTC_ADDRESS, "chain": " Bitcoin "}))
    assert payload is not None
    assert payload.chain == ChainId.BITCOIN
