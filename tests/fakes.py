"""
Fake wallet capabilities, mocked RPC endpoints and stub providers for tests.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable
from typing import Any

import httpx

from multiwallet.capabilities import InjectedCapabilityProbe
from multiwallet.models import ChainId
from multiwallet.providers.base import ChainProvider
from multiwallet.rpc import JsonRpcClient

ETH_ADDRESS = "0xABCDEF0123456789ABCDEF0123456789ABCDEF01"
ETH_RECIPIENT = "0x1111111111111111111111111111111111111111"
BTC_ADDRESS = "1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa"
BTC_SEGWIT_ADDRESS = "bc1qar0srrr7xfkvy5l643lydnw9re59gtzzwf5mdq"
SOL_ADDRESS = "SysvarRent111111111111111111111111111111111"
SOL_RECIPIENT = "Vote111111111111111111111111111111111111111"
SOL_BLOCKHASHES = [
    "SysvarC1ock11111111111111111111111111111111",
    "SysvarRecentB1ockHashes11111111111111111111",
]


class FakeBitcoinWallet:
    """Unisat-style capability."""

    def __init__(self, accounts: list[str] | None = None, total: int = 0):
        self.accounts = [BTC_ADDRESS] if accounts is None else accounts
        self.total = total
        self.error: Exception | None = None
        self.sent: list[tuple[str, int]] = []

    async def request_accounts(self) -> list[str]:
        if self.error:
            raise self.error
        return self.accounts

    async def get_balance(self) -> dict[str, int]:
        return {"confirmed": self.total, "unconfirmed": 0, "total": self.total}

    async def send_bitcoin(self, to: str, satoshis: int) -> str:
        if self.error:
            raise self.error
        self.sent.append((to, satoshis))
        return "ab" * 32


class FakeEthereumWallet:
    """EIP-1193 capability recording every request."""

    def __init__(self, accounts: list[str] | None = None):
        self.accounts = [ETH_ADDRESS] if accounts is None else accounts
        self.requests: list[tuple[str, list]] = []
        self.errors: dict[str, Exception] = {}

    async def request(self, method: str, params: list | None = None) -> Any:
        self.requests.append((method, params or []))
        if method in self.errors:
            raise self.errors[method]
        if method in ("eth_requestAccounts", "eth_accounts"):
            return self.accounts
        if method == "eth_sendTransaction":
            return "0x" + "cd" * 32
        raise AssertionError(f"unexpected method {method}")

    @property
    def methods(self) -> list[str]:
        return [method for method, _ in self.requests]


class FakeSolanaWallet:
    """Phantom-style capability."""

    def __init__(self, public_key: str | None = SOL_ADDRESS, is_phantom: bool = True):
        self.is_phantom = is_phantom
        self.public_key = public_key
        self.error: Exception | None = None
        self.transactions: list[Any] = []

    async def connect(self) -> str:
        if self.error:
            raise self.error
        if self.public_key is None:
            self.public_key = SOL_ADDRESS
        return self.public_key

    async def sign_and_send_transaction(self, transaction: Any) -> dict[str, str]:
        if self.error:
            raise self.error
        self.transactions.append(transaction)
        return {"signature": f"sig{len(self.transactions)}"}


class RpcRecorder:
    """JSON-RPC handler for httpx.MockTransport, answering from a method table."""

    def __init__(self, responses: dict[str, Any | Callable[[list], Any]]):
        self.responses = responses
        self.calls: list[tuple[str, list]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        method, params = body["method"], body["params"]
        self.calls.append((method, params))
        answer = self.responses.get(method)
        if isinstance(answer, httpx.Response):
            return answer
        if callable(answer):
            answer = answer(params)
        if isinstance(answer, dict) and "error" in answer:
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], **answer})
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": answer})

    def methods(self) -> list[str]:
        return [method for method, _ in self.calls]

    def client(self) -> JsonRpcClient:
        return JsonRpcClient("https://rpc.test", transport=httpx.MockTransport(self))


class StubProvider(ChainProvider):
    """
    Provider with canned results for session/service tests.

    ``balance_error`` makes get_balance raise instead of degrading to "0",
    standing in for a provider that does not honour the soft-fail contract.
    """

    wallet_name = "stub wallet"

    def __init__(self, chain: ChainId, address: str, balance: str = "0"):
        super().__init__(InjectedCapabilityProbe())
        self.chain = chain
        self.address = address
        self.balance = balance
        self.connect_error: Exception | None = None
        self.balance_error: Exception | None = None
        self.connect_calls = 0
        self.balance_calls = 0
        self.sent: list[tuple[str, str]] = []
        self.gate: asyncio.Event | None = None

    def capability(self) -> Any:
        return object()

    async def get_balance(self, address: str) -> str:
        self.balance_calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.balance_error is not None:
            raise self.balance_error
        return await super().get_balance(address)

    async def _connect(self, capability: Any) -> str:
        self.connect_calls += 1
        await asyncio.sleep(0)
        if self.connect_error is not None:
            raise self.connect_error
        return self.address

    async def _fetch_balance(self, address: str) -> str:
        return self.balance

    async def _send(self, capability: Any, to: str, units: int) -> str:
        self.sent.append((to, str(units)))
        return f"tx-{self.chain.value}-{len(self.sent)}"
