"""
Ethereum provider backed by an EIP-1193 wallet (MetaMask and compatibles).

Balances are read from a public JSON-RPC endpoint; transfers are signed and
broadcast by the wallet via eth_sendTransaction.
"""

from __future__ import annotations

from multiwallet.amounts import from_base_units
from multiwallet.capabilities import CapabilityProbe, EthereumWalletCapability
from multiwallet.errors import WalletNotConnectedError
from multiwallet.models import ChainId
from multiwallet.providers.base import ChainProvider
from multiwallet.rpc import JsonRpcClient


class EthereumProvider(ChainProvider):
    chain = ChainId.ETHEREUM
    wallet_name = "Ethereum wallet (MetaMask)"

    def __init__(self, probe: CapabilityProbe, rpc: JsonRpcClient):
        super().__init__(probe)
        self.rpc = rpc

    async def _connect(self, capability: EthereumWalletCapability) -> str:
        accounts = await capability.request("eth_requestAccounts", [])
        return accounts[0] if accounts else ""

    async def _fetch_balance(self, address: str) -> str:
        result = await self.rpc.call("eth_getBalance", [address, "latest"])
        return from_base_units(int(result, 16), self.chain)

    async def _send(self, capability: EthereumWalletCapability, to: str, units: int) -> str:
        accounts = await capability.request("eth_accounts", [])
        if not accounts:
            raise WalletNotConnectedError("No authorized Ethereum account in wallet")

        tx = {
            "from": accounts[0],
            "to": to,
            "value": hex(units),
        }
        return await capability.request("eth_sendTransaction", [tx])

    async def close(self) -> None:
        await self.rpc.close()
