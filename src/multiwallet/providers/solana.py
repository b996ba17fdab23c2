"""
Solana provider backed by a Phantom-style wallet.

Transfers are built locally as a single System Program transfer instruction
and handed unsigned to the wallet for signing and submission.
"""

from __future__ import annotations

from solders.hash import Hash
from solders.message import Message
from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer
from solders.transaction import Transaction

from multiwallet.amounts import from_base_units
from multiwallet.capabilities import CapabilityProbe, SolanaWalletCapability
from multiwallet.errors import InvalidRecipientError, WalletNotConnectedError
from multiwallet.models import ChainId
from multiwallet.providers.base import ChainProvider
from multiwallet.rpc import JsonRpcClient


def build_transfer_transaction(
    payer: str, recipient: str, lamports: int, recent_blockhash: str
) -> Transaction:
    """Build an unsigned SOL transfer with ``payer`` as fee payer and sender."""
    try:
        to_pubkey = Pubkey.from_string(recipient)
    except ValueError as e:
        raise InvalidRecipientError(f"Invalid solana address: {recipient!r}") from e
    from_pubkey = Pubkey.from_string(payer)

    ix = transfer(
        TransferParams(
            from_pubkey=from_pubkey,
            to_pubkey=to_pubkey,
            lamports=lamports,
        )
    )
    message = Message.new_with_blockhash([ix], from_pubkey, Hash.from_string(recent_blockhash))
    return Transaction.new_unsigned(message)


class SolanaProvider(ChainProvider):
    chain = ChainId.SOLANA
    wallet_name = "Solana wallet (Phantom)"

    def __init__(
        self,
        probe: CapabilityProbe,
        rpc: JsonRpcClient,
        commitment: str = "confirmed",
    ):
        super().__init__(probe)
        self.rpc = rpc
        self.commitment = commitment

    async def _connect(self, capability: SolanaWalletCapability) -> str:
        public_key = await capability.connect()
        return str(public_key) if public_key else ""

    async def _fetch_balance(self, address: str) -> str:
        result = await self.rpc.call("getBalance", [address, {"commitment": self.commitment}])
        return from_base_units(int(result["value"]), self.chain)

    async def get_latest_blockhash(self) -> str:
        """Fetch a recent blockhash. Blockhashes expire, so this is never cached."""
        result = await self.rpc.call("getLatestBlockhash", [{"commitment": self.commitment}])
        return result["value"]["blockhash"]

    async def _send(self, capability: SolanaWalletCapability, to: str, units: int) -> str:
        payer = capability.public_key
        if not payer:
            raise WalletNotConnectedError("Solana wallet is not connected")

        blockhash = await self.get_latest_blockhash()
        tx = build_transfer_transaction(str(payer), to, units, blockhash)
        result = await capability.sign_and_send_transaction(tx)
        return result["signature"]

    async def close(self) -> None:
        await self.rpc.close()
