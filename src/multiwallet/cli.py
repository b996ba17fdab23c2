"""
Command-line interface for multiwallet.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from multiwallet.address import is_valid_address
from multiwallet.amounts import (
    format_currency,
    format_for_display,
    from_base_units,
    shorten_address,
    to_base_units,
)
from multiwallet.capabilities import InjectedCapabilityProbe
from multiwallet.config import Settings, get_settings
from multiwallet.errors import AmountError
from multiwallet.models import ChainId
from multiwallet.qr import build_payload, decode_payload, encode_payload
from multiwallet.service import WalletService
from multiwallet.session import WalletSession
from multiwallet.storage import JsonFileStore

app = typer.Typer(
    name="multiwallet",
    help="Bitcoin, Ethereum and Solana wallet utilities",
    add_completion=False,
)

ChainOption = Annotated[ChainId, typer.Option("--chain", "-c", help="Chain")]
StateFileOption = Annotated[
    Path | None,
    typer.Option("--state-file", envvar="MULTIWALLET_STORAGE_PATH", help="Session state file"),
]
LogLevelOption = Annotated[
    str | None, typer.Option("--log-level", "-l", help="Defaults to MULTIWALLET_LOG_LEVEL")
]


def setup_logging(level: str = "INFO") -> None:
    """Configure loguru logging."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )


def _open_session(settings: Settings, state_file: Path | None) -> WalletSession:
    service = WalletService.from_settings(settings, InjectedCapabilityProbe())
    session = WalletSession(service, JsonFileStore(state_file or settings.storage_path))
    session.load()
    return session


@app.command()
def validate(address: str, chain: ChainOption) -> None:
    """Check that an address is well-formed for a chain."""
    if is_valid_address(address, chain):
        typer.echo(f"valid {chain.value} address")
        return
    typer.echo(f"invalid {chain.value} address", err=True)
    raise typer.Exit(1)


@app.command("to-base")
def to_base(amount: str, chain: ChainOption) -> None:
    """Convert a decimal amount into base units (satoshi, wei, lamports)."""
    try:
        typer.echo(str(to_base_units(amount, chain)))
    except AmountError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("from-base")
def from_base(units: int, chain: ChainOption) -> None:
    """Convert base units into a decimal amount."""
    try:
        typer.echo(from_base_units(units, chain))
    except AmountError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("format")
def format_amount(
    balance: str,
    chain: Annotated[ChainId | None, typer.Option("--chain", "-c", help="Append ticker")] = None,
) -> None:
    """Format a balance for display with six decimal places."""
    if chain is None:
        typer.echo(format_for_display(balance))
    else:
        typer.echo(format_currency(balance, chain))


@app.command("qr-encode")
def qr_encode(
    address: str,
    chain: ChainOption,
    amount: Annotated[str | None, typer.Option("--amount", "-a", help="Requested amount")] = None,
) -> None:
    """Print the QR payload for a receive request."""
    if not is_valid_address(address, chain):
        typer.echo(f"Error: invalid {chain.value} address", err=True)
        raise typer.Exit(1)
    if amount:
        try:
            to_base_units(amount, chain)
        except AmountError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)
    typer.echo(encode_payload(build_payload(address, chain, amount)))


@app.command("qr-decode")
def qr_decode(text: str) -> None:
    """Parse scanned QR text."""
    payload = decode_payload(text)
    if payload is None:
        typer.echo("Error: not a wallet QR payload", err=True)
        raise typer.Exit(1)
    typer.echo(f"Chain:   {payload.chain.value}")
    typer.echo(f"Address: {payload.address}")
    if payload.amount is not None:
        typer.echo(f"Amount:  {format_currency(payload.amount, payload.chain)}")


@app.command()
def wallets(state_file: StateFileOption = None, log_level: LogLevelOption = None) -> None:
    """List saved wallets."""
    settings = get_settings()
    setup_logging(log_level or settings.log_level)
    session = _open_session(settings, state_file)

    if not session.wallets:
        typer.echo("No wallets connected")
        return

    active = session.active_wallet
    for wallet in session.wallets:
        marker = "*" if active is not None and wallet.chain == active.chain else " "
        typer.echo(
            f"{marker} {wallet.chain.value:<9} {shorten_address(wallet.address, 6):<18} "
            f"{format_currency(wallet.balance, wallet.chain)}"
        )


@app.command()
def disconnect(
    chain: Annotated[ChainId, typer.Argument(help="Chain to forget")],
    state_file: StateFileOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Remove a saved wallet."""
    settings = get_settings()
    setup_logging(log_level or settings.log_level)
    session = _open_session(settings, state_file)
    if not asyncio.run(session.disconnect(chain)):
        typer.echo(f"No {chain.value} wallet saved", err=True)
        raise typer.Exit(1)
    typer.echo(f"Disconnected {chain.value} wallet")


@app.command()
def balance(address: str, chain: ChainOption, log_level: LogLevelOption = None) -> None:
    """Look up an address balance over the chain's RPC endpoint (ethereum, solana)."""
    settings = get_settings()
    setup_logging(log_level or settings.log_level)
    if chain == ChainId.BITCOIN:
        # Bitcoin balances come from the connected wallet extension only
        typer.echo("Error: no RPC balance lookup for bitcoin", err=True)
        raise typer.Exit(1)
    if not is_valid_address(address, chain):
        typer.echo(f"Error: invalid {chain.value} address", err=True)
        raise typer.Exit(1)
    typer.echo(format_currency(asyncio.run(_lookup_balance(settings, address, chain)), chain))


async def _lookup_balance(settings: Settings, address: str, chain: ChainId) -> str:
    service = WalletService.from_settings(settings, InjectedCapabilityProbe())
    try:
        return await service.get_balance(address, chain)
    finally:
        await service.close()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
