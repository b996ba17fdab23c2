"""
Configuration management using pydantic-settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MULTIWALLET_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    ethereum_rpc_url: str = "https://cloudflare-eth.com"
    solana_rpc_url: str = "https://api.mainnet-beta.solana.com"
    solana_commitment: Literal["processed", "confirmed", "finalized"] = "confirmed"

    rpc_timeout: float = Field(default=30.0, gt=0)

    storage_path: Path = Path.home() / ".multiwallet" / "state.json"

    log_level: str = "INFO"


def get_settings() -> Settings:
    return Settings()
