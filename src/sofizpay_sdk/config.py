"""Configuration surface for the SofizPay SDK.

Settings are loaded from ``SOFIZPAY_*`` environment variables (and an
optional ``.env`` file) and passed explicitly to every component; nothing
reads a process-wide network selection.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from stellar_sdk import Network

from .models.asset import DZT_ASSET_CODE, DZT_ISSUER_ACCOUNT_ID, AssetDescriptor

DEFAULT_API_BASE_URL = "https://api.sofizpay.com"


class LedgerNetwork(str, Enum):
    """Supported Stellar networks."""

    MAINNET = "mainnet"
    TESTNET = "testnet"

    @property
    def passphrase(self) -> str:
        if self is LedgerNetwork.MAINNET:
            return Network.PUBLIC_NETWORK_PASSPHRASE
        return Network.TESTNET_NETWORK_PASSPHRASE

    @property
    def horizon_url(self) -> str:
        if self is LedgerNetwork.MAINNET:
            return "https://horizon.stellar.org"
        return "https://horizon-testnet.stellar.org"


class SofizPaySettings(BaseSettings):
    """Main SofizPay SDK configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SOFIZPAY_",
        env_file=".env",
        extra="ignore",
    )

    # Ledger
    network: LedgerNetwork = LedgerNetwork.MAINNET
    horizon_url: Optional[str] = None
    base_fee: int = Field(default=100, ge=100)
    transaction_timeout: int = Field(default=30, gt=0)

    # Tracked asset
    asset_code: str = DZT_ASSET_CODE
    asset_issuer: str = DZT_ISSUER_ACCOUNT_ID

    # CIB gateway
    api_base_url: str = DEFAULT_API_BASE_URL
    http_timeout: float = Field(default=30.0, gt=0)
    cib_public_key_pem: Optional[str] = None

    @property
    def resolved_horizon_url(self) -> str:
        return self.horizon_url or self.network.horizon_url

    @property
    def asset(self) -> AssetDescriptor:
        return AssetDescriptor(code=self.asset_code, issuer=self.asset_issuer)


def load_settings(**overrides) -> SofizPaySettings:
    """Build settings from the environment, applying explicit overrides."""
    overrides = {k: v for k, v in overrides.items() if v is not None}
    return SofizPaySettings(**overrides)
