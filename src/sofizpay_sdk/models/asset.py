"""Asset identity for SofizPay SDK."""
from __future__ import annotations

from typing import Optional

from stellar_sdk import Asset

from .base import SofizPayModel

DZT_ASSET_CODE = "DZT"
DZT_ISSUER_ACCOUNT_ID = "GCAZI7YBLIDJWIVEL7ETNAZGPP3LC24NO6KAOBWZHUERXQ7M5BC52DLV"


class AssetDescriptor(SofizPayModel):
    """The token tracked by the SDK, named by code and issuer."""

    code: str = DZT_ASSET_CODE
    issuer: str = DZT_ISSUER_ACCOUNT_ID

    @classmethod
    def dzt(cls) -> "AssetDescriptor":
        return cls()

    def matches(self, code: Optional[str], issuer: Optional[str]) -> bool:
        """Both code and issuer must be exactly equal."""
        return code == self.code and issuer == self.issuer

    def to_stellar_asset(self) -> Asset:
        return Asset(self.code, self.issuer)

    def __str__(self) -> str:
        return f"{self.code}:{self.issuer}"
