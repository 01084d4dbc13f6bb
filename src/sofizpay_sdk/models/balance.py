"""Account balance model for SofizPay SDK."""
from __future__ import annotations

from typing import Optional

from .base import SofizPayModel


class Balance(SofizPayModel):
    """A single balance line of a ledger account."""

    account_id: str
    balance: str
    asset_code: str
    asset_issuer: str
    limit: Optional[str] = None
    is_authorized: bool = True

    @property
    def is_native(self) -> bool:
        return self.asset_issuer == "native"
