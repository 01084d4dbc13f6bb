"""Ledger payment models for SofizPay SDK."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from .asset import AssetDescriptor
from .base import SofizPayModel


class LedgerPayment(SofizPayModel):
    """A payment of the tracked asset observed in ledger history."""

    hash: str = Field(alias="transaction_hash")
    from_address: str
    to_address: str
    amount: str
    asset: AssetDescriptor
    memo: Optional[str] = None
    timestamp: datetime
    succeeded: bool = True
    page_cursor: Optional[str] = None
