"""
Base resource classes for SofizPay SDK.

Ledger-backed resources borrow a ``LedgerClient`` and the tracked asset;
both are passed in explicitly at construction.
"""
from __future__ import annotations

from ..ledger.client import LedgerClient
from ..models.asset import AssetDescriptor


class LedgerResource:
    """Base class for resources that read from or write to the ledger.

    Attributes:
        _ledger: The borrowed ledger client
        _asset: The asset this SDK tracks
    """

    def __init__(self, ledger: LedgerClient, asset: AssetDescriptor) -> None:
        """Initialize the resource.

        Args:
            ledger: Ledger client shared with the owning SofizPayClient
            asset: Tracked asset (DZT by default)
        """
        self._ledger = ledger
        self._asset = asset

    @property
    def asset(self) -> AssetDescriptor:
        return self._asset
