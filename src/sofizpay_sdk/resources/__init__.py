"""
Resources for the SofizPay SDK.

Ledger-backed resources share a ``LedgerClient``; the CIB resource shares
the ``httpx.Client`` of the owning ``SofizPayClient``.
"""
from .base import LedgerResource
from .accounts import AccountsResource
from .cib import CibResource
from .payments import PaymentsResource
from .transactions import TransactionsResource

__all__ = [
    # Base classes
    "LedgerResource",
    # Ledger
    "AccountsResource",
    "PaymentsResource",
    "TransactionsResource",
    # Gateway
    "CibResource",
]
