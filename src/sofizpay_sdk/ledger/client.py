"""Ledger client interface used by the SofizPay resources.

Resources borrow a ``LedgerClient``; they never create or close one. Record
methods return raw Horizon JSON objects in the order the ledger delivers
them. ``records.py`` decodes them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from stellar_sdk import Account, TransactionEnvelope

# Horizon rejects page sizes above this.
MAX_PAGE_SIZE = 200


@dataclass(frozen=True)
class SubmitResult:
    """Outcome of a transaction submission."""
    successful: bool
    hash: str
    result_code: Optional[str] = None
    operation_result_codes: List[str] = field(default_factory=list)


class LedgerClient(Protocol):
    """Capabilities the SDK needs from a Stellar ledger."""

    @property
    def network_passphrase(self) -> str:
        ...

    def load_account(self, account_id: str) -> Account:
        """Current sequence state, used as a transaction source."""
        ...

    def fetch_account(self, account_id: str) -> Dict[str, Any]:
        """Raw account record including balances."""
        ...

    def submit_transaction(self, envelope: TransactionEnvelope) -> SubmitResult:
        ...

    def payments_for_account(
        self,
        account_id: str,
        limit: int,
        cursor: Optional[str] = None,
        descending: bool = True,
    ) -> List[Dict[str, Any]]:
        """Payment operations of an account, owning transaction joined."""
        ...

    def transactions_for_account(
        self,
        account_id: str,
        limit: int,
        cursor: Optional[str] = None,
        descending: bool = True,
    ) -> List[Dict[str, Any]]:
        ...

    def operations_for_transaction(self, tx_hash: str) -> List[Dict[str, Any]]:
        ...
