"""Decoding of raw Horizon records.

Operations are decoded once into a closed set of variants: a payment of the
tracked asset, or anything else. Callers branch on the variant instead of
probing record fields repeatedly.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from ..models.asset import AssetDescriptor


@dataclass(frozen=True)
class TrackedPayment:
    """A ``payment`` operation moving the tracked asset."""
    transaction_hash: str
    from_address: str
    to_address: str
    amount: str
    created_at: str
    paging_token: Optional[str] = None
    memo: Optional[str] = None


@dataclass(frozen=True)
class OtherOperation:
    """Any operation that is not a tracked-asset payment."""
    type: str
    paging_token: Optional[str] = None


LedgerOperation = Union[TrackedPayment, OtherOperation]


@dataclass(frozen=True)
class TransactionRecord:
    """A transaction row from account history."""
    hash: str
    created_at: str
    successful: bool
    memo: Optional[str] = None
    paging_token: Optional[str] = None


def _joined_memo(record: Mapping[str, Any]) -> Optional[str]:
    # Best effort: only present when the transaction was joined.
    transaction = record.get("transaction")
    if isinstance(transaction, Mapping):
        memo = transaction.get("memo")
        return memo if isinstance(memo, str) else None
    return None


def decode_operation(record: Mapping[str, Any], asset: AssetDescriptor) -> LedgerOperation:
    """Decode an operation record against the tracked asset.

    Raises:
        KeyError: if a payment record of the tracked asset lacks a field
    """
    op_type = str(record.get("type", "unknown"))
    paging_token = record.get("paging_token")
    if (
        op_type != "payment"
        or record.get("asset_type") == "native"
        or not asset.matches(record.get("asset_code"), record.get("asset_issuer"))
    ):
        return OtherOperation(type=op_type, paging_token=paging_token)

    return TrackedPayment(
        transaction_hash=record["transaction_hash"],
        from_address=record["from"],
        to_address=record["to"],
        amount=record["amount"],
        created_at=record["created_at"],
        paging_token=paging_token,
        memo=_joined_memo(record),
    )


def decode_transaction(record: Mapping[str, Any]) -> TransactionRecord:
    """Decode a transaction record.

    Raises:
        KeyError: if the hash or creation time is missing
    """
    memo = record.get("memo")
    return TransactionRecord(
        hash=record["hash"],
        created_at=record["created_at"],
        successful=bool(record.get("successful", True)),
        memo=memo if isinstance(memo, str) else None,
        paging_token=record.get("paging_token"),
    )


def page_cursor(records: list[Dict[str, Any]]) -> Optional[str]:
    """Cursor that continues after the last record of a page."""
    if not records:
        return None
    token = records[-1].get("paging_token")
    return str(token) if token is not None else None
