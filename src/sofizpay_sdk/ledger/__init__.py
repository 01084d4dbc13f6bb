"""Stellar ledger access for the SofizPay SDK."""
from .client import MAX_PAGE_SIZE, LedgerClient, SubmitResult
from .horizon import HorizonLedgerClient
from .records import (
    LedgerOperation,
    OtherOperation,
    TrackedPayment,
    TransactionRecord,
    decode_operation,
    decode_transaction,
)

__all__ = [
    "MAX_PAGE_SIZE",
    "LedgerClient",
    "SubmitResult",
    "HorizonLedgerClient",
    "LedgerOperation",
    "OtherOperation",
    "TrackedPayment",
    "TransactionRecord",
    "decode_operation",
    "decode_transaction",
]
