"""Ledger history search for SofizPay SDK."""
from __future__ import annotations

import logging
from typing import Optional

from ..ledger.client import MAX_PAGE_SIZE
from ..ledger.records import TrackedPayment, decode_operation, decode_transaction, page_cursor
from ..logging_utils import mask_account_id
from ..models.errors import NetworkError, SofizPayError, ValidationError
from ..models.payment import LedgerPayment
from ..validators import require_non_empty
from .base import LedgerResource

logger = logging.getLogger(__name__)

# Most transactions will not carry the memo being searched for; fetch
# several per wanted match so sparse memos do not cost a round trip each.
MEMO_SEARCH_OVERFETCH = 3


class TransactionsResource(LedgerResource):
    """Resource for locating tracked-asset payments in account history.

    Results keep the ledger's newest-first order; nothing is re-sorted.
    Any upstream failure discards the partial result and raises
    ``NetworkError``.
    """

    def get_payment_history(
        self,
        account_id: str,
        limit: int = 20,
        cursor: Optional[str] = None,
    ) -> list[LedgerPayment]:
        """
        Get the latest tracked-asset payments of an account.

        Args:
            account_id: Ledger account to inspect
            limit: Maximum number of payments to return
            cursor: Continue after this paging token

        Returns:
            Up to ``limit`` payments, newest first
        """
        self._validate(account_id, limit)
        try:
            return self._collect_history(account_id, limit, cursor)
        except SofizPayError:
            raise
        except Exception as e:
            raise NetworkError(f"Failed to get payment history: {e}") from e

    def get_transactions_by_memo(
        self,
        account_id: str,
        memo: str,
        limit: int = 20,
        cursor: Optional[str] = None,
    ) -> list[LedgerPayment]:
        """
        Find tracked-asset payments whose transaction memo equals ``memo``.

        Args:
            account_id: Ledger account to inspect
            memo: Memo to match exactly
            limit: Maximum number of payments to return
            cursor: Continue after this transaction paging token

        Returns:
            Up to ``limit`` matching payments, newest first
        """
        self._validate(account_id, limit)
        try:
            return self._collect_by_memo(account_id, memo, limit, cursor)
        except SofizPayError:
            raise
        except Exception as e:
            raise NetworkError(f"Failed to get transactions by memo: {e}") from e

    def _validate(self, account_id: str, limit: int) -> None:
        require_non_empty(account_id, "account_id", "Account ID cannot be empty")
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValidationError("Limit must be a positive integer", field="limit")

    def _collect_history(
        self,
        account_id: str,
        limit: int,
        cursor: Optional[str],
    ) -> list[LedgerPayment]:
        page_size = min(limit, MAX_PAGE_SIZE)
        payments: list[LedgerPayment] = []

        while len(payments) < limit:
            records = self._ledger.payments_for_account(
                account_id, limit=page_size, cursor=cursor, descending=True
            )
            for record in records:
                operation = decode_operation(record, self._asset)
                if not isinstance(operation, TrackedPayment):
                    continue
                payments.append(
                    LedgerPayment(
                        hash=operation.transaction_hash,
                        from_address=operation.from_address,
                        to_address=operation.to_address,
                        amount=operation.amount,
                        asset=self._asset,
                        memo=operation.memo,
                        timestamp=operation.created_at,
                        # Failed payments are not listed as completed operations.
                        succeeded=True,
                        page_cursor=operation.paging_token,
                    )
                )
                if len(payments) >= limit:
                    break

            cursor = page_cursor(records)
            if len(records) < page_size or cursor is None:
                break

        logger.debug(
            "Payment history for %s: %d item(s)", mask_account_id(account_id), len(payments)
        )
        return payments

    def _collect_by_memo(
        self,
        account_id: str,
        memo: str,
        limit: int,
        cursor: Optional[str],
    ) -> list[LedgerPayment]:
        page_size = min(limit * MEMO_SEARCH_OVERFETCH, MAX_PAGE_SIZE)
        matches: list[LedgerPayment] = []

        while len(matches) < limit:
            records = self._ledger.transactions_for_account(
                account_id, limit=page_size, cursor=cursor, descending=True
            )
            for record in records:
                transaction = decode_transaction(record)
                if transaction.memo != memo:
                    continue

                for op_record in self._ledger.operations_for_transaction(transaction.hash):
                    operation = decode_operation(op_record, self._asset)
                    if not isinstance(operation, TrackedPayment):
                        continue
                    matches.append(
                        LedgerPayment(
                            hash=transaction.hash,
                            from_address=operation.from_address,
                            to_address=operation.to_address,
                            amount=operation.amount,
                            asset=self._asset,
                            memo=transaction.memo,
                            timestamp=transaction.created_at,
                            succeeded=transaction.successful,
                            page_cursor=operation.paging_token,
                        )
                    )
                    if len(matches) >= limit:
                        break
                if len(matches) >= limit:
                    break

            cursor = page_cursor(records)
            if len(records) < page_size or cursor is None:
                break

        logger.debug(
            "Memo search on %s: %d match(es)", mask_account_id(account_id), len(matches)
        )
        return matches
