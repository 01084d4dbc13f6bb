"""Horizon-backed ledger client built on stellar-sdk."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from stellar_sdk import Account, Server, TransactionEnvelope
from stellar_sdk.exceptions import BadRequestError
from stellar_sdk.exceptions import NotFoundError as HorizonNotFoundError

from ..config import LedgerNetwork
from ..logging_utils import mask_account_id
from ..models.errors import NotFoundError
from .client import MAX_PAGE_SIZE, SubmitResult

logger = logging.getLogger(__name__)


def _records(response: Dict[str, Any]) -> List[Dict[str, Any]]:
    return list(response.get("_embedded", {}).get("records", []))


class HorizonLedgerClient:
    """Synchronous Stellar ledger client.

    Args:
        network: Network whose passphrase signs transactions
        horizon_url: Override for the network's public Horizon instance
        server: Pre-built ``stellar_sdk.Server`` (takes precedence over
            ``horizon_url``)
    """

    def __init__(
        self,
        network: LedgerNetwork = LedgerNetwork.MAINNET,
        horizon_url: Optional[str] = None,
        server: Optional[Server] = None,
    ) -> None:
        self.network = network
        self.horizon_url = horizon_url or network.horizon_url
        self._server = server or Server(horizon_url=self.horizon_url)

    @property
    def network_passphrase(self) -> str:
        return self.network.passphrase

    def load_account(self, account_id: str) -> Account:
        try:
            return self._server.load_account(account_id)
        except HorizonNotFoundError as e:
            raise NotFoundError("Account", account_id) from e

    def fetch_account(self, account_id: str) -> Dict[str, Any]:
        try:
            return self._server.accounts().account_id(account_id).call()
        except HorizonNotFoundError as e:
            raise NotFoundError("Account", account_id) from e

    def submit_transaction(self, envelope: TransactionEnvelope) -> SubmitResult:
        try:
            response = self._server.submit_transaction(envelope)
        except BadRequestError as e:
            # Horizon reports ledger rejections as 400 with result codes.
            result_codes = (e.extras or {}).get("result_codes", {})
            logger.info(
                "Transaction %s rejected: %s",
                envelope.hash_hex(),
                result_codes.get("transaction"),
            )
            return SubmitResult(
                successful=False,
                hash=envelope.hash_hex(),
                result_code=result_codes.get("transaction"),
                operation_result_codes=list(result_codes.get("operations", [])),
            )
        return SubmitResult(
            successful=bool(response.get("successful", True)),
            hash=response.get("hash") or envelope.hash_hex(),
        )

    def payments_for_account(
        self,
        account_id: str,
        limit: int,
        cursor: Optional[str] = None,
        descending: bool = True,
    ) -> List[Dict[str, Any]]:
        builder = (
            self._server.payments()
            .for_account(account_id)
            .join("transactions")
            .limit(min(limit, MAX_PAGE_SIZE))
            .order(desc=descending)
        )
        if cursor is not None:
            builder = builder.cursor(cursor)
        logger.debug("Fetching payments for %s (cursor=%s)", mask_account_id(account_id), cursor)
        return _records(builder.call())

    def transactions_for_account(
        self,
        account_id: str,
        limit: int,
        cursor: Optional[str] = None,
        descending: bool = True,
    ) -> List[Dict[str, Any]]:
        builder = (
            self._server.transactions()
            .for_account(account_id)
            .limit(min(limit, MAX_PAGE_SIZE))
            .order(desc=descending)
        )
        if cursor is not None:
            builder = builder.cursor(cursor)
        logger.debug("Fetching transactions for %s (cursor=%s)", mask_account_id(account_id), cursor)
        return _records(builder.call())

    def operations_for_transaction(self, tx_hash: str) -> List[Dict[str, Any]]:
        builder = self._server.operations().for_transaction(tx_hash).limit(MAX_PAGE_SIZE)
        return _records(builder.call())

    def close(self) -> None:
        self._server.close()
