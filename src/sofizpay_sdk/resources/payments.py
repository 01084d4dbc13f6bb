"""Payment submission for SofizPay SDK."""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, Union

from stellar_sdk import Keypair, MuxedAccount, TransactionBuilder
from stellar_sdk.exceptions import MemoInvalidException, SdkError

from ..ledger.client import LedgerClient
from ..logging_utils import mask_account_id
from ..models.asset import AssetDescriptor
from ..models.errors import NetworkError, ValidationError
from ..validators import parse_positive_amount, require_non_empty
from .base import LedgerResource

logger = logging.getLogger(__name__)

DEFAULT_BASE_FEE = 100
DEFAULT_TRANSACTION_TIMEOUT = 30

# Ledger amounts are int64 stroops (10^-7 units).
AMOUNT_DECIMAL_PLACES = 7
MAX_AMOUNT = Decimal("922337203685.4775807")


class PaymentsResource(LedgerResource):
    """Resource for sending tracked-asset payments.

    Every call is a single attempt: nothing is retried, so callers that need
    idempotency must track their own request ids (a memo works well).
    """

    def __init__(
        self,
        ledger: LedgerClient,
        asset: AssetDescriptor,
        base_fee: int = DEFAULT_BASE_FEE,
        transaction_timeout: int = DEFAULT_TRANSACTION_TIMEOUT,
    ) -> None:
        super().__init__(ledger, asset)
        self._base_fee = base_fee
        self._transaction_timeout = transaction_timeout

    def send_payment(
        self,
        source_secret: str,
        destination: str,
        amount: Union[str, Decimal],
        memo: Optional[str] = None,
    ) -> str:
        """
        Send a payment of the tracked asset.

        Args:
            source_secret: Secret seed of the paying account
            destination: Receiving account id
            amount: Positive decimal amount
            memo: Optional text memo; the ledger rejects memos over 28 bytes

        Returns:
            The ledger transaction hash

        Raises:
            ValidationError: if an input is invalid (raised before any
                network call)
            NetworkError: if the ledger rejects the transaction or cannot be
                reached
        """
        source_keypair = self._validate_inputs(source_secret, destination, amount)
        try:
            source_account = self._ledger.load_account(source_keypair.public_key)

            builder = TransactionBuilder(
                source_account=source_account,
                network_passphrase=self._ledger.network_passphrase,
                base_fee=self._base_fee,
            ).append_payment_op(
                destination=destination,
                asset=self._asset.to_stellar_asset(),
                amount=str(amount).strip(),
            )
            if memo is not None:
                builder.add_text_memo(memo)
            envelope = builder.set_timeout(self._transaction_timeout).build()
            envelope.sign(source_keypair)

            result = self._ledger.submit_transaction(envelope)
        except (ValidationError, NetworkError):
            raise
        except MemoInvalidException as e:
            raise ValidationError(f"Invalid memo: {e}", field="memo") from e
        except Exception as e:
            raise NetworkError(f"Failed to send payment: {e}") from e

        if not result.successful:
            raise NetworkError(
                f"Transaction failed: {result.result_code}",
                result_code=result.result_code,
                details={"operations": result.operation_result_codes, "hash": result.hash},
            )

        logger.info(
            "Sent %s %s from %s to %s (tx %s)",
            amount,
            self._asset.code,
            mask_account_id(source_keypair.public_key),
            mask_account_id(destination),
            result.hash,
        )
        return result.hash

    def _validate_inputs(
        self,
        source_secret: str,
        destination: str,
        amount: Union[str, Decimal],
    ) -> Keypair:
        require_non_empty(source_secret, "source_secret", "Source secret key cannot be empty")
        try:
            keypair = Keypair.from_secret(source_secret)
        except (ValueError, SdkError):
            raise ValidationError(
                "Invalid source secret key format", field="source_secret"
            ) from None
        require_non_empty(destination, "destination", "Destination account ID cannot be empty")
        try:
            MuxedAccount.from_account(destination)
        except (ValueError, SdkError):
            raise ValidationError(
                "Invalid destination account ID", field="destination"
            ) from None
        value = parse_positive_amount(amount, field="amount")
        if value.as_tuple().exponent < -AMOUNT_DECIMAL_PLACES:
            raise ValidationError(
                f"Amount must have at most {AMOUNT_DECIMAL_PLACES} decimal places", field="amount"
            )
        if value > MAX_AMOUNT:
            raise ValidationError(f"Amount must not exceed {MAX_AMOUNT}", field="amount")
        return keypair
