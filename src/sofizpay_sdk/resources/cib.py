"""CIB card-gateway resource for SofizPay SDK."""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Optional, Union

import httpx

from ..callback import is_payment_successful, parse_callback_url, parse_return_url
from ..config import DEFAULT_API_BASE_URL
from ..logging_utils import mask_account_id, mask_url
from ..models.cib import GatewayTransaction, SignatureVerificationResult
from ..models.errors import GatewayError, NetworkError, SofizPayError, ValidationError
from ..signature import build_verification_result
from ..validators import parse_positive_amount, require_non_empty

logger = logging.getLogger(__name__)

CREATE_TRANSACTION_PATH = "/make-cib-transaction/"
DEFAULT_GATEWAY_ERROR = "Failed to create CIB transaction"


class CibResource:
    """Resource for the CIB card gateway.

    Opens payment sessions on the gateway and checks the signed return URL
    the customer is redirected to afterwards. The HTTP client is borrowed
    from the owning ``SofizPayClient``.
    """

    def __init__(
        self,
        http_client: httpx.Client,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = 30.0,
    ) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    def create_transaction(
        self,
        account: str,
        amount: Union[str, Decimal],
        full_name: str,
        phone: str,
        email: str,
        return_url: Optional[str] = None,
        memo: Optional[str] = None,
        redirect: bool = False,
    ) -> GatewayTransaction:
        """
        Open a card-payment session on the gateway.

        Args:
            account: Ledger account to be credited
            amount: Positive decimal amount
            full_name: Customer's full name
            phone: Customer's phone number
            email: Customer's email address
            return_url: Where the gateway sends the customer afterwards
            memo: Optional memo forwarded to the gateway
            redirect: Ask the gateway to redirect straight to the payment page

        Returns:
            The created gateway transaction

        Raises:
            ValidationError: if a field is missing or the amount is invalid
            GatewayError: if the gateway reports a failure
            NetworkError: if the gateway cannot be reached
        """
        require_non_empty(account, "account", "Account parameter is required")
        require_non_empty(amount, "amount", "Amount parameter is required")
        parse_positive_amount(amount, field="amount")
        require_non_empty(full_name, "full_name", "Full name is required")
        require_non_empty(phone, "phone", "Phone number is required")
        require_non_empty(email, "email", "Email address is required")

        params: dict[str, Any] = {
            "account": account,
            "amount": str(amount).strip(),
            "full_name": full_name,
            "phone": phone,
            "email": email,
            "redirect": "yes" if redirect else "no",
        }
        if return_url:
            params["return_url"] = return_url
        if memo:
            params["memo"] = memo

        url = f"{self._base_url}{CREATE_TRANSACTION_PATH}"
        try:
            response = self._http.get(url, params=params, timeout=self._timeout)
            logger.debug("CIB gateway answered %s for %s", response.status_code, mask_url(str(response.url)))

            body = self._json_body(response)
            if not isinstance(body, dict) or not body.get("success"):
                error = body.get("error") if isinstance(body, dict) else None
                raise GatewayError(error or DEFAULT_GATEWAY_ERROR, status_code=response.status_code)

            transaction = GatewayTransaction.model_validate(body)
        except SofizPayError:
            raise
        except (httpx.TimeoutException, httpx.TransportError) as e:
            raise NetworkError(f"Network error while creating CIB transaction: {e}") from e
        except Exception as e:
            raise SofizPayError(f"Unexpected error while creating CIB transaction: {e}") from e

        logger.info(
            "Created CIB transaction %s for %s",
            transaction.merchant_transaction_id,
            mask_account_id(account),
        )
        return transaction

    def verify_signature(self, return_url: str, public_key_pem: str) -> SignatureVerificationResult:
        """
        Verify the signature carried by a gateway return URL.

        Args:
            return_url: The complete return URL, query string included
            public_key_pem: The gateway's RSA public key in PEM format

        Returns:
            The verification result; an invalid signature is reported in the
            result rather than raised

        Raises:
            ValidationError: if the URL lacks a query or a required parameter
        """
        params = parse_callback_url(return_url)
        try:
            return build_verification_result(params, public_key_pem)
        except ValidationError:
            raise
        except Exception as e:
            logger.warning("CIB signature verification failed: %s", e)
            return SignatureVerificationResult(
                valid=False,
                payment_status=params.payment_status,
                transaction_id=params.transaction_id,
                gateway_transaction_id=params.cib_transaction_id,
                amount="0",
                raw_message=params.message,
                error=f"Error verifying signature: {e}",
            )

    def parse_return_url(self, return_url: str) -> dict[str, str]:
        """Return every query parameter of a return URL."""
        return parse_return_url(return_url)

    def is_payment_successful(self, return_url: str) -> bool:
        """Check the unverified ``payment_status`` of a return URL."""
        return is_payment_successful(return_url)

    @staticmethod
    def _json_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None
