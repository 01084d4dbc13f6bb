"""CIB gateway models for SofizPay SDK."""
from __future__ import annotations

from typing import Any, Optional

from pydantic import Field, computed_field, field_validator

from .base import SofizPayModel

PAYMENT_STATUS_SUCCESS = "success"


class CallbackParameters(SofizPayModel):
    """Parameters the gateway appends to the merchant's return URL."""

    payment_status: str
    transaction_id: str
    cib_transaction_id: str
    signature: str
    message: str
    extra: dict[str, str] = Field(default_factory=dict)


class SignatureVerificationResult(SofizPayModel):
    """Outcome of checking a CIB callback signature.

    ``valid`` is False for forged or tampered callbacks; ``successful`` can
    only be True when ``valid`` is.
    """

    valid: bool
    payment_status: str
    transaction_id: str
    gateway_transaction_id: str
    amount: str
    raw_message: str
    error: Optional[str] = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def successful(self) -> bool:
        return self.valid and self.payment_status == PAYMENT_STATUS_SUCCESS


class GatewayTransaction(SofizPayModel):
    """A card-payment session opened on the CIB gateway."""

    merchant_transaction_id: str = Field(alias="transaction_id")
    gateway_transaction_id: str = Field(alias="cib_transaction_id")
    payment_url: str
    amount: str
    status: str
    info_url: str = Field(alias="more_info_url")
    raw_gateway_payload: dict[str, Any] = Field(default_factory=dict, alias="cib_response")

    @field_validator(
        "merchant_transaction_id",
        "gateway_transaction_id",
        "amount",
        "status",
        mode="before",
    )
    @classmethod
    def _coerce_to_str(cls, value: Any) -> Any:
        # The gateway returns ids and amounts as JSON numbers.
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("raw_gateway_payload", mode="before")
    @classmethod
    def _default_payload(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else {}
