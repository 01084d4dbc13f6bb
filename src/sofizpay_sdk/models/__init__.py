"""SofizPay SDK Models."""
from .base import SofizPayModel
from .asset import AssetDescriptor, DZT_ASSET_CODE, DZT_ISSUER_ACCOUNT_ID
from .balance import Balance
from .cib import CallbackParameters, GatewayTransaction, SignatureVerificationResult
from .payment import LedgerPayment
from .errors import (
    ErrorCode,
    GatewayError,
    NetworkError,
    NotFoundError,
    SofizPayError,
    ValidationError,
)

__all__ = [
    "SofizPayModel",
    "AssetDescriptor",
    "DZT_ASSET_CODE",
    "DZT_ISSUER_ACCOUNT_ID",
    "Balance",
    "CallbackParameters",
    "GatewayTransaction",
    "SignatureVerificationResult",
    "LedgerPayment",
    "ErrorCode",
    "SofizPayError",
    "ValidationError",
    "NetworkError",
    "GatewayError",
    "NotFoundError",
]
