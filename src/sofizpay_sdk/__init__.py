"""
SofizPay Python SDK

DZT payments on the Stellar ledger and CIB card payments through the
SofizPay gateway.
"""

from .client import SofizPayClient
from .config import LedgerNetwork, SofizPaySettings, load_settings
from .callback import is_payment_successful, parse_callback_url, parse_return_url
from .signature import extract_amount_from_message, verify_message_signature
from .models.errors import (
    ErrorCode,
    GatewayError,
    NetworkError,
    NotFoundError,
    SofizPayError,
    ValidationError,
)
from .models.asset import AssetDescriptor, DZT_ASSET_CODE, DZT_ISSUER_ACCOUNT_ID
from .models.balance import Balance
from .models.cib import CallbackParameters, GatewayTransaction, SignatureVerificationResult
from .models.payment import LedgerPayment

__version__ = "0.1.0"

__all__ = [
    # Client
    "SofizPayClient",
    # Configuration
    "LedgerNetwork",
    "SofizPaySettings",
    "load_settings",
    # Callback helpers
    "parse_callback_url",
    "parse_return_url",
    "is_payment_successful",
    "verify_message_signature",
    "extract_amount_from_message",
    # Errors
    "ErrorCode",
    "SofizPayError",
    "ValidationError",
    "NetworkError",
    "GatewayError",
    "NotFoundError",
    # Models
    "AssetDescriptor",
    "DZT_ASSET_CODE",
    "DZT_ISSUER_ACCOUNT_ID",
    "Balance",
    "CallbackParameters",
    "GatewayTransaction",
    "SignatureVerificationResult",
    "LedgerPayment",
]
