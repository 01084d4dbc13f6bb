"""RSA signature verification for CIB gateway callbacks.

The gateway signs ``message`` with RSA PKCS#1 v1.5 over SHA-256 and sends
the signature as URL-safe base64. Verification here is a predicate: every
decode, key-loading or verification failure yields ``False``.
"""
from __future__ import annotations

import base64
import binascii
import logging
import re

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.hazmat.primitives.serialization import load_pem_public_key

from .models.cib import CallbackParameters, SignatureVerificationResult

logger = logging.getLogger(__name__)

INVALID_SIGNATURE_ERROR = "Invalid signature"

_NON_AMOUNT_CHARS = re.compile(r"[^0-9.]")


def _b64url_decode(value: str) -> bytes:
    standard = value.strip().translate(str.maketrans("-_", "+/"))
    pad = "=" * ((4 - len(standard) % 4) % 4)
    return base64.b64decode(standard + pad, validate=True)


def verify_message_signature(message: str, signature: str, public_key_pem: str) -> bool:
    """Verify an RSA-SHA256 (PKCS#1 v1.5) signature over ``message``.

    Args:
        message: The exact string the gateway signed
        signature: URL-safe base64 signature, padding optional
        public_key_pem: Merchant-held public key in PEM format

    Returns:
        True only when the signature cryptographically verifies
    """
    try:
        decoded_signature = _b64url_decode(signature)
    except (binascii.Error, ValueError, AttributeError, TypeError):
        return False
    if not decoded_signature:
        return False

    try:
        public_key = load_pem_public_key(public_key_pem.encode("utf-8"))
    except (ValueError, TypeError, AttributeError, UnsupportedAlgorithm):
        return False
    if not isinstance(public_key, rsa.RSAPublicKey):
        return False

    try:
        public_key.verify(
            decoded_signature,
            message.encode("utf-8"),
            padding.PKCS1v15(),
            hashes.SHA256(),
        )
        return True
    except InvalidSignature:
        return False
    except Exception:
        logger.exception("Signature verification engine error")
        return False


def extract_amount_from_message(message: str, status: str) -> str:
    """Recover the amount the gateway appended after the status.

    The gateway builds ``message`` as base URL + status + amount with no
    delimiter. The tail after the *last* occurrence of ``status`` is kept
    and every character other than digits and ``.`` is dropped.

    Known ambiguity: if the status string recurs after the real status, or
    the base URL itself ends in digits next to the status, the result is
    wrong. The gateway's format gives no way to tell these cases apart.
    """
    if not status:
        return "0"
    position = message.rfind(status)
    if position == -1:
        return "0"
    amount = _NON_AMOUNT_CHARS.sub("", message[position + len(status):])
    return amount or "0"


def build_verification_result(
    params: CallbackParameters,
    public_key_pem: str,
) -> SignatureVerificationResult:
    """Verify parsed callback parameters and report every field."""
    amount = extract_amount_from_message(params.message, params.payment_status)
    is_valid = verify_message_signature(params.message, params.signature, public_key_pem)

    if not is_valid:
        logger.warning(
            "CIB callback signature rejected for transaction %s (status=%s)",
            params.transaction_id,
            params.payment_status,
        )

    return SignatureVerificationResult(
        valid=is_valid,
        payment_status=params.payment_status,
        transaction_id=params.transaction_id,
        gateway_transaction_id=params.cib_transaction_id,
        amount=amount,
        raw_message=params.message,
        error=None if is_valid else INVALID_SIGNATURE_ERROR,
    )


__all__ = [
    "INVALID_SIGNATURE_ERROR",
    "build_verification_result",
    "extract_amount_from_message",
    "verify_message_signature",
]
