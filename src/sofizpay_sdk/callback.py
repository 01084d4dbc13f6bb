"""Parsing of the return URL the CIB gateway redirects the customer to."""
from __future__ import annotations

from urllib.parse import parse_qsl, urlsplit

from .models.cib import PAYMENT_STATUS_SUCCESS, CallbackParameters
from .models.errors import ValidationError

REQUIRED_CALLBACK_PARAMS = (
    "payment_status",
    "transaction_id",
    "cib_transaction_id",
    "signature",
    "message",
)


def _query_params(url: str) -> dict[str, str]:
    # dict() over the pairs: the last occurrence of a repeated key wins.
    query = urlsplit(url).query
    return dict(parse_qsl(query, keep_blank_values=True))


def parse_return_url(url: str) -> dict[str, str]:
    """Return every query parameter of ``url``; never raises on bad input."""
    try:
        return _query_params(url)
    except (ValueError, TypeError, AttributeError):
        return {}


def parse_callback_url(url: str) -> CallbackParameters:
    """Extract and validate the signed callback parameters.

    Args:
        url: The complete return URL, query string included

    Returns:
        The validated callback parameters

    Raises:
        ValidationError: if the URL has no query string or a required
            parameter is missing. Required keys are checked in a fixed
            order and the first missing one is reported.
    """
    try:
        query = urlsplit(url).query
    except (ValueError, TypeError, AttributeError):
        raise ValidationError("Invalid return URL: could not be parsed", field="url") from None
    if not query:
        raise ValidationError("Invalid return URL: no query parameters found", field="query")

    params = dict(parse_qsl(query, keep_blank_values=True))
    for name in REQUIRED_CALLBACK_PARAMS:
        if name not in params:
            raise ValidationError(f"Missing required parameter: {name}", field=name)

    extra = {k: v for k, v in params.items() if k not in REQUIRED_CALLBACK_PARAMS}
    return CallbackParameters(
        payment_status=params["payment_status"],
        transaction_id=params["transaction_id"],
        cib_transaction_id=params["cib_transaction_id"],
        signature=params["signature"],
        message=params["message"],
        extra=extra,
    )


def is_payment_successful(url: str) -> bool:
    """Check the *claimed* payment status of a return URL.

    This reads ``payment_status`` without verifying the signature. Anyone
    can craft such a URL, so the result must never gate fulfilment or any
    money movement; use ``CibResource.verify_signature`` for that.
    """
    return parse_return_url(url).get("payment_status") == PAYMENT_STATUS_SUCCESS


__all__ = [
    "REQUIRED_CALLBACK_PARAMS",
    "is_payment_successful",
    "parse_callback_url",
    "parse_return_url",
]
