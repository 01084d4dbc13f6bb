"""Error models for SofizPay SDK."""
from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class ErrorCode(str, Enum):
    """Machine-readable error codes."""

    UNKNOWN_ERROR = "SOFIZPAY_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    GATEWAY_ERROR = "GATEWAY_ERROR"
    NOT_FOUND = "NOT_FOUND"


class SofizPayError(Exception):
    """Base exception for SofizPay SDK."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or ErrorCode.UNKNOWN_ERROR.value
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


class ValidationError(SofizPayError):
    """Caller-supplied input failed a precondition.

    Always raised before any network call and never worth retrying.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(
            message,
            code=ErrorCode.VALIDATION_ERROR.value,
            details={"field": field},
        )
        self.field = field


class NetworkError(SofizPayError):
    """Transport failure or explicit rejection from the ledger or gateway.

    The underlying exception, when there is one, is chained as
    ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        result_code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        details = dict(details or {})
        if result_code is not None:
            details["result_code"] = result_code
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, code=ErrorCode.NETWORK_ERROR.value, details=details)
        self.result_code = result_code
        self.status_code = status_code


class GatewayError(SofizPayError):
    """The gateway answered the request but reported a business failure."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(
            message,
            code=ErrorCode.GATEWAY_ERROR.value,
            details={"status_code": status_code},
        )
        self.status_code = status_code


class NotFoundError(SofizPayError):
    """Resource not found on the ledger."""

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            code=ErrorCode.NOT_FOUND.value,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )
        self.resource_type = resource_type
        self.resource_id = resource_id
