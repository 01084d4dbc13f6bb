"""Input validation shared by the SDK resources."""
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Union

from .models.errors import ValidationError


def require_non_empty(value: Any, field: str, message: str) -> None:
    """Raise ValidationError if value is missing or blank."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(message, field=field)


def parse_positive_amount(value: Union[str, Decimal, int, float, None], field: str = "amount") -> Decimal:
    """Parse a strictly positive, finite decimal amount.

    Raises:
        ValidationError: if the value is empty, not numeric, or <= 0
    """
    message = "Amount must be a positive number"
    if value is None or isinstance(value, bool):
        raise ValidationError(message, field=field)
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(message, field=field) from None
    if not amount.is_finite() or amount <= 0:
        raise ValidationError(message, field=field)
    return amount
