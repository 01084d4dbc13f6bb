"""
Logging helpers for ledger and gateway operations.

Features:
- Account id masking
- URL masking (query strings can carry signatures and customer data)
- One-call logging setup for the command line
"""
from __future__ import annotations

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def mask_account_id(account_id: Optional[str]) -> str:
    """Keep the first and last four characters of a ledger account id."""
    if not account_id:
        return "<none>"
    if len(account_id) <= 12:
        return "***"
    return f"{account_id[:4]}...{account_id[-4:]}"


def mask_url(url: str) -> str:
    """Mask sensitive parts of URL (query parameters)."""
    if "?" in url:
        base = url.split("?")[0]
        return f"{base}?<params_masked>"
    return url


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging for command line use."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )
    # stellar_sdk and httpx are chatty at DEBUG
    if not verbose:
        logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("stellar_sdk").setLevel(logging.INFO if verbose else logging.WARNING)
