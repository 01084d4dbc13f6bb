"""
SofizPay Python SDK client.

Example usage:
    ```python
    from sofizpay_sdk import SofizPayClient

    with SofizPayClient(network="testnet") as client:
        # Send DZT
        tx_hash = client.send_payment(
            source_secret="S...",
            destination="G...",
            amount="10.5",
            memo="order-42",
        )

        # Look for a payment by memo
        payments = client.get_transactions_by_memo("G...", "order-42")

        # Open a CIB card payment
        session = client.create_cib_transaction(
            account="G...",
            amount="1500",
            full_name="Amine B.",
            phone="+213555000000",
            email="amine@example.com",
            return_url="https://shop.example.com/return",
        )
    ```
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional, Union

import httpx

from .config import LedgerNetwork, SofizPaySettings, load_settings
from .ledger.client import LedgerClient
from .ledger.horizon import HorizonLedgerClient
from .models.balance import Balance
from .models.cib import GatewayTransaction, SignatureVerificationResult
from .models.errors import ValidationError
from .models.payment import LedgerPayment
from .resources.accounts import AccountsResource
from .resources.cib import CibResource
from .resources.payments import PaymentsResource
from .resources.transactions import TransactionsResource

USER_AGENT = "sofizpay-sdk-python/0.1.0"


class SofizPayClient:
    """
    SofizPay client.

    Provides access to every SDK resource:
    - payments: Send DZT on the Stellar ledger
    - transactions: Payment history and memo search
    - accounts: Balances and trustlines
    - cib: CIB card-gateway sessions and callback verification

    Args:
        network: ``"mainnet"`` or ``"testnet"`` (overrides settings)
        http_client: Pre-built HTTP client for the gateway; not closed by
            this client
        base_url: Gateway API base URL (overrides settings)
        ledger: Pre-built ledger client; not closed by this client
        settings: Full configuration; loaded from the environment if omitted
    """

    def __init__(
        self,
        network: Optional[Union[str, LedgerNetwork]] = None,
        http_client: Optional[httpx.Client] = None,
        base_url: Optional[str] = None,
        ledger: Optional[LedgerClient] = None,
        settings: Optional[SofizPaySettings] = None,
    ) -> None:
        if settings is None:
            settings = load_settings(network=network, api_base_url=base_url)
        else:
            updates: dict[str, Any] = {}
            if network is not None:
                updates["network"] = LedgerNetwork(network)
            if base_url is not None:
                updates["api_base_url"] = base_url
            if updates:
                settings = settings.model_copy(update=updates)
        self.settings = settings

        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.Client(
            headers={"User-Agent": USER_AGENT},
            timeout=settings.http_timeout,
        )

        self._owns_ledger = ledger is None
        self._ledger: LedgerClient = ledger or HorizonLedgerClient(
            network=settings.network,
            horizon_url=settings.horizon_url,
        )

        asset = settings.asset
        self.payments = PaymentsResource(
            self._ledger,
            asset,
            base_fee=settings.base_fee,
            transaction_timeout=settings.transaction_timeout,
        )
        self.transactions = TransactionsResource(self._ledger, asset)
        self.accounts = AccountsResource(self._ledger, asset)
        self.cib = CibResource(
            self._http_client,
            base_url=settings.api_base_url,
            timeout=settings.http_timeout,
        )

    @property
    def network(self) -> LedgerNetwork:
        return self.settings.network

    @property
    def base_url(self) -> str:
        return self.cib.base_url

    @property
    def http_client(self) -> httpx.Client:
        return self._http_client

    @property
    def ledger(self) -> LedgerClient:
        return self._ledger

    def close(self) -> None:
        """Close the HTTP and ledger clients this instance created."""
        if self._owns_http_client and not self._http_client.is_closed:
            self._http_client.close()
        if self._owns_ledger and isinstance(self._ledger, HorizonLedgerClient):
            self._ledger.close()

    def __enter__(self) -> "SofizPayClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ==================== Convenience Methods ====================

    def send_payment(
        self,
        source_secret: str,
        destination: str,
        amount: Union[str, Decimal],
        memo: Optional[str] = None,
    ) -> str:
        """Send DZT. See ``PaymentsResource.send_payment``."""
        return self.payments.send_payment(source_secret, destination, amount, memo=memo)

    def get_payment_history(
        self,
        account_id: str,
        limit: int = 20,
        cursor: Optional[str] = None,
    ) -> list[LedgerPayment]:
        """Latest DZT payments of an account, newest first."""
        return self.transactions.get_payment_history(account_id, limit=limit, cursor=cursor)

    def get_transactions_by_memo(
        self,
        account_id: str,
        memo: str,
        limit: int = 20,
        cursor: Optional[str] = None,
    ) -> list[LedgerPayment]:
        """DZT payments whose transaction memo equals ``memo``."""
        return self.transactions.get_transactions_by_memo(
            account_id, memo, limit=limit, cursor=cursor
        )

    def get_dzt_balance(self, account_id: str) -> Optional[Balance]:
        return self.accounts.get_dzt_balance(account_id)

    def create_cib_transaction(
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
        """Open a CIB payment session. See ``CibResource.create_transaction``."""
        return self.cib.create_transaction(
            account=account,
            amount=amount,
            full_name=full_name,
            phone=phone,
            email=email,
            return_url=return_url,
            memo=memo,
            redirect=redirect,
        )

    def verify_cib_signature(
        self,
        return_url: str,
        public_key_pem: Optional[str] = None,
    ) -> SignatureVerificationResult:
        """
        Verify a CIB return URL.

        Falls back to ``settings.cib_public_key_pem`` when no key is given.
        """
        key = public_key_pem or self.settings.cib_public_key_pem
        if not key:
            raise ValidationError("Public key is required", field="public_key_pem")
        return self.cib.verify_signature(return_url, key)
