"""
Pytest configuration and fixtures for SofizPay SDK tests.
"""
from __future__ import annotations

import base64
from typing import Any, Optional
from urllib.parse import urlencode

import pytest
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from stellar_sdk import Account, Keypair, Network, TransactionEnvelope

from sofizpay_sdk.ledger.client import SubmitResult
from sofizpay_sdk.models.asset import AssetDescriptor
from sofizpay_sdk.models.errors import NotFoundError


class FakeLedgerClient:
    """In-memory ledger serving newest-first records with cursor paging."""

    def __init__(self) -> None:
        self.payments: list[dict[str, Any]] = []
        self.transactions: list[dict[str, Any]] = []
        self.operations: dict[str, list[dict[str, Any]]] = {}
        self.accounts: dict[str, dict[str, Any]] = {}
        self.submitted: list[TransactionEnvelope] = []
        self.submit_result: Optional[SubmitResult] = None
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.error: Optional[Exception] = None
        # method name -> call number from which ``error`` is raised; when
        # empty, every call raises ``error``.
        self.fail_on_call: dict[str, int] = {}

    @property
    def network_passphrase(self) -> str:
        return Network.TESTNET_NETWORK_PASSPHRASE

    def _maybe_fail(self) -> None:
        if self.error is None:
            return
        if self.fail_on_call:
            name = self.calls[-1][0]
            threshold = self.fail_on_call.get(name)
            if threshold is None or len(self.calls_to(name)) < threshold:
                return
        raise self.error

    @staticmethod
    def _page(records: list[dict[str, Any]], limit: int, cursor: Optional[str]) -> list[dict[str, Any]]:
        start = 0
        if cursor is not None:
            tokens = [r.get("paging_token") for r in records]
            start = tokens.index(cursor) + 1
        return records[start:start + limit]

    def load_account(self, account_id: str) -> Account:
        self.calls.append(("load_account", {"account_id": account_id}))
        self._maybe_fail()
        if account_id not in self.accounts:
            raise NotFoundError("Account", account_id)
        return Account(account_id, 1)

    def fetch_account(self, account_id: str) -> dict[str, Any]:
        self.calls.append(("fetch_account", {"account_id": account_id}))
        self._maybe_fail()
        if account_id not in self.accounts:
            raise NotFoundError("Account", account_id)
        return self.accounts[account_id]

    def submit_transaction(self, envelope: TransactionEnvelope) -> SubmitResult:
        self.calls.append(("submit_transaction", {}))
        self._maybe_fail()
        self.submitted.append(envelope)
        if self.submit_result is not None:
            return self.submit_result
        return SubmitResult(successful=True, hash=envelope.hash_hex())

    def payments_for_account(self, account_id, limit, cursor=None, descending=True):
        self.calls.append(("payments_for_account", {"limit": limit, "cursor": cursor}))
        self._maybe_fail()
        return self._page(self.payments, limit, cursor)

    def transactions_for_account(self, account_id, limit, cursor=None, descending=True):
        self.calls.append(("transactions_for_account", {"limit": limit, "cursor": cursor}))
        self._maybe_fail()
        return self._page(self.transactions, limit, cursor)

    def operations_for_transaction(self, tx_hash):
        self.calls.append(("operations_for_transaction", {"tx_hash": tx_hash}))
        self._maybe_fail()
        return list(self.operations.get(tx_hash, []))

    def calls_to(self, name: str) -> list[dict[str, Any]]:
        return [kwargs for call, kwargs in self.calls if call == name]


def tx_hash(n: int) -> str:
    return f"{n:064x}"


def payment_record(
    n: int,
    asset: AssetDescriptor,
    *,
    memo: Optional[str] = None,
    op_type: str = "payment",
    asset_code: Optional[str] = None,
    asset_issuer: Optional[str] = None,
    native: bool = False,
    amount: str = "10.0000000",
    source: str = "GSOURCE",
    destination: str = "GDESTINATION",
) -> dict[str, Any]:
    """Horizon-shaped operation record; larger ``n`` means newer."""
    record: dict[str, Any] = {
        "id": str(n),
        "paging_token": str(n),
        "type": op_type,
        "transaction_hash": tx_hash(n),
        "created_at": f"2024-05-01T10:{n % 60:02d}:00Z",
        "transaction": {"memo": memo} if memo is not None else {},
    }
    if op_type == "payment":
        record.update({"from": source, "to": destination, "amount": amount})
        if native:
            record["asset_type"] = "native"
        else:
            record.update(
                {
                    "asset_type": "credit_alphanum4",
                    "asset_code": asset_code or asset.code,
                    "asset_issuer": asset_issuer or asset.issuer,
                }
            )
    return record


def transaction_record(n: int, *, memo: Optional[str] = None, successful: bool = True) -> dict[str, Any]:
    record: dict[str, Any] = {
        "hash": tx_hash(n),
        "paging_token": str(n),
        "created_at": f"2024-05-01T11:{n % 60:02d}:00Z",
        "successful": successful,
        "memo_type": "text" if memo is not None else "none",
    }
    if memo is not None:
        record["memo"] = memo
    return record


def sign_message(private_key: rsa.RSAPrivateKey, message: str) -> str:
    """Sign the way the gateway does: PKCS#1 v1.5 / SHA-256, URL-safe base64."""
    signature = private_key.sign(message.encode("utf-8"), padding.PKCS1v15(), hashes.SHA256())
    return base64.urlsafe_b64encode(signature).rstrip(b"=").decode("ascii")


def callback_url(base: str = "https://shop.example.com/return", **params: str) -> str:
    return f"{base}?{urlencode(params)}"


def _public_pem(private_key: rsa.RSAPrivateKey) -> str:
    return private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("utf-8")


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def public_key_pem(rsa_private_key) -> str:
    return _public_pem(rsa_private_key)


@pytest.fixture(scope="session")
def other_public_key_pem() -> str:
    return _public_pem(rsa.generate_private_key(public_exponent=65537, key_size=2048))


@pytest.fixture
def signed_callback(rsa_private_key):
    """Build a signed return URL for a status and amount."""

    def _build(status: str = "success", amount: str = "100", **overrides: str) -> str:
        message = overrides.pop("message", None) or f"https://shop.example.com/return{status}{amount}"
        params = {
            "payment_status": status,
            "transaction_id": "TX-1001",
            "cib_transaction_id": "CIB-778899",
            "message": message,
            "signature": sign_message(rsa_private_key, message),
        }
        params.update(overrides)
        return callback_url(**params)

    return _build


@pytest.fixture
def asset() -> AssetDescriptor:
    return AssetDescriptor(code="DZT", issuer=Keypair.random().public_key)


@pytest.fixture
def fake_ledger() -> FakeLedgerClient:
    return FakeLedgerClient()


@pytest.fixture
def source_keypair() -> Keypair:
    return Keypair.random()


@pytest.fixture
def destination() -> str:
    return Keypair.random().public_key


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep developer SOFIZPAY_* variables out of the tests."""
    for name in (
        "SOFIZPAY_NETWORK",
        "SOFIZPAY_HORIZON_URL",
        "SOFIZPAY_API_BASE_URL",
        "SOFIZPAY_CIB_PUBLIC_KEY_PEM",
        "SOFIZPAY_SOURCE_SECRET",
    ):
        monkeypatch.delenv(name, raising=False)
