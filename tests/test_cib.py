"""Tests for the CIB gateway resource."""
from __future__ import annotations

import re
from urllib.parse import parse_qs, urlsplit

import httpx
import pytest

from sofizpay_sdk.models.errors import GatewayError, NetworkError, SofizPayError, ValidationError
from sofizpay_sdk.resources.cib import CibResource

from conftest import callback_url

BASE_URL = "https://api.test.sofizpay.com"
ENDPOINT = re.compile(r"https://api\.test\.sofizpay\.com/make-cib-transaction/.*")

SUCCESS_BODY = {
    "success": True,
    "transaction_id": "TX-1001",
    "cib_transaction_id": 778899,
    "payment_url": "https://cib.example.dz/pay/778899",
    "amount": 1500,
    "status": "pending",
    "more_info_url": "https://api.test.sofizpay.com/info/TX-1001",
    "cib_response": {"orderId": "778899", "errorCode": "0"},
}

CUSTOMER = {
    "account": "GMERCHANT",
    "amount": "1500",
    "full_name": "Amine B.",
    "phone": "+213555000000",
    "email": "amine@example.com",
}


@pytest.fixture
def http_client():
    with httpx.Client() as client:
        yield client


@pytest.fixture
def cib(http_client) -> CibResource:
    return CibResource(http_client, base_url=BASE_URL + "/", timeout=5.0)


def _query(request: httpx.Request) -> dict[str, str]:
    return {k: v[0] for k, v in parse_qs(urlsplit(str(request.url)).query).items()}


class TestCreateTransaction:
    def test_creates_transaction(self, cib, httpx_mock):
        httpx_mock.add_response(url=ENDPOINT, json=SUCCESS_BODY)

        transaction = cib.create_transaction(
            **CUSTOMER, return_url="https://shop.example.com/return", memo="order-42"
        )

        assert transaction.merchant_transaction_id == "TX-1001"
        assert transaction.gateway_transaction_id == "778899"
        assert transaction.payment_url == "https://cib.example.dz/pay/778899"
        assert transaction.amount == "1500"
        assert transaction.status == "pending"
        assert transaction.info_url.endswith("/info/TX-1001")
        assert transaction.raw_gateway_payload == {"orderId": "778899", "errorCode": "0"}

        request = httpx_mock.get_request()
        assert request.method == "GET"
        assert request.url.path == "/make-cib-transaction/"
        assert _query(request) == {
            **CUSTOMER,
            "redirect": "no",
            "return_url": "https://shop.example.com/return",
            "memo": "order-42",
        }

    def test_optional_params_omitted(self, cib, httpx_mock):
        httpx_mock.add_response(url=ENDPOINT, json=SUCCESS_BODY)

        cib.create_transaction(**CUSTOMER, redirect=True)

        query = _query(httpx_mock.get_request())
        assert query["redirect"] == "yes"
        assert "return_url" not in query
        assert "memo" not in query

    def test_missing_cib_response_defaults_to_empty(self, cib, httpx_mock):
        body = {k: v for k, v in SUCCESS_BODY.items() if k != "cib_response"}
        httpx_mock.add_response(url=ENDPOINT, json=body)

        assert cib.create_transaction(**CUSTOMER).raw_gateway_payload == {}

    @pytest.mark.parametrize(
        "field, value",
        [
            ("account", ""),
            ("amount", ""),
            ("amount", "0"),
            ("amount", "-10"),
            ("amount", "ten"),
            ("full_name", ""),
            ("phone", " "),
            ("email", ""),
        ],
    )
    def test_validation_before_request(self, cib, httpx_mock, field, value):
        with pytest.raises(ValidationError) as exc_info:
            cib.create_transaction(**{**CUSTOMER, field: value})
        assert exc_info.value.field == field
        assert httpx_mock.get_requests() == []

    def test_gateway_failure(self, cib, httpx_mock):
        httpx_mock.add_response(
            url=ENDPOINT, status_code=400, json={"success": False, "error": "Invalid account"}
        )

        with pytest.raises(GatewayError) as exc_info:
            cib.create_transaction(**CUSTOMER)

        assert exc_info.value.message == "Invalid account"
        assert exc_info.value.status_code == 400

    def test_gateway_failure_without_message(self, cib, httpx_mock):
        httpx_mock.add_response(url=ENDPOINT, json={"success": False})

        with pytest.raises(GatewayError) as exc_info:
            cib.create_transaction(**CUSTOMER)

        assert exc_info.value.message == "Failed to create CIB transaction"
        assert exc_info.value.status_code == 200

    def test_non_json_body(self, cib, httpx_mock):
        httpx_mock.add_response(url=ENDPOINT, status_code=502, text="<html>Bad gateway</html>")

        with pytest.raises(GatewayError) as exc_info:
            cib.create_transaction(**CUSTOMER)

        assert exc_info.value.status_code == 502

    def test_json_array_body(self, cib, httpx_mock):
        httpx_mock.add_response(url=ENDPOINT, json=["unexpected"])

        with pytest.raises(GatewayError):
            cib.create_transaction(**CUSTOMER)

    def test_timeout(self, cib, httpx_mock):
        httpx_mock.add_exception(httpx.ReadTimeout("timed out"), url=ENDPOINT)

        with pytest.raises(NetworkError) as exc_info:
            cib.create_transaction(**CUSTOMER)

        assert "Network error while creating CIB transaction" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)

    def test_connection_error(self, cib, httpx_mock):
        httpx_mock.add_exception(httpx.ConnectError("refused"), url=ENDPOINT)

        with pytest.raises(NetworkError):
            cib.create_transaction(**CUSTOMER)

    def test_malformed_success_body(self, cib, httpx_mock):
        httpx_mock.add_response(url=ENDPOINT, json={"success": True})

        with pytest.raises(SofizPayError) as exc_info:
            cib.create_transaction(**CUSTOMER)

        assert type(exc_info.value) is SofizPayError
        assert "Unexpected error while creating CIB transaction" in exc_info.value.message


class TestVerifySignature:
    def test_valid_success(self, cib, signed_callback, public_key_pem):
        result = cib.verify_signature(signed_callback("success", "100"), public_key_pem)

        assert result.valid is True
        assert result.successful is True
        assert result.amount == "100"
        assert result.transaction_id == "TX-1001"
        assert result.gateway_transaction_id == "CIB-778899"

    def test_forged_success(self, cib, signed_callback, public_key_pem):
        url = signed_callback("success", "100", signature="Zm9yZ2VkLXNpZ25hdHVyZQ")

        result = cib.verify_signature(url, public_key_pem)

        assert result.valid is False
        assert result.successful is False
        assert result.error is not None

    def test_tampered_message(self, cib, signed_callback, public_key_pem):
        url = signed_callback("success", "100").replace("success100", "success900")

        result = cib.verify_signature(url, public_key_pem)

        assert result.amount == "900"
        assert result.valid is False
        assert result.successful is False

    def test_wrong_key(self, cib, signed_callback, other_public_key_pem):
        assert cib.verify_signature(signed_callback(), other_public_key_pem).valid is False

    def test_real_callback_amount(self, cib, public_key_pem):
        url = callback_url(
            payment_status="success",
            transaction_id="1212123",
            cib_transaction_id="CIB-1",
            message="1212123hicibsuccess100",
            signature="c2lnbmF0dXJl",
        )

        result = cib.verify_signature(url, public_key_pem)

        assert result.amount == "100"

    def test_missing_parameter_raises(self, cib, public_key_pem):
        with pytest.raises(ValidationError) as exc_info:
            cib.verify_signature(callback_url(payment_status="success"), public_key_pem)
        assert exc_info.value.field == "transaction_id"

    def test_no_query_raises(self, cib, public_key_pem):
        with pytest.raises(ValidationError):
            cib.verify_signature("https://shop.example.com/return", public_key_pem)

    def test_unexpected_failure_is_reported_in_result(self, cib, signed_callback, public_key_pem, monkeypatch):
        def boom(params, pem):
            raise RuntimeError("engine exploded")

        monkeypatch.setattr("sofizpay_sdk.resources.cib.build_verification_result", boom)

        result = cib.verify_signature(signed_callback(), public_key_pem)

        assert result.valid is False
        assert result.error == "Error verifying signature: engine exploded"


class TestReturnUrlHelpers:
    def test_parse_return_url(self, cib):
        assert cib.parse_return_url("https://x.dz/r?payment_status=success&a=1") == {
            "payment_status": "success",
            "a": "1",
        }

    def test_is_payment_successful(self, cib):
        assert cib.is_payment_successful("https://x.dz/r?payment_status=success") is True
        assert cib.is_payment_successful("https://x.dz/r?payment_status=failed") is False
