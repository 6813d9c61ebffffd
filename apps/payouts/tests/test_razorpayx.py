from __future__ import annotations

from unittest import mock

import pytest
import requests
from django.test import override_settings

from apps.payouts.exceptions import PayoutConfigurationError, PayoutGatewayError, PayoutValidationError
from apps.payouts.providers import (
    DisbursementRequest,
    MockPayoutGateway,
    RazorpayXGateway,
    get_payout_gateway,
)
from apps.payouts.providers.razorpayx import IDEMPOTENCY_HEADER

BANK = {"account_holder_name": "Asha Rao", "account_number": "123456789012", "ifsc_code": "hdfc0001234"}


def _response(status_code: int, payload) -> mock.Mock:
    response = mock.Mock(status_code=status_code)
    response.json.return_value = payload
    return response


def _gateway(session) -> RazorpayXGateway:
    return RazorpayXGateway(
        base_url="https://api.razorpay.com/v1/",
        key_id="rzp_test_key",
        key_secret="rzp_test_secret",
        account_number="7878780080316316",
        session=session,
    )


def _request(**overrides) -> DisbursementRequest:
    fields = {
        "fund_account_id": "fa_123",
        "amount_cents": 8000,
        "currency": "INR",
        "reference_id": "PAYOUT_2026_1_42",
        "narration": "FP Payout 1 2026",
        "idempotency_key": "0f4d1b3c9a8e4e3d8c6b5a4f3e2d1c0b",
    }
    fields.update(overrides)
    return DisbursementRequest(**fields)


def test_create_disbursement_sends_idempotency_header():
    session = mock.Mock()
    session.request.return_value = _response(200, {"id": "pout_abc", "status": "queued"})

    result = _gateway(session).create_disbursement(_request())

    assert result.external_payout_id == "pout_abc"
    assert result.status == "queued"
    method, url = session.request.call_args.args
    kwargs = session.request.call_args.kwargs
    assert method == "POST"
    assert url == "https://api.razorpay.com/v1/payouts"
    assert kwargs["headers"][IDEMPOTENCY_HEADER] == "0f4d1b3c9a8e4e3d8c6b5a4f3e2d1c0b"
    assert kwargs["auth"] == ("rzp_test_key", "rzp_test_secret")
    assert kwargs["timeout"] == 10
    body = kwargs["json"]
    assert body["account_number"] == "7878780080316316"
    assert body["fund_account_id"] == "fa_123"
    assert body["amount"] == 8000
    assert body["mode"] == "IMPS"
    assert body["purpose"] == "payout"
    assert body["reference_id"] == "PAYOUT_2026_1_42"
    assert body["narration"] == "FP Payout 1 2026"


def test_rail_error_description_is_surfaced():
    session = mock.Mock()
    session.request.return_value = _response(
        400, {"error": {"code": "BAD_REQUEST_ERROR", "description": "The fund account is inactive"}}
    )

    with pytest.raises(PayoutGatewayError) as excinfo:
        _gateway(session).create_disbursement(_request())

    assert excinfo.value.message == "RazorpayX payout creation failed: The fund account is inactive"
    assert excinfo.value.context["status_code"] == 400


def test_timeout_becomes_gateway_error():
    session = mock.Mock()
    session.request.side_effect = requests.Timeout("read timed out")

    with pytest.raises(PayoutGatewayError) as excinfo:
        _gateway(session).create_disbursement(_request())

    assert "timed out" in excinfo.value.message


def test_connection_error_becomes_gateway_error():
    session = mock.Mock()
    session.request.side_effect = requests.ConnectionError("refused")

    with pytest.raises(PayoutGatewayError):
        _gateway(session).create_disbursement(_request())


def test_disbursement_without_idempotency_key_is_rejected_locally():
    session = mock.Mock()
    with pytest.raises(PayoutValidationError):
        _gateway(session).create_disbursement(_request(idempotency_key=""))
    session.request.assert_not_called()


def test_register_contact_and_fund_account():
    session = mock.Mock()
    session.request.side_effect = [
        _response(200, {"id": "cont_001"}),
        _response(200, {"id": "fa_001"}),
    ]
    educator = mock.Mock(id=42, full_name="Asha Rao", email="asha@example.com", mobile_number="9876543210")
    gateway = _gateway(session)

    assert gateway.register_contact(educator) == "cont_001"
    assert gateway.register_fund_account("cont_001", BANK) == "fa_001"

    contact_call, fund_call = session.request.call_args_list
    assert contact_call.args[1].endswith("/contacts")
    assert contact_call.kwargs["json"]["type"] == "vendor"
    assert contact_call.kwargs["json"]["reference_id"] == "42"
    fund_body = fund_call.kwargs["json"]
    assert fund_body["contact_id"] == "cont_001"
    assert fund_body["account_type"] == "bank_account"
    assert fund_body["bank_account"] == {
        "name": "Asha Rao",
        "ifsc": "HDFC0001234",
        "account_number": "123456789012",
    }


def test_invalid_ifsc_is_rejected_before_rail_call():
    session = mock.Mock()
    with pytest.raises(PayoutValidationError) as excinfo:
        _gateway(session).register_fund_account("cont_001", {**BANK, "ifsc_code": "HDFC1234"})
    assert "IFSC" in excinfo.value.message
    session.request.assert_not_called()


def test_incomplete_bank_details_list_missing_fields():
    session = mock.Mock()
    with pytest.raises(PayoutValidationError) as excinfo:
        _gateway(session).register_fund_account("cont_001", {"account_holder_name": "Asha Rao"})
    assert excinfo.value.context["missing"] == ["account_number", "ifsc_code"]


def test_missing_credentials_is_configuration_error():
    with pytest.raises(PayoutConfigurationError):
        RazorpayXGateway(base_url="https://api.razorpay.com/v1", key_id="", key_secret="", account_number="1")
    with pytest.raises(PayoutConfigurationError):
        RazorpayXGateway(base_url="https://api.razorpay.com/v1", key_id="k", key_secret="s", account_number="")


def test_get_payout_gateway_follows_settings():
    with override_settings(PAYOUT_GATEWAY_PROVIDER="mock"):
        assert isinstance(get_payout_gateway(), MockPayoutGateway)
    with override_settings(PAYOUT_GATEWAY_PROVIDER="razorpayx"):
        assert isinstance(get_payout_gateway(), RazorpayXGateway)
    with override_settings(PAYOUT_GATEWAY_PROVIDER="paypal"):
        with pytest.raises(PayoutConfigurationError):
            get_payout_gateway()


def test_mock_gateway_deduplicates_by_idempotency_key():
    gateway = MockPayoutGateway()
    first = gateway.create_disbursement(_request())
    again = gateway.create_disbursement(_request())
    other = gateway.create_disbursement(_request(idempotency_key="another"))
    assert first == again
    assert other.external_payout_id != first.external_payout_id
