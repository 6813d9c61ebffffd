from __future__ import annotations

import pytest

from apps.educators.models import Educator
from apps.educators.services import update_bank_details
from apps.payouts.exceptions import PayoutGatewayError, PayoutValidationError
from apps.payouts.providers import MockPayoutGateway
from apps.payouts.services import FixedIntervalPacer, PayoutProcessor
from apps.payouts.tests.factories import RecordingGateway, make_educator, make_payout

BANK = {
    "account_holder_name": "Asha Rao",
    "account_number": "123456789012",
    "ifsc_code": "sbin0000123",
    "bank_name": "State Bank of India",
}


@pytest.mark.django_db
def test_first_update_registers_contact_and_fund_account():
    educator = make_educator(fund_account="", with_bank=False)

    result = update_bank_details(educator, BANK, gateway=MockPayoutGateway())

    educator.refresh_from_db()
    assert result.contact_created is True
    assert educator.external_contact_id.startswith("cont_mock_")
    assert educator.external_fund_account_id == result.fund_account_id
    assert educator.bank_ifsc_code == "SBIN0000123"
    assert educator.is_payout_ready


@pytest.mark.django_db
def test_changing_bank_details_reuses_contact_and_replaces_fund_account():
    educator = make_educator(fund_account="", with_bank=False)
    gateway = MockPayoutGateway()
    first = update_bank_details(educator, BANK, gateway=gateway)
    contact_id = Educator.objects.get(pk=educator.pk).external_contact_id

    second = update_bank_details(educator, {**BANK, "account_number": "999988887777"}, gateway=gateway)

    educator.refresh_from_db()
    assert second.contact_created is False
    assert educator.external_contact_id == contact_id
    assert second.fund_account_id != first.fund_account_id
    assert educator.external_fund_account_id == second.fund_account_id
    assert educator.bank_account_number == "999988887777"


@pytest.mark.django_db
def test_invalid_ifsc_is_not_saved():
    educator = make_educator(fund_account="", with_bank=False)

    with pytest.raises(PayoutValidationError):
        update_bank_details(educator, {**BANK, "ifsc_code": "SBIN123"}, gateway=RecordingGateway())

    assert Educator.objects.get(pk=educator.pk).bank_ifsc_code == ""


@pytest.mark.django_db
def test_gateway_failure_keeps_local_details():
    educator = make_educator(fund_account="", with_bank=False)

    class DownGateway(RecordingGateway):
        def register_contact(self, educator):
            raise PayoutGatewayError("RazorpayX contact creation failed: Service unavailable")

    with pytest.raises(PayoutGatewayError):
        update_bank_details(educator, BANK, gateway=DownGateway())

    stored = Educator.objects.get(pk=educator.pk)
    assert stored.bank_account_number == "123456789012"
    assert stored.has_bank_details
    assert not stored.is_payout_ready


@pytest.mark.django_db
def test_failed_reregistration_unlinks_previous_fund_account():
    educator = make_educator(fund_account="fa_previous", external_contact_id="cont_existing")

    class FundAccountDown(RecordingGateway):
        def register_fund_account(self, contact_id, bank_details):
            raise PayoutGatewayError("RazorpayX fund account creation failed: Service unavailable")

    with pytest.raises(PayoutGatewayError):
        update_bank_details(educator, {**BANK, "account_number": "999988887777"}, gateway=FundAccountDown())

    stored = Educator.objects.get(pk=educator.pk)
    assert stored.bank_account_number == "999988887777"
    assert stored.external_fund_account_id == ""
    assert stored.external_contact_id == "cont_existing"
    assert not stored.is_payout_ready

    payout = make_payout(stored)
    gateway = RecordingGateway()
    with pytest.raises(PayoutValidationError) as excinfo:
        PayoutProcessor(gateway=gateway, pacer=FixedIntervalPacer(0)).process_payout(payout.pk)
    assert "no fund account is linked" in excinfo.value.message
    assert gateway.requests == []


@pytest.mark.django_db
def test_bank_name_only_change_keeps_fund_account():
    educator = make_educator(fund_account="fa_current", external_contact_id="cont_existing")

    class FundAccountDown(RecordingGateway):
        def register_fund_account(self, contact_id, bank_details):
            raise PayoutGatewayError("RazorpayX fund account creation failed: Service unavailable")

    details = {**educator.bank_details, "bank_name": "HDFC Bank Ltd"}
    with pytest.raises(PayoutGatewayError):
        update_bank_details(educator, details, gateway=FundAccountDown())

    stored = Educator.objects.get(pk=educator.pk)
    assert stored.bank_name == "HDFC Bank Ltd"
    assert stored.external_fund_account_id == "fa_current"
