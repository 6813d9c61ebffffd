from __future__ import annotations

from unittest import mock

from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from apps.educators.models import Educator
from apps.payouts.exceptions import PayoutGatewayError
from apps.payouts.tests.factories import RecordingGateway, make_educator
from apps.users.models import User

URL = "/api/v1/educators/me/bank-details/"
PAYLOAD = {
    "account_holder_name": "Asha Rao",
    "account_number": "123456789012",
    "ifsc_code": "hdfc0001234",
    "bank_name": "HDFC Bank",
}


class BankDetailsApiTests(TestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(
            email="asha@example.com", password="pass12345", name="Asha", role=User.Role.EDUCATOR
        )
        self.educator = make_educator(user=self.user, fund_account="", with_bank=False)
        self.client = APIClient()
        self.client.force_authenticate(self.user)

    @override_settings(PAYOUT_GATEWAY_PROVIDER="mock")
    def test_put_registers_bank_details(self) -> None:
        response = self.client.put(URL, PAYLOAD, format="json")

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.data["is_payout_ready"])
        self.assertEqual(response.data["bank_ifsc_code"], "HDFC0001234")
        self.assertEqual(response.data["bank_account_number"], "********9012")

    def test_put_rejects_invalid_ifsc(self) -> None:
        response = self.client.put(URL, {**PAYLOAD, "ifsc_code": "HDFC123"}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertIn("ifsc_code", response.data)
        self.assertEqual(Educator.objects.get(pk=self.educator.pk).bank_account_number, "")

    def test_put_reports_gateway_failure_after_saving(self) -> None:
        class DownGateway(RecordingGateway):
            def register_contact(self, educator):
                raise PayoutGatewayError("RazorpayX contact creation failed: Service unavailable")

        with mock.patch("apps.educators.services.onboarding.get_payout_gateway", return_value=DownGateway()):
            response = self.client.put(URL, PAYLOAD, format="json")

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.data["detail"], "Bank details saved, but failed to register with payout system")
        stored = Educator.objects.get(pk=self.educator.pk)
        self.assertEqual(stored.bank_ifsc_code, "HDFC0001234")
        self.assertFalse(stored.is_payout_ready)

    def test_get_masks_account_number(self) -> None:
        Educator.objects.filter(pk=self.educator.pk).update(bank_account_number="123456789012")
        client = APIClient()
        client.force_authenticate(User.objects.get(pk=self.user.pk))
        response = client.get(URL)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["bank_account_number"], "********9012")

    def test_user_without_profile_gets_404(self) -> None:
        other = User.objects.create_user(email="student@example.com", password="pass12345", name="Student")
        client = APIClient()
        client.force_authenticate(other)
        response = client.put(URL, PAYLOAD, format="json")
        self.assertEqual(response.status_code, 404)
