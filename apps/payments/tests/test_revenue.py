from __future__ import annotations

from django.test import TestCase
from rest_framework.test import APIClient

from apps.payments.models import PaymentStatus, ProductType
from apps.payments.selectors import RevenueSelector, list_succeeded_payments
from apps.payouts.tests.factories import aware, make_payment
from apps.users.models import User


class RevenueSelectorTests(TestCase):
    def setUp(self) -> None:
        make_payment(1, 1000, aware(2026, 1, 5))
        make_payment(2, 500, aware(2026, 1, 20), product_type=ProductType.WEBINAR)
        make_payment(1, 700, aware(2026, 2, 3))
        make_payment(1, 300, aware(2026, 2, 4), status=PaymentStatus.REFUNDED)
        make_payment(3, 900, aware(2026, 2, 5), product_type=ProductType.TEST, status=PaymentStatus.FAILED)

    def test_list_succeeded_payments_is_bounded_and_ordered(self) -> None:
        rows = list(list_succeeded_payments(aware(2026, 1, 1, 0), aware(2026, 1, 31, 23, 59, 59)))
        self.assertEqual([row.amount_cents for row in rows], [1000, 500])

    def test_summary(self) -> None:
        self.assertEqual(
            RevenueSelector.summary(),
            {
                "total_revenue_cents": 2200,
                "total_refunded_cents": 300,
                "total_failed_cents": 900,
                "total_transactions": 5,
            },
        )

    def test_summary_filters_by_type(self) -> None:
        summary = RevenueSelector.summary(product_types=[ProductType.WEBINAR])
        self.assertEqual(summary["total_revenue_cents"], 500)
        self.assertEqual(summary["total_transactions"], 1)

    def test_by_month(self) -> None:
        rows = RevenueSelector.by_month(date_from=aware(2026, 1, 1, 0), date_to=aware(2026, 3, 1, 0))
        self.assertEqual(
            rows,
            [
                {"year": 2026, "month": 1, "revenue_cents": 1500},
                {"year": 2026, "month": 2, "revenue_cents": 700},
            ],
        )

    def test_by_type(self) -> None:
        self.assertEqual(
            RevenueSelector.by_type(),
            [{"type": "course", "revenue_cents": 1700}, {"type": "webinar", "revenue_cents": 500}],
        )


class RevenueApiTests(TestCase):
    def setUp(self) -> None:
        make_payment(1, 1000, aware(2026, 1, 5))
        make_payment(2, 500, aware(2026, 1, 20), product_type=ProductType.WEBINAR)
        self.admin = User.objects.create_user(email="ops@example.com", password="pass12345", name="Ops", is_staff=True)
        self.client = APIClient()
        self.client.force_authenticate(self.admin)

    def test_summary_endpoint_accepts_comma_separated_types(self) -> None:
        response = self.client.get("/api/v1/admin/revenue/summary/", {"product_type": "course,webinar"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["total_revenue_cents"], 1500)

    def test_unknown_type_is_rejected(self) -> None:
        response = self.client.get("/api/v1/admin/revenue/by-type/", {"product_type": "bundle"})
        self.assertEqual(response.status_code, 400)

    def test_by_type_endpoint(self) -> None:
        response = self.client.get("/api/v1/admin/revenue/by-type/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["results"][0], {"type": "course", "revenue_cents": 1000})

    def test_requires_admin(self) -> None:
        student = User.objects.create_user(email="s@example.com", password="pass12345", name="S")
        client = APIClient()
        client.force_authenticate(student)
        response = client.get("/api/v1/admin/revenue/summary/")
        self.assertEqual(response.status_code, 403)
