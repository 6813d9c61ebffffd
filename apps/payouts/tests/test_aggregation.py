from __future__ import annotations

from datetime import datetime

import pytest
from django.utils import timezone

from apps.payments.models import PaymentStatus, ProductType
from apps.payouts.exceptions import PayoutValidationError
from apps.payouts.models import Payout, PayoutStatus
from apps.payouts.services import calculate_payouts, period_bounds, previous_period
from apps.payouts.services.aggregation import aggregate_revenue, calculate_commission_cents
from apps.payouts.tests.factories import aware, make_course, make_educator, make_payment


def test_commission_rounds_half_up_per_transaction():
    assert calculate_commission_cents(1000) == 200
    assert calculate_commission_cents(1999) == 400
    assert calculate_commission_cents(2) == 0
    assert calculate_commission_cents(3) == 1
    assert calculate_commission_cents(15, commission_bps=1000) == 2
    assert calculate_commission_cents(14, commission_bps=1000) == 1
    assert calculate_commission_cents(0) == 0


def test_period_bounds_cover_whole_month_inclusive():
    start, end = period_bounds(2, 2024)
    assert timezone.localtime(start).replace(tzinfo=None) == datetime(2024, 2, 1, 0, 0, 0)
    assert timezone.localtime(end).replace(tzinfo=None) == datetime(2024, 2, 29, 23, 59, 59, 999999)


def test_period_bounds_reject_bad_month():
    with pytest.raises(PayoutValidationError):
        period_bounds(13, 2026)
    with pytest.raises(PayoutValidationError):
        period_bounds("x", 2026)


def test_previous_period_wraps_year():
    assert previous_period(datetime(2026, 1, 1)) == (12, 2025)
    assert previous_period(datetime(2026, 7, 15)) == (6, 2026)


class _Event:
    def __init__(self, pk, product_id, amount_cents):
        self.id = pk
        self.product_id = product_id
        self.product_type = ProductType.COURSE
        self.amount_cents = amount_cents


def test_aggregate_revenue_skips_unresolved_owner():
    owners = {1: 10, 2: 20}
    events = [_Event(1, 1, 1000), _Event(2, 2, 500), _Event(3, 3, 700), _Event(4, 1, 1999)]

    aggregation = aggregate_revenue(events, resolver=lambda product_id, _type: owners.get(product_id))

    assert aggregation.considered_events == 4
    assert aggregation.skipped_events == 1
    assert aggregation.totals[10].gross_cents == 2999
    assert aggregation.totals[10].commission_cents == 600
    assert aggregation.totals[10].payable_cents == 2399
    assert aggregation.totals[20].commission_cents == 100
    assert set(aggregation.totals) == {10, 20}


@pytest.mark.django_db
def test_calculate_payouts_creates_pending_record_per_educator():
    alice = make_educator()
    bob = make_educator()
    alice_course = make_course(alice)
    bob_course = make_course(bob)

    make_payment(alice_course.id, 1000, aware(2026, 1, 1, 0, 0, 0))
    make_payment(alice_course.id, 1999, aware(2026, 1, 31, 23, 59, 59))
    make_payment(bob_course.id, 505, aware(2026, 1, 10))
    # Excluded: wrong status, outside the month, unknown product.
    make_payment(alice_course.id, 5000, aware(2026, 1, 12), status=PaymentStatus.REFUNDED)
    make_payment(alice_course.id, 5000, aware(2026, 2, 1, 0, 0, 0))
    make_payment(999999, 5000, aware(2026, 1, 12))

    records = calculate_payouts(1, 2026)

    assert len(records) == 2
    alice_payout = Payout.objects.get(educator=alice)
    assert alice_payout.period_key == f"PAYOUT_2026_1_{alice.id}"
    assert alice_payout.gross_cents == 2999
    assert alice_payout.commission_cents == 600
    assert alice_payout.amount_cents == 2399
    assert alice_payout.status == PayoutStatus.PENDING
    assert alice_payout.idempotency_key is None
    assert alice_payout.currency == "INR"

    bob_payout = Payout.objects.get(educator=bob)
    assert (bob_payout.gross_cents, bob_payout.commission_cents, bob_payout.amount_cents) == (505, 101, 404)


@pytest.mark.django_db
def test_calculate_payouts_is_idempotent():
    educator = make_educator()
    course = make_course(educator)
    make_payment(course.id, 1000, aware(2026, 3, 5))

    first = calculate_payouts(3, 2026)
    second = calculate_payouts(3, 2026)

    assert Payout.objects.count() == 1
    assert first[0].pk == second[0].pk
    payout = Payout.objects.get()
    assert (payout.gross_cents, payout.commission_cents, payout.amount_cents) == (1000, 200, 800)


@pytest.mark.django_db
def test_recalculation_updates_pending_and_leaves_in_flight_records():
    alice = make_educator()
    bob = make_educator()
    alice_course = make_course(alice)
    bob_course = make_course(bob)
    make_payment(alice_course.id, 1000, aware(2026, 4, 2))
    make_payment(bob_course.id, 1000, aware(2026, 4, 2))
    calculate_payouts(4, 2026)

    Payout.objects.filter(educator=alice).update(status=PayoutStatus.PROCESSING, idempotency_key="abc123")
    make_payment(alice_course.id, 4000, aware(2026, 4, 20))
    make_payment(bob_course.id, 4000, aware(2026, 4, 20))

    records = calculate_payouts(4, 2026)

    assert [payout.educator_id for payout in records] == [bob.id]
    alice_payout = Payout.objects.get(educator=alice)
    assert alice_payout.status == PayoutStatus.PROCESSING
    assert alice_payout.gross_cents == 1000
    assert alice_payout.idempotency_key == "abc123"
    bob_payout = Payout.objects.get(educator=bob)
    assert bob_payout.gross_cents == 5000
    assert bob_payout.amount_cents == 4000


@pytest.mark.django_db
def test_calculate_payouts_with_no_revenue_writes_nothing():
    assert calculate_payouts(5, 2026) == []
    assert Payout.objects.count() == 0


@pytest.mark.django_db
def test_sub_second_payment_in_last_second_belongs_to_the_month():
    educator = make_educator()
    course = make_course(educator)
    make_payment(course.id, 1000, aware(2026, 6, 30, 23, 59, 59).replace(microsecond=500000))
    make_payment(course.id, 3000, aware(2026, 7, 1, 0, 0, 0))

    records = calculate_payouts(6, 2026)

    assert len(records) == 1
    assert records[0].gross_cents == 1000
