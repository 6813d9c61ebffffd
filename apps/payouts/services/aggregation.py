from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from apps.catalog.products import resolve_owner
from apps.payments.models import PaymentEvent
from apps.payments.selectors import list_succeeded_payments
from apps.payouts.exceptions import PayoutValidationError
from apps.payouts.models import Payout, PayoutStatus

logger = logging.getLogger(__name__)

OwnerResolver = Callable[[int, str], Optional[int]]


@dataclass
class EducatorRevenue:
    gross_cents: int = 0
    commission_cents: int = 0

    @property
    def payable_cents(self) -> int:
        return self.gross_cents - self.commission_cents


@dataclass
class RevenueAggregation:
    totals: Dict[int, EducatorRevenue] = field(default_factory=dict)
    considered_events: int = 0
    skipped_events: int = 0


def validate_period(month: int, year: int) -> Tuple[int, int]:
    try:
        month, year = int(month), int(year)
    except (TypeError, ValueError) as exc:
        raise PayoutValidationError("Month and year must be integers.") from exc
    if not 1 <= month <= 12:
        raise PayoutValidationError(f"Month must be between 1 and 12, got {month}.", month=month)
    if not 1000 <= year <= 9999:
        raise PayoutValidationError(f"Year must be a four-digit year, got {year}.", year=year)
    return month, year


def period_bounds(month: int, year: int) -> Tuple[datetime, datetime]:
    """
    Inclusive bounds: day 1 00:00:00 through the last day 23:59:59.999999.

    The end carries full microsecond precision so that sub-second timestamps
    in the final second of the month still belong to it.
    """
    month, year = validate_period(month, year)
    last_day = calendar.monthrange(year, month)[1]
    start = timezone.make_aware(datetime(year, month, 1, 0, 0, 0))
    end = timezone.make_aware(datetime(year, month, last_day, 23, 59, 59, 999999))
    return start, end


def previous_period(today: Optional[datetime] = None) -> Tuple[int, int]:
    today = today or timezone.localtime()
    if today.month == 1:
        return 12, today.year - 1
    return today.month - 1, today.year


def calculate_commission_cents(amount_cents: int, commission_bps: Optional[int] = None) -> int:
    if amount_cents <= 0:
        return 0
    bps = int(commission_bps if commission_bps is not None else getattr(settings, "PAYOUT_COMMISSION_BPS", 2000))
    # Round half up per transaction.
    return (amount_cents * bps + 5000) // 10000


def aggregate_revenue(
    payments: Iterable[PaymentEvent],
    *,
    resolver: OwnerResolver = resolve_owner,
    commission_bps: Optional[int] = None,
) -> RevenueAggregation:
    aggregation = RevenueAggregation()
    for payment in payments:
        aggregation.considered_events += 1
        educator_id = resolver(payment.product_id, payment.product_type)
        if educator_id is None:
            aggregation.skipped_events += 1
            logger.info(
                "Skipping payment with unresolved owner",
                extra={
                    "payment_id": payment.id,
                    "product_id": payment.product_id,
                    "product_type": payment.product_type,
                },
            )
            continue
        revenue = aggregation.totals.setdefault(educator_id, EducatorRevenue())
        revenue.gross_cents += payment.amount_cents
        revenue.commission_cents += calculate_commission_cents(payment.amount_cents, commission_bps)
    return aggregation


def _upsert_pending(educator_id: int, month: int, year: int, revenue: EducatorRevenue) -> Optional[Payout]:
    period_key = Payout.build_period_key(educator_id, month, year)
    amounts = {
        "gross_cents": revenue.gross_cents,
        "commission_cents": revenue.commission_cents,
        "amount_cents": revenue.payable_cents,
    }
    with transaction.atomic():
        payout, created = Payout.objects.get_or_create(
            period_key=period_key,
            defaults={
                "educator_id": educator_id,
                "month": month,
                "year": year,
                "status": PayoutStatus.PENDING,
                "scheduled_date": timezone.now(),
                **amounts,
            },
        )
    if created:
        return payout
    if Payout.objects.update_if_status(payout.pk, [PayoutStatus.PENDING], **amounts):
        payout.refresh_from_db()
        return payout
    logger.info(
        "Leaving in-flight payout untouched",
        extra={"payout_id": payout.pk, "period_key": period_key, "status": payout.status},
    )
    return None


def calculate_payouts(
    month: int,
    year: int,
    *,
    resolver: OwnerResolver = resolve_owner,
    commission_bps: Optional[int] = None,
) -> List[Payout]:
    """
    Aggregate a month's succeeded payments into one pending payout per educator.

    Safe to re-run: existing records are only recomputed while still pending,
    and the returned list holds just the records created or updated.
    """
    month, year = validate_period(month, year)
    start, end = period_bounds(month, year)
    logger.info(
        "Calculating payouts",
        extra={"month": month, "year": year, "start": start.isoformat(), "end": end.isoformat()},
    )

    aggregation = aggregate_revenue(
        list_succeeded_payments(start, end),
        resolver=resolver,
        commission_bps=commission_bps,
    )

    records: List[Payout] = []
    for educator_id, revenue in aggregation.totals.items():
        if revenue.gross_cents == 0:
            continue
        payout = _upsert_pending(educator_id, month, year, revenue)
        if payout is not None:
            records.append(payout)

    logger.info(
        "Payout calculation finished",
        extra={
            "month": month,
            "year": year,
            "considered_events": aggregation.considered_events,
            "skipped_events": aggregation.skipped_events,
            "educators": len(aggregation.totals),
            "records_written": len(records),
        },
    )
    return records
