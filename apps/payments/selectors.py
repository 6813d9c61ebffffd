from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

from django.db.models import Count, Q, QuerySet, Sum
from django.db.models.functions import TruncMonth
from django.utils import timezone

from apps.payments.models import PaymentEvent, PaymentStatus


def list_succeeded_payments(start: datetime, end: datetime) -> QuerySet[PaymentEvent]:
    """Succeeded payment events with ``start <= occurred_at <= end``."""
    return (
        PaymentEvent.objects.filter(
            status=PaymentStatus.SUCCEEDED,
            occurred_at__gte=start,
            occurred_at__lte=end,
        )
        .only("id", "product_id", "product_type", "amount_cents", "currency", "occurred_at")
        .order_by("occurred_at", "id")
    )


def _filtered(
    *,
    statuses: Optional[Sequence[str]] = None,
    product_types: Optional[Iterable[str]] = None,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
) -> QuerySet[PaymentEvent]:
    qs = PaymentEvent.objects.all()
    if statuses:
        qs = qs.filter(status__in=list(statuses))
    types = [value for value in (product_types or []) if value]
    if types:
        qs = qs.filter(product_type__in=types)
    if date_from:
        qs = qs.filter(occurred_at__gte=date_from)
    if date_to:
        qs = qs.filter(occurred_at__lte=date_to)
    return qs


class RevenueSelector:
    """
    Platform-wide revenue aggregations (ADMIN ONLY). Amounts stay in minor units.
    """

    @staticmethod
    def summary(
        *,
        product_types: Optional[Iterable[str]] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> dict:
        qs = _filtered(product_types=product_types, date_from=date_from, date_to=date_to)
        totals = qs.aggregate(
            total_succeeded=Sum("amount_cents", filter=Q(status=PaymentStatus.SUCCEEDED)),
            total_refunded=Sum("amount_cents", filter=Q(status=PaymentStatus.REFUNDED)),
            total_failed=Sum("amount_cents", filter=Q(status=PaymentStatus.FAILED)),
            total_transactions=Count("id"),
        )
        return {
            "total_revenue_cents": totals["total_succeeded"] or 0,
            "total_refunded_cents": totals["total_refunded"] or 0,
            "total_failed_cents": totals["total_failed"] or 0,
            "total_transactions": totals["total_transactions"] or 0,
        }

    @staticmethod
    def by_month(
        *,
        product_types: Optional[Iterable[str]] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> list[dict]:
        # Defaults to the trailing twelve months.
        date_to = date_to or timezone.now()
        date_from = date_from or (date_to - timedelta(days=365))
        rows = (
            _filtered(
                statuses=[PaymentStatus.SUCCEEDED],
                product_types=product_types,
                date_from=date_from,
                date_to=date_to,
            )
            .annotate(month=TruncMonth("occurred_at"))
            .values("month")
            .annotate(revenue_cents=Sum("amount_cents"))
            .order_by("month")
        )
        return [
            {"year": row["month"].year, "month": row["month"].month, "revenue_cents": row["revenue_cents"] or 0}
            for row in rows
        ]

    @staticmethod
    def by_type(
        *,
        product_types: Optional[Iterable[str]] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> list[dict]:
        rows = (
            _filtered(
                statuses=[PaymentStatus.SUCCEEDED],
                product_types=product_types,
                date_from=date_from,
                date_to=date_to,
            )
            .values("product_type")
            .annotate(revenue_cents=Sum("amount_cents"))
            .order_by("-revenue_cents")
        )
        return [{"type": row["product_type"], "revenue_cents": row["revenue_cents"] or 0} for row in rows]


revenue_summary = RevenueSelector.summary
revenue_by_month = RevenueSelector.by_month
revenue_by_type = RevenueSelector.by_type
