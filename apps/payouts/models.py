from __future__ import annotations

from typing import Iterable

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from apps.core.models import BaseModel


def default_currency() -> str:
    return getattr(settings, "PLATFORM_CURRENCY", "INR")


class PayoutStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    PROCESSING = "processing", "Processing"
    PAID = "paid", "Paid"
    FAILED = "failed", "Failed"
    REVERSED = "reversed", "Reversed"


# A disbursement attempt is only permitted from these states.
DISBURSABLE_STATUSES = (PayoutStatus.PENDING, PayoutStatus.FAILED)


class PayoutQuerySet(models.QuerySet):
    def disbursable(self) -> "PayoutQuerySet":
        return self.filter(status__in=DISBURSABLE_STATUSES)

    def for_period(self, month: int, year: int) -> "PayoutQuerySet":
        return self.filter(month=month, year=year)

    def update_if_status(self, pk: int, statuses: Iterable[str], **fields: object) -> bool:
        """Compare-and-swap: apply ``fields`` only while the row is in one of ``statuses``."""
        fields.setdefault("updated_at", timezone.now())
        return self.filter(pk=pk, status__in=list(statuses)).update(**fields) == 1


class Payout(BaseModel):
    Status = PayoutStatus

    educator = models.ForeignKey(
        "educators.Educator",
        on_delete=models.PROTECT,
        related_name="payouts",
    )
    month = models.PositiveSmallIntegerField(help_text="1-12")
    year = models.PositiveSmallIntegerField()
    period_key = models.CharField(max_length=64, unique=True)

    gross_cents = models.BigIntegerField(default=0, help_text="Smallest currency unit (paise).")
    commission_cents = models.BigIntegerField(default=0)
    amount_cents = models.BigIntegerField(default=0, help_text="Payable: gross minus commission.")
    currency = models.CharField(max_length=8, default=default_currency)

    status = models.CharField(max_length=16, choices=PayoutStatus.choices, default=PayoutStatus.PENDING)
    idempotency_key = models.CharField(max_length=64, unique=True, null=True, blank=True)
    external_payout_id = models.CharField(max_length=64, blank=True, db_index=True)
    narration = models.CharField(max_length=30, blank=True)
    scheduled_date = models.DateTimeField(default=timezone.now)

    objects = PayoutQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["year", "month", "status"], name="payout_period_status_idx"),
        ]
        constraints = [
            models.UniqueConstraint(fields=["educator", "month", "year"], name="payout_unique_educator_period"),
            models.CheckConstraint(
                condition=models.Q(amount_cents=models.F("gross_cents") - models.F("commission_cents")),
                name="payout_amount_is_gross_minus_commission",
            ),
            models.CheckConstraint(
                condition=models.Q(gross_cents__gte=0, commission_cents__gte=0),
                name="payout_amounts_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(month__gte=1, month__lte=12),
                name="payout_month_range",
            ),
        ]

    @staticmethod
    def build_period_key(educator_id: int, month: int, year: int) -> str:
        return f"PAYOUT_{int(year)}_{int(month)}_{educator_id}"

    @property
    def can_disburse(self) -> bool:
        return self.status in DISBURSABLE_STATUSES

    def save(self, *args, **kwargs) -> None:  # type: ignore[override]
        if not self._state.adding:
            stored = type(self).objects.filter(pk=self.pk).values_list("idempotency_key", flat=True).first()
            if stored and stored != self.idempotency_key:
                raise ValidationError("Payout idempotency_key is immutable once set.")
        super().save(*args, **kwargs)

    def __str__(self) -> str:  # pragma: no cover - debug helper
        return f"Payout {self.period_key} {self.amount_cents} {self.status}"
