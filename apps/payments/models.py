from __future__ import annotations

from django.conf import settings
from django.db import models
from django.utils import timezone

from apps.core.models import BaseModel


class ProductType(models.TextChoices):
    COURSE = "course", "Course"
    WEBINAR = "webinar", "Webinar"
    TEST_SERIES = "testSeries", "Test series"
    TEST = "test", "Test"
    LIVE_CLASS = "liveClass", "Live class"


class PaymentStatus(models.TextChoices):
    CREATED = "created", "Created"
    PENDING = "pending", "Pending"
    AUTHORIZED = "authorized", "Authorized"
    SUCCEEDED = "succeeded", "Succeeded"
    FAILED = "failed", "Failed"
    REFUNDED = "refunded", "Refunded"
    CANCELLED = "cancelled", "Cancelled"


class PaymentEvent(BaseModel):
    ProductType = ProductType
    Status = PaymentStatus

    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="payment_events",
        null=True,
        blank=True,
    )
    product_id = models.BigIntegerField()
    product_type = models.CharField(max_length=16, choices=ProductType.choices)
    amount_cents = models.BigIntegerField(help_text="Smallest currency unit (paise).")
    currency = models.CharField(max_length=8, default="INR")
    status = models.CharField(max_length=16, choices=PaymentStatus.choices, default=PaymentStatus.CREATED)
    provider_order_id = models.CharField(max_length=64, blank=True)
    provider_payment_id = models.CharField(max_length=64, blank=True)
    receipt = models.CharField(max_length=64, blank=True)
    occurred_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-occurred_at"]
        indexes = [
            models.Index(fields=["status", "occurred_at"], name="payment_status_occurred_idx"),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(amount_cents__gt=0), name="payment_amount_cents_gt_0"),
        ]

    def __str__(self) -> str:  # pragma: no cover - debug helper
        return f"PaymentEvent<{self.product_type}:{self.product_id} {self.amount_cents} {self.status}>"
