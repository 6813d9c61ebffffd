from __future__ import annotations

from django.db import models

from apps.core.models import BaseModel


class Product(BaseModel):
    educator = models.ForeignKey(
        "educators.Educator",
        on_delete=models.PROTECT,
        related_name="+",
    )
    title = models.CharField(max_length=200)
    price_cents = models.PositiveIntegerField(default=0, help_text="Smallest currency unit (paise).")
    is_active = models.BooleanField(default=True)

    class Meta:
        abstract = True
        ordering = ["-created_at"]

    def __str__(self) -> str:  # pragma: no cover - debug helper
        return self.title


class Course(Product):
    class Meta(Product.Meta):
        pass


class Webinar(Product):
    scheduled_at = models.DateTimeField(null=True, blank=True)

    class Meta(Product.Meta):
        pass


class TestSeries(Product):
    class Meta(Product.Meta):
        verbose_name_plural = "test series"


class Test(Product):
    series = models.ForeignKey(
        TestSeries,
        on_delete=models.SET_NULL,
        related_name="tests",
        null=True,
        blank=True,
    )

    class Meta(Product.Meta):
        pass
