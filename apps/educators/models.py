from __future__ import annotations

import re

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from apps.core.models import BaseModel

IFSC_PATTERN = re.compile(r"^[A-Z]{4}0[A-Z0-9]{6}$")


def normalize_ifsc(value: str | None) -> str:
    return str(value or "").strip().upper()


def is_valid_ifsc(value: str | None) -> bool:
    return bool(IFSC_PATTERN.match(normalize_ifsc(value)))


class Educator(BaseModel):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="educator_profile",
        null=True,
        blank=True,
    )
    full_name = models.CharField(max_length=160)
    email = models.EmailField(unique=True)
    mobile_number = models.CharField(max_length=20, blank=True)

    bank_account_holder_name = models.CharField(max_length=160, blank=True)
    bank_account_number = models.CharField(max_length=34, blank=True)
    bank_ifsc_code = models.CharField(max_length=11, blank=True)
    bank_name = models.CharField(max_length=120, blank=True)

    external_contact_id = models.CharField(max_length=64, blank=True)
    external_fund_account_id = models.CharField(max_length=64, blank=True)

    class Meta:
        ordering = ["full_name"]

    def clean(self) -> None:
        self.bank_ifsc_code = normalize_ifsc(self.bank_ifsc_code)
        if self.bank_ifsc_code and not is_valid_ifsc(self.bank_ifsc_code):
            raise ValidationError({"bank_ifsc_code": "Please provide a valid IFSC code."})

    @property
    def bank_details(self) -> dict:
        return {
            "account_holder_name": self.bank_account_holder_name,
            "account_number": self.bank_account_number,
            "ifsc_code": self.bank_ifsc_code,
            "bank_name": self.bank_name,
        }

    @property
    def has_bank_details(self) -> bool:
        return bool(self.bank_account_holder_name and self.bank_account_number and self.bank_ifsc_code)

    @property
    def is_payout_ready(self) -> bool:
        return bool(self.external_fund_account_id)

    def __str__(self) -> str:  # pragma: no cover - debug helper
        return f"{self.full_name}<{self.email}>"
