from __future__ import annotations

import logging
from dataclasses import dataclass

from django.db import transaction

from apps.educators.models import Educator, normalize_ifsc
from apps.payouts.providers import PayoutGateway, get_payout_gateway
from apps.payouts.providers.base import validate_bank_details

logger = logging.getLogger(__name__)

BANK_FIELD_MAP = {
    "account_holder_name": "bank_account_holder_name",
    "account_number": "bank_account_number",
    "ifsc_code": "bank_ifsc_code",
    "bank_name": "bank_name",
}
# A change to any of these makes the linked fund account point at the wrong account.
ROUTING_FIELDS = ("bank_account_holder_name", "bank_account_number", "bank_ifsc_code")


@dataclass
class BankDetailsUpdate:
    educator: Educator
    contact_created: bool
    fund_account_id: str


def _apply_bank_details(educator: Educator, bank_details: dict) -> list[str]:
    """Assign the given details and return the names of fields whose value changed."""
    changed: list[str] = []
    for key, field in BANK_FIELD_MAP.items():
        if key not in bank_details:
            continue
        value = str(bank_details.get(key) or "").strip()
        if key == "ifsc_code":
            value = normalize_ifsc(value)
        if getattr(educator, field) != value:
            setattr(educator, field, value)
            changed.append(field)
    return changed


def update_bank_details(
    educator: Educator,
    bank_details: dict,
    *,
    gateway: PayoutGateway | None = None,
) -> BankDetailsUpdate:
    """
    Save bank details and register them with the payout rail.

    The contact is created at most once per educator; every bank-detail change
    produces a new fund account which replaces the previous reference. Local
    details are persisted before any rail call, so a gateway failure leaves
    them saved with the educator not yet payout-ready: a routing change unlinks
    the previous fund account in the same write.
    """
    changed = _apply_bank_details(educator, bank_details)
    validate_bank_details(educator.bank_details)
    if any(field in ROUTING_FIELDS for field in changed) and educator.external_fund_account_id:
        educator.external_fund_account_id = ""
        changed.append("external_fund_account_id")
    if changed:
        educator.save(update_fields=[*changed, "updated_at"])

    gateway = gateway or get_payout_gateway()
    contact_created = False
    if not educator.external_contact_id:
        contact_id = gateway.register_contact(educator)
        with transaction.atomic():
            Educator.objects.filter(pk=educator.pk, external_contact_id="").update(external_contact_id=contact_id)
            educator.refresh_from_db(fields=["external_contact_id"])
        contact_created = educator.external_contact_id == contact_id
        logger.info("Registered payout contact", extra={"educator_id": educator.id})

    fund_account_id = gateway.register_fund_account(educator.external_contact_id, educator.bank_details)
    educator.external_fund_account_id = fund_account_id
    educator.save(update_fields=["external_fund_account_id", "updated_at"])
    logger.info(
        "Registered payout fund account",
        extra={"educator_id": educator.id, "account_number": educator.bank_account_number},
    )
    return BankDetailsUpdate(educator=educator, contact_created=contact_created, fund_account_id=fund_account_id)
