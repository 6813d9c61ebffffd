from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from apps.educators.models import is_valid_ifsc, normalize_ifsc
from apps.payouts.exceptions import PayoutValidationError

if TYPE_CHECKING:  # pragma: no cover
    from apps.educators.models import Educator


@dataclass(frozen=True)
class DisbursementRequest:
    fund_account_id: str
    amount_cents: int
    currency: str
    reference_id: str
    narration: str
    idempotency_key: str


@dataclass(frozen=True)
class DisbursementResult:
    external_payout_id: str
    status: str


def validate_bank_details(bank_details: dict) -> dict:
    holder = str(bank_details.get("account_holder_name") or "").strip()
    account_number = str(bank_details.get("account_number") or "").strip()
    ifsc = normalize_ifsc(bank_details.get("ifsc_code"))
    missing = [
        name
        for name, value in (
            ("account_holder_name", holder),
            ("account_number", account_number),
            ("ifsc_code", ifsc),
        )
        if not value
    ]
    if missing:
        raise PayoutValidationError(
            f"Bank details incomplete: missing {', '.join(missing)}.",
            missing=missing,
        )
    if not is_valid_ifsc(ifsc):
        raise PayoutValidationError(f"Invalid IFSC code: {ifsc}.", ifsc_code=ifsc)
    return {
        "account_holder_name": holder,
        "account_number": account_number,
        "ifsc_code": ifsc,
    }


def validate_disbursement(request: DisbursementRequest) -> None:
    if not request.idempotency_key:
        raise PayoutValidationError("An idempotency key is required for every disbursement.")
    if not request.fund_account_id:
        raise PayoutValidationError("A fund account is required for every disbursement.")
    if int(request.amount_cents) <= 0:
        raise PayoutValidationError("Disbursement amount must be positive.", amount_cents=request.amount_cents)


class PayoutGateway:
    """Adapter between payout records and an external payout rail."""

    name = "base"

    def register_contact(self, educator: "Educator") -> str:
        raise NotImplementedError

    def register_fund_account(self, contact_id: str, bank_details: dict) -> str:
        raise NotImplementedError

    def create_disbursement(self, request: DisbursementRequest) -> DisbursementResult:
        raise NotImplementedError
