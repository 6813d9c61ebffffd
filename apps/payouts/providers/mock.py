from __future__ import annotations

import hashlib
import logging
from typing import TYPE_CHECKING, Dict

from apps.payouts.providers.base import (
    DisbursementRequest,
    DisbursementResult,
    PayoutGateway,
    validate_bank_details,
    validate_disbursement,
)

if TYPE_CHECKING:  # pragma: no cover
    from apps.educators.models import Educator

logger = logging.getLogger(__name__)


def _digest(*parts: object) -> str:
    return hashlib.sha256(":".join(str(part) for part in parts).encode("utf-8")).hexdigest()[:14]


class MockPayoutGateway(PayoutGateway):
    """
    Simulated payout rail for local development.
    Deduplicates disbursements by idempotency key the way the real rail does.
    """

    name = "mock"

    def __init__(self) -> None:
        self.disbursements: Dict[str, DisbursementResult] = {}

    def register_contact(self, educator: "Educator") -> str:
        return f"cont_mock_{_digest('contact', educator.id)}"

    def register_fund_account(self, contact_id: str, bank_details: dict) -> str:
        details = validate_bank_details(bank_details)
        return f"fa_mock_{_digest(contact_id, details['account_number'], details['ifsc_code'])}"

    def create_disbursement(self, request: DisbursementRequest) -> DisbursementResult:
        validate_disbursement(request)
        existing = self.disbursements.get(request.idempotency_key)
        if existing is not None:
            return existing
        result = DisbursementResult(
            external_payout_id=f"pout_mock_{_digest(request.idempotency_key)}",
            status="processing",
        )
        self.disbursements[request.idempotency_key] = result
        logger.info(
            "MockPayoutGateway accepted disbursement",
            extra={"reference_id": request.reference_id, "amount_cents": request.amount_cents},
        )
        return result
