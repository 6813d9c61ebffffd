from __future__ import annotations

import logging
import re
import uuid
from dataclasses import asdict, dataclass, field
from typing import List, Optional, Sequence

from django.conf import settings
from django.utils import timezone

from apps.payouts.exceptions import (
    PayoutConfigurationError,
    PayoutError,
    PayoutNotFound,
    PayoutStateConflict,
    PayoutValidationError,
)
from apps.payouts.models import DISBURSABLE_STATUSES, Payout, PayoutStatus
from apps.payouts.providers import DisbursementRequest, PayoutGateway, get_payout_gateway
from apps.payouts.services.aggregation import validate_period
from apps.payouts.services.pacing import FixedIntervalPacer, Pacer

logger = logging.getLogger(__name__)

NARRATION_MAX_LENGTH = 30
NARRATION_FALLBACK = "Payout"
_NARRATION_DISALLOWED = re.compile(r"[^A-Za-z0-9 ]")


def build_narration(month: int, year: int, prefix: Optional[str] = None) -> str:
    """Rail-safe narration: alphanumerics and spaces only, at most 30 characters."""
    if prefix is None:
        prefix = getattr(settings, "PAYOUT_NARRATION_PREFIX", "FP Payout")
    text = _NARRATION_DISALLOWED.sub("", f"{prefix} {month} {year}")
    text = text[:NARRATION_MAX_LENGTH].strip()
    return text or NARRATION_FALLBACK


@dataclass
class BulkItemResult:
    payout_id: int
    educator_id: Optional[int]
    success: bool
    status: str
    message: str
    external_payout_id: str = ""

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass
class BulkResult:
    results: List[BulkItemResult] = field(default_factory=list)
    aborted: bool = False
    abort_reason: str = ""
    not_attempted: List[int] = field(default_factory=list)

    @property
    def summary(self) -> dict:
        succeeded = sum(1 for item in self.results if item.success)
        return {
            "total": len(self.results),
            "succeeded": succeeded,
            "failed": len(self.results) - succeeded,
        }

    def as_dict(self) -> dict:
        return {
            "results": [item.as_dict() for item in self.results],
            "summary": self.summary,
            "aborted": self.aborted,
            "abort_reason": self.abort_reason,
            "not_attempted": list(self.not_attempted),
        }


class PayoutProcessor:
    """
    Drives payout records through a disbursement attempt against the gateway.

    Single attempts raise ``PayoutError`` subclasses; bulk runs capture them
    per item and keep going. Nothing here retries automatically.
    """

    def __init__(
        self,
        *,
        gateway: Optional[PayoutGateway] = None,
        pacer: Optional[Pacer] = None,
        min_amount_cents: Optional[int] = None,
        narration_prefix: Optional[str] = None,
    ) -> None:
        self._gateway = gateway
        self.pacer = pacer or FixedIntervalPacer(float(getattr(settings, "PAYOUT_BULK_INTERVAL_SECONDS", 1.5)))
        self.min_amount_cents = int(
            min_amount_cents if min_amount_cents is not None else getattr(settings, "PAYOUT_MIN_AMOUNT_CENTS", 100)
        )
        self.narration_prefix = narration_prefix

    @property
    def gateway(self) -> PayoutGateway:
        if self._gateway is None:
            self._gateway = get_payout_gateway()
        return self._gateway

    # --- single ---

    def process_payout(self, payout_id: int) -> Payout:
        payout = Payout.objects.select_related("educator").filter(pk=payout_id).first()
        if payout is None:
            raise PayoutNotFound(f"Payout {payout_id} not found.", payout_id=payout_id)
        return self._attempt(payout)

    def _check_preconditions(self, payout: Payout) -> str:
        if not payout.can_disburse:
            raise PayoutStateConflict(f"Payout is already {payout.status}.", status=payout.status)

        educator = payout.educator
        fund_account_id = educator.external_fund_account_id
        if not fund_account_id:
            if educator.has_bank_details:
                raise PayoutValidationError(
                    "Educator bank details are saved but no fund account is linked with the payout rail. "
                    "Re-submit the bank details to register them.",
                    educator_id=educator.id,
                )
            raise PayoutValidationError(
                "Educator has not added bank details. Ask them to add account holder name, "
                "account number and IFSC code before paying out.",
                educator_id=educator.id,
            )

        if payout.amount_cents < self.min_amount_cents:
            raise PayoutValidationError(
                f"Payout amount {payout.amount_cents} is below the minimum disbursement of "
                f"{self.min_amount_cents} ({payout.currency} minor units).",
                amount_cents=payout.amount_cents,
                min_amount_cents=self.min_amount_cents,
            )
        return fund_account_id

    def _ensure_idempotency_key(self, payout: Payout) -> str:
        if payout.idempotency_key:
            return payout.idempotency_key
        Payout.objects.filter(pk=payout.pk, idempotency_key__isnull=True).update(
            idempotency_key=uuid.uuid4().hex,
            updated_at=timezone.now(),
        )
        # Whichever writer won, every attempt uses the stored key.
        payout.refresh_from_db(fields=["idempotency_key"])
        return payout.idempotency_key

    def _attempt(self, payout: Payout) -> Payout:
        fund_account_id = self._check_preconditions(payout)
        gateway = self.gateway
        idempotency_key = self._ensure_idempotency_key(payout)
        narration = build_narration(payout.month, payout.year, self.narration_prefix)
        request = DisbursementRequest(
            fund_account_id=fund_account_id,
            amount_cents=int(payout.amount_cents),
            currency=payout.currency,
            reference_id=payout.period_key,
            narration=narration,
            idempotency_key=idempotency_key,
        )
        log_extra = {
            "payout_id": payout.pk,
            "period_key": payout.period_key,
            "amount_cents": payout.amount_cents,
            "idempotency_key": idempotency_key,
            "gateway": gateway.name,
        }
        logger.info("Initiating payout disbursement", extra=log_extra)
        try:
            result = gateway.create_disbursement(request)
        except PayoutError as exc:
            logger.warning("Payout disbursement failed", extra={**log_extra, "reason": exc.message})
            raise

        accepted = Payout.objects.update_if_status(
            payout.pk,
            DISBURSABLE_STATUSES,
            status=PayoutStatus.PROCESSING,
            external_payout_id=result.external_payout_id,
            narration=narration,
        )
        payout.refresh_from_db()
        if not accepted and payout.external_payout_id != result.external_payout_id:
            raise PayoutStateConflict(f"Payout is already {payout.status}.", status=payout.status)
        logger.info(
            "Payout accepted by gateway",
            extra={**log_extra, "external_payout_id": result.external_payout_id, "rail_status": result.status},
        )
        return payout

    # --- bulk ---

    def select_for_bulk(
        self,
        *,
        payout_ids: Optional[Sequence[int]] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> List[Payout]:
        qs = Payout.objects.disbursable().select_related("educator")
        if payout_ids:
            by_id = qs.in_bulk(list(payout_ids))
            seen: set[int] = set()
            ordered: List[Payout] = []
            for payout_id in payout_ids:
                payout = by_id.get(int(payout_id))
                if payout is not None and payout.pk not in seen:
                    seen.add(payout.pk)
                    ordered.append(payout)
            return ordered
        if month is None or year is None:
            raise PayoutValidationError("Provide payout_ids or both month and year.")
        month, year = validate_period(month, year)
        return list(qs.for_period(month, year).order_by("created_at", "id"))

    def process_bulk(
        self,
        *,
        payout_ids: Optional[Sequence[int]] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> BulkResult:
        payouts = self.select_for_bulk(payout_ids=payout_ids, month=month, year=year)
        logger.info("Starting bulk payout run", extra={"count": len(payouts), "month": month, "year": year})
        outcome = BulkResult()
        for index, payout in enumerate(payouts):
            self.pacer.wait()
            try:
                outcome.results.append(self._attempt_isolated(payout))
            except PayoutConfigurationError as exc:
                # Every later item would fail the same way; stop and keep what was recorded.
                outcome.aborted = True
                outcome.abort_reason = exc.message
                outcome.not_attempted = [item.pk for item in payouts[index:]]
                logger.error(
                    "Bulk payout run aborted",
                    extra={"payout_id": payout.pk, "reason": exc.message, **outcome.summary},
                )
                return outcome
        logger.info("Bulk payout run finished", extra=outcome.summary)
        return outcome

    def _attempt_isolated(self, payout: Payout) -> BulkItemResult:
        try:
            processed = self.process_payout(payout.pk)
        except PayoutConfigurationError:
            raise
        except PayoutError as exc:
            current = Payout.objects.filter(pk=payout.pk).values_list("status", flat=True).first()
            return BulkItemResult(
                payout_id=payout.pk,
                educator_id=payout.educator_id,
                success=False,
                status=current or payout.status,
                message=exc.message,
            )
        except Exception:
            logger.exception("Unexpected error while processing payout", extra={"payout_id": payout.pk})
            return BulkItemResult(
                payout_id=payout.pk,
                educator_id=payout.educator_id,
                success=False,
                status=payout.status,
                message="Unexpected error while processing payout.",
            )
        return BulkItemResult(
            payout_id=processed.pk,
            educator_id=processed.educator_id,
            success=True,
            status=processed.status,
            message="Payout initiated successfully.",
            external_payout_id=processed.external_payout_id,
        )
