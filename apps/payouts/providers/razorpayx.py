from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import requests

from apps.payouts.exceptions import PayoutConfigurationError, PayoutGatewayError, PayoutValidationError
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

IDEMPOTENCY_HEADER = "X-Payout-Idempotency"


def _error_description(payload: object) -> str:
    if not isinstance(payload, dict):
        return ""
    error = payload.get("error")
    if isinstance(error, dict):
        return str(error.get("description") or error.get("reason") or error.get("code") or "").strip()
    return str(error or "").strip()


class RazorpayXGateway(PayoutGateway):
    name = "razorpayx"

    def __init__(
        self,
        *,
        base_url: str,
        key_id: str,
        key_secret: str,
        account_number: str,
        mode: str = "IMPS",
        timeout: int = 10,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = str(base_url or "").rstrip("/")
        self.key_id = str(key_id or "").strip()
        self.key_secret = str(key_secret or "").strip()
        self.account_number = str(account_number or "").strip()
        self.mode = str(mode or "IMPS").strip().upper()
        self.timeout = int(timeout or 10)
        if not self.base_url:
            raise PayoutConfigurationError("RAZORPAYX_BASE_URL is required.")
        if not self.key_id or not self.key_secret:
            raise PayoutConfigurationError("RazorpayX credentials are not configured.")
        if not self.account_number:
            raise PayoutConfigurationError("RAZORPAYX_ACCOUNT_NUMBER is required.")
        self.session = session or requests.Session()

    def _post(self, *, action: str, path: str, payload: dict, headers: dict | None = None) -> dict:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                "POST",
                url,
                json=payload,
                auth=(self.key_id, self.key_secret),
                headers={"Content-Type": "application/json", **(headers or {})},
                timeout=self.timeout,
            )
        except requests.Timeout as exc:
            logger.warning("RazorpayX %s timed out", action, extra={"path": path})
            raise PayoutGatewayError(f"RazorpayX {action} failed: request timed out after {self.timeout}s.") from exc
        except requests.RequestException as exc:
            logger.warning("RazorpayX %s unavailable", action, extra={"path": path}, exc_info=True)
            raise PayoutGatewayError(f"RazorpayX {action} failed: payout rail unavailable.") from exc

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.status_code >= 400:
            description = _error_description(data) or f"HTTP {response.status_code}"
            logger.warning(
                "RazorpayX %s rejected",
                action,
                extra={"path": path, "status_code": response.status_code, "description": description},
            )
            raise PayoutGatewayError(
                f"RazorpayX {action} failed: {description}",
                status_code=response.status_code,
            )
        if not isinstance(data, dict):
            raise PayoutGatewayError(f"RazorpayX {action} failed: invalid response body.")
        return data

    def register_contact(self, educator: "Educator") -> str:
        payload = {
            "name": educator.full_name,
            "email": educator.email,
            "contact": educator.mobile_number,
            "type": "vendor",
            "reference_id": str(educator.id),
            "notes": {"source": "educator_payouts"},
        }
        data = self._post(action="contact creation", path="/contacts", payload=payload)
        contact_id = str(data.get("id") or "").strip()
        if not contact_id:
            raise PayoutGatewayError("RazorpayX contact creation failed: contact id is missing.")
        return contact_id

    def register_fund_account(self, contact_id: str, bank_details: dict) -> str:
        if not contact_id:
            raise PayoutValidationError("A registered contact is required before linking a bank account.")
        details = validate_bank_details(bank_details)
        payload = {
            "contact_id": contact_id,
            "account_type": "bank_account",
            "bank_account": {
                "name": details["account_holder_name"],
                "ifsc": details["ifsc_code"],
                "account_number": details["account_number"],
            },
        }
        data = self._post(action="fund account creation", path="/fund_accounts", payload=payload)
        fund_account_id = str(data.get("id") or "").strip()
        if not fund_account_id:
            raise PayoutGatewayError("RazorpayX fund account creation failed: fund account id is missing.")
        return fund_account_id

    def create_disbursement(self, request: DisbursementRequest) -> DisbursementResult:
        validate_disbursement(request)
        payload = {
            "account_number": self.account_number,
            "fund_account_id": request.fund_account_id,
            "amount": int(request.amount_cents),
            "currency": request.currency,
            "mode": self.mode,
            "purpose": "payout",
            "queue_if_low_balance": True,
            "reference_id": request.reference_id,
            "narration": request.narration,
        }
        data = self._post(
            action="payout creation",
            path="/payouts",
            payload=payload,
            headers={IDEMPOTENCY_HEADER: request.idempotency_key},
        )
        payout_id = str(data.get("id") or "").strip()
        if not payout_id:
            raise PayoutGatewayError("RazorpayX payout creation failed: payout id is missing.")
        return DisbursementResult(external_payout_id=payout_id, status=str(data.get("status") or "processing"))
