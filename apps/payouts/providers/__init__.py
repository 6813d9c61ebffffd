from __future__ import annotations

from django.conf import settings

from apps.payouts.exceptions import PayoutConfigurationError
from apps.payouts.providers.base import DisbursementRequest, DisbursementResult, PayoutGateway
from apps.payouts.providers.mock import MockPayoutGateway
from apps.payouts.providers.razorpayx import RazorpayXGateway


def get_payout_gateway() -> PayoutGateway:
    provider = str(getattr(settings, "PAYOUT_GATEWAY_PROVIDER", "razorpayx") or "").lower()
    if provider == "mock":
        return MockPayoutGateway()
    if provider == "razorpayx":
        return RazorpayXGateway(
            base_url=getattr(settings, "RAZORPAYX_BASE_URL", ""),
            key_id=getattr(settings, "RAZORPAYX_KEY_ID", ""),
            key_secret=getattr(settings, "RAZORPAYX_KEY_SECRET", ""),
            account_number=getattr(settings, "RAZORPAYX_ACCOUNT_NUMBER", ""),
            mode=getattr(settings, "RAZORPAYX_PAYOUT_MODE", "IMPS"),
            timeout=int(getattr(settings, "RAZORPAYX_TIMEOUT_SECONDS", 10)),
        )
    raise PayoutConfigurationError(f"Unsupported payout gateway provider: {provider}")


__all__ = [
    "DisbursementRequest",
    "DisbursementResult",
    "MockPayoutGateway",
    "PayoutGateway",
    "RazorpayXGateway",
    "get_payout_gateway",
]
