from __future__ import annotations

from django.conf import settings


def payouts_enabled() -> bool:
    flags = getattr(settings, "FEATURE_FLAGS", {})
    return flags.get("payouts", False)
