from __future__ import annotations

from apps.educators.services.onboarding import BankDetailsUpdate, update_bank_details

__all__ = ["BankDetailsUpdate", "update_bank_details"]
