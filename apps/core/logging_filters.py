from __future__ import annotations

import logging

SENSITIVE_ATTRS = ("account_number", "bank_account_number")


def mask_account_number(value: object) -> str:
    text = str(value or "")
    if len(text) <= 4:
        return "*" * len(text)
    return "*" * (len(text) - 4) + text[-4:]


class StripRequestBodyFilter(logging.Filter):
    """
    Drop request body/content fields from log records and mask bank account
    numbers passed through ``extra`` so payout logs never carry full PII.
    """

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        for attr in ("request", "request_body", "data", "body"):
            if hasattr(record, attr):
                setattr(record, attr, None)
        for attr in SENSITIVE_ATTRS:
            if getattr(record, attr, None):
                setattr(record, attr, mask_account_number(getattr(record, attr)))
        return True
