from __future__ import annotations

import logging

from apps.core.logging_filters import StripRequestBodyFilter, mask_account_number


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("apps.payouts", logging.INFO, "path", 1, "msg", args=(), exc_info=None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_strip_request_body_filter_redacts_fields():
    record = _record(request="req", request_body="secret", data={"account_number": "1"}, body="secret")

    assert StripRequestBodyFilter().filter(record) is True
    assert record.request is None
    assert record.request_body is None
    assert record.data is None
    assert record.body is None


def test_account_numbers_are_masked():
    record = _record(account_number="123456789012", bank_account_number="99887766", payout_id=7)

    StripRequestBodyFilter().filter(record)

    assert record.account_number == "********9012"
    assert record.bank_account_number == "****7766"
    assert record.payout_id == 7


def test_mask_account_number_short_values():
    assert mask_account_number("1234") == "****"
    assert mask_account_number("") == ""
    assert mask_account_number(None) == ""
