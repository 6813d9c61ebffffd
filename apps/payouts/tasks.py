from __future__ import annotations

import logging
from typing import List, Optional

from celery import shared_task

from apps.payouts.services import PayoutProcessor, calculate_payouts, previous_period

logger = logging.getLogger(__name__)


@shared_task
def calculate_monthly_payouts(month: int, year: int) -> dict:
    records = calculate_payouts(month, year)
    return {"month": month, "year": year, "count": len(records), "payout_ids": [payout.pk for payout in records]}


@shared_task
def calculate_previous_month_payouts() -> dict:
    month, year = previous_period()
    logger.info("Running monthly payout calculation", extra={"month": month, "year": year})
    return calculate_monthly_payouts(month, year)


@shared_task
def process_payouts_for_period(
    month: Optional[int] = None,
    year: Optional[int] = None,
    payout_ids: Optional[List[int]] = None,
) -> dict:
    outcome = PayoutProcessor().process_bulk(payout_ids=payout_ids, month=month, year=year)
    return outcome.as_dict()
