from __future__ import annotations

from apps.payouts.services.aggregation import aggregate_revenue, calculate_payouts, period_bounds, previous_period
from apps.payouts.services.pacing import FixedIntervalPacer
from apps.payouts.services.processor import BulkResult, PayoutProcessor, build_narration

__all__ = [
    "BulkResult",
    "FixedIntervalPacer",
    "PayoutProcessor",
    "aggregate_revenue",
    "build_narration",
    "calculate_payouts",
    "period_bounds",
    "previous_period",
]
