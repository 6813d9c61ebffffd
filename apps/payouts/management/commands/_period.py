from __future__ import annotations

from typing import Tuple

from django.core.management.base import CommandError


def parse_month_option(value: str) -> Tuple[int, int]:
    """Parse ``YYYY-MM`` into ``(month, year)``."""
    try:
        year_str, month_str = str(value).split("-")
        year, month = int(year_str), int(month_str)
    except ValueError as exc:
        raise CommandError("Month must be in YYYY-MM format.") from exc
    if not 1 <= month <= 12:
        raise CommandError("Month must be in YYYY-MM format.")
    return month, year
