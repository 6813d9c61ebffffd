from __future__ import annotations

import django_filters

from apps.payouts.models import Payout, PayoutStatus


class PayoutFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=PayoutStatus.choices)
    month = django_filters.NumberFilter()
    year = django_filters.NumberFilter()
    educator = django_filters.NumberFilter(field_name="educator_id")

    class Meta:
        model = Payout
        fields = ["status", "month", "year", "educator"]
