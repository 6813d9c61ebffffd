from __future__ import annotations

from django.contrib import admin

from apps.payouts.models import Payout


@admin.register(Payout)
class PayoutAdmin(admin.ModelAdmin):
    list_display = ("period_key", "educator", "amount_cents", "currency", "status", "external_payout_id", "scheduled_date")
    list_filter = ("status", "year", "month")
    search_fields = ("period_key", "external_payout_id", "educator__email", "educator__full_name")
    readonly_fields = (
        "educator",
        "month",
        "year",
        "period_key",
        "gross_cents",
        "commission_cents",
        "amount_cents",
        "currency",
        "idempotency_key",
        "external_payout_id",
        "narration",
        "scheduled_date",
        "created_at",
        "updated_at",
    )

    def has_add_permission(self, request):  # type: ignore[override]
        return False

    def has_delete_permission(self, request, obj=None):  # type: ignore[override]
        return False
