from django.contrib import admin

from apps.payments.models import PaymentEvent


@admin.register(PaymentEvent)
class PaymentEventAdmin(admin.ModelAdmin):
    list_display = ("id", "product_type", "product_id", "amount_cents", "currency", "status", "occurred_at")
    list_filter = ("status", "product_type", "currency")
    search_fields = ("provider_order_id", "provider_payment_id", "receipt")
    date_hierarchy = "occurred_at"
