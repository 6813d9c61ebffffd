from django.contrib import admin

from apps.educators.models import Educator


@admin.register(Educator)
class EducatorAdmin(admin.ModelAdmin):
    list_display = ("id", "full_name", "email", "bank_ifsc_code", "external_fund_account_id", "updated_at")
    search_fields = ("full_name", "email")
    readonly_fields = ("external_contact_id", "external_fund_account_id", "created_at", "updated_at")
