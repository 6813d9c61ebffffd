from django.contrib import admin

from apps.catalog.models import Course, Test, TestSeries, Webinar


@admin.register(Course, Webinar, TestSeries, Test)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "educator", "price_cents", "is_active")
    list_filter = ("is_active",)
    search_fields = ("title",)
