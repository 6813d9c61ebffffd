from django.urls import path

from apps.payments.views import RevenueByMonthView, RevenueByTypeView, RevenueSummaryView

app_name = "payments"

urlpatterns = [
    path("admin/revenue/summary/", RevenueSummaryView.as_view(), name="revenue-summary"),
    path("admin/revenue/by-month/", RevenueByMonthView.as_view(), name="revenue-by-month"),
    path("admin/revenue/by-type/", RevenueByTypeView.as_view(), name="revenue-by-type"),
]
