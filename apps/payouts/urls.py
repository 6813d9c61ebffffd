from django.urls import path

from apps.payouts.views import (
    AdminPayoutListView,
    MyPayoutListView,
    PayoutBulkProcessView,
    PayoutCalculateView,
    PayoutProcessView,
)

app_name = "payouts"

urlpatterns = [
    path("admin/payouts/", AdminPayoutListView.as_view(), name="admin-payout-list"),
    path("admin/payouts/calculate/", PayoutCalculateView.as_view(), name="admin-payout-calculate"),
    path("admin/payouts/pay/", PayoutProcessView.as_view(), name="admin-payout-pay"),
    path("admin/payouts/pay-bulk/", PayoutBulkProcessView.as_view(), name="admin-payout-pay-bulk"),
    path("payouts/me/", MyPayoutListView.as_view(), name="my-payouts"),
]
