from django.urls import path

from apps.educators.views import EducatorBankDetailsView

app_name = "educators"

urlpatterns = [
    path("educators/me/bank-details/", EducatorBankDetailsView.as_view(), name="bank-details"),
]
