from __future__ import annotations

from rest_framework import permissions
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.payments.selectors import RevenueSelector
from apps.payments.serializers import RevenueQuerySerializer


class _RevenueView(APIView):
    permission_classes = [permissions.IsAdminUser]

    def get_filters(self, request: Request) -> dict:
        serializer = RevenueQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        return {
            "product_types": data.get("product_type") or None,
            "date_from": data.get("date_from"),
            "date_to": data.get("date_to"),
        }


class RevenueSummaryView(_RevenueView):
    def get(self, request: Request) -> Response:
        return Response(RevenueSelector.summary(**self.get_filters(request)))


class RevenueByMonthView(_RevenueView):
    def get(self, request: Request) -> Response:
        return Response({"results": RevenueSelector.by_month(**self.get_filters(request))})


class RevenueByTypeView(_RevenueView):
    def get(self, request: Request) -> Response:
        return Response({"results": RevenueSelector.by_type(**self.get_filters(request))})
