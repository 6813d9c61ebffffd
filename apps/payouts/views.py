from __future__ import annotations

import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import generics, permissions, status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.payouts.exceptions import PayoutError
from apps.payouts.feature_flag import payouts_enabled
from apps.payouts.filters import PayoutFilter
from apps.payouts.models import Payout
from apps.payouts.serializers import (
    BulkProcessSerializer,
    EducatorPayoutSerializer,
    PayoutSerializer,
    PeriodSerializer,
    ProcessPayoutSerializer,
)
from apps.payouts.services import PayoutProcessor, calculate_payouts

logger = logging.getLogger(__name__)

DISABLED_RESPONSE = {"detail": "Payouts disabled"}


def error_response(exc: PayoutError) -> Response:
    return Response(exc.as_dict(), status=exc.http_status)


class PayoutCalculateView(APIView):
    permission_classes = [permissions.IsAdminUser]

    def post(self, request: Request) -> Response:
        if not payouts_enabled():
            return Response(DISABLED_RESPONSE, status=status.HTTP_403_FORBIDDEN)
        serializer = PeriodSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            records = calculate_payouts(serializer.validated_data["month"], serializer.validated_data["year"])
        except PayoutError as exc:
            return error_response(exc)
        return Response(
            {
                "count": len(records),
                "payouts": PayoutSerializer(records, many=True).data,
            },
            status=status.HTTP_200_OK,
        )


class PayoutProcessView(APIView):
    permission_classes = [permissions.IsAdminUser]

    def post(self, request: Request) -> Response:
        if not payouts_enabled():
            return Response(DISABLED_RESPONSE, status=status.HTTP_403_FORBIDDEN)
        serializer = ProcessPayoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            payout = PayoutProcessor().process_payout(serializer.validated_data["payout_id"])
        except PayoutError as exc:
            return error_response(exc)
        return Response(PayoutSerializer(payout).data, status=status.HTTP_200_OK)


class PayoutBulkProcessView(APIView):
    permission_classes = [permissions.IsAdminUser]

    def post(self, request: Request) -> Response:
        if not payouts_enabled():
            return Response(DISABLED_RESPONSE, status=status.HTTP_403_FORBIDDEN)
        serializer = BulkProcessSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            outcome = PayoutProcessor().process_bulk(
                payout_ids=data.get("payout_ids"),
                month=data.get("month"),
                year=data.get("year"),
            )
        except PayoutError as exc:
            return error_response(exc)
        if outcome.aborted:
            return Response(outcome.as_dict(), status=status.HTTP_503_SERVICE_UNAVAILABLE)
        return Response(outcome.as_dict(), status=status.HTTP_200_OK)


class AdminPayoutListView(generics.ListAPIView):
    permission_classes = [permissions.IsAdminUser]
    serializer_class = PayoutSerializer
    queryset = Payout.objects.select_related("educator")
    filter_backends = [DjangoFilterBackend]
    filterset_class = PayoutFilter

    def list(self, request: Request, *args, **kwargs) -> Response:  # type: ignore[override]
        if not payouts_enabled():
            return Response(DISABLED_RESPONSE, status=status.HTTP_403_FORBIDDEN)
        return super().list(request, *args, **kwargs)


class MyPayoutListView(generics.ListAPIView):
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = EducatorPayoutSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = PayoutFilter

    def get_queryset(self):  # type: ignore[override]
        educator = getattr(self.request.user, "educator_profile", None)
        if educator is None:
            return Payout.objects.none()
        return Payout.objects.filter(educator=educator)

    def list(self, request: Request, *args, **kwargs) -> Response:  # type: ignore[override]
        if not payouts_enabled():
            return Response(DISABLED_RESPONSE, status=status.HTTP_403_FORBIDDEN)
        return super().list(request, *args, **kwargs)
