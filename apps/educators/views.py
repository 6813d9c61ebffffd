from __future__ import annotations

import logging

from rest_framework import permissions, status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.educators.serializers import BankDetailsSerializer, EducatorSerializer
from apps.educators.services import update_bank_details
from apps.payouts.exceptions import PayoutConfigurationError, PayoutGatewayError, PayoutValidationError

logger = logging.getLogger(__name__)


class EducatorBankDetailsView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request: Request) -> Response:
        educator = getattr(request.user, "educator_profile", None)
        if educator is None:
            return Response({"detail": "Educator profile not found."}, status=status.HTTP_404_NOT_FOUND)
        return Response(EducatorSerializer(educator).data)

    def put(self, request: Request) -> Response:
        educator = getattr(request.user, "educator_profile", None)
        if educator is None:
            return Response({"detail": "Educator profile not found."}, status=status.HTTP_404_NOT_FOUND)
        serializer = BankDetailsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            update_bank_details(educator, serializer.validated_data)
        except PayoutValidationError as exc:
            return Response(exc.as_dict(), status=exc.http_status)
        except (PayoutGatewayError, PayoutConfigurationError) as exc:
            logger.warning(
                "Bank details saved but payout registration failed",
                extra={"educator_id": educator.id, "error": exc.message},
            )
            return Response(
                {
                    "detail": "Bank details saved, but failed to register with payout system",
                    "educator": EducatorSerializer(educator).data,
                },
                status=status.HTTP_502_BAD_GATEWAY,
            )
        return Response(EducatorSerializer(educator).data, status=status.HTTP_200_OK)
