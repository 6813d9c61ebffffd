from __future__ import annotations

from django.conf import settings
from django.db import DatabaseError, connection
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView


class HealthView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes: list = []

    def get(self, request):
        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
        except DatabaseError:
            return Response({"status": "degraded", "database": False}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
        return Response(
            {
                "status": "ok",
                "database": True,
                "payouts_enabled": bool(settings.FEATURE_FLAGS.get("payouts", False)),
                "payout_provider": settings.PAYOUT_GATEWAY_PROVIDER,
            }
        )
