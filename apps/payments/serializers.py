from __future__ import annotations

from rest_framework import serializers

from apps.payments.models import ProductType


class RevenueQuerySerializer(serializers.Serializer):
    date_from = serializers.DateTimeField(required=False)
    date_to = serializers.DateTimeField(required=False)
    product_type = serializers.CharField(required=False, allow_blank=True)

    def validate_product_type(self, value: str) -> list[str]:
        types = [item.strip() for item in value.split(",") if item.strip()]
        unknown = [item for item in types if item not in ProductType.values]
        if unknown:
            raise serializers.ValidationError(f"Unknown product type(s): {', '.join(unknown)}.")
        return types

    def validate(self, attrs: dict) -> dict:
        date_from, date_to = attrs.get("date_from"), attrs.get("date_to")
        if date_from and date_to and date_from > date_to:
            raise serializers.ValidationError("date_from must not be after date_to.")
        return attrs
