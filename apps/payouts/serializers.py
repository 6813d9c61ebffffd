from __future__ import annotations

from rest_framework import serializers

from apps.payouts.models import Payout


class PayoutSerializer(serializers.ModelSerializer):
    educator_name = serializers.CharField(source="educator.full_name", read_only=True)

    class Meta:
        model = Payout
        fields = (
            "id",
            "educator_id",
            "educator_name",
            "month",
            "year",
            "period_key",
            "gross_cents",
            "commission_cents",
            "amount_cents",
            "currency",
            "status",
            "external_payout_id",
            "narration",
            "scheduled_date",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class EducatorPayoutSerializer(serializers.ModelSerializer):
    class Meta:
        model = Payout
        fields = (
            "id",
            "month",
            "year",
            "gross_cents",
            "commission_cents",
            "amount_cents",
            "currency",
            "status",
            "scheduled_date",
            "created_at",
        )
        read_only_fields = fields


class PeriodSerializer(serializers.Serializer):
    month = serializers.IntegerField(min_value=1, max_value=12)
    year = serializers.IntegerField(min_value=2000, max_value=9999)


class ProcessPayoutSerializer(serializers.Serializer):
    payout_id = serializers.IntegerField(min_value=1)


class BulkProcessSerializer(serializers.Serializer):
    payout_ids = serializers.ListField(child=serializers.IntegerField(min_value=1), required=False, allow_empty=False)
    month = serializers.IntegerField(min_value=1, max_value=12, required=False)
    year = serializers.IntegerField(min_value=2000, max_value=9999, required=False)

    def validate(self, attrs: dict) -> dict:
        if attrs.get("payout_ids"):
            return attrs
        if attrs.get("month") is None or attrs.get("year") is None:
            raise serializers.ValidationError("Provide payout_ids or both month and year.")
        return attrs
