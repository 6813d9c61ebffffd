from __future__ import annotations

from rest_framework import serializers

from apps.core.logging_filters import mask_account_number
from apps.educators.models import Educator, is_valid_ifsc, normalize_ifsc


class BankDetailsSerializer(serializers.Serializer):
    account_holder_name = serializers.CharField(max_length=160)
    account_number = serializers.RegexField(r"^\d{6,34}$", max_length=34)
    ifsc_code = serializers.CharField(max_length=11)
    bank_name = serializers.CharField(max_length=120, required=False, allow_blank=True)

    def validate_ifsc_code(self, value: str) -> str:
        value = normalize_ifsc(value)
        if not is_valid_ifsc(value):
            raise serializers.ValidationError("Please provide a valid IFSC code.")
        return value


class EducatorSerializer(serializers.ModelSerializer):
    bank_account_number = serializers.SerializerMethodField()
    is_payout_ready = serializers.BooleanField(read_only=True)

    class Meta:
        model = Educator
        fields = (
            "id",
            "full_name",
            "email",
            "mobile_number",
            "bank_account_holder_name",
            "bank_account_number",
            "bank_ifsc_code",
            "bank_name",
            "is_payout_ready",
            "updated_at",
        )
        read_only_fields = fields

    def get_bank_account_number(self, obj: Educator) -> str:
        return mask_account_number(obj.bank_account_number)
