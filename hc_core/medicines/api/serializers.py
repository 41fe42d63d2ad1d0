# hc_core/medicines/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from hc_core.medicines.models import Medicine


class MedicineCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    stock = serializers.IntegerField(min_value=0, required=False, default=0)


class MedicineUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    stock = serializers.IntegerField(min_value=0, required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs


class MedicineSerializer(serializers.ModelSerializer):
    class Meta:
        model = Medicine
        fields = [
            "id",
            "doctor_id",
            "name",
            "description",
            "stock",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
