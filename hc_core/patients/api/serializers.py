# hc_core/patients/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from hc_core.patients.models import Patient, PatientSex, PatientStatus


class PatientCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    age = serializers.IntegerField(min_value=0, max_value=150)
    sex = serializers.ChoiceField(choices=PatientSex.choices)
    email = serializers.EmailField(required=False, allow_blank=True, default="")
    complications = serializers.CharField(required=False, allow_blank=True, default="")


class PatientUpdateSerializer(serializers.Serializer):
    """
    Partial update contract (PATCH).
    """
    name = serializers.CharField(max_length=255, required=False)
    age = serializers.IntegerField(min_value=0, max_value=150, required=False)
    sex = serializers.ChoiceField(choices=PatientSex.choices, required=False)
    email = serializers.EmailField(required=False, allow_blank=True)
    complications = serializers.CharField(required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=PatientStatus.choices, required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs


class PatientSerializer(serializers.ModelSerializer):
    class Meta:
        model = Patient
        fields = [
            "id",
            "doctor_id",
            "name",
            "age",
            "sex",
            "email",
            "complications",
            "auth_user_id",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
