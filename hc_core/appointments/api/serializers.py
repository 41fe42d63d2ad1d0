# hc_core/appointments/api/serializers.py
from __future__ import annotations

from uuid import UUID

from rest_framework import serializers

from hc_core.appointments.constants import AppointmentStatus, PainSeverity
from hc_core.appointments.models import Appointment


class RepetitionSerializer(serializers.Serializer):
    morning = serializers.BooleanField(required=False, default=False)
    afternoon = serializers.BooleanField(required=False, default=False)
    evening = serializers.BooleanField(required=False, default=False)


class PrescriptionLineSerializer(serializers.Serializer):
    """
    A submitted prescription row. Rejected here (never reaching the service)
    when the medicine or quantity is missing or no repetition time is ticked.
    """
    medicine_id = serializers.UUIDField()
    medicine_name = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    quantity = serializers.CharField(max_length=64)
    repetition = RepetitionSerializer()
    instructions = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_repetition(self, value):
        if not (value.get("morning") or value.get("afternoon") or value.get("evening")):
            raise serializers.ValidationError("At least one repetition time must be selected.")
        return value

    def validate(self, attrs):
        attrs["medicine_id"] = str(attrs["medicine_id"])
        attrs["repetition"] = dict(attrs["repetition"])
        return dict(attrs)


class DraftPrescriptionLineSerializer(serializers.Serializer):
    """
    A row as it sits in the form while being edited: anything may be missing.
    A blank or malformed medicine id means no medicine is chosen yet.
    """
    medicine_id = serializers.CharField(max_length=64, required=False, allow_blank=True, allow_null=True, default="")
    quantity = serializers.CharField(max_length=64, required=False, allow_blank=True, allow_null=True, default="")

    def validate_medicine_id(self, value):
        if not value:
            return ""
        try:
            return str(UUID(str(value)))
        except ValueError:
            return ""

    def validate(self, attrs):
        return {"medicine_id": attrs.get("medicine_id") or "", "quantity": attrs.get("quantity") or ""}


class StockPreviewRequestSerializer(serializers.Serializer):
    prescriptions = DraftPrescriptionLineSerializer(many=True)


class AppointmentCreateSerializer(serializers.Serializer):
    patient_id = serializers.UUIDField()
    appointment_at = serializers.DateTimeField()
    patient_remarks = serializers.CharField(required=False, allow_blank=True, default="")
    doctor_notes = serializers.CharField(required=False, allow_blank=True, default="")
    pain_severity = serializers.ChoiceField(choices=PainSeverity.choices, required=False, allow_blank=True, default="")
    symptoms = serializers.ListField(child=serializers.CharField(max_length=64), required=False, default=list)
    prescriptions = PrescriptionLineSerializer(many=True, required=False, default=list)
    next_appointment_date = serializers.DateField(required=False, allow_null=True, default=None)


class AppointmentEditSerializer(serializers.Serializer):
    """
    Edit-form submission. PUT requires status; PATCH sends only what changed.
    low_stock_alerts switches low-stock alerting off (or on) for this submission.
    """
    status = serializers.ChoiceField(choices=AppointmentStatus.choices)
    patient_id = serializers.UUIDField(required=False)
    appointment_at = serializers.DateTimeField(required=False)
    patient_remarks = serializers.CharField(required=False, allow_blank=True)
    doctor_notes = serializers.CharField(required=False, allow_blank=True)
    pain_severity = serializers.ChoiceField(choices=PainSeverity.choices, required=False, allow_blank=True)
    symptoms = serializers.ListField(child=serializers.CharField(max_length=64), required=False)
    prescriptions = PrescriptionLineSerializer(many=True, required=False)
    next_appointment_date = serializers.DateField(required=False, allow_null=True)
    low_stock_alerts = serializers.BooleanField(required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs


class AppointmentSerializer(serializers.ModelSerializer):
    patient_id = serializers.UUIDField(read_only=True)
    patient_name = serializers.CharField(source="patient.name", read_only=True)

    class Meta:
        model = Appointment
        fields = [
            "id",
            "doctor_id",
            "patient_id",
            "patient_name",
            "appointment_at",
            "status",
            "patient_remarks",
            "doctor_notes",
            "pain_severity",
            "symptoms",
            "prescriptions",
            "next_appointment_date",
            "completed_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class RecentPatientSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    created_at = serializers.DateTimeField()


class DashboardSummarySerializer(serializers.Serializer):
    total_patients = serializers.IntegerField()
    upcoming_appointments = serializers.IntegerField()
    appointments_today = serializers.IntegerField()
    total_medicines = serializers.IntegerField()
    recent_patients = RecentPatientSerializer(many=True)
