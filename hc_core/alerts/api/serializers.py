from rest_framework import serializers
from hc_core.alerts.models import Alert


class AlertSerializer(serializers.ModelSerializer):
    class Meta:
        model = Alert
        fields = [
            "id",
            "code",
            "title",
            "message",
            "severity",
            "status",
            "medicine_id",
            "appointment_id",
            "acked_at",
            "created_at",
            "updated_at",
            "meta",
        ]
        read_only_fields = fields
