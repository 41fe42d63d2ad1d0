# hc_core/audit/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import serializers, status, viewsets
from rest_framework.response import Response

from hc_core.audit.api.serializers import AuditEventSerializer
from hc_core.audit.models import AuditEvent
from hc_core.audit.selectors import list_audit_events
from hc_core.common.permissions import DoctorPermission
from hc_core.common.scope import require_doctor_scope

MAX_EVENTS = 200


class AuditQuerySerializer(serializers.Serializer):
    entity_type = serializers.CharField(required=False, help_text="Appointment or Medicine.")
    entity_id = serializers.UUIDField(required=False)
    event_code = serializers.CharField(
        required=False,
        help_text='Exact code, or a prefix ending in "." (e.g. "appointment.").',
    )
    since = serializers.DateTimeField(required=False)


class AuditEventViewSet(viewsets.GenericViewSet):
    """
    The acting doctor's audit trail: scheduling, status transitions and stock decrements.
    """
    permission_classes = [DoctorPermission]

    serializer_class = AuditEventSerializer
    queryset = AuditEvent.objects.none()

    @extend_schema(tags=["Audit"], parameters=[AuditQuerySerializer], responses={200: AuditEventSerializer(many=True)})
    def list(self, request):
        scope = require_doctor_scope(request)

        query = AuditQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        qs = list_audit_events(doctor_id=scope.doctor_id, **query.validated_data)
        return Response(AuditEventSerializer(qs[:MAX_EVENTS], many=True).data, status=status.HTTP_200_OK)
