from __future__ import annotations

from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from hc_core.alerts.api.serializers import AlertSerializer
from hc_core.alerts.models import Alert
from hc_core.alerts.selectors import alerts_qs
from hc_core.alerts.services import AlertService
from hc_core.common.permissions import DoctorPermission
from hc_core.common.scope import require_doctor_scope


class AlertViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    permission_classes = [DoctorPermission]
    serializer_class = AlertSerializer
    queryset = Alert.objects.none()

    def get_queryset(self):
        scope = require_doctor_scope(self.request)
        qs = alerts_qs(doctor_id=scope.doctor_id)
        status_q = self.request.query_params.get("status")
        severity_q = self.request.query_params.get("severity")
        code_q = self.request.query_params.get("code")
        if status_q:
            qs = qs.filter(status=status_q)
        if severity_q:
            qs = qs.filter(severity=severity_q)
        if code_q:
            qs = qs.filter(code=code_q)
        return qs.order_by("-created_at")

    @action(methods=["POST"], detail=True, url_path="ack")
    def ack(self, request, pk=None):
        scope = require_doctor_scope(request)
        try:
            alert = AlertService.ack_alert(doctor_id=scope.doctor_id, alert_id=pk)
        except (Alert.DoesNotExist, ValueError):
            raise NotFound("Alert not found.")
        return Response(AlertSerializer(alert).data, status=status.HTTP_200_OK)
