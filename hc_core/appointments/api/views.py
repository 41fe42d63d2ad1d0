# hc_core/appointments/api/views.py
from __future__ import annotations

from django.core.exceptions import ValidationError as DjangoValidationError
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ValidationError as DRFValidationError
from rest_framework.response import Response

from hc_core.alerts.low_stock import LowStockConfig
from hc_core.appointments.api.serializers import (
    AppointmentCreateSerializer,
    AppointmentEditSerializer,
    AppointmentSerializer,
    DashboardSummarySerializer,
    StockPreviewRequestSerializer,
)
from hc_core.appointments.completion import AppointmentCompletionService
from hc_core.appointments.constants import COMMON_SYMPTOMS
from hc_core.appointments.models import Appointment
from hc_core.appointments.prescriptions import lines_from_json
from hc_core.appointments.reservation import display_stocks, medicine_options
from hc_core.appointments.selectors import AppointmentSelector
from hc_core.appointments.services import AppointmentService
from hc_core.common.api.pagination import DefaultPagination
from hc_core.common.permissions import DoctorPermission, PatientReadPermission
from hc_core.common.scope import require_doctor_scope
from hc_core.medicines.selectors import medicines_qs


class AppointmentViewSet(viewsets.ViewSet):
    """
    Thin API layer:
    - doctor scope
    - validation mapping
    - calls selectors for reads
    - calls services for writes (edit submissions go through
      AppointmentCompletionService)
    """

    serializer_class = AppointmentSerializer
    queryset = Appointment.objects.none()

    def get_permissions(self):
        if self.action == "mine":
            return [PatientReadPermission()]
        return [DoctorPermission()]

    def _get_object(self, doctor_id: int, pk) -> Appointment:
        try:
            return AppointmentSelector.get_appointment(doctor_id=doctor_id, appointment_id=pk)
        except AppointmentSelector.NotFound:
            raise NotFound("Appointment not found.")

    # ----------------------------
    # Reads
    # ----------------------------
    def list(self, request):
        scope = require_doctor_scope(request)

        try:
            qs = AppointmentSelector.list_appointments(doctor_id=scope.doctor_id, params=request.query_params)
        except DjangoValidationError as e:
            raise DRFValidationError({"detail": e.messages[0]})

        paginator = DefaultPagination()
        page = paginator.paginate_queryset(qs, request, view=self)
        return paginator.get_paginated_response(AppointmentSerializer(page, many=True).data)

    def retrieve(self, request, pk=None):
        scope = require_doctor_scope(request)
        return Response(AppointmentSerializer(self._get_object(scope.doctor_id, pk)).data)

    @action(detail=False, methods=["get"])
    def mine(self, request):
        """
        A patient's own appointments and prescriptions across their doctors.
        """
        qs = AppointmentSelector.for_patient_user(user_id=request.user.id)
        return Response(AppointmentSerializer(qs[:200], many=True).data)

    @extend_schema(responses=DashboardSummarySerializer)
    @action(detail=False, methods=["get"])
    def summary(self, request):
        scope = require_doctor_scope(request)
        data = AppointmentSelector.dashboard_summary(doctor_id=scope.doctor_id)
        return Response(DashboardSummarySerializer(data).data)

    @action(detail=False, methods=["get"])
    def symptoms(self, request):
        """
        Suggested symptom tags for the appointment form. Stored symptoms are free strings.
        """
        return Response([{"value": value, "label": label} for value, label in COMMON_SYMPTOMS])

    # ----------------------------
    # Writes
    # ----------------------------
    def create(self, request):
        scope = require_doctor_scope(request)

        ser = AppointmentCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        appt = AppointmentService.schedule(
            doctor_id=scope.doctor_id,
            actor_user_id=scope.actor_user_id,
            **ser.validated_data,
        )
        return Response(AppointmentSerializer(appt).data, status=status.HTTP_201_CREATED)

    def update(self, request, pk=None):
        return self._submit(request, pk, partial=False)

    def partial_update(self, request, pk=None):
        return self._submit(request, pk, partial=True)

    def _submit(self, request, pk, *, partial: bool):
        scope = require_doctor_scope(request)
        self._get_object(scope.doctor_id, pk)

        ser = AppointmentEditSerializer(data=request.data, partial=partial)
        ser.is_valid(raise_exception=True)

        data = dict(ser.validated_data)
        alerts_enabled = data.pop("low_stock_alerts", None)

        result = AppointmentCompletionService.submit(
            doctor_id=scope.doctor_id,
            appointment_id=pk,
            data=data,
            actor_user_id=scope.actor_user_id,
            alert_config=LowStockConfig.from_settings(enabled=alerts_enabled),
        )

        body = AppointmentSerializer(result.appointment).data
        body["stock_changes"] = [
            {
                "medicine_id": c.medicine_id,
                "medicine_name": c.medicine_name,
                "previous_stock": c.previous_stock,
                "new_stock": c.new_stock,
            }
            for c in result.stock_changes
        ]
        body["low_stock"] = [
            {"medicine_id": s.medicine_id, "medicine_name": s.medicine_name, "stock": s.stock}
            for s in result.low_stock
        ]
        return Response(body, status=status.HTTP_200_OK)

    def destroy(self, request, pk=None):
        scope = require_doctor_scope(request)
        self._get_object(scope.doctor_id, pk)
        AppointmentService.delete_appointment(
            doctor_id=scope.doctor_id,
            actor_user_id=scope.actor_user_id,
            appointment_id=pk,
        )
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ----------------------------
    # Stock reservation (form helper, no side effects)
    # ----------------------------
    @extend_schema(request=StockPreviewRequestSerializer)
    @action(detail=False, methods=["post"], url_path="stock-preview")
    def stock_preview(self, request):
        """
        Stock to display for each prescription row of an in-progress edit,
        honouring the quantities reserved by the other rows.
        """
        scope = require_doctor_scope(request)

        ser = StockPreviewRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        lines = lines_from_json(ser.validated_data["prescriptions"])
        catalogue = [(str(m.id), m.name, m.stock) for m in medicines_qs(doctor_id=scope.doctor_id)]
        stock = {mid: s for mid, _, s in catalogue}

        rows = []
        for row in display_stocks(lines, stock):
            rows.append(
                {
                    "index": row.index,
                    "medicine_id": row.medicine_id or None,
                    "reserved": row.reserved,
                    "display_stock": row.display_stock,
                    "exceeds_stock": row.exceeds_stock,
                    "options": [
                        {
                            "medicine_id": o.medicine_id,
                            "name": o.name,
                            "display_stock": o.display_stock,
                            "disabled": o.disabled,
                        }
                        for o in medicine_options(lines, row.index, catalogue)
                    ],
                }
            )
        return Response({"prescriptions": rows}, status=status.HTTP_200_OK)
