# hc_core/patients/api/views.py
from __future__ import annotations

from rest_framework import status, viewsets
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from hc_core.common.permissions import DoctorPermission
from hc_core.common.scope import require_doctor_scope
from hc_core.patients.api.serializers import (
    PatientCreateSerializer,
    PatientSerializer,
    PatientUpdateSerializer,
)
from hc_core.patients.models import Patient
from hc_core.patients.selectors import get_patient, search_patients
from hc_core.patients.services import PatientService


class PatientViewSet(viewsets.ViewSet):
    permission_classes = [DoctorPermission]

    serializer_class = PatientSerializer
    queryset = Patient.objects.none()

    def _get_object(self, doctor_id: int, pk) -> Patient:
        try:
            return get_patient(doctor_id=doctor_id, patient_id=pk)
        except (Patient.DoesNotExist, ValueError):
            raise NotFound("Patient not found.")

    def list(self, request):
        scope = require_doctor_scope(request)

        qs = search_patients(
            doctor_id=scope.doctor_id,
            q=request.query_params.get("q", ""),
            include_archived=request.query_params.get("include_archived") in {"1", "true", "True"},
        )
        return Response(PatientSerializer(qs[:200], many=True).data, status=status.HTTP_200_OK)

    def create(self, request):
        scope = require_doctor_scope(request)

        ser = PatientCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        patient = PatientService.create_patient(doctor_id=scope.doctor_id, **ser.validated_data)
        return Response(PatientSerializer(patient).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        scope = require_doctor_scope(request)
        patient = self._get_object(scope.doctor_id, pk)
        return Response(PatientSerializer(patient).data, status=status.HTTP_200_OK)

    def partial_update(self, request, pk=None):
        scope = require_doctor_scope(request)
        self._get_object(scope.doctor_id, pk)

        ser = PatientUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        patient = PatientService.update_patient(
            doctor_id=scope.doctor_id,
            patient_id=pk,
            data=ser.validated_data,
        )
        return Response(PatientSerializer(patient).data, status=status.HTTP_200_OK)

    def destroy(self, request, pk=None):
        """
        Archive, never hard-delete: appointments keep pointing at the record.
        """
        scope = require_doctor_scope(request)
        self._get_object(scope.doctor_id, pk)
        PatientService.archive_patient(doctor_id=scope.doctor_id, patient_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
