# hc_core/medicines/api/views.py
from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import mixins, status, viewsets
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from hc_core.common.permissions import DoctorPermission
from hc_core.common.scope import require_doctor_scope
from hc_core.medicines.api.serializers import (
    MedicineCreateSerializer,
    MedicineSerializer,
    MedicineUpdateSerializer,
)
from hc_core.medicines.filters import MedicineFilter
from hc_core.medicines.models import Medicine
from hc_core.medicines.selectors import get_medicine, medicines_qs
from hc_core.medicines.services import MedicineService


class MedicineViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    Doctor's medicine catalogue.
    list: filtered (?q=, ?low_stock=true) and paginated; writes go through MedicineService.
    """
    permission_classes = [DoctorPermission]
    serializer_class = MedicineSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = MedicineFilter
    queryset = Medicine.objects.none()

    def get_queryset(self):
        scope = require_doctor_scope(self.request)
        return medicines_qs(doctor_id=scope.doctor_id)

    def _get_object(self, doctor_id: int, pk) -> Medicine:
        try:
            return get_medicine(doctor_id=doctor_id, medicine_id=pk)
        except (Medicine.DoesNotExist, ValueError):
            raise NotFound("Medicine not found.")

    def create(self, request):
        scope = require_doctor_scope(request)

        ser = MedicineCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        med = MedicineService.create_medicine(doctor_id=scope.doctor_id, **ser.validated_data)
        return Response(MedicineSerializer(med).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        scope = require_doctor_scope(request)
        return Response(MedicineSerializer(self._get_object(scope.doctor_id, pk)).data)

    def partial_update(self, request, pk=None):
        scope = require_doctor_scope(request)
        self._get_object(scope.doctor_id, pk)

        ser = MedicineUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        med = MedicineService.update_medicine(
            doctor_id=scope.doctor_id,
            medicine_id=pk,
            data=ser.validated_data,
        )
        return Response(MedicineSerializer(med).data, status=status.HTTP_200_OK)

    def destroy(self, request, pk=None):
        scope = require_doctor_scope(request)
        self._get_object(scope.doctor_id, pk)
        MedicineService.delete_medicine(doctor_id=scope.doctor_id, medicine_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
