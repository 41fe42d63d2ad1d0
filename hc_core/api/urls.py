# hc_core/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from hc_core.alerts.api.views import AlertViewSet
from hc_core.appointments.api.views import AppointmentViewSet
from hc_core.audit.api.views import AuditEventViewSet
from hc_core.medicines.api.views import MedicineViewSet
from hc_core.patients.api.views import PatientViewSet

router = DefaultRouter()

router.register(r"patients", PatientViewSet, basename="patients")
router.register(r"medicines", MedicineViewSet, basename="medicines")
router.register(r"appointments", AppointmentViewSet, basename="appointments")
router.register(r"alerts", AlertViewSet, basename="alerts")
router.register(r"audit/events", AuditEventViewSet, basename="audit-events")

urlpatterns = [
    # Stock simplejwt views; login flows themselves live outside this backend.
    path("auth/token/", TokenObtainPairView.as_view(), name="token-obtain"),
    path("auth/token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),

    *router.urls,
]
