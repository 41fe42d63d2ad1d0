# hc_core/appointments/apps.py
from __future__ import annotations

from django.apps import AppConfig


class AppointmentsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "hc_core.appointments"
