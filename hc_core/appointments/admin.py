# hc_core/appointments/admin.py
from django.contrib import admin

from hc_core.appointments.models import Appointment


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ("id", "patient", "doctor_id", "appointment_at", "status", "completed_at")
    list_filter = ("status", "appointment_at")
    search_fields = ("id", "patient__name")
    autocomplete_fields = ("patient",)
    # status and stock move only through AppointmentCompletionService
    readonly_fields = ("status", "completed_at", "prescriptions")
    ordering = ("-appointment_at",)
