# hc_core/patients/admin.py
from django.contrib import admin

from hc_core.patients.models import Patient


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ("name", "age", "sex", "email", "doctor_id", "status", "created_at")
    list_filter = ("status", "sex")
    search_fields = ("name", "email")
    ordering = ("name",)
