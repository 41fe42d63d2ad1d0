# hc_core/medicines/admin.py
from django.contrib import admin

from hc_core.medicines.models import Medicine


@admin.register(Medicine)
class MedicineAdmin(admin.ModelAdmin):
    list_display = ("name", "stock", "doctor_id", "updated_at")
    search_fields = ("name", "description")
    ordering = ("name",)
