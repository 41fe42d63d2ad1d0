from django.contrib import admin

from hc_core.alerts.models import Alert


@admin.register(Alert)
class AlertAdmin(admin.ModelAdmin):
    list_display = ("title", "code", "severity", "status", "doctor_id", "created_at")
    list_filter = ("code", "severity", "status")
    ordering = ("-created_at",)
