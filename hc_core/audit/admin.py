# hc_core/audit/admin.py
from django.contrib import admin

from hc_core.audit.models import AuditEvent


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    """
    Read-only: the trail is append-only and written by services.
    """
    list_display = ("occurred_at", "event_code", "entity_type", "entity_id", "doctor_id", "actor_user_id")
    list_filter = ("event_code", "entity_type")
    search_fields = ("=entity_id", "=doctor_id")
    date_hierarchy = "occurred_at"
    ordering = ("-occurred_at",)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
