from __future__ import annotations

from django.db.models import QuerySet

from hc_core.alerts.models import Alert


def alerts_qs(*, doctor_id: int) -> QuerySet[Alert]:
    return Alert.objects.filter(doctor_id=doctor_id)
