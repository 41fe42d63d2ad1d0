# hc_core/medicines/models.py
from django.db import models
from hc_core.common.models import DoctorScopedModel


class Medicine(DoctorScopedModel):
    """
    Doctor-owned medicine with an on-hand stock count.
    Stock is never persisted negative; decrements clamp at zero.
    """
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")  # potency, form, etc.
    stock = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "medicines_medicine"
        indexes = [
            models.Index(fields=["doctor_id", "name"], name="medicine_doctor_name_idx"),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(stock__gte=0), name="ck_medicine_stock_non_negative"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.stock})"
