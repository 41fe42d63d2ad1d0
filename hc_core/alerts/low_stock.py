# hc_core/alerts/low_stock.py
"""
Low-stock decision.

Pure: given a medicine's stock after a decrement and an explicit LowStockConfig,
decide whether to raise a low-stock alert and describe it. Delivery lives in
hc_core.alerts.services.
"""
from __future__ import annotations

from dataclasses import dataclass

from django.conf import settings

from hc_core.alerts.models import AlertSeverity

DEFAULT_LOW_STOCK_THRESHOLD = 5

LOW_STOCK_ALERT_CODE = "low-stock"


@dataclass(frozen=True)
class LowStockConfig:
    threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    enabled: bool = True

    @classmethod
    def from_settings(cls, *, enabled: bool | None = None) -> "LowStockConfig":
        """
        Defaults from HC_LOW_STOCK_THRESHOLD / HC_LOW_STOCK_ALERTS_ENABLED.
        `enabled` lets a caller (e.g. a user preference) switch alerts off.
        """
        threshold = int(getattr(settings, "HC_LOW_STOCK_THRESHOLD", DEFAULT_LOW_STOCK_THRESHOLD))
        default_enabled = bool(getattr(settings, "HC_LOW_STOCK_ALERTS_ENABLED", True))
        return cls(threshold=threshold, enabled=default_enabled if enabled is None else bool(enabled))


@dataclass(frozen=True)
class LowStockSignal:
    medicine_id: str
    medicine_name: str
    stock: int
    threshold: int

    @property
    def title(self) -> str:
        return "Low stock"

    @property
    def message(self) -> str:
        return f'Stock for "{self.medicine_name}" is low: {self.stock} remaining.'

    @property
    def severity(self) -> str:
        return AlertSeverity.CRITICAL if self.stock == 0 else AlertSeverity.WARNING


def evaluate_low_stock(
    *,
    medicine_id: str,
    medicine_name: str,
    stock: int,
    config: LowStockConfig,
) -> LowStockSignal | None:
    if not config.enabled:
        return None
    if stock > config.threshold:
        return None
    return LowStockSignal(
        medicine_id=str(medicine_id),
        medicine_name=medicine_name,
        stock=int(stock),
        threshold=config.threshold,
    )
