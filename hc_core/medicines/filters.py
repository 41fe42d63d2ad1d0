# hc_core/medicines/filters.py
from __future__ import annotations

import django_filters
from django.conf import settings
from django.db.models import Q

from hc_core.medicines.models import Medicine


class MedicineFilter(django_filters.FilterSet):
    q = django_filters.CharFilter(method="filter_q")
    low_stock = django_filters.BooleanFilter(method="filter_low_stock")

    class Meta:
        model = Medicine
        fields = ["q", "low_stock"]

    def filter_q(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(Q(name__icontains=value) | Q(description__icontains=value))

    def filter_low_stock(self, queryset, name, value):
        threshold = settings.HC_LOW_STOCK_THRESHOLD
        if value is True:
            return queryset.filter(stock__lte=threshold)
        if value is False:
            return queryset.filter(stock__gt=threshold)
        return queryset
