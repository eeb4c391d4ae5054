from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.db.models import Q, QuerySet

from .models import ShippingMethod, ShippingRate


def available_shipping_methods(*, distributor_id: int | None) -> QuerySet[ShippingMethod]:
    qs = ShippingMethod.objects.filter(is_active=True)
    if distributor_id is not None:
        qs = qs.filter(Q(distributors__isnull=True) | Q(distributors__id=int(distributor_id)))
    return qs.distinct().order_by("sort_order", "code")


def get_shipping_net(*, shipping_method: str, country_code: str) -> Decimal:
    shipping_method = (shipping_method or "").strip()
    country_code = (country_code or "").strip().upper()

    if not shipping_method:
        raise ValueError("shipping_method is required")
    if len(country_code) != 2:
        raise ValueError("Invalid country_code")

    rate = (
        ShippingRate.objects.select_related("method")
        .filter(
            method__code=shipping_method,
            method__is_active=True,
            is_active=True,
            country_code=country_code,
        )
        .first()
    )
    if rate:
        return Decimal(rate.net_eur)

    return Decimal(str(getattr(settings, "DEFAULT_SHIPPING_NET_EUR", "0.00")))
