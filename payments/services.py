from __future__ import annotations

from django.db.models import Q

from .models import PaymentMethod


def get_available_payment_method(*, code: str, distributor_id: int | None) -> PaymentMethod | None:
    code = (code or "").strip()
    if not code:
        return None

    qs = PaymentMethod.objects.filter(code=code, is_active=True)
    if distributor_id is not None:
        qs = qs.filter(Q(distributors__isnull=True) | Q(distributors__id=int(distributor_id)))
    return qs.distinct().first()
