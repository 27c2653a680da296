# uicms/iam/selectors.py
from __future__ import annotations

from typing import Optional

from django.db.models import QuerySet

from uicms.iam.models import Staff


def staff_by_id(*, staff_id) -> Optional[Staff]:
    try:
        return Staff.objects.filter(id=int(staff_id)).first()
    except (TypeError, ValueError):
        return None


def staff_list(
    *,
    role: str | None = None,
    campus_id: int | None = None,
    clinic_id: int | None = None,
    employment_status: str | None = None,
) -> QuerySet[Staff]:
    qs = Staff.objects.select_related("campus", "clinic")
    if role:
        qs = qs.filter(role=role)
    if campus_id:
        qs = qs.filter(campus_id=campus_id)
    if clinic_id:
        qs = qs.filter(clinic_id=clinic_id)
    if employment_status:
        qs = qs.filter(employment_status=employment_status)
    return qs.order_by("last_name", "first_name", "id")
