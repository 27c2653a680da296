# uicms/patients/selectors.py
from __future__ import annotations

from django.db.models import Q, QuerySet

from uicms.patients.models import Patient


def get_patient(*, patient_id: int) -> Patient:
    return Patient.objects.select_related("campus", "registered_clinic").get(id=patient_id)


def search_patients(*, q: str | None = None, campus_id: int | None = None) -> QuerySet[Patient]:
    qs = Patient.objects.select_related("campus", "registered_clinic")

    if campus_id:
        qs = qs.filter(campus_id=campus_id)

    qv = (q or "").strip()
    if qv:
        qs = qs.filter(
            Q(first_name__icontains=qv)
            | Q(middle_name__icontains=qv)
            | Q(last_name__icontains=qv)
            | Q(university_id__icontains=qv)
        )

    return qs.order_by("-created_at", "-id")
