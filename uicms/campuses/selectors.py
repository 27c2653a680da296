# uicms/campuses/selectors.py
from __future__ import annotations

from typing import Optional

from django.db.models import Case, IntegerField, QuerySet, Value, When

from uicms.campuses.models import Campus, Clinic, ClinicType
from uicms.common.models import RecordStatus


def campuses_list(*, status: str | None = None) -> QuerySet[Campus]:
    qs = Campus.objects.all()
    if status:
        qs = qs.filter(status=status)
    return qs.order_by("name")


def campus_by_id(*, campus_id: int) -> Campus:
    return Campus.objects.get(id=campus_id)


def clinics_list(
    *,
    campus_id: int | None = None,
    clinic_type: str | None = None,
    status: str | None = None,
) -> QuerySet[Clinic]:
    qs = Clinic.objects.select_related("campus")
    if campus_id:
        qs = qs.filter(campus_id=campus_id)
    if clinic_type:
        qs = qs.filter(clinic_type=clinic_type)
    if status:
        qs = qs.filter(status=status)
    return qs.order_by("campus__name", "name")


def clinic_by_id(*, clinic_id: int) -> Clinic:
    return Clinic.objects.select_related("campus").get(id=clinic_id)


def campus_id_for_clinic(*, clinic_id: int) -> Optional[int]:
    """Campus the clinic belongs to, or None if no such clinic exists."""
    return Clinic.objects.filter(id=clinic_id).values_list("campus_id", flat=True).first()


def hub_general_clinic(*, campus_id: int, clinic_type: str = ClinicType.GENERAL) -> Optional[Clinic]:
    """
    Receiving clinic of the given type on the hub campus.
    Active clinics win over inactive ones; ties break on the lowest id.
    """
    return (
        Clinic.objects.filter(campus_id=campus_id, clinic_type=clinic_type)
        .annotate(
            _inactive=Case(
                When(status=RecordStatus.ACTIVE, then=Value(0)),
                default=Value(1),
                output_field=IntegerField(),
            )
        )
        .order_by("_inactive", "id")
        .first()
    )
