# uicms/campuses/services.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from django.db import transaction
from rest_framework.exceptions import ValidationError

from uicms.audit.services import AuditEntity, AuditService
from uicms.campuses.models import Campus, Clinic


@dataclass(frozen=True)
class CampusUpdate:
    name: Optional[str] = None
    address: Optional[str] = None
    contact: Optional[str] = None
    status: Optional[str] = None


@dataclass(frozen=True)
class ClinicUpdate:
    name: Optional[str] = None
    clinic_type: Optional[str] = None
    status: Optional[str] = None


def _changed_fields(patch) -> dict:
    return {k: v for k, v in patch.__dict__.items() if v is not None}


class CampusService:
    @staticmethod
    @transaction.atomic
    def create(
        *,
        actor_staff_id: int | None,
        name: str,
        address: str = "",
        contact: str = "",
        status: str | None = None,
    ) -> Campus:
        name = (name or "").strip()
        if Campus.objects.filter(name__iexact=name).exists():
            raise ValidationError({"name": "A campus with this name already exists."})

        fields = {"name": name, "address": address or "", "contact": contact or ""}
        if status:
            fields["status"] = status

        campus = Campus.objects.create(**fields)

        AuditService.log(
            event_code="campus.created",
            entity_type=AuditEntity.CAMPUS,
            entity_id=campus.id,
            actor_staff_id=actor_staff_id,
            metadata={"name": campus.name},
        )
        return campus

    @staticmethod
    @transaction.atomic
    def update(*, actor_staff_id: int | None, campus_id: int, patch: CampusUpdate) -> Campus:
        campus = Campus.objects.select_for_update().get(id=campus_id)
        changes = _changed_fields(patch)

        if "name" in changes:
            changes["name"] = changes["name"].strip()
            clash = Campus.objects.filter(name__iexact=changes["name"]).exclude(id=campus.id)
            if clash.exists():
                raise ValidationError({"name": "A campus with this name already exists."})

        for field, value in changes.items():
            setattr(campus, field, value)
        campus.save()

        AuditService.log(
            event_code="campus.updated",
            entity_type=AuditEntity.CAMPUS,
            entity_id=campus.id,
            actor_staff_id=actor_staff_id,
            metadata={"updated_fields": sorted(changes.keys())},
        )
        return campus


class ClinicService:
    @staticmethod
    @transaction.atomic
    def create(
        *,
        actor_staff_id: int | None,
        campus_id: int,
        name: str,
        clinic_type: str,
        status: str | None = None,
    ) -> Clinic:
        if not Campus.objects.filter(id=campus_id).exists():
            raise ValidationError({"campus_id": "Campus not found."})

        name = (name or "").strip()
        if Clinic.objects.filter(campus_id=campus_id, name__iexact=name).exists():
            raise ValidationError({"name": "A clinic with this name already exists on this campus."})

        fields = {"campus_id": campus_id, "name": name, "clinic_type": clinic_type}
        if status:
            fields["status"] = status

        clinic = Clinic.objects.create(**fields)

        AuditService.log(
            event_code="clinic.created",
            entity_type=AuditEntity.CLINIC,
            entity_id=clinic.id,
            actor_staff_id=actor_staff_id,
            metadata={"campus_id": campus_id, "clinic_type": clinic_type},
        )
        return clinic

    @staticmethod
    @transaction.atomic
    def update(*, actor_staff_id: int | None, clinic_id: int, patch: ClinicUpdate) -> Clinic:
        clinic = Clinic.objects.select_for_update().get(id=clinic_id)
        changes = _changed_fields(patch)

        if "name" in changes:
            changes["name"] = changes["name"].strip()
            clash = (
                Clinic.objects.filter(campus_id=clinic.campus_id, name__iexact=changes["name"])
                .exclude(id=clinic.id)
            )
            if clash.exists():
                raise ValidationError({"name": "A clinic with this name already exists on this campus."})

        for field, value in changes.items():
            setattr(clinic, field, value)
        clinic.save()

        AuditService.log(
            event_code="clinic.updated",
            entity_type=AuditEntity.CLINIC,
            entity_id=clinic.id,
            actor_staff_id=actor_staff_id,
            metadata={"updated_fields": sorted(changes.keys())},
        )
        return clinic
