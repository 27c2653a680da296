# uicms/patients/services.py
from __future__ import annotations

from django.db import transaction
from rest_framework.exceptions import ValidationError

from uicms.audit.services import AuditEntity, AuditService
from uicms.campuses.models import Campus, Clinic
from uicms.patients.models import Patient


class PatientService:
    @staticmethod
    @transaction.atomic
    def create_patient(
        *,
        actor_staff_id: int | None,
        first_name: str,
        last_name: str,
        middle_name: str = "",
        university_id: str | None = None,
        external_id: str = "",
        gender: str = "",
        date_of_birth=None,
        contact: str = "",
        email: str = "",
        address: str = "",
        campus_id: int | None = None,
        registered_clinic_id: int | None = None,
    ) -> Patient:
        university_id = (university_id or "").strip() or None
        if university_id and Patient.objects.filter(university_id=university_id).exists():
            raise ValidationError({"university_id": "Patient with this university ID already exists."})

        if campus_id is not None and not Campus.objects.filter(id=campus_id).exists():
            raise ValidationError({"campus_id": "Campus not found."})

        if registered_clinic_id is not None:
            clinic_campus = (
                Clinic.objects.filter(id=registered_clinic_id).values_list("campus_id", flat=True).first()
            )
            if clinic_campus is None:
                raise ValidationError({"registered_clinic_id": "Clinic not found."})
            if campus_id is None:
                campus_id = clinic_campus

        patient = Patient.objects.create(
            first_name=first_name.strip(),
            middle_name=(middle_name or "").strip(),
            last_name=last_name.strip(),
            university_id=university_id,
            external_id=external_id or "",
            gender=gender or "",
            date_of_birth=date_of_birth,
            contact=contact or "",
            email=email or "",
            address=address or "",
            campus_id=campus_id,
            registered_clinic_id=registered_clinic_id,
        )

        AuditService.log(
            event_code="patient.created",
            entity_type=AuditEntity.PATIENT,
            entity_id=patient.id,
            actor_staff_id=actor_staff_id,
            metadata={"university_id": university_id, "campus_id": campus_id},
        )
        return patient
