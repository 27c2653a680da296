# uicms/iam/services.py
from __future__ import annotations

import logging
import re
from typing import Optional

from django.core.validators import validate_email
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from rest_framework.exceptions import ValidationError

from uicms.audit.services import AuditEntity, AuditService
from uicms.campuses.models import Campus, Clinic
from uicms.common.models import RecordStatus
from uicms.iam.models import Staff
from uicms.iam.roles import Role

logger = logging.getLogger(__name__)

PHONE_RE = re.compile(r"^(\+251|0)[0-9]{9}$")
MIN_PASSWORD_LENGTH = 6


class StaffService:
    @staticmethod
    @transaction.atomic
    def register(
        *,
        actor_staff_id: int | None,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        role: str,
        middle_name: str = "",
        qualification: str = "",
        license_no: str = "",
        contact: str = "",
        campus_id: Optional[int] = None,
        clinic_id: Optional[int] = None,
        employment_status: str = RecordStatus.ACTIVE,
    ) -> Staff:
        """
        Create a staff account. All field errors are collected and raised
        together as one ValidationError keyed by field name.
        """
        errors: dict[str, str] = {}

        first_name = (first_name or "").strip()
        last_name = (last_name or "").strip()
        email = (email or "").strip().lower()
        contact = (contact or "").strip()

        if not first_name:
            errors["first_name"] = "This field is required."
        if not last_name:
            errors["last_name"] = "This field is required."

        if not email:
            errors["email"] = "This field is required."
        else:
            try:
                validate_email(email)
            except DjangoValidationError:
                errors["email"] = "Invalid email format."
            else:
                if Staff.objects.filter(email__iexact=email).exists():
                    errors["email"] = "Email already registered."

        if not password or len(password) < MIN_PASSWORD_LENGTH:
            errors["password"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters."

        if role not in Role.values:
            errors["role"] = "Invalid role."

        if employment_status not in RecordStatus.values:
            errors["employment_status"] = "Employment status must be active or inactive."

        if contact and not PHONE_RE.match(contact):
            errors["contact"] = "Invalid phone number. Use +251XXXXXXXXX or 0XXXXXXXXX."

        if campus_id is not None and not Campus.objects.filter(id=campus_id).exists():
            errors["campus_id"] = "Campus not found."

        if clinic_id is not None:
            clinic_campus = Clinic.objects.filter(id=clinic_id).values_list("campus_id", flat=True).first()
            if clinic_campus is None:
                errors["clinic_id"] = "Clinic not found."
            elif campus_id is not None and clinic_campus != campus_id:
                errors["clinic_id"] = "Clinic does not belong to the selected campus."
            elif campus_id is None:
                campus_id = clinic_campus

        if errors:
            raise ValidationError(errors)

        staff = Staff.objects.create_user(
            email,
            password,
            first_name=first_name,
            middle_name=(middle_name or "").strip(),
            last_name=last_name,
            role=role,
            qualification=qualification or "",
            license_no=license_no or "",
            contact=contact,
            campus_id=campus_id,
            clinic_id=clinic_id,
            employment_status=employment_status,
        )

        AuditService.log(
            event_code="staff.registered",
            entity_type=AuditEntity.STAFF,
            entity_id=staff.id,
            actor_staff_id=actor_staff_id,
            metadata={"role": role, "campus_id": campus_id, "clinic_id": clinic_id},
        )
        logger.info("Registered staff_id=%s role=%s", staff.id, role)
        return staff
