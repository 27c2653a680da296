# uicms/iam/roles.py
from __future__ import annotations

from django.db import models


class Role(models.TextChoices):
    ADMIN = "Admin", "Admin"
    HEALTH_ADMIN = "HealthAdmin", "Health Admin"
    CLINIC_MANAGER = "ClinicManager", "Clinic Manager"
    DOCTOR = "Doctor", "Doctor"
    NURSE = "Nurse", "Nurse"
    PHARMACIST = "Pharmacist", "Pharmacist"
    RECEPTIONIST = "Receptionist", "Receptionist"
    LAB_STAFF = "LabStaff", "Lab Staff"


# Total over Role. Used by MinLevel policies.
PERMISSION_LEVELS: dict[str, int] = {
    Role.ADMIN: 100,
    Role.HEALTH_ADMIN: 80,
    Role.CLINIC_MANAGER: 60,
    Role.DOCTOR: 50,
    Role.PHARMACIST: 40,
    Role.LAB_STAFF: 40,
    Role.NURSE: 40,
    Role.RECEPTIONIST: 20,
}


def permission_level_for(role: str) -> int:
    return PERMISSION_LEVELS.get(role, 0)


def is_role(value) -> bool:
    return isinstance(value, str) and value in Role.values
