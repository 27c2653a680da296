# uicms/iam/principal.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from uicms.iam.roles import permission_level_for


@dataclass(frozen=True)
class Principal:
    """
    The authenticated staff member for one request.

    Built from a Staff row by the authentication class and attached to
    ``request.user``. Carries only non-secret fields.
    """

    id: int
    full_name: str
    role: str
    email: str
    campus_id: Optional[int]
    clinic_id: Optional[int]
    employment_status: str
    permission_level: int

    # DRF / Django auth protocol
    is_authenticated = True
    is_anonymous = False

    @property
    def pk(self) -> int:
        return self.id

    @classmethod
    def from_staff(cls, staff) -> "Principal":
        return cls(
            id=staff.id,
            full_name=staff.full_name,
            role=staff.role,
            email=staff.email,
            campus_id=staff.campus_id,
            clinic_id=staff.clinic_id,
            employment_status=staff.employment_status,
            permission_level=permission_level_for(staff.role),
        )

    def as_dict(self) -> dict:
        return {
            "staff_id": self.id,
            "full_name": self.full_name,
            "role": self.role,
            "email": self.email,
            "campus_id": self.campus_id,
            "clinic_id": self.clinic_id,
            "employment_status": self.employment_status,
            "permission_level": self.permission_level,
        }
