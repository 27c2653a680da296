# uicms/conftest.py
import itertools

import pytest
from rest_framework.test import APIClient

from uicms.campuses.models import Campus, Clinic, ClinicType
from uicms.iam.models import Staff
from uicms.iam.principal import Principal
from uicms.iam.roles import Role
from uicms.iam.tokens import issue_token_pair
from uicms.patients.models import Patient

PASSWORD = "Pass@12345"

_email_seq = itertools.count(1)


def bearer(staff) -> dict:
    """Authorization header kwargs for APIClient requests."""
    access = issue_token_pair(staff)["access"]
    return {"HTTP_AUTHORIZATION": f"Bearer {access}"}


# -------------------------------------------------------------------
# Campus topology: hub campus 1, secondary campuses 2 and 3
# -------------------------------------------------------------------

@pytest.fixture
def main_campus(db):
    return Campus.objects.create(id=1, name="Main Campus")


@pytest.fixture
def techno_campus(db):
    return Campus.objects.create(id=2, name="Techno Campus")


@pytest.fixture
def vet_campus(db):
    return Campus.objects.create(id=3, name="Veterinary Campus")


@pytest.fixture
def hub_clinic(main_campus):
    return Clinic.objects.create(id=10, campus=main_campus, name="Main General Clinic", clinic_type=ClinicType.GENERAL)


@pytest.fixture
def main_dental_clinic(main_campus):
    return Clinic.objects.create(id=11, campus=main_campus, name="Main Dental Clinic", clinic_type=ClinicType.DENTAL)


@pytest.fixture
def techno_clinic(techno_campus):
    return Clinic.objects.create(id=20, campus=techno_campus, name="Techno Clinic", clinic_type=ClinicType.GENERAL)


@pytest.fixture
def techno_lab(techno_campus):
    return Clinic.objects.create(id=21, campus=techno_campus, name="Techno Lab", clinic_type=ClinicType.LAB)


@pytest.fixture
def vet_clinic(vet_campus):
    return Clinic.objects.create(id=30, campus=vet_campus, name="Vet Clinic", clinic_type=ClinicType.GENERAL)


# -------------------------------------------------------------------
# Staff
# -------------------------------------------------------------------

@pytest.fixture
def make_staff(db):
    def _make(role: str, *, clinic: Clinic | None = None, email: str | None = None, **extra) -> Staff:
        n = next(_email_seq)
        return Staff.objects.create_user(
            email or f"{role.lower()}{n}@uicms.test",
            PASSWORD,
            first_name=role,
            last_name=f"User{n}",
            role=role,
            campus_id=clinic.campus_id if clinic else None,
            clinic=clinic,
            **extra,
        )

    return _make


@pytest.fixture
def admin(make_staff):
    return make_staff(Role.ADMIN)


@pytest.fixture
def doctor(make_staff, techno_clinic):
    return make_staff(Role.DOCTOR, clinic=techno_clinic)


@pytest.fixture
def hub_doctor(make_staff, hub_clinic):
    return make_staff(Role.DOCTOR, clinic=hub_clinic)


@pytest.fixture
def nurse(make_staff):
    return make_staff(Role.NURSE)


@pytest.fixture
def clinic_manager(make_staff):
    return make_staff(Role.CLINIC_MANAGER)


@pytest.fixture
def receptionist(make_staff):
    return make_staff(Role.RECEPTIONIST)


@pytest.fixture
def principal_for():
    return Principal.from_staff


# -------------------------------------------------------------------
# Patients
# -------------------------------------------------------------------

@pytest.fixture
def patient(techno_campus):
    return Patient.objects.create(
        first_name="Abebe",
        last_name="Kebede",
        university_id="UGR/1234/15",
        campus=techno_campus,
    )


# -------------------------------------------------------------------
# Clients
# -------------------------------------------------------------------

@pytest.fixture
def client_for():
    """
    Real bearer-token client. Goes through StaffJWTAuthentication, so the
    request principal is built exactly as in production.
    """
    def _client(staff) -> APIClient:
        c = APIClient()
        c.credentials(**bearer(staff))
        return c

    return _client


@pytest.fixture
def anon_client():
    return APIClient()
