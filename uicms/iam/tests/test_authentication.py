# uicms/iam/tests/test_authentication.py
from datetime import timedelta

import pytest
from rest_framework.test import APIClient, APIRequestFactory
from rest_framework_simplejwt.exceptions import AuthenticationFailed
from rest_framework_simplejwt.tokens import AccessToken

from uicms.common.models import RecordStatus
from uicms.iam.auth import StaffJWTAuthentication
from uicms.iam.principal import Principal
from uicms.iam.roles import Role
from uicms.iam.tokens import issue_token_pair

pytestmark = pytest.mark.django_db


def _request_with(header: str | None):
    factory = APIRequestFactory()
    extra = {"HTTP_AUTHORIZATION": header} if header is not None else {}
    return factory.get("/api/v1/me/", **extra)


def test_authenticate_returns_principal_without_secrets(doctor, techno_clinic):
    access = issue_token_pair(doctor)["access"]

    principal, token = StaffJWTAuthentication().authenticate(_request_with(f"Bearer {access}"))

    assert isinstance(principal, Principal)
    assert principal.id == doctor.id
    assert principal.role == Role.DOCTOR
    assert principal.full_name == doctor.full_name
    assert principal.email == doctor.email
    assert principal.campus_id == techno_clinic.campus_id
    assert principal.clinic_id == techno_clinic.id
    assert principal.employment_status == "active"
    assert not hasattr(principal, "password")
    assert "password" not in principal.as_dict()
    assert str(token["staff_id"]) == str(doctor.id)
    assert token["role"] == Role.DOCTOR


def test_missing_header_is_anonymous():
    assert StaffJWTAuthentication().authenticate(_request_with(None)) is None


def test_other_scheme_is_anonymous(doctor):
    access = issue_token_pair(doctor)["access"]
    assert StaffJWTAuthentication().authenticate(_request_with(f"Basic {access}")) is None


def test_expired_token_fails(doctor):
    token = AccessToken.for_user(doctor)
    token.set_exp(lifetime=-timedelta(minutes=1))

    with pytest.raises(AuthenticationFailed) as exc:
        StaffJWTAuthentication().authenticate(_request_with(f"Bearer {token}"))
    assert "Invalid or expired token" in str(exc.value.detail)


def test_tampered_token_fails(doctor):
    access = issue_token_pair(doctor)["access"]
    with pytest.raises(AuthenticationFailed):
        StaffJWTAuthentication().authenticate(_request_with(f"Bearer {access[:-4]}abcd"))


def test_deleted_principal_fails(doctor):
    access = issue_token_pair(doctor)["access"]
    doctor.delete()

    with pytest.raises(AuthenticationFailed) as exc:
        StaffJWTAuthentication().authenticate(_request_with(f"Bearer {access}"))
    assert "Invalid token user" in str(exc.value.detail)


def test_token_without_staff_claim_fails():
    token = AccessToken()
    with pytest.raises(AuthenticationFailed):
        StaffJWTAuthentication().authenticate(_request_with(f"Bearer {token}"))


@pytest.mark.parametrize("header", ["Bearer", "Bearer a b", "Bearer not-a-jwt"])
def test_malformed_header_is_401_over_http(header):
    c = APIClient()
    res = c.get("/api/v1/me/", HTTP_AUTHORIZATION=header)
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "not_authenticated"


def test_deleted_principal_is_401_over_http(doctor):
    access = issue_token_pair(doctor)["access"]
    doctor.delete()

    c = APIClient()
    res = c.get("/api/v1/me/", HTTP_AUTHORIZATION=f"Bearer {access}")
    assert res.status_code == 401
    body = res.json()
    assert body["error"]["code"] == "not_authenticated"
    assert body["error"]["message"] == "Invalid token user"


def test_no_token_is_401_over_http(anon_client):
    res = anon_client.get("/api/v1/referrals/")
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "not_authenticated"


def test_token_of_deactivated_staff_fails(doctor):
    access = issue_token_pair(doctor)["access"]
    doctor.employment_status = RecordStatus.INACTIVE
    doctor.save(update_fields=["employment_status"])

    with pytest.raises(AuthenticationFailed) as exc:
        StaffJWTAuthentication().authenticate(_request_with(f"Bearer {access}"))
    assert "User is inactive" in str(exc.value.detail)


def test_deactivated_staff_lose_access_over_http(doctor, patient, techno_clinic, techno_lab):
    c = APIClient()
    c.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_token_pair(doctor)['access']}")
    assert c.get("/api/v1/me/").status_code == 200

    doctor.employment_status = RecordStatus.INACTIVE
    doctor.save(update_fields=["employment_status"])

    res = c.get("/api/v1/me/")
    assert res.status_code == 401
    assert res.json()["error"]["message"] == "User is inactive"

    res = c.post(
        "/api/v1/referrals/",
        {
            "patient_id": patient.id,
            "from_clinic_id": techno_clinic.id,
            "to_clinic_id": techno_lab.id,
            "reason": "Follow-up.",
        },
        format="json",
    )
    assert res.status_code == 401
