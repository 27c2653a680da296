# uicms/iam/tests/test_auth_and_me.py
import pytest
from rest_framework.test import APIClient

from uicms.common.models import RecordStatus
from uicms.conftest import PASSWORD
from uicms.iam.roles import Role

pytestmark = pytest.mark.django_db


def test_login_returns_token_pair_and_staff(doctor):
    c = APIClient()
    res = c.post("/api/v1/auth/login/", {"email": doctor.email, "password": PASSWORD}, format="json")
    assert res.status_code == 200, res.data

    body = res.json()
    assert body["access"]
    assert body["refresh"]
    assert body["staff"]["staff_id"] == doctor.id
    assert body["staff"]["role"] == Role.DOCTOR
    assert "password" not in body["staff"]


def test_login_with_wrong_password_is_401(doctor):
    c = APIClient()
    res = c.post("/api/v1/auth/login/", {"email": doctor.email, "password": "nope-nope"}, format="json")
    assert res.status_code == 401
    assert res.headers["WWW-Authenticate"].startswith("Bearer")
    assert res.json()["error"]["code"] == "not_authenticated"


def test_login_missing_fields_is_400():
    c = APIClient()
    res = c.post("/api/v1/auth/login/", {"email": "x@uicms.test"}, format="json")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "validation_error"


def test_inactive_staff_cannot_login(make_staff):
    staff = make_staff(Role.NURSE, employment_status=RecordStatus.INACTIVE)
    c = APIClient()
    res = c.post("/api/v1/auth/login/", {"email": staff.email, "password": PASSWORD}, format="json")
    assert res.status_code == 401


def test_me_uses_login_token(doctor):
    c = APIClient()
    login = c.post("/api/v1/auth/login/", {"email": doctor.email, "password": PASSWORD}, format="json")
    access = login.json()["access"]

    c.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
    res = c.get("/api/v1/me/")
    assert res.status_code == 200

    me = res.json()
    assert me["staff_id"] == doctor.id
    assert me["email"] == doctor.email
    assert me["role"] == Role.DOCTOR
    assert me["permission_level"] == 50
    assert "password" not in me


def test_me_requires_auth(anon_client):
    res = anon_client.get("/api/me/")
    assert res.status_code == 401


def test_refresh_issues_new_access(doctor):
    c = APIClient()
    login = c.post("/api/v1/auth/login/", {"email": doctor.email, "password": PASSWORD}, format="json")

    res = c.post("/api/v1/auth/refresh/", {"refresh": login.json()["refresh"]}, format="json")
    assert res.status_code == 200, res.data
    new_access = res.json()["access"]

    c.credentials(HTTP_AUTHORIZATION=f"Bearer {new_access}")
    assert c.get("/api/v1/me/").status_code == 200


def test_refresh_with_garbage_is_401():
    c = APIClient()
    res = c.post("/api/v1/auth/refresh/", {"refresh": "garbage"}, format="json")
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "not_authenticated"


def test_access_token_cannot_be_used_to_refresh(doctor):
    c = APIClient()
    login = c.post("/api/v1/auth/login/", {"email": doctor.email, "password": PASSWORD}, format="json")

    res = c.post("/api/v1/auth/refresh/", {"refresh": login.json()["access"]}, format="json")
    assert res.status_code == 401
