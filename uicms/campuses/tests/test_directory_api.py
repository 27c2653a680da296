# uicms/campuses/tests/test_directory_api.py
import pytest

from uicms.audit.models import AuditEvent
from uicms.campuses.models import Campus, Clinic, ClinicType
from uicms.campuses.selectors import campus_id_for_clinic, hub_general_clinic
from uicms.common.models import RecordStatus

pytestmark = pytest.mark.django_db


def test_any_staff_can_list_campuses(client_for, receptionist, main_campus, techno_campus):
    res = client_for(receptionist).get("/api/v1/campuses/")
    assert res.status_code == 200
    assert {c["name"] for c in res.json()} == {"Main Campus", "Techno Campus"}


def test_admin_creates_campus(client_for, admin):
    res = client_for(admin).post("/api/v1/campuses/", {"name": "Agri Campus"}, format="json")
    assert res.status_code == 201, res.data
    assert res.json()["status"] == RecordStatus.ACTIVE
    assert AuditEvent.objects.filter(event_code="campus.created", entity_id=res.json()["id"]).exists()


def test_campus_name_is_unique_ignoring_case(client_for, admin, main_campus):
    res = client_for(admin).post("/api/v1/campuses/", {"name": "main campus"}, format="json")
    assert res.status_code == 400
    assert "name" in res.json()["error"]["details"]


def test_doctor_cannot_create_campus(client_for, doctor):
    res = client_for(doctor).post("/api/v1/campuses/", {"name": "Rogue Campus"}, format="json")
    assert res.status_code == 403
    assert not Campus.objects.filter(name="Rogue Campus").exists()


def test_patch_campus(client_for, admin, main_campus):
    res = client_for(admin).patch(f"/api/v1/campuses/{main_campus.id}/", {"address": "Arat Kilo"}, format="json")
    assert res.status_code == 200, res.data
    assert res.json()["address"] == "Arat Kilo"
    assert res.json()["name"] == "Main Campus"


def test_campus_clinics(client_for, doctor, hub_clinic, main_dental_clinic):
    res = client_for(doctor).get(f"/api/v1/campuses/{hub_clinic.campus_id}/clinics/", {"type": "General"})
    assert res.status_code == 200
    assert [c["id"] for c in res.json()] == [hub_clinic.id]
    assert res.json()[0]["type"] == ClinicType.GENERAL


def test_unknown_campus_is_404(client_for, doctor):
    assert client_for(doctor).get("/api/v1/campuses/999/").status_code == 404
    assert client_for(doctor).get("/api/v1/campuses/999/clinics/").status_code == 404


def test_clinic_list_filters(client_for, doctor, hub_clinic, techno_clinic, techno_lab):
    c = client_for(doctor)
    ids = {x["id"] for x in c.get("/api/v1/clinics/", {"campus_id": techno_clinic.campus_id}).json()}
    assert ids == {techno_clinic.id, techno_lab.id}

    assert c.get("/api/v1/clinics/", {"campus_id": "abc"}).status_code == 400


def test_admin_creates_clinic(client_for, admin, techno_campus):
    res = client_for(admin).post(
        "/api/v1/clinics/",
        {"campus_id": techno_campus.id, "name": "Techno Pharmacy", "type": "Pharmacy"},
        format="json",
    )
    assert res.status_code == 201, res.data
    assert res.json()["type"] == ClinicType.PHARMACY
    assert res.json()["campus_name"] == "Techno Campus"


def test_clinic_name_unique_per_campus(client_for, admin, techno_clinic):
    res = client_for(admin).post(
        "/api/v1/clinics/",
        {"campus_id": techno_clinic.campus_id, "name": techno_clinic.name.upper()},
        format="json",
    )
    assert res.status_code == 400


def test_clinic_on_unknown_campus(client_for, admin):
    res = client_for(admin).post("/api/v1/clinics/", {"campus_id": 999, "name": "Ghost"}, format="json")
    assert res.status_code == 400
    assert "campus_id" in res.json()["error"]["details"]


def test_hub_clinic_prefers_active_then_lowest_id(main_campus):
    Clinic.objects.create(id=13, campus=main_campus, name="Old General", clinic_type=ClinicType.GENERAL,
                          status=RecordStatus.INACTIVE)
    Clinic.objects.create(id=15, campus=main_campus, name="General B", clinic_type=ClinicType.GENERAL)
    Clinic.objects.create(id=14, campus=main_campus, name="General A", clinic_type=ClinicType.GENERAL)

    assert hub_general_clinic(campus_id=main_campus.id).id == 14


def test_hub_clinic_none_when_missing(main_dental_clinic):
    assert hub_general_clinic(campus_id=main_dental_clinic.campus_id) is None


def test_campus_id_for_clinic(techno_clinic):
    assert campus_id_for_clinic(clinic_id=techno_clinic.id) == techno_clinic.campus_id
    assert campus_id_for_clinic(clinic_id=999) is None
