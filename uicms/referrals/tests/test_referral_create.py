# uicms/referrals/tests/test_referral_create.py
import pytest
from rest_framework.exceptions import ValidationError

from uicms.audit.models import AuditEvent
from uicms.campuses.models import Clinic, ClinicType
from uicms.iam.roles import Role
from uicms.referrals.models import Referral, ReferralStatus, ReferralTrackingEntry
from uicms.referrals.services import ReferralService

pytestmark = pytest.mark.django_db

URL = "/api/v1/referrals/"


def _body(patient, from_clinic, to_clinic, **extra):
    data = {
        "patient_id": patient.id,
        "from_clinic_id": from_clinic.id,
        "to_clinic_id": to_clinic.id,
        "reason": "Persistent chest pain, needs specialist review.",
    }
    data.update(extra)
    return data


def test_secondary_to_secondary_is_routed_to_hub(client_for, doctor, patient, techno_clinic, vet_clinic, hub_clinic):
    res = client_for(doctor).post(URL, _body(patient, techno_clinic, vet_clinic), format="json")
    assert res.status_code == 201, res.data

    body = res.json()
    assert body["to_clinic_id"] == hub_clinic.id
    assert body["to_clinic_name"] == hub_clinic.name
    assert body["requested_to_clinic_id"] == vet_clinic.id
    assert body["status"] == ReferralStatus.PENDING
    assert body["urgency"] == "Normal"
    assert body["referring_doctor_id"] == doctor.id
    assert body["receiving_doctor_id"] is None
    assert body["accepted_at"] is None

    referral = Referral.objects.get(id=body["referral_id"])
    assert referral.to_clinic_id == hub_clinic.id


def test_referral_into_hub_campus_is_routed_to_hub_clinic(
    client_for, doctor, patient, techno_clinic, main_dental_clinic, hub_clinic
):
    res = client_for(doctor).post(URL, _body(patient, techno_clinic, main_dental_clinic), format="json")
    assert res.status_code == 201, res.data
    assert res.json()["to_clinic_id"] == hub_clinic.id


def test_same_campus_referral_is_not_routed(client_for, doctor, patient, techno_clinic, techno_lab, hub_clinic):
    res = client_for(doctor).post(URL, _body(patient, techno_clinic, techno_lab), format="json")
    assert res.status_code == 201, res.data
    assert res.json()["to_clinic_id"] == techno_lab.id


def test_hub_outbound_referral_is_not_routed(client_for, hub_doctor, patient, hub_clinic, techno_lab):
    res = client_for(hub_doctor).post(URL, _body(patient, hub_clinic, techno_lab), format="json")
    assert res.status_code == 201, res.data
    assert res.json()["to_clinic_id"] == techno_lab.id


def test_missing_hub_clinic_fails_without_writing(client_for, doctor, patient, techno_clinic, main_dental_clinic):
    res = client_for(doctor).post(URL, _body(patient, techno_clinic, main_dental_clinic), format="json")

    assert res.status_code == 400
    err = res.json()["error"]
    assert err["code"] == "no_receiving_clinic"
    assert err["message"] == "Main Campus does not have a receiving clinic."

    assert Referral.objects.count() == 0
    assert ReferralTrackingEntry.objects.count() == 0
    assert not AuditEvent.objects.filter(event_code="referral.created").exists()


def test_routing_honours_configured_hub(settings, client_for, doctor, patient, techno_clinic, vet_clinic, main_campus):
    dental_hub = Clinic.objects.create(id=12, campus=main_campus, name="Hub Dental", clinic_type=ClinicType.DENTAL)
    settings.REFERRAL_ROUTING = {"HUB_CAMPUS_ID": 1, "SECONDARY_CAMPUS_IDS": [2, 3], "HUB_CLINIC_TYPE": "Dental"}

    res = client_for(doctor).post(URL, _body(patient, techno_clinic, vet_clinic), format="json")
    assert res.status_code == 201, res.data
    assert res.json()["to_clinic_id"] == dental_hub.id


def test_creation_writes_tracking_entry_and_audit(client_for, doctor, patient, techno_clinic, vet_clinic, hub_clinic):
    res = client_for(doctor).post(URL, _body(patient, techno_clinic, vet_clinic), format="json")
    referral_id = res.json()["referral_id"]

    entries = list(ReferralTrackingEntry.objects.filter(referral_id=referral_id))
    assert len(entries) == 1
    assert entries[0].status == ReferralStatus.PENDING
    assert entries[0].staff_id == doctor.id
    assert str(hub_clinic.id) in entries[0].notes

    event = AuditEvent.objects.get(event_code="referral.created", entity_id=referral_id)
    assert event.entity_type == "Referral"
    assert event.actor_staff_id == doctor.id
    assert event.metadata["redirected"] is True
    assert event.metadata["requested_to_clinic_id"] == vet_clinic.id


@pytest.mark.parametrize("field", ["from_clinic_id", "to_clinic_id", "patient_id"])
def test_unknown_reference_is_400_naming_the_field(client_for, doctor, patient, techno_clinic, techno_lab, field):
    body = _body(patient, techno_clinic, techno_lab)
    body[field] = 999999

    res = client_for(doctor).post(URL, body, format="json")

    assert res.status_code == 400
    err = res.json()["error"]
    assert err["code"] == "validation_error"
    assert field in err["details"]
    assert Referral.objects.count() == 0


def test_unknown_receiving_doctor_is_400(client_for, doctor, patient, techno_clinic, techno_lab):
    res = client_for(doctor).post(
        URL, _body(patient, techno_clinic, techno_lab, receiving_doctor_id=999999), format="json"
    )
    assert res.status_code == 400
    assert "receiving_doctor_id" in res.json()["error"]["details"]


def test_missing_reason_is_400(client_for, doctor, patient, techno_clinic, techno_lab):
    body = _body(patient, techno_clinic, techno_lab)
    del body["reason"]

    res = client_for(doctor).post(URL, body, format="json")
    assert res.status_code == 400
    assert "reason" in res.json()["error"]["details"]


def test_blank_reason_is_400(client_for, doctor, patient, techno_clinic, techno_lab):
    res = client_for(doctor).post(URL, _body(patient, techno_clinic, techno_lab, reason="   "), format="json")
    assert res.status_code == 400


def test_caller_is_always_the_referring_doctor(client_for, doctor, make_staff, patient, techno_clinic, techno_lab):
    colleague = make_staff(Role.DOCTOR, clinic=techno_clinic)

    res = client_for(doctor).post(
        URL,
        _body(patient, techno_clinic, techno_lab, urgency="Urgent", referring_doctor_id=colleague.id),
        format="json",
    )
    assert res.status_code == 201, res.data
    assert res.json()["urgency"] == "Urgent"
    assert res.json()["referring_doctor_id"] == doctor.id


def test_receiving_doctor_must_be_a_doctor(client_for, doctor, receptionist, patient, techno_clinic, techno_lab):
    res = client_for(doctor).post(
        URL,
        _body(patient, techno_clinic, techno_lab, receiving_doctor_id=receptionist.id),
        format="json",
    )

    assert res.status_code == 400
    assert "receiving_doctor_id" in res.json()["error"]["details"]
    assert Referral.objects.count() == 0


def test_service_rejects_non_doctor_referrer(receptionist, nurse, patient, techno_clinic, techno_lab):
    with pytest.raises(ValidationError) as exc:
        ReferralService.create_referral(
            actor_staff_id=receptionist.id,
            patient_id=patient.id,
            from_clinic_id=techno_clinic.id,
            to_clinic_id=techno_lab.id,
            reason="Needs lab workup.",
            referring_doctor_id=receptionist.id,
            receiving_doctor_id=nurse.id,
        )

    assert set(exc.value.detail) == {"referring_doctor_id", "receiving_doctor_id"}
    assert Referral.objects.count() == 0


def test_nurse_cannot_create(client_for, nurse, patient, techno_clinic, techno_lab):
    res = client_for(nurse).post(URL, _body(patient, techno_clinic, techno_lab), format="json")
    assert res.status_code == 403
    assert Referral.objects.count() == 0
