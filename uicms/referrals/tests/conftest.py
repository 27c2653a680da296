# uicms/referrals/tests/conftest.py
import pytest

from uicms.referrals.services import ReferralService


@pytest.fixture
def make_referral(doctor, patient, techno_clinic, techno_lab):
    def _make(**overrides):
        data = {
            "actor_staff_id": doctor.id,
            "patient_id": patient.id,
            "from_clinic_id": techno_clinic.id,
            "to_clinic_id": techno_lab.id,
            "reason": "Needs lab workup.",
            "referring_doctor_id": doctor.id,
        }
        data.update(overrides)
        return ReferralService.create_referral(**data)

    return _make


@pytest.fixture
def referral(make_referral):
    return make_referral()
