# uicms/referrals/services.py

from __future__ import annotations

import logging
from typing import Optional

from django.db import transaction
from django.utils.timezone import now
from rest_framework.exceptions import NotFound, ValidationError

from uicms.audit.services import AuditService
from uicms.campuses.selectors import campus_id_for_clinic, hub_general_clinic
from uicms.iam.models import Staff
from uicms.iam.roles import Role
from uicms.patients.models import Patient
from uicms.referrals.exceptions import InvalidTransition, NoReceivingClinic
from uicms.referrals.models import (
    Referral,
    ReferralStatus,
    ReferralTrackingEntry,
    ReferralUrgency,
    TrackingStatus,
)
from uicms.referrals.routing import ReferralRoutingPolicy, route_referral
from uicms.referrals.selectors import get_referral

logger = logging.getLogger(__name__)

MAX_NOTES_LENGTH = 1000


class ReferralService:
    """
    Referral write-model operations.

    Notes:
    - Creation applies hub routing before anything is written.
    - Transitions are a single conditional UPDATE guarded on the expected
      current status, so two concurrent accepts cannot both succeed.
    - Each write records a tracking entry and an audit event in the same
      transaction as the status change.
    """

    # target status -> required current status
    TRANSITIONS = {
        ReferralStatus.ACCEPTED: ReferralStatus.PENDING,
        ReferralStatus.REJECTED: ReferralStatus.PENDING,
        ReferralStatus.COMPLETED: ReferralStatus.ACCEPTED,
    }

    # -------------------------
    # Internal helpers
    # -------------------------
    @staticmethod
    def _record(
        *,
        referral_id: int,
        actor_staff_id: Optional[int],
        tracking_status: str,
        notes: str,
        action: str,
        metadata: dict,
    ) -> None:
        ReferralTrackingEntry.objects.create(
            referral_id=referral_id,
            staff_id=actor_staff_id,
            status=tracking_status,
            notes=notes or "",
        )
        AuditService.referral_event(
            referral_id=referral_id,
            action=action,
            actor_staff_id=actor_staff_id,
            **metadata,
        )

    @staticmethod
    def _validate_notes(notes: Optional[str]) -> str:
        notes = (notes or "").strip()
        if len(notes) > MAX_NOTES_LENGTH:
            raise ValidationError({"notes": f"Notes must be at most {MAX_NOTES_LENGTH} characters."})
        return notes

    @staticmethod
    def _require_doctor(staff_id: Optional[int], field: str, errors: dict) -> None:
        if staff_id is None:
            return
        role = Staff.objects.filter(id=staff_id).values_list("role", flat=True).first()
        if role is None:
            errors[field] = "Staff member not found."
        elif role != Role.DOCTOR:
            errors[field] = "Staff member is not a doctor."

    @staticmethod
    def _transition(
        *,
        referral_id: int,
        to_status: str,
        actor_staff_id: Optional[int],
        notes: str = "",
        extra_updates: Optional[dict] = None,
    ) -> Referral:
        from_status = ReferralService.TRANSITIONS[to_status]
        ts = now()

        updates = {"status": to_status, "updated_at": ts}
        if extra_updates:
            updates.update(extra_updates)

        affected = Referral.objects.filter(id=referral_id, status=from_status).update(**updates)
        if affected == 0:
            current = Referral.objects.filter(id=referral_id).values_list("status", flat=True).first()
            if current is None:
                raise NotFound("Referral not found.")
            logger.info(
                "Rejected transition referral_id=%s %s -> %s",
                referral_id,
                current,
                to_status,
            )
            raise InvalidTransition(f"Cannot change referral status from {current} to {to_status}.")

        metadata = {"from_status": from_status, "to_status": to_status}
        if extra_updates and extra_updates.get("receiving_doctor_id") is not None:
            metadata["receiving_doctor_id"] = extra_updates["receiving_doctor_id"]

        ReferralService._record(
            referral_id=referral_id,
            actor_staff_id=actor_staff_id,
            tracking_status=to_status,
            notes=notes,
            action=to_status.lower(),
            metadata=metadata,
        )
        logger.info("Referral %s moved %s -> %s", referral_id, from_status, to_status)
        return get_referral(referral_id=referral_id)

    # -------------------------
    # Create
    # -------------------------
    @staticmethod
    @transaction.atomic
    def create_referral(
        *,
        actor_staff_id: Optional[int],
        patient_id: int,
        from_clinic_id: int,
        to_clinic_id: int,
        reason: str,
        referring_doctor_id: int,
        receiving_doctor_id: Optional[int] = None,
        urgency: str = ReferralUrgency.NORMAL,
    ) -> Referral:
        """
        Create a Pending referral.

        If the referral leaves a secondary campus for another campus, the
        destination is replaced by the hub campus receiving clinic. When the
        hub has no such clinic, NoReceivingClinic is raised and nothing is
        written.
        """
        errors: dict[str, str] = {}

        from_campus_id = campus_id_for_clinic(clinic_id=from_clinic_id)
        if from_campus_id is None:
            errors["from_clinic_id"] = "Clinic not found."

        to_campus_id = campus_id_for_clinic(clinic_id=to_clinic_id)
        if to_campus_id is None:
            errors["to_clinic_id"] = "Clinic not found."

        if not Patient.objects.filter(id=patient_id).exists():
            errors["patient_id"] = "Patient not found."

        ReferralService._require_doctor(referring_doctor_id, "referring_doctor_id", errors)
        ReferralService._require_doctor(receiving_doctor_id, "receiving_doctor_id", errors)

        reason = (reason or "").strip()
        if not reason:
            errors["reason"] = "This field is required."

        if urgency not in ReferralUrgency.values:
            errors["urgency"] = "Invalid urgency."

        if errors:
            raise ValidationError(errors)

        decision = route_referral(
            policy=ReferralRoutingPolicy.from_settings(),
            from_campus_id=from_campus_id,
            to_campus_id=to_campus_id,
            to_clinic_id=to_clinic_id,
            find_hub_clinic=hub_general_clinic,
        )
        if decision is None:
            raise NoReceivingClinic()

        referral = Referral.objects.create(
            patient_id=patient_id,
            from_clinic_id=from_clinic_id,
            to_clinic_id=decision.to_clinic_id,
            requested_to_clinic_id=to_clinic_id,
            reason=reason,
            urgency=urgency,
            referring_doctor_id=referring_doctor_id,
            receiving_doctor_id=receiving_doctor_id,
            status=ReferralStatus.PENDING,
        )

        note = ""
        if decision.redirected:
            note = f"Routed to hub clinic {decision.to_clinic_id} (requested clinic {to_clinic_id})."

        ReferralService._record(
            referral_id=referral.id,
            actor_staff_id=actor_staff_id,
            tracking_status=ReferralStatus.PENDING,
            notes=note,
            action="created",
            metadata={
                "from_clinic_id": from_clinic_id,
                "to_clinic_id": decision.to_clinic_id,
                "requested_to_clinic_id": to_clinic_id,
                "redirected": decision.redirected,
                "urgency": urgency,
            },
        )
        logger.info(
            "Referral %s created from clinic %s to clinic %s",
            referral.id,
            from_clinic_id,
            decision.to_clinic_id,
        )
        return get_referral(referral_id=referral.id)

    # -------------------------
    # Transitions
    # -------------------------
    @staticmethod
    @transaction.atomic
    def accept(
        *,
        referral_id: int,
        actor_staff_id: Optional[int],
        actor_role: Optional[str] = None,
        receiving_doctor_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> Referral:
        """
        Pending -> Accepted. Stamps accepted_at.
        Without an explicit receiving doctor, an accepting Doctor becomes it.
        """
        if not Referral.objects.filter(id=referral_id).exists():
            raise NotFound("Referral not found.")

        notes = ReferralService._validate_notes(notes)

        if receiving_doctor_id is None and actor_role == Role.DOCTOR:
            receiving_doctor_id = actor_staff_id

        errors: dict[str, str] = {}
        ReferralService._require_doctor(receiving_doctor_id, "receiving_doctor_id", errors)
        if errors:
            raise ValidationError(errors)

        extra = {"accepted_at": now()}
        if receiving_doctor_id is not None:
            extra["receiving_doctor_id"] = receiving_doctor_id

        return ReferralService._transition(
            referral_id=referral_id,
            to_status=ReferralStatus.ACCEPTED,
            actor_staff_id=actor_staff_id,
            notes=notes,
            extra_updates=extra,
        )

    @staticmethod
    @transaction.atomic
    def reject(*, referral_id: int, actor_staff_id: Optional[int], notes: Optional[str] = None) -> Referral:
        return ReferralService._transition(
            referral_id=referral_id,
            to_status=ReferralStatus.REJECTED,
            actor_staff_id=actor_staff_id,
            notes=ReferralService._validate_notes(notes),
        )

    @staticmethod
    @transaction.atomic
    def complete(*, referral_id: int, actor_staff_id: Optional[int], notes: Optional[str] = None) -> Referral:
        return ReferralService._transition(
            referral_id=referral_id,
            to_status=ReferralStatus.COMPLETED,
            actor_staff_id=actor_staff_id,
            notes=ReferralService._validate_notes(notes),
        )

    # -------------------------
    # Tracking history
    # -------------------------
    @staticmethod
    @transaction.atomic
    def add_tracking_entry(
        *,
        referral_id: int,
        actor_staff_id: Optional[int],
        status: str,
        notes: Optional[str] = None,
    ) -> ReferralTrackingEntry:
        if status not in TrackingStatus.values:
            raise ValidationError({"status": "Invalid tracking status."})
        notes = ReferralService._validate_notes(notes)

        if not Referral.objects.filter(id=referral_id).exists():
            raise NotFound("Referral not found.")

        entry = ReferralTrackingEntry.objects.create(
            referral_id=referral_id,
            staff_id=actor_staff_id,
            status=status,
            notes=notes,
        )
        AuditService.referral_event(
            referral_id=referral_id,
            action="tracking_added",
            actor_staff_id=actor_staff_id,
            tracking_status=status,
        )
        return entry
