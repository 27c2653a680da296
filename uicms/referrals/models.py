# uicms/referrals/models.py
from __future__ import annotations

from django.conf import settings
from django.db import models

from uicms.common.models import TimeStampedModel


class ReferralStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    ACCEPTED = "Accepted", "Accepted"
    REJECTED = "Rejected", "Rejected"
    COMPLETED = "Completed", "Completed"


class ReferralUrgency(models.TextChoices):
    NORMAL = "Normal", "Normal"
    URGENT = "Urgent", "Urgent"
    EMERGENCY = "Emergency", "Emergency"


class TrackingStatus(models.TextChoices):
    """Labels staff may use when appending a manual tracking entry."""
    INITIATED = "Initiated", "Initiated"
    REVIEWED = "Reviewed", "Reviewed"
    IN_PROGRESS = "In Progress", "In Progress"
    COMPLETED = "Completed", "Completed"
    CLOSED = "Closed", "Closed"


class Referral(TimeStampedModel):
    """
    Patient referral from one clinic to another.

    Lifecycle:
      Pending -> Accepted -> Completed
      Pending -> Rejected
    Rejected and Completed are terminal.

    ``to_clinic`` is the destination after hub routing; ``requested_to_clinic``
    keeps what the referring doctor asked for.
    """

    patient = models.ForeignKey("patients.Patient", on_delete=models.PROTECT, related_name="referrals")

    from_clinic = models.ForeignKey(
        "campuses.Clinic",
        on_delete=models.PROTECT,
        related_name="outgoing_referrals",
    )
    to_clinic = models.ForeignKey(
        "campuses.Clinic",
        on_delete=models.PROTECT,
        related_name="incoming_referrals",
    )
    requested_to_clinic = models.ForeignKey(
        "campuses.Clinic",
        on_delete=models.PROTECT,
        related_name="requested_referrals",
        null=True,
        blank=True,
    )

    reason = models.TextField()
    urgency = models.CharField(
        max_length=16,
        choices=ReferralUrgency.choices,
        default=ReferralUrgency.NORMAL,
        db_index=True,
    )

    referring_doctor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="referrals_made",
    )
    receiving_doctor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="referrals_received",
        null=True,
        blank=True,
    )

    status = models.CharField(
        max_length=16,
        choices=ReferralStatus.choices,
        default=ReferralStatus.PENDING,
        db_index=True,
    )
    accepted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "referrals_referral"
        indexes = [
            models.Index(fields=["status", "created_at"], name="referral_status_created_idx"),
            models.Index(fields=["to_clinic", "status"], name="referral_to_status_idx"),
            models.Index(fields=["patient", "created_at"], name="referral_patient_idx"),
        ]

    def __str__(self) -> str:
        return f"Referral #{self.id} ({self.status})"


class ReferralTrackingEntry(models.Model):
    """
    Append-only history of a referral: one row per status change plus any
    manual notes added by clinical staff.
    """

    referral = models.ForeignKey(Referral, on_delete=models.CASCADE, related_name="tracking_entries")
    staff = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="referral_tracking_entries",
        null=True,
        blank=True,
    )
    status = models.CharField(max_length=32)
    notes = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = "referrals_tracking_entry"
        ordering = ["created_at", "id"]

    def __str__(self) -> str:
        return f"{self.referral_id}: {self.status}"
