# uicms/campuses/models.py
from __future__ import annotations

from django.db import models

from uicms.common.models import RecordStatus, TimeStampedModel


class ClinicType(models.TextChoices):
    GENERAL = "General", "General"
    DENTAL = "Dental", "Dental"
    LAB = "Lab", "Lab"
    PHARMACY = "Pharmacy", "Pharmacy"
    OTHER = "Other", "Other"


class Campus(TimeStampedModel):
    """
    A university campus. Campus ids are referenced by the referral routing
    table (REFERRAL_ROUTING), so they are stable integers.
    """

    name = models.CharField(max_length=100, unique=True)
    address = models.TextField(blank=True, default="")
    contact = models.CharField(max_length=32, blank=True, default="")
    status = models.CharField(
        max_length=16,
        choices=RecordStatus.choices,
        default=RecordStatus.ACTIVE,
        db_index=True,
    )

    class Meta:
        db_table = "campuses_campus"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Clinic(TimeStampedModel):
    campus = models.ForeignKey(Campus, on_delete=models.PROTECT, related_name="clinics")
    name = models.CharField(max_length=100)
    clinic_type = models.CharField(
        max_length=16,
        choices=ClinicType.choices,
        default=ClinicType.GENERAL,
        db_index=True,
    )
    status = models.CharField(
        max_length=16,
        choices=RecordStatus.choices,
        default=RecordStatus.ACTIVE,
        db_index=True,
    )

    class Meta:
        db_table = "campuses_clinic"
        constraints = [
            models.UniqueConstraint(fields=["campus", "name"], name="uq_clinic_campus_name"),
        ]
        indexes = [
            models.Index(fields=["campus", "clinic_type"], name="clinic_campus_type_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.campus_id})"
