# uicms/patients/models.py
from django.db import models

from uicms.common.models import TimeStampedModel


class Gender(models.TextChoices):
    MALE = "Male", "Male"
    FEMALE = "Female", "Female"


class Patient(TimeStampedModel):
    """
    A patient registered at one of the campus clinics.
    Students and staff carry a university id; external patients may not.
    """
    first_name = models.CharField(max_length=100)
    middle_name = models.CharField(max_length=100, blank=True, default="")
    last_name = models.CharField(max_length=100)

    university_id = models.CharField(max_length=50, unique=True, null=True, blank=True)
    external_id = models.CharField(max_length=50, blank=True, default="")

    gender = models.CharField(max_length=16, choices=Gender.choices, blank=True, default="")
    date_of_birth = models.DateField(null=True, blank=True)
    contact = models.CharField(max_length=32, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    address = models.TextField(blank=True, default="")

    campus = models.ForeignKey(
        "campuses.Campus",
        on_delete=models.PROTECT,
        related_name="patients",
        null=True,
        blank=True,
    )
    registered_clinic = models.ForeignKey(
        "campuses.Clinic",
        on_delete=models.PROTECT,
        related_name="registered_patients",
        null=True,
        blank=True,
    )

    class Meta:
        db_table = "patients_patient"
        indexes = [
            models.Index(fields=["last_name", "first_name"], name="patient_name_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.full_name} ({self.university_id or self.id})"

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.middle_name, self.last_name) if p)
