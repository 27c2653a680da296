# uicms/iam/models.py
from __future__ import annotations

from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.db import models

from uicms.common.models import RecordStatus
from uicms.iam.roles import Role


class StaffManager(BaseUserManager):
    use_in_migrations = True

    def create_user(self, email: str, password: str | None = None, **extra_fields):
        if not email:
            raise ValueError("Staff members must have an email address.")
        staff = self.model(email=self.normalize_email(email).lower(), **extra_fields)
        staff.set_password(password)
        staff.save(using=self._db)
        return staff

    def create_superuser(self, email: str, password: str | None = None, **extra_fields):
        extra_fields["role"] = Role.ADMIN
        extra_fields.setdefault("employment_status", RecordStatus.ACTIVE)
        return self.create_user(email, password, **extra_fields)


class Staff(AbstractBaseUser):
    """
    A clinic staff member. This is the persistent record behind a request
    Principal; the password hash lives here and never leaves this model.
    """

    first_name = models.CharField(max_length=100)
    middle_name = models.CharField(max_length=100, blank=True, default="")
    last_name = models.CharField(max_length=100)

    email = models.EmailField(max_length=255, unique=True)

    role = models.CharField(max_length=32, choices=Role.choices, db_index=True)
    qualification = models.CharField(max_length=255, blank=True, default="")
    license_no = models.CharField(max_length=100, blank=True, default="")
    contact = models.CharField(max_length=32, blank=True, default="")

    campus = models.ForeignKey(
        "campuses.Campus",
        on_delete=models.PROTECT,
        related_name="staff",
        null=True,
        blank=True,
    )
    clinic = models.ForeignKey(
        "campuses.Clinic",
        on_delete=models.PROTECT,
        related_name="staff",
        null=True,
        blank=True,
    )

    employment_status = models.CharField(
        max_length=16,
        choices=RecordStatus.choices,
        default=RecordStatus.ACTIVE,
        db_index=True,
    )

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = StaffManager()

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["first_name", "last_name"]

    class Meta:
        db_table = "iam_staff"
        ordering = ["last_name", "first_name", "id"]

    def __str__(self) -> str:
        return f"{self.full_name} <{self.email}>"

    @property
    def full_name(self) -> str:
        parts = [self.first_name, self.middle_name, self.last_name]
        return " ".join(p for p in parts if p)

    @property
    def is_active(self) -> bool:
        return self.employment_status == RecordStatus.ACTIVE

    # Django admin access
    @property
    def is_staff(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_superuser(self) -> bool:
        return self.role == Role.ADMIN

    def has_perm(self, perm, obj=None) -> bool:
        return self.is_active and self.role == Role.ADMIN

    def has_module_perms(self, app_label) -> bool:
        return self.is_active and self.role == Role.ADMIN
