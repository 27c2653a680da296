# uicms/iam/management/commands/create_admin.py

import os

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from rest_framework.exceptions import ValidationError

from uicms.common.models import RecordStatus
from uicms.iam.models import Staff
from uicms.iam.roles import Role
from uicms.iam.services import StaffService


class Command(BaseCommand):
    help = "Create the initial Admin account, or reset its password if it already exists (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--email", required=True)
        parser.add_argument("--first-name", default="System")
        parser.add_argument("--last-name", default="Administrator")
        parser.add_argument(
            "--password",
            default=None,
            help="Defaults to the UICMS_ADMIN_PASSWORD environment variable.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        email = options["email"].strip().lower()
        password = options["password"] or os.getenv("UICMS_ADMIN_PASSWORD")
        if not password:
            raise CommandError("Provide --password or set UICMS_ADMIN_PASSWORD.")

        existing = Staff.objects.filter(email__iexact=email).first()
        if existing is not None:
            existing.first_name = options["first_name"]
            existing.last_name = options["last_name"]
            existing.role = Role.ADMIN
            existing.employment_status = RecordStatus.ACTIVE
            existing.set_password(password)
            existing.save()
            self.stdout.write(self.style.WARNING(f"Admin {email} already existed; details and password updated."))
            return

        try:
            staff = StaffService.register(
                actor_staff_id=None,
                first_name=options["first_name"],
                last_name=options["last_name"],
                email=email,
                password=password,
                role=Role.ADMIN,
            )
        except ValidationError as e:
            raise CommandError(f"Invalid admin details: {e.detail}")

        self.stdout.write(self.style.SUCCESS(f"Admin created: staff_id={staff.id} email={staff.email}"))
