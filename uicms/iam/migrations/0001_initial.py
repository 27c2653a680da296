from django.db import migrations, models
import django.db.models.deletion

import uicms.iam.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("campuses", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Staff",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                ("first_name", models.CharField(max_length=100)),
                ("middle_name", models.CharField(blank=True, default="", max_length=100)),
                ("last_name", models.CharField(max_length=100)),
                ("email", models.EmailField(max_length=255, unique=True)),
                (
                    "role",
                    models.CharField(
                        choices=[
                            ("Admin", "Admin"),
                            ("HealthAdmin", "Health Admin"),
                            ("ClinicManager", "Clinic Manager"),
                            ("Doctor", "Doctor"),
                            ("Nurse", "Nurse"),
                            ("Pharmacist", "Pharmacist"),
                            ("Receptionist", "Receptionist"),
                            ("LabStaff", "Lab Staff"),
                        ],
                        db_index=True,
                        max_length=32,
                    ),
                ),
                ("qualification", models.CharField(blank=True, default="", max_length=255)),
                ("license_no", models.CharField(blank=True, default="", max_length=100)),
                ("contact", models.CharField(blank=True, default="", max_length=32)),
                (
                    "employment_status",
                    models.CharField(
                        choices=[("active", "Active"), ("inactive", "Inactive")],
                        db_index=True,
                        default="active",
                        max_length=16,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "campus",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="staff",
                        to="campuses.campus",
                    ),
                ),
                (
                    "clinic",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="staff",
                        to="campuses.clinic",
                    ),
                ),
            ],
            options={
                "db_table": "iam_staff",
                "ordering": ["last_name", "first_name", "id"],
            },
            managers=[
                ("objects", uicms.iam.models.StaffManager()),
            ],
        ),
    ]
