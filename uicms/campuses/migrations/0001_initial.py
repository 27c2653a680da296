from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Campus",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=100, unique=True)),
                ("address", models.TextField(blank=True, default="")),
                ("contact", models.CharField(blank=True, default="", max_length=32)),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("inactive", "Inactive")],
                        db_index=True,
                        default="active",
                        max_length=16,
                    ),
                ),
            ],
            options={
                "db_table": "campuses_campus",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Clinic",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=100)),
                (
                    "clinic_type",
                    models.CharField(
                        choices=[
                            ("General", "General"),
                            ("Dental", "Dental"),
                            ("Lab", "Lab"),
                            ("Pharmacy", "Pharmacy"),
                            ("Other", "Other"),
                        ],
                        db_index=True,
                        default="General",
                        max_length=16,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("inactive", "Inactive")],
                        db_index=True,
                        default="active",
                        max_length=16,
                    ),
                ),
                (
                    "campus",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="clinics",
                        to="campuses.campus",
                    ),
                ),
            ],
            options={
                "db_table": "campuses_clinic",
                "indexes": [models.Index(fields=["campus", "clinic_type"], name="clinic_campus_type_idx")],
                "constraints": [models.UniqueConstraint(fields=("campus", "name"), name="uq_clinic_campus_name")],
            },
        ),
    ]
