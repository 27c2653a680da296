from django.contrib import admin

from uicms.patients.models import Patient


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "first_name",
        "last_name",
        "university_id",
        "gender",
        "campus",
        "created_at",
    )
    list_filter = ("gender", "campus")
    search_fields = ("first_name", "middle_name", "last_name", "university_id", "contact", "email")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("-created_at",)
