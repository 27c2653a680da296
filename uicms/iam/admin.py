from django.contrib import admin

from uicms.iam.models import Staff


@admin.register(Staff)
class StaffAdmin(admin.ModelAdmin):
    list_display = ("id", "email", "first_name", "last_name", "role", "campus", "clinic", "employment_status")
    list_filter = ("role", "employment_status", "campus")
    search_fields = ("email", "first_name", "last_name", "license_no")
    readonly_fields = ("password", "last_login", "created_at", "updated_at")
    ordering = ("last_name", "first_name")
