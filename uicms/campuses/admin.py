from django.contrib import admin

from uicms.campuses.models import Campus, Clinic


@admin.register(Campus)
class CampusAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "status", "contact", "updated_at")
    list_filter = ("status",)
    search_fields = ("name", "address")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("name",)


@admin.register(Clinic)
class ClinicAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "campus", "clinic_type", "status", "updated_at")
    list_filter = ("clinic_type", "status", "campus")
    search_fields = ("name", "campus__name")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("campus", "name")
