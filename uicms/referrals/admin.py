from django.contrib import admin

from uicms.referrals.models import Referral, ReferralTrackingEntry


class ReferralTrackingEntryInline(admin.TabularInline):
    model = ReferralTrackingEntry
    extra = 0
    readonly_fields = ("staff", "status", "notes", "created_at")
    can_delete = False


@admin.register(Referral)
class ReferralAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "patient",
        "from_clinic",
        "to_clinic",
        "urgency",
        "status",
        "referring_doctor",
        "receiving_doctor",
        "created_at",
    )
    list_filter = ("status", "urgency", "to_clinic__campus")
    search_fields = ("patient__first_name", "patient__last_name", "patient__university_id", "reason")
    readonly_fields = ("status", "accepted_at", "created_at", "updated_at", "requested_to_clinic")
    ordering = ("-created_at",)
    inlines = [ReferralTrackingEntryInline]
