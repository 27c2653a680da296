# uicms/referrals/selectors.py
from __future__ import annotations

from django.db.models import QuerySet

from uicms.referrals.models import Referral, ReferralTrackingEntry


def _base_qs() -> QuerySet[Referral]:
    return Referral.objects.select_related(
        "patient",
        "from_clinic",
        "to_clinic",
        "requested_to_clinic",
        "referring_doctor",
        "receiving_doctor",
    )


def get_referral(*, referral_id: int) -> Referral:
    return _base_qs().get(id=referral_id)


def list_referrals() -> QuerySet[Referral]:
    """Newest first. Filtering is applied by ReferralFilter on top of this."""
    return _base_qs().order_by("-created_at", "-id")


def tracking_history(*, referral_id: int) -> QuerySet[ReferralTrackingEntry]:
    return (
        ReferralTrackingEntry.objects.filter(referral_id=referral_id)
        .select_related("staff")
        .order_by("created_at", "id")
    )
