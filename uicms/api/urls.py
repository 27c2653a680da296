# uicms/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from uicms.audit.api.views import AuditEventViewSet
from uicms.campuses.api.views import CampusViewSet, ClinicViewSet
from uicms.iam.api.auth import LoginView, RefreshView
from uicms.iam.api.me import MeView
from uicms.iam.api.staff import StaffViewSet
from uicms.patients.api.views import PatientViewSet
from uicms.referrals.api.views import ReferralViewSet

router = DefaultRouter()

router.register(r"referrals", ReferralViewSet, basename="referrals")
router.register(r"patients", PatientViewSet, basename="patients")
router.register(r"staff", StaffViewSet, basename="staff")
router.register(r"campuses", CampusViewSet, basename="campuses")
router.register(r"clinics", ClinicViewSet, basename="clinics")
router.register(r"audit/events", AuditEventViewSet, basename="audit-events")

urlpatterns = [
    # Auth + /me
    path("auth/login/", LoginView.as_view(), name="login"),
    path("auth/refresh/", RefreshView.as_view(), name="refresh"),
    path("me/", MeView.as_view(), name="me"),

    # Router URLs last (so explicit paths win if ever overlapping)
    *router.urls,
]
