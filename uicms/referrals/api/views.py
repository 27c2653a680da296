# uicms/referrals/api/views.py

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.response import Response

from uicms.common.api.pagination import paginate
from uicms.iam.permissions import PolicyPermission
from uicms.iam.roles import Role
from uicms.referrals.api.serializers import (
    ReferralAcceptSerializer,
    ReferralCreateSerializer,
    ReferralNotesSerializer,
    ReferralSerializer,
    TrackingEntryCreateSerializer,
    TrackingEntrySerializer,
)
from uicms.referrals.filters import ReferralFilter
from uicms.referrals.models import Referral
from uicms.referrals.selectors import get_referral, list_referrals
from uicms.referrals.selectors import tracking_history as tracking_entries_for
from uicms.referrals.services import ReferralService

REFERRAL_READERS = (Role.ADMIN, Role.HEALTH_ADMIN, Role.DOCTOR, Role.NURSE)
REFERRAL_DECIDERS = (Role.DOCTOR, Role.CLINIC_MANAGER)


def _referral_id(pk) -> int:
    try:
        return int(pk)
    except (TypeError, ValueError):
        raise NotFound("Referral not found.")


class ReferralViewSet(viewsets.ViewSet):
    """
    Referral endpoints.

    Thin HTTP layer: validation of the request shape happens in serializers,
    routing and the status machine live in ReferralService.
    """
    permission_classes = [PolicyPermission]
    policy_per_action = {
        "create": Role.DOCTOR,
        "list": REFERRAL_READERS,
        "retrieve": REFERRAL_READERS,
        "accept": REFERRAL_DECIDERS,
        "reject": REFERRAL_DECIDERS,
        "complete": Role.DOCTOR,
        "tracking_history": REFERRAL_READERS,
        "add_tracking_entry": (Role.DOCTOR, Role.NURSE),
    }

    serializer_class = ReferralSerializer
    queryset = Referral.objects.none()

    @extend_schema(tags=["Referrals"], responses={200: ReferralSerializer(many=True)})
    def list(self, request):
        f = ReferralFilter(request.query_params, queryset=list_referrals())
        if not f.is_valid():
            raise ValidationError(f.errors)
        return paginate(request, f.qs, ReferralSerializer)

    @extend_schema(tags=["Referrals"], responses={200: ReferralSerializer})
    def retrieve(self, request, pk=None):
        try:
            referral = get_referral(referral_id=_referral_id(pk))
        except Referral.DoesNotExist:
            raise NotFound("Referral not found.")
        return Response(ReferralSerializer(referral).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Referrals"], request=ReferralCreateSerializer, responses={201: ReferralSerializer})
    def create(self, request):
        s = ReferralCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = s.validated_data

        referral = ReferralService.create_referral(
            actor_staff_id=request.user.id,
            patient_id=d["patient_id"],
            from_clinic_id=d["from_clinic_id"],
            to_clinic_id=d["to_clinic_id"],
            reason=d["reason"],
            urgency=d["urgency"],
            referring_doctor_id=request.user.id,
            receiving_doctor_id=d.get("receiving_doctor_id"),
        )
        return Response(ReferralSerializer(referral).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Referrals"], request=ReferralAcceptSerializer, responses={200: ReferralSerializer})
    @action(detail=True, methods=["put"], url_path="accept")
    def accept(self, request, pk=None):
        s = ReferralAcceptSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        referral = ReferralService.accept(
            referral_id=_referral_id(pk),
            actor_staff_id=request.user.id,
            actor_role=request.user.role,
            receiving_doctor_id=s.validated_data.get("receiving_doctor_id"),
            notes=s.validated_data.get("notes"),
        )
        return Response(ReferralSerializer(referral).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Referrals"], request=ReferralNotesSerializer, responses={200: ReferralSerializer})
    @action(detail=True, methods=["put"], url_path="reject")
    def reject(self, request, pk=None):
        s = ReferralNotesSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        referral = ReferralService.reject(
            referral_id=_referral_id(pk),
            actor_staff_id=request.user.id,
            notes=s.validated_data.get("notes"),
        )
        return Response(ReferralSerializer(referral).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Referrals"], request=ReferralNotesSerializer, responses={200: ReferralSerializer})
    @action(detail=True, methods=["put"], url_path="complete")
    def complete(self, request, pk=None):
        s = ReferralNotesSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        referral = ReferralService.complete(
            referral_id=_referral_id(pk),
            actor_staff_id=request.user.id,
            notes=s.validated_data.get("notes"),
        )
        return Response(ReferralSerializer(referral).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Referrals"], responses={200: TrackingEntrySerializer(many=True)})
    @action(detail=True, methods=["get"], url_path="tracking-history")
    def tracking_history(self, request, pk=None):
        referral_id = _referral_id(pk)
        if not Referral.objects.filter(id=referral_id).exists():
            raise NotFound("Referral not found.")
        entries = tracking_entries_for(referral_id=referral_id)
        return Response(TrackingEntrySerializer(entries, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Referrals"], request=TrackingEntryCreateSerializer, responses={201: TrackingEntrySerializer})
    @tracking_history.mapping.post
    def add_tracking_entry(self, request, pk=None):
        s = TrackingEntryCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        entry = ReferralService.add_tracking_entry(
            referral_id=_referral_id(pk),
            actor_staff_id=request.user.id,
            status=s.validated_data["status"],
            notes=s.validated_data.get("notes"),
        )
        return Response(TrackingEntrySerializer(entry).data, status=status.HTTP_201_CREATED)
