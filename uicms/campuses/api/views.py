# uicms/campuses/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.response import Response

from uicms.campuses.api.serializers import (
    CampusCreateSerializer,
    CampusSerializer,
    CampusUpdateSerializer,
    ClinicCreateSerializer,
    ClinicSerializer,
    ClinicUpdateSerializer,
)
from uicms.campuses.models import Campus, Clinic
from uicms.campuses.selectors import campus_by_id, campuses_list, clinic_by_id, clinics_list
from uicms.campuses.services import CampusService, CampusUpdate, ClinicService, ClinicUpdate
from uicms.iam.permissions import PolicyPermission
from uicms.iam.roles import Role

DIRECTORY_WRITERS = (Role.ADMIN, Role.HEALTH_ADMIN)

DIRECTORY_POLICIES = {
    "list": None,
    "retrieve": None,
    "clinics": None,
    "create": DIRECTORY_WRITERS,
    "partial_update": DIRECTORY_WRITERS,
}


def _parse_pk(pk) -> int:
    try:
        return int(pk)
    except (TypeError, ValueError):
        raise NotFound("Not found.")


def _int_param(request, name: str) -> int | None:
    raw = request.query_params.get(name)
    if raw in (None, ""):
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError({name: "Invalid integer."})


class CampusViewSet(viewsets.ViewSet):
    permission_classes = [PolicyPermission]
    policy_per_action = DIRECTORY_POLICIES

    @extend_schema(tags=["Campuses"], responses={200: CampusSerializer(many=True)})
    def list(self, request):
        qs = campuses_list(status=request.query_params.get("status") or None)
        return Response(CampusSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Campuses"], responses={200: CampusSerializer})
    def retrieve(self, request, pk=None):
        try:
            obj = campus_by_id(campus_id=_parse_pk(pk))
        except Campus.DoesNotExist:
            raise NotFound("Campus not found.")
        return Response(CampusSerializer(obj).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Campuses"], request=CampusCreateSerializer, responses={201: CampusSerializer})
    def create(self, request):
        s = CampusCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = s.validated_data

        obj = CampusService.create(
            actor_staff_id=request.user.id,
            name=d["name"],
            address=d.get("address") or "",
            contact=d.get("contact") or "",
            status=d.get("status"),
        )
        return Response(CampusSerializer(obj).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Campuses"], request=CampusUpdateSerializer, responses={200: CampusSerializer})
    def partial_update(self, request, pk=None):
        s = CampusUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = s.validated_data

        try:
            obj = CampusService.update(
                actor_staff_id=request.user.id,
                campus_id=_parse_pk(pk),
                patch=CampusUpdate(
                    name=d.get("name"),
                    address=d.get("address"),
                    contact=d.get("contact"),
                    status=d.get("status"),
                ),
            )
        except Campus.DoesNotExist:
            raise NotFound("Campus not found.")
        return Response(CampusSerializer(obj).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Campuses"], responses={200: ClinicSerializer(many=True)})
    @action(detail=True, methods=["get"], url_path="clinics")
    def clinics(self, request, pk=None):
        campus_id = _parse_pk(pk)
        if not Campus.objects.filter(id=campus_id).exists():
            raise NotFound("Campus not found.")
        qs = clinics_list(
            campus_id=campus_id,
            clinic_type=request.query_params.get("type") or None,
            status=request.query_params.get("status") or None,
        )
        return Response(ClinicSerializer(qs, many=True).data, status=status.HTTP_200_OK)


class ClinicViewSet(viewsets.ViewSet):
    permission_classes = [PolicyPermission]
    policy_per_action = DIRECTORY_POLICIES

    @extend_schema(tags=["Clinics"], responses={200: ClinicSerializer(many=True)})
    def list(self, request):
        qs = clinics_list(
            campus_id=_int_param(request, "campus_id"),
            clinic_type=request.query_params.get("type") or None,
            status=request.query_params.get("status") or None,
        )
        return Response(ClinicSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Clinics"], responses={200: ClinicSerializer})
    def retrieve(self, request, pk=None):
        try:
            obj = clinic_by_id(clinic_id=_parse_pk(pk))
        except Clinic.DoesNotExist:
            raise NotFound("Clinic not found.")
        return Response(ClinicSerializer(obj).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Clinics"], request=ClinicCreateSerializer, responses={201: ClinicSerializer})
    def create(self, request):
        s = ClinicCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = s.validated_data

        obj = ClinicService.create(
            actor_staff_id=request.user.id,
            campus_id=d["campus_id"],
            name=d["name"],
            clinic_type=d["type"],
            status=d.get("status"),
        )
        return Response(ClinicSerializer(obj).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Clinics"], request=ClinicUpdateSerializer, responses={200: ClinicSerializer})
    def partial_update(self, request, pk=None):
        s = ClinicUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = s.validated_data

        try:
            obj = ClinicService.update(
                actor_staff_id=request.user.id,
                clinic_id=_parse_pk(pk),
                patch=ClinicUpdate(
                    name=d.get("name"),
                    clinic_type=d.get("type"),
                    status=d.get("status"),
                ),
            )
        except Clinic.DoesNotExist:
            raise NotFound("Clinic not found.")
        return Response(ClinicSerializer(obj).data, status=status.HTTP_200_OK)
