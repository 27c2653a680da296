# uicms/iam/api/staff.py

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from uicms.common.api.pagination import paginate
from uicms.iam.api.serializers import StaffRegisterSerializer, StaffSerializer
from uicms.iam.permissions import PolicyPermission
from uicms.iam.roles import Role
from uicms.iam.selectors import staff_by_id, staff_list
from uicms.iam.services import StaffService

STAFF_READERS = (Role.ADMIN, Role.HEALTH_ADMIN, Role.CLINIC_MANAGER)


class StaffViewSet(viewsets.ViewSet):
    permission_classes = [PolicyPermission]
    policy_per_action = {
        "list": STAFF_READERS,
        "retrieve": STAFF_READERS,
        "create": Role.ADMIN,
    }

    @extend_schema(tags=["Staff"], responses={200: StaffSerializer(many=True)})
    def list(self, request):
        qp = request.query_params
        qs = staff_list(
            role=qp.get("role") or None,
            campus_id=qp.get("campus_id") or None,
            clinic_id=qp.get("clinic_id") or None,
            employment_status=qp.get("employment_status") or None,
        )
        return paginate(request, qs, StaffSerializer)

    @extend_schema(tags=["Staff"], responses={200: StaffSerializer})
    def retrieve(self, request, pk=None):
        staff = staff_by_id(staff_id=pk)
        if staff is None:
            raise NotFound("Staff member not found.")
        return Response(StaffSerializer(staff).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Staff"], request=StaffRegisterSerializer, responses={201: StaffSerializer})
    def create(self, request):
        s = StaffRegisterSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = s.validated_data

        staff = StaffService.register(
            actor_staff_id=request.user.id,
            first_name=d["first_name"],
            middle_name=d.get("middle_name") or "",
            last_name=d["last_name"],
            email=d["email"],
            password=d["password"],
            role=d["role"],
            qualification=d.get("qualification") or "",
            license_no=d.get("license_no") or "",
            contact=d.get("contact") or "",
            campus_id=d.get("campus_id"),
            clinic_id=d.get("clinic_id"),
            employment_status=d["employment_status"],
        )
        return Response(StaffSerializer(staff).data, status=status.HTTP_201_CREATED)
