# uicms/audit/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from uicms.audit.api.serializers import AuditEventSerializer
from uicms.audit.models import AuditEvent
from uicms.audit.selectors import list_audit_events
from uicms.iam.permissions import PolicyPermission
from uicms.iam.roles import Role


def _int_param(request, name: str) -> int | None:
    raw = request.query_params.get(name)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError({name: "Invalid integer."})


class AuditEventViewSet(viewsets.GenericViewSet):
    """
    List audit events. Admin only.
    """
    permission_classes = [PolicyPermission]
    policy_per_action = {"list": Role.ADMIN}

    serializer_class = AuditEventSerializer
    queryset = AuditEvent.objects.none()

    @extend_schema(
        tags=["Audit"],
        responses={200: AuditEventSerializer(many=True)},
        parameters=[
            OpenApiParameter(
                name="entity_type",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Filter by entity type (e.g. Referral, Patient, Staff).",
            ),
            OpenApiParameter(
                name="entity_id",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Filter by entity id.",
            ),
            OpenApiParameter(
                name="event_code",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Filter by event code (e.g. referral.created, referral.accepted).",
            ),
            OpenApiParameter(
                name="actor_staff_id",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Filter by acting staff id.",
            ),
            OpenApiParameter(
                name="limit",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Max records to return (default 200, max 500).",
            ),
        ],
    )
    def list(self, request):
        qs = list_audit_events(
            entity_type=request.query_params.get("entity_type") or None,
            entity_id=_int_param(request, "entity_id"),
            event_code=request.query_params.get("event_code") or None,
            actor_staff_id=_int_param(request, "actor_staff_id"),
        )

        limit = request.query_params.get("limit")
        try:
            limit_n = int(limit) if limit else 200
        except ValueError:
            limit_n = 200
        limit_n = max(1, min(limit_n, 500))

        return Response(AuditEventSerializer(qs[:limit_n], many=True).data, status=status.HTTP_200_OK)
