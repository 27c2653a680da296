# uicms/iam/api/me.py

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from uicms.iam.api.serializers import PrincipalSerializer
from uicms.iam.permissions import PolicyPermission


class MeView(APIView):
    permission_classes = [PolicyPermission]
    policy_per_action = {"get": None}

    @extend_schema(responses={200: PrincipalSerializer}, tags=["IAM"])
    def get(self, request):
        """Current principal, as resolved from the bearer token."""
        return Response(PrincipalSerializer(request.user.as_dict()).data, status=status.HTTP_200_OK)
