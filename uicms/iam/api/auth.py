# uicms/iam/api/auth.py

from __future__ import annotations

import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import AuthenticationFailed, InvalidToken, TokenError
from rest_framework_simplejwt.serializers import TokenRefreshSerializer

from uicms.iam.api.serializers import (
    LoginRequestSerializer,
    LoginResponseSerializer,
    RefreshRequestSerializer,
    RefreshResponseSerializer,
    StaffSerializer,
)
from uicms.iam.models import Staff
from uicms.iam.tokens import StaffTokenObtainPairSerializer

logger = logging.getLogger(__name__)


class LoginView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(
        request=LoginRequestSerializer,
        responses={200: LoginResponseSerializer},
        tags=["IAM"],
    )
    def post(self, request):
        serializer = StaffTokenObtainPairSerializer(data=request.data)
        try:
            serializer.is_valid(raise_exception=True)
        except AuthenticationFailed:
            logger.info("Failed login attempt")
            raise

        staff = serializer.user
        logger.info("Login ok for staff_id=%s", staff.id)
        return Response(
            {
                "access": serializer.validated_data["access"],
                "refresh": serializer.validated_data["refresh"],
                "staff": StaffSerializer(staff).data,
            },
            status=status.HTTP_200_OK,
        )


class RefreshView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(
        request=RefreshRequestSerializer,
        responses={200: RefreshResponseSerializer},
        tags=["IAM"],
    )
    def post(self, request):
        serializer = TokenRefreshSerializer(data=request.data)
        try:
            serializer.is_valid(raise_exception=True)
        except TokenError as e:
            raise InvalidToken(e.args[0]) from None
        except Staff.DoesNotExist:
            raise AuthenticationFailed("Invalid token user", code="user_not_found") from None

        data = {"access": serializer.validated_data["access"]}
        if "refresh" in serializer.validated_data:
            data["refresh"] = serializer.validated_data["refresh"]
        return Response(data, status=status.HTTP_200_OK)
