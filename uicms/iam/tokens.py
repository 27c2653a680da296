# uicms/iam/tokens.py
from __future__ import annotations

from rest_framework_simplejwt.serializers import TokenObtainPairSerializer
from rest_framework_simplejwt.tokens import RefreshToken


class StaffTokenObtainPairSerializer(TokenObtainPairSerializer):
    """Email + password login. Tokens carry ``staff_id`` and ``role``."""

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token["role"] = user.role
        return token


def issue_token_pair(staff) -> dict[str, str]:
    refresh: RefreshToken = StaffTokenObtainPairSerializer.get_token(staff)
    return {
        "access": str(refresh.access_token),
        "refresh": str(refresh),
    }
