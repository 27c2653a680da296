# uicms/iam/auth.py

from __future__ import annotations

import logging

from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed, InvalidToken
from rest_framework_simplejwt.settings import api_settings

from uicms.iam.principal import Principal
from uicms.iam.selectors import staff_by_id

logger = logging.getLogger(__name__)


class StaffJWTAuthentication(JWTAuthentication):
    """
    Authenticate ``Authorization: Bearer <access>`` and attach a Principal.

    - Bad signature / expired / wrong token type -> 401 "Invalid or expired token"
    - Valid token whose staff row no longer exists -> 401 "Invalid token user"
    - Valid token for staff who are no longer active -> 401 "User is inactive"
    - No Authorization header (or another scheme) -> anonymous; the
      permission layer then answers 401
    """

    def get_validated_token(self, raw_token):
        try:
            return super().get_validated_token(raw_token)
        except InvalidToken:
            raise AuthenticationFailed("Invalid or expired token", code="token_not_valid") from None

    def get_user(self, validated_token):
        try:
            staff_id = validated_token[api_settings.USER_ID_CLAIM]
        except KeyError:
            raise AuthenticationFailed("Invalid or expired token", code="token_not_valid") from None

        staff = staff_by_id(staff_id=staff_id)
        if staff is None:
            logger.warning("Token refers to unknown staff_id=%s", staff_id)
            raise AuthenticationFailed("Invalid token user", code="user_not_found")

        if not staff.is_active:
            logger.info("Token presented by inactive staff_id=%s", staff_id)
            raise AuthenticationFailed("User is inactive", code="user_inactive")

        return Principal.from_staff(staff)
