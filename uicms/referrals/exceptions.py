# uicms/referrals/exceptions.py
from __future__ import annotations

from rest_framework import status
from rest_framework.exceptions import APIException

from uicms.common.api.exceptions import ConflictError


class NoReceivingClinic(APIException):
    """Hub routing applies but the hub campus has no clinic to receive the referral."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Main Campus does not have a receiving clinic."
    default_code = "no_receiving_clinic"


class InvalidTransition(ConflictError):
    default_detail = "Referral status does not allow this transition."
    default_code = "invalid_transition"
