# uicms/iam/policies.py
"""
Authorization policies.

A policy describes who may call an endpoint:

  - a single role ("Doctor" or Role.DOCTOR)       -> exact match
  - a collection of roles                         -> any-of
  - MinLevel(n) / {"min_level": n} / {"minLevel": n} -> permission_level >= n
  - None                                          -> any authenticated principal

Anything else is a configuration error, raised before the principal is
looked at so a misconfigured route fails the same way for every caller.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from rest_framework import status
from rest_framework.exceptions import APIException, NotAuthenticated, PermissionDenied

from uicms.iam.roles import is_role

logger = logging.getLogger(__name__)

MIN_LEVEL_KEYS = ("min_level", "minLevel")


class ConfigurationError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "RBAC configuration invalid."
    default_code = "rbac_configuration_invalid"


@dataclass(frozen=True)
class MinLevel:
    level: int


@dataclass(frozen=True)
class _Compiled:
    kind: str  # "any" | "roles" | "min_level"
    roles: frozenset = frozenset()
    level: int = 0


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def compile_policy(policy: Any) -> _Compiled:
    """Validate a policy's shape. Raises ConfigurationError for unknown shapes."""
    if policy is None:
        return _Compiled(kind="any")

    if isinstance(policy, str):
        if not is_role(policy):
            raise ConfigurationError(f"Unknown role in policy: {policy!r}.")
        return _Compiled(kind="roles", roles=frozenset({str(policy)}))

    if isinstance(policy, MinLevel):
        if not _is_int(policy.level):
            raise ConfigurationError("MinLevel requires an integer level.")
        return _Compiled(kind="min_level", level=policy.level)

    if isinstance(policy, Mapping):
        keys = [k for k in MIN_LEVEL_KEYS if k in policy]
        if len(policy) != 1 or len(keys) != 1 or not _is_int(policy[keys[0]]):
            raise ConfigurationError("Level policy must be {'min_level': <int>}.")
        return _Compiled(kind="min_level", level=policy[keys[0]])

    if isinstance(policy, (list, tuple, set, frozenset)):
        if not policy or not all(is_role(r) for r in policy):
            raise ConfigurationError("Role set policy must be a non-empty collection of known roles.")
        return _Compiled(kind="roles", roles=frozenset(str(r) for r in policy))

    raise ConfigurationError(f"Unsupported policy type: {type(policy).__name__}.")


def authorize(principal: Optional[Any], policy: Any) -> None:
    """
    Allow (return None) or raise:
      ConfigurationError -> policy shape is not recognised
      NotAuthenticated   -> no authenticated principal
      PermissionDenied   -> principal does not satisfy the policy
    """
    try:
        compiled = compile_policy(policy)
    except ConfigurationError:
        logger.error("Invalid authorization policy: %r", policy)
        raise

    if principal is None or not getattr(principal, "is_authenticated", False):
        raise NotAuthenticated()

    if compiled.kind == "any":
        return

    if compiled.kind == "roles":
        allowed = getattr(principal, "role", None) in compiled.roles
    else:
        allowed = (getattr(principal, "permission_level", None) or 0) >= compiled.level

    if not allowed:
        logger.info(
            "Authorization denied for staff_id=%s role=%s",
            getattr(principal, "id", None),
            getattr(principal, "role", None),
        )
        raise PermissionDenied("Access denied: insufficient permissions.")
