# uicms/iam/permissions.py
from __future__ import annotations

from typing import Any

from rest_framework.permissions import BasePermission

from uicms.iam.policies import authorize

_UNSET = object()


class PolicyPermission(BasePermission):
    """
    DRF permission that evaluates one policy per view action.

    Views declare ``policy_per_action = {"list": ..., "create": [...], ...}``.
    Actions missing from the map are denied unless ``default_policy`` is set
    on the view.
    """

    message = "Access denied: insufficient permissions."

    def _infer_action(self, request, view) -> str | None:
        action = getattr(view, "action", None)
        if action:
            return action

        # Plain APIViews have no action; fall back to the HTTP verb.
        return request.method.lower()

    def _policy_for(self, request, view) -> Any:
        action = self._infer_action(request, view)
        policies = getattr(view, "policy_per_action", {}) or {}
        if action in policies:
            return policies[action]
        return getattr(view, "default_policy", _UNSET)

    def has_permission(self, request, view) -> bool:
        policy = self._policy_for(request, view)
        if policy is _UNSET:
            # Unknown action => deny by default
            return False

        authorize(getattr(request, "user", None), policy)
        return True

    def has_object_permission(self, request, view, obj) -> bool:
        return self.has_permission(request, view)
