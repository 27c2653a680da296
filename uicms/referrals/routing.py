# uicms/referrals/routing.py
"""
Hub-and-spoke routing for inter-campus referrals.

Secondary campuses do not refer to each other (or to arbitrary hub clinics)
directly: any referral that leaves a secondary campus is sent to the hub
campus clinic of the configured type. Everything else goes where the
referring doctor asked.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from django.conf import settings

from uicms.campuses.models import ClinicType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReferralRoutingPolicy:
    hub_campus_id: int
    secondary_campus_ids: frozenset
    hub_clinic_type: str = ClinicType.GENERAL

    @classmethod
    def from_settings(cls) -> "ReferralRoutingPolicy":
        cfg = getattr(settings, "REFERRAL_ROUTING", {}) or {}
        return cls(
            hub_campus_id=int(cfg.get("HUB_CAMPUS_ID", 1)),
            secondary_campus_ids=frozenset(int(c) for c in cfg.get("SECONDARY_CAMPUS_IDS", (2, 3))),
            hub_clinic_type=cfg.get("HUB_CLINIC_TYPE", ClinicType.GENERAL),
        )

    def redirects(self, *, from_campus_id: int, to_campus_id: int) -> bool:
        return from_campus_id != to_campus_id and from_campus_id in self.secondary_campus_ids


@dataclass(frozen=True)
class RoutingDecision:
    to_clinic_id: int
    redirected: bool


def route_referral(
    *,
    policy: ReferralRoutingPolicy,
    from_campus_id: int,
    to_campus_id: int,
    to_clinic_id: int,
    find_hub_clinic: Callable[..., Optional[object]],
) -> Optional[RoutingDecision]:
    """
    Decide the stored destination of a referral.

    Returns None when the referral must be redirected but the hub campus has
    no clinic of the configured type.
    """
    if not policy.redirects(from_campus_id=from_campus_id, to_campus_id=to_campus_id):
        return RoutingDecision(to_clinic_id=to_clinic_id, redirected=False)

    hub = find_hub_clinic(campus_id=policy.hub_campus_id, clinic_type=policy.hub_clinic_type)
    if hub is None:
        logger.warning(
            "No %s clinic on hub campus %s for referral from campus %s",
            policy.hub_clinic_type,
            policy.hub_campus_id,
            from_campus_id,
        )
        return None

    logger.info(
        "Routing referral from campus %s to hub clinic %s (requested clinic %s on campus %s)",
        from_campus_id,
        hub.id,
        to_clinic_id,
        to_campus_id,
    )
    return RoutingDecision(to_clinic_id=hub.id, redirected=True)
