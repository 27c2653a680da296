# uicms/audit/services.py
from __future__ import annotations

from typing import Any, Optional

from django.db import transaction

from uicms.audit.models import AuditEvent


class AuditEntity:
    """Values stored in AuditEvent.entity_type."""

    REFERRAL = "Referral"
    PATIENT = "Patient"
    STAFF = "Staff"
    CAMPUS = "Campus"
    CLINIC = "Clinic"

    ALL = frozenset({REFERRAL, PATIENT, STAFF, CAMPUS, CLINIC})


class AuditService:
    """
    Append-only audit writer.

    Callers invoke it from inside their own ``transaction.atomic`` block, so an
    event commits or rolls back together with the change it describes.
    Metadata carries ids and status codes only; free text (reasons, notes)
    stays on the domain record.
    """

    @staticmethod
    @transaction.atomic
    def log(
        *,
        event_code: str,
        entity_type: str,
        entity_id: int,
        actor_staff_id: Optional[int],
        metadata: Optional[dict[str, Any]] = None,
    ) -> AuditEvent:
        if entity_type not in AuditEntity.ALL:
            raise ValueError(f"Unknown audit entity type: {entity_type!r}")

        return AuditEvent.objects.create(
            event_code=event_code,
            entity_type=entity_type,
            entity_id=entity_id,
            actor_staff_id=actor_staff_id,
            metadata=dict(metadata or {}),
        )

    @staticmethod
    def referral_event(
        *,
        referral_id: int,
        action: str,
        actor_staff_id: Optional[int],
        **metadata: Any,
    ) -> AuditEvent:
        """Record ``referral.<action>`` for one referral."""
        return AuditService.log(
            event_code=f"referral.{action}",
            entity_type=AuditEntity.REFERRAL,
            entity_id=referral_id,
            actor_staff_id=actor_staff_id,
            metadata=metadata,
        )
