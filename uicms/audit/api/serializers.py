from rest_framework import serializers

from uicms.audit.models import AuditEvent


class AuditEventSerializer(serializers.ModelSerializer):
    actor_staff_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = AuditEvent
        fields = [
            "id",
            "event_code",
            "entity_type",
            "entity_id",
            "actor_staff_id",
            "occurred_at",
            "metadata",
        ]
        read_only_fields = fields
