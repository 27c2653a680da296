# uicms/referrals/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from uicms.referrals.models import Referral, ReferralTrackingEntry, ReferralUrgency, TrackingStatus


class ReferralSerializer(serializers.ModelSerializer):
    referral_id = serializers.IntegerField(source="id", read_only=True)

    patient_id = serializers.IntegerField(read_only=True)
    patient_name = serializers.CharField(source="patient.full_name", read_only=True)

    from_clinic_id = serializers.IntegerField(read_only=True)
    from_clinic_name = serializers.CharField(source="from_clinic.name", read_only=True)
    to_clinic_id = serializers.IntegerField(read_only=True)
    to_clinic_name = serializers.CharField(source="to_clinic.name", read_only=True)
    requested_to_clinic_id = serializers.IntegerField(read_only=True, allow_null=True)

    referring_doctor_id = serializers.IntegerField(read_only=True)
    referring_doctor_name = serializers.CharField(source="referring_doctor.full_name", read_only=True)
    receiving_doctor_id = serializers.IntegerField(read_only=True, allow_null=True)
    receiving_doctor_name = serializers.CharField(
        source="receiving_doctor.full_name",
        read_only=True,
        default=None,
    )

    class Meta:
        model = Referral
        fields = [
            "referral_id",
            "patient_id",
            "patient_name",
            "from_clinic_id",
            "from_clinic_name",
            "to_clinic_id",
            "to_clinic_name",
            "requested_to_clinic_id",
            "reason",
            "urgency",
            "referring_doctor_id",
            "referring_doctor_name",
            "receiving_doctor_id",
            "receiving_doctor_name",
            "status",
            "created_at",
            "accepted_at",
            "updated_at",
        ]
        read_only_fields = fields


class ReferralCreateSerializer(serializers.Serializer):
    patient_id = serializers.IntegerField()
    from_clinic_id = serializers.IntegerField()
    to_clinic_id = serializers.IntegerField()
    reason = serializers.CharField()
    urgency = serializers.ChoiceField(choices=ReferralUrgency.choices, default=ReferralUrgency.NORMAL)
    receiving_doctor_id = serializers.IntegerField(required=False, allow_null=True)


class ReferralAcceptSerializer(serializers.Serializer):
    receiving_doctor_id = serializers.IntegerField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, max_length=1000)


class ReferralNotesSerializer(serializers.Serializer):
    notes = serializers.CharField(required=False, allow_blank=True, max_length=1000)


class TrackingEntrySerializer(serializers.ModelSerializer):
    tracking_id = serializers.IntegerField(source="id", read_only=True)
    referral_id = serializers.IntegerField(read_only=True)
    staff_id = serializers.IntegerField(read_only=True, allow_null=True)
    staff_name = serializers.CharField(source="staff.full_name", read_only=True, default=None)
    staff_role = serializers.CharField(source="staff.role", read_only=True, default=None)

    class Meta:
        model = ReferralTrackingEntry
        fields = ["tracking_id", "referral_id", "staff_id", "staff_name", "staff_role", "status", "notes", "created_at"]
        read_only_fields = fields


class TrackingEntryCreateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=TrackingStatus.choices)
    notes = serializers.CharField(required=False, allow_blank=True, max_length=1000, default="")
