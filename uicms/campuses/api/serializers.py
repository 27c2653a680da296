# uicms/campuses/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from uicms.campuses.models import Campus, Clinic, ClinicType
from uicms.common.models import RecordStatus


class CampusSerializer(serializers.ModelSerializer):
    class Meta:
        model = Campus
        fields = ["id", "name", "address", "contact", "status", "created_at", "updated_at"]
        read_only_fields = fields


class CampusCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    address = serializers.CharField(required=False, allow_blank=True, default="")
    contact = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    status = serializers.ChoiceField(choices=RecordStatus.choices, required=False)


class CampusUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100, required=False)
    address = serializers.CharField(required=False, allow_blank=True)
    contact = serializers.CharField(max_length=32, required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=RecordStatus.choices, required=False)


class ClinicSerializer(serializers.ModelSerializer):
    campus_id = serializers.IntegerField(read_only=True)
    campus_name = serializers.CharField(source="campus.name", read_only=True)
    type = serializers.CharField(source="clinic_type", read_only=True)

    class Meta:
        model = Clinic
        fields = ["id", "campus_id", "campus_name", "name", "type", "status", "created_at", "updated_at"]
        read_only_fields = fields


class ClinicCreateSerializer(serializers.Serializer):
    campus_id = serializers.IntegerField()
    name = serializers.CharField(max_length=100)
    type = serializers.ChoiceField(choices=ClinicType.choices, default=ClinicType.GENERAL)
    status = serializers.ChoiceField(choices=RecordStatus.choices, required=False)


class ClinicUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100, required=False)
    type = serializers.ChoiceField(choices=ClinicType.choices, required=False)
    status = serializers.ChoiceField(choices=RecordStatus.choices, required=False)
