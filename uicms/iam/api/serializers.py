# uicms/iam/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from uicms.common.models import RecordStatus
from uicms.iam.models import Staff
from uicms.iam.roles import Role, permission_level_for


class StaffSerializer(serializers.ModelSerializer):
    staff_id = serializers.IntegerField(source="id", read_only=True)
    full_name = serializers.CharField(read_only=True)
    campus_id = serializers.IntegerField(read_only=True, allow_null=True)
    campus_name = serializers.CharField(source="campus.name", read_only=True, default=None)
    clinic_id = serializers.IntegerField(read_only=True, allow_null=True)
    clinic_name = serializers.CharField(source="clinic.name", read_only=True, default=None)
    permission_level = serializers.SerializerMethodField()

    class Meta:
        model = Staff
        fields = [
            "staff_id",
            "first_name",
            "middle_name",
            "last_name",
            "full_name",
            "email",
            "role",
            "permission_level",
            "qualification",
            "license_no",
            "contact",
            "campus_id",
            "campus_name",
            "clinic_id",
            "clinic_name",
            "employment_status",
            "created_at",
        ]
        read_only_fields = fields

    def get_permission_level(self, obj) -> int:
        return permission_level_for(obj.role)


class StaffRegisterSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=100)
    middle_name = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    last_name = serializers.CharField(max_length=100)
    email = serializers.EmailField(max_length=255)
    password = serializers.CharField(write_only=True, min_length=6, trim_whitespace=False)
    role = serializers.ChoiceField(choices=Role.choices)
    qualification = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    license_no = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    contact = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    campus_id = serializers.IntegerField(required=False, allow_null=True)
    clinic_id = serializers.IntegerField(required=False, allow_null=True)
    employment_status = serializers.ChoiceField(choices=RecordStatus.choices, default=RecordStatus.ACTIVE)


class PrincipalSerializer(serializers.Serializer):
    staff_id = serializers.IntegerField()
    full_name = serializers.CharField()
    role = serializers.CharField()
    email = serializers.EmailField()
    campus_id = serializers.IntegerField(allow_null=True)
    clinic_id = serializers.IntegerField(allow_null=True)
    employment_status = serializers.CharField()
    permission_level = serializers.IntegerField()


class LoginRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField()


class LoginResponseSerializer(serializers.Serializer):
    access = serializers.CharField()
    refresh = serializers.CharField()
    staff = StaffSerializer()


class RefreshRequestSerializer(serializers.Serializer):
    refresh = serializers.CharField()


class RefreshResponseSerializer(serializers.Serializer):
    access = serializers.CharField()
