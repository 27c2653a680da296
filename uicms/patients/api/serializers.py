# uicms/patients/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from uicms.patients.models import Gender, Patient


class PatientCreateSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=100)
    middle_name = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    last_name = serializers.CharField(max_length=100)
    university_id = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)
    external_id = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")
    gender = serializers.ChoiceField(choices=Gender.choices, required=False, allow_blank=True, default="")
    date_of_birth = serializers.DateField(required=False, allow_null=True)
    contact = serializers.RegexField(
        r"^(\+251|0)[0-9]{9}$",
        max_length=32,
        required=False,
        allow_blank=True,
        default="",
        error_messages={"invalid": "Invalid phone number. Use +251XXXXXXXXX or 0XXXXXXXXX."},
    )
    email = serializers.EmailField(required=False, allow_blank=True, default="")
    address = serializers.CharField(required=False, allow_blank=True, default="")
    campus_id = serializers.IntegerField(required=False, allow_null=True)
    registered_clinic_id = serializers.IntegerField(required=False, allow_null=True)


class PatientSerializer(serializers.ModelSerializer):
    full_name = serializers.CharField(read_only=True)
    campus_id = serializers.IntegerField(read_only=True, allow_null=True)
    campus_name = serializers.CharField(source="campus.name", read_only=True, default=None)
    registered_clinic_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = Patient
        fields = [
            "id",
            "first_name",
            "middle_name",
            "last_name",
            "full_name",
            "university_id",
            "external_id",
            "gender",
            "date_of_birth",
            "contact",
            "email",
            "address",
            "campus_id",
            "campus_name",
            "registered_clinic_id",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
