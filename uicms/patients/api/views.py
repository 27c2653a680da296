# uicms/patients/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from uicms.common.api.pagination import paginate
from uicms.iam.permissions import PolicyPermission
from uicms.iam.roles import Role
from uicms.patients.api.serializers import PatientCreateSerializer, PatientSerializer
from uicms.patients.models import Patient
from uicms.patients.selectors import get_patient, search_patients
from uicms.patients.services import PatientService

PATIENT_WRITERS = (Role.ADMIN, Role.RECEPTIONIST, Role.NURSE, Role.DOCTOR)


class PatientViewSet(viewsets.ViewSet):
    permission_classes = [PolicyPermission]
    policy_per_action = {
        "list": None,
        "retrieve": None,
        "create": PATIENT_WRITERS,
    }

    serializer_class = PatientSerializer
    queryset = Patient.objects.none()

    @extend_schema(tags=["Patients"], responses={200: PatientSerializer(many=True)})
    def list(self, request):
        q = request.query_params.get("q", "").strip()
        qs = search_patients(q=q, campus_id=request.query_params.get("campus_id") or None)
        return paginate(request, qs, PatientSerializer)

    @extend_schema(tags=["Patients"], responses={200: PatientSerializer})
    def retrieve(self, request, pk=None):
        try:
            patient = get_patient(patient_id=int(pk))
        except (ValueError, Patient.DoesNotExist):
            raise NotFound("Patient not found.")
        return Response(PatientSerializer(patient).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Patients"], request=PatientCreateSerializer, responses={201: PatientSerializer})
    def create(self, request):
        ser = PatientCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        patient = PatientService.create_patient(
            actor_staff_id=request.user.id,
            **ser.validated_data,
        )
        return Response(PatientSerializer(patient).data, status=status.HTTP_201_CREATED)
