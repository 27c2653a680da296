# uicms/referrals/filters.py
import django_filters

from uicms.referrals.models import Referral, ReferralStatus, ReferralUrgency


class ReferralFilter(django_filters.FilterSet):
    patient_id = django_filters.NumberFilter(field_name="patient_id")
    from_clinic_id = django_filters.NumberFilter(field_name="from_clinic_id")
    to_clinic_id = django_filters.NumberFilter(field_name="to_clinic_id")
    referring_doctor_id = django_filters.NumberFilter(field_name="referring_doctor_id")
    receiving_doctor_id = django_filters.NumberFilter(field_name="receiving_doctor_id")
    status = django_filters.ChoiceFilter(choices=ReferralStatus.choices)
    urgency = django_filters.ChoiceFilter(choices=ReferralUrgency.choices)
    created_after = django_filters.IsoDateTimeFilter(field_name="created_at", lookup_expr="gte")
    created_before = django_filters.IsoDateTimeFilter(field_name="created_at", lookup_expr="lte")

    class Meta:
        model = Referral
        fields = [
            "patient_id",
            "from_clinic_id",
            "to_clinic_id",
            "referring_doctor_id",
            "receiving_doctor_id",
            "status",
            "urgency",
            "created_after",
            "created_before",
        ]
