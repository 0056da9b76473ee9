"""
URL mappings for the medication tracker API.

Paths match the ``API_ENDPOINTS`` table of the front-end.  Trailing
slashes are deliberately omitted.
"""
from django.urls import include, path

from .views import health
from .views.assignments import (
    assignment_detail,
    assignments_list,
    assignments_with_remaining_days,
    patient_assignments_with_remaining_days,
)
from .views.medications import medication_detail, medications_list
from .views.patients import patient_detail, patients_list


urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz),
    # Patients
    path('patients', patients_list, name='patients'),
    path('patients/<int:pk>', patient_detail, name='patient-detail'),
    # Medications
    path('medications', medications_list, name='medications'),
    path('medications/<int:pk>', medication_detail, name='medication-detail'),
    # Assignments
    path('assignments', assignments_list, name='assignments'),
    path('assignments/with-remaining-days', assignments_with_remaining_days, name='assignments-remaining'),
    path(
        'assignments/patient/<int:patient_id>/with-remaining-days',
        patient_assignments_with_remaining_days,
        name='patient-assignments-remaining',
    ),
    path('assignments/<int:pk>', assignment_detail, name='assignment-detail'),
]
