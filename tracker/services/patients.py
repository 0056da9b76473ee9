import logging
from datetime import date

from django.db import transaction
from rest_framework.exceptions import NotFound

from tracker.models import Patient
from tracker.services.formatting import (
    format_assignment_brief,
    format_medication_brief,
    format_patient_brief,
)

logger = logging.getLogger(__name__)


def _base_queryset():
    # Each patient is returned with their assignments and the medication of each.
    return Patient.objects.prefetch_related('assignments__medication')


def format_patient(patient: Patient) -> dict:
    data = format_patient_brief(patient)
    assignments = []
    for a in patient.assignments.all():
        item = format_assignment_brief(a)
        item['medication'] = format_medication_brief(a.medication)
        assignments.append(item)
    data['assignments'] = assignments
    return data


def get_patient(pk: int) -> Patient:
    patient = _base_queryset().filter(pk=pk).first()
    if not patient:
        raise NotFound(f'Patient with ID {pk} not found')
    return patient


def ensure_patient_exists(pk: int) -> None:
    if not Patient.objects.filter(pk=pk).exists():
        raise NotFound(f'Patient with ID {pk} not found')


def list_patients() -> list[Patient]:
    return list(_base_queryset().order_by('id'))


def create_patient(*, name: str, date_of_birth: date) -> Patient:
    with transaction.atomic():
        patient = Patient.objects.create(name=name, date_of_birth=date_of_birth)
    logger.info('created patient %s', patient.id)
    return get_patient(patient.id)


def update_patient(pk: int, **fields) -> Patient:
    with transaction.atomic():
        patient = Patient.objects.select_for_update().filter(pk=pk).first()
        if not patient:
            raise NotFound(f'Patient with ID {pk} not found')
        if 'name' in fields:
            patient.name = fields['name']
        if 'date_of_birth' in fields:
            patient.date_of_birth = fields['date_of_birth']
        patient.save()
    logger.info('updated patient %s fields=%s', pk, sorted(fields))
    return get_patient(pk)


def delete_patient(pk: int) -> None:
    """Delete a patient together with all of their assignments."""
    with transaction.atomic():
        patient = Patient.objects.filter(pk=pk).first()
        if not patient:
            raise NotFound(f'Patient with ID {pk} not found')
        _, per_model = patient.delete()
    logger.info('deleted patient %s (assignments removed: %s)', pk, per_model.get('tracker.Assignment', 0))
