import logging

from django.db import transaction
from django.db.models import ProtectedError
from rest_framework.exceptions import NotFound

from tracker.exceptions import Conflict
from tracker.models import Medication
from tracker.services.formatting import (
    format_assignment_brief,
    format_medication_brief,
    format_patient_brief,
)

logger = logging.getLogger(__name__)


def _base_queryset():
    return Medication.objects.prefetch_related('assignments__patient')


def format_medication(medication: Medication) -> dict:
    data = format_medication_brief(medication)
    assignments = []
    for a in medication.assignments.all():
        item = format_assignment_brief(a)
        item['patient'] = format_patient_brief(a.patient)
        assignments.append(item)
    data['assignments'] = assignments
    return data


def get_medication(pk: int) -> Medication:
    medication = _base_queryset().filter(pk=pk).first()
    if not medication:
        raise NotFound(f'Medication with ID {pk} not found')
    return medication


def ensure_medication_exists(pk: int) -> None:
    if not Medication.objects.filter(pk=pk).exists():
        raise NotFound(f'Medication with ID {pk} not found')


def list_medications() -> list[Medication]:
    return list(_base_queryset().order_by('id'))


def create_medication(*, name: str, dosage: str, frequency: str) -> Medication:
    with transaction.atomic():
        medication = Medication.objects.create(name=name, dosage=dosage, frequency=frequency)
    logger.info('created medication %s', medication.id)
    return get_medication(medication.id)


def update_medication(pk: int, **fields) -> Medication:
    with transaction.atomic():
        medication = Medication.objects.select_for_update().filter(pk=pk).first()
        if not medication:
            raise NotFound(f'Medication with ID {pk} not found')
        for field in ('name', 'dosage', 'frequency'):
            if field in fields:
                setattr(medication, field, fields[field])
        medication.save()
    logger.info('updated medication %s fields=%s', pk, sorted(fields))
    return get_medication(pk)


def delete_medication(pk: int) -> None:
    """Delete a medication that no assignment refers to.

    Raises :class:`Conflict` while assignments still reference it; those
    have to be removed or re-pointed first.
    """
    with transaction.atomic():
        medication = Medication.objects.filter(pk=pk).first()
        if not medication:
            raise NotFound(f'Medication with ID {pk} not found')
        try:
            medication.delete()
        except ProtectedError as exc:
            in_use = len(exc.protected_objects)
            logger.warning('refused to delete medication %s: %s assignments', pk, in_use)
            raise Conflict(
                f'Medication with ID {pk} is used by {in_use} assignment(s) and cannot be deleted'
            ) from exc
    logger.info('deleted medication %s', pk)
