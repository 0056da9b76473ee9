"""
Assignment persistence and the remaining-days listings.

Every read joins the referenced patient and medication explicitly via
``select_related``; the list endpoints never touch relations lazily.
Referenced ids are checked before writing so that an unknown
``patientId``/``medicationId`` surfaces as a 404 naming the missing
record rather than as a database integrity error.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from tracker.models import Assignment
from tracker.services.formatting import (
    format_assignment_brief,
    format_medication_brief,
    format_patient_brief,
)
from tracker.services.medications import ensure_medication_exists
from tracker.services.patients import ensure_patient_exists
from tracker.services.treatment import (
    WINDOW_TOO_LATE,
    remaining_days,
    treatment_urgency,
    window_fits_calendar,
)

logger = logging.getLogger(__name__)


def _base_queryset():
    return Assignment.objects.select_related('patient', 'medication')


def format_assignment(assignment: Assignment) -> dict:
    data = format_assignment_brief(assignment)
    data['patient'] = format_patient_brief(assignment.patient)
    data['medication'] = format_medication_brief(assignment.medication)
    return data


def format_assignment_with_remaining(assignment: Assignment, today: Optional[date] = None) -> dict:
    data = format_assignment(assignment)
    left = remaining_days(assignment.start_date, assignment.number_of_days, today=today)
    data['remainingDays'] = left
    data['urgency'] = treatment_urgency(left)
    return data


def get_assignment(pk: int) -> Assignment:
    assignment = _base_queryset().filter(pk=pk).first()
    if not assignment:
        raise NotFound(f'Assignment with ID {pk} not found')
    return assignment


def list_assignments(patient_id: Optional[int] = None) -> list[Assignment]:
    qs = _base_queryset()
    if patient_id is not None:
        qs = qs.filter(patient_id=patient_id)
    return list(qs.order_by('id'))


def assignments_with_remaining_days(
    patient_id: Optional[int] = None,
    *,
    active_only: bool = False,
    today: Optional[date] = None,
) -> list[dict]:
    """List assignments with ``remainingDays`` and ``urgency`` added.

    ``today`` is resolved once so every item in one response is measured
    against the same date.  With ``active_only`` closed windows are left
    out.  Asking for an unknown patient raises :class:`NotFound`.
    """
    if patient_id is not None:
        ensure_patient_exists(patient_id)
    today = today or timezone.localdate()
    items = [format_assignment_with_remaining(a, today=today) for a in list_assignments(patient_id)]
    if active_only:
        items = [item for item in items if item['remainingDays'] > 0]
    return items


def create_assignment(*, patient_id: int, medication_id: int, start_date: date, number_of_days: int) -> Assignment:
    with transaction.atomic():
        ensure_patient_exists(patient_id)
        ensure_medication_exists(medication_id)
        assignment = Assignment.objects.create(
            patient_id=patient_id,
            medication_id=medication_id,
            start_date=start_date,
            number_of_days=number_of_days,
        )
    logger.info(
        'created assignment %s: patient=%s medication=%s start=%s days=%s',
        assignment.id, patient_id, medication_id, start_date, number_of_days,
    )
    return get_assignment(assignment.id)


def update_assignment(pk: int, **fields) -> Assignment:
    with transaction.atomic():
        assignment = Assignment.objects.select_for_update().filter(pk=pk).first()
        if not assignment:
            raise NotFound(f'Assignment with ID {pk} not found')
        if 'patient_id' in fields:
            ensure_patient_exists(fields['patient_id'])
            assignment.patient_id = fields['patient_id']
        if 'medication_id' in fields:
            ensure_medication_exists(fields['medication_id'])
            assignment.medication_id = fields['medication_id']
        if 'start_date' in fields:
            assignment.start_date = fields['start_date']
        if 'number_of_days' in fields:
            assignment.number_of_days = fields['number_of_days']
        if not window_fits_calendar(assignment.start_date, assignment.number_of_days):
            raise ValidationError({'startDate': WINDOW_TOO_LATE})
        assignment.save()
    logger.info('updated assignment %s fields=%s', pk, sorted(fields))
    return get_assignment(pk)


def delete_assignment(pk: int) -> None:
    deleted, _ = Assignment.objects.filter(pk=pk).delete()
    if not deleted:
        raise NotFound(f'Assignment with ID {pk} not found')
    logger.info('deleted assignment %s', pk)
