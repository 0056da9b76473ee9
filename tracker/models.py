"""
Database models for the medication tracker.

Three record types are stored: patients, medications and assignments
linking one patient to one medication for a fixed number of days.
Assignments reference the other two by plain foreign-key columns; the
service layer decides which related rows to load for each query.
"""
from __future__ import annotations

from django.db import models


class Patient(models.Model):
    name = models.CharField(max_length=255)
    date_of_birth = models.DateField()

    class Meta:
        ordering = ['id']

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"


class Medication(models.Model):
    name = models.CharField(max_length=255)
    # Dosage and frequency are free text, e.g. "500mg" and "twice daily".
    dosage = models.CharField(max_length=255)
    frequency = models.CharField(max_length=255)

    class Meta:
        ordering = ['id']

    def __str__(self) -> str:
        return f"{self.name} {self.dosage}"


class Assignment(models.Model):
    """A medication given to a patient for ``number_of_days`` days from ``start_date``.

    Deleting the patient removes their assignments.  A medication cannot
    be deleted while any assignment still references it.
    """
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='assignments')
    medication = models.ForeignKey(Medication, on_delete=models.PROTECT, related_name='assignments')
    start_date = models.DateField()
    number_of_days = models.PositiveIntegerField()

    class Meta:
        ordering = ['id']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(number_of_days__gte=1),
                name='assignment_number_of_days_positive',
            ),
        ]

    def __str__(self) -> str:
        return f"{self.patient_id} -> {self.medication_id} from {self.start_date} ({self.number_of_days}d)"
