"""
JSON shapes shared by the patient, medication and assignment endpoints.

Keys are camelCase to match the front-end types.  The "brief" forms
carry no related records and are nested inside the full forms built by
each service module.
"""
from tracker.models import Assignment, Medication, Patient


def format_patient_brief(patient: Patient) -> dict:
    return {
        'id': patient.id,
        'name': patient.name,
        'dateOfBirth': patient.date_of_birth.isoformat(),
    }


def format_medication_brief(medication: Medication) -> dict:
    return {
        'id': medication.id,
        'name': medication.name,
        'dosage': medication.dosage,
        'frequency': medication.frequency,
    }


def format_assignment_brief(assignment: Assignment) -> dict:
    return {
        'id': assignment.id,
        'patientId': assignment.patient_id,
        'medicationId': assignment.medication_id,
        'startDate': assignment.start_date.isoformat(),
        'numberOfDays': assignment.number_of_days,
    }
