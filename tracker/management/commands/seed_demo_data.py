"""
Management command to populate the database with demo data.
"""
from datetime import timedelta

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from tracker.models import Assignment, Medication, Patient

PATIENTS = [
    ('Mario Rossi', '1958-03-14'),
    ('Giulia Bianchi', '1972-11-02'),
    ('John Smith', '1990-06-21'),
]

MEDICATIONS = [
    ('Amoxicillin', '500mg', 'Three times daily'),
    ('Ibuprofen', '400mg', 'Every 8 hours as needed'),
    ('Metformin', '850mg', 'Twice daily'),
]

# (patient index, medication index, start offset from today, number of days)
ASSIGNMENTS = [
    (0, 0, -3, 10),
    (0, 1, 5, 10),
    (1, 2, -30, 90),
    (1, 1, -15, 10),
    (2, 0, -1, 3),
]


class Command(BaseCommand):
    help = 'Populate database with demo patients, medications and assignments'

    def add_arguments(self, parser):
        parser.add_argument('--reset', action='store_true', help='Delete existing records first')

    def handle(self, *args, **options):
        today = timezone.localdate()
        with transaction.atomic():
            if options['reset']:
                # Assignments first: medications are protected while assigned.
                Assignment.objects.all().delete()
                Patient.objects.all().delete()
                Medication.objects.all().delete()
                self.stdout.write('Existing records deleted')

            patients = [
                Patient.objects.create(name=name, date_of_birth=dob)
                for name, dob in PATIENTS
            ]
            medications = [
                Medication.objects.create(name=name, dosage=dosage, frequency=frequency)
                for name, dosage, frequency in MEDICATIONS
            ]
            for p_idx, m_idx, offset, days in ASSIGNMENTS:
                Assignment.objects.create(
                    patient=patients[p_idx],
                    medication=medications[m_idx],
                    start_date=today + timedelta(days=offset),
                    number_of_days=days,
                )

        self.stdout.write(self.style.SUCCESS(
            f'Created {len(patients)} patients, {len(medications)} medications, '
            f'{len(ASSIGNMENTS)} assignments'
        ))
