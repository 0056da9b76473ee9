"""
Integration tests for the medication tracker API.

These tests exercise the CRUD endpoints for patients, medications and
assignments, the delete rules between them and the not-found
responses.  They use Django REST Framework's APIClient within the
APITestCase base class.

To run the tests:

```
pytest -q tracker/tests
```
"""
from datetime import date

from rest_framework import status
from rest_framework.test import APITestCase

from ..models import Assignment, Medication, Patient


class PatientAPITests(APITestCase):
    def test_create_then_fetch_patient(self):
        """A new patient comes back with an empty assignments list."""
        response = self.client.post('/patients', {'name': 'A', 'dateOfBirth': '2000-01-01'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        pid = response.data['id']
        self.assertEqual(response.data['name'], 'A')
        self.assertEqual(response.data['dateOfBirth'], '2000-01-01')

        response = self.client.get(f'/patients/{pid}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'id': pid, 'name': 'A', 'dateOfBirth': '2000-01-01', 'assignments': []})

    def test_list_patients_includes_assignments_with_medication(self):
        patient = Patient.objects.create(name='Mario Rossi', date_of_birth=date(1958, 3, 14))
        other = Patient.objects.create(name='Giulia Bianchi', date_of_birth=date(1972, 11, 2))
        med = Medication.objects.create(name='Amoxicillin', dosage='500mg', frequency='3x daily')
        assignment = Assignment.objects.create(
            patient=patient, medication=med, start_date=date(2024, 5, 1), number_of_days=10
        )

        response = self.client.get('/patients')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([p['id'] for p in response.data], [patient.id, other.id])
        first = response.data[0]
        self.assertEqual(len(first['assignments']), 1)
        item = first['assignments'][0]
        self.assertEqual(item['id'], assignment.id)
        self.assertEqual(item['startDate'], '2024-05-01')
        self.assertEqual(item['numberOfDays'], 10)
        self.assertEqual(item['medication']['name'], 'Amoxicillin')
        self.assertEqual(response.data[1]['assignments'], [])

    def test_patch_replaces_only_given_fields(self):
        patient = Patient.objects.create(name='Old Name', date_of_birth=date(1990, 6, 21))
        response = self.client.patch(f'/patients/{patient.id}', {'name': 'New Name'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['name'], 'New Name')
        self.assertEqual(response.data['dateOfBirth'], '1990-06-21')

        response = self.client.patch(f'/patients/{patient.id}', {'dateOfBirth': '1991-01-02'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        patient.refresh_from_db()
        self.assertEqual(patient.name, 'New Name')
        self.assertEqual(patient.date_of_birth, date(1991, 1, 2))

    def test_missing_patient_returns_404_with_message(self):
        for method in ('get', 'patch', 'delete'):
            response = getattr(self.client, method)('/patients/999', {}, format='json')
            self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
            body = response.json()
            self.assertFalse(body['ok'])
            self.assertEqual(body['error']['code'], 'not_found')
            self.assertEqual(body['error']['message'], 'Patient with ID 999 not found')

    def test_delete_patient_removes_their_assignments(self):
        patient = Patient.objects.create(name='A', date_of_birth=date(2000, 1, 1))
        keep = Patient.objects.create(name='B', date_of_birth=date(2000, 1, 1))
        med = Medication.objects.create(name='Ibuprofen', dosage='400mg', frequency='every 8h')
        Assignment.objects.create(patient=patient, medication=med, start_date=date(2024, 1, 1), number_of_days=5)
        Assignment.objects.create(patient=patient, medication=med, start_date=date(2024, 2, 1), number_of_days=5)
        kept = Assignment.objects.create(patient=keep, medication=med, start_date=date(2024, 2, 1), number_of_days=5)

        response = self.client.delete(f'/patients/{patient.id}')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Patient.objects.filter(id=patient.id).exists())
        self.assertEqual(list(Assignment.objects.values_list('id', flat=True)), [kept.id])
        self.assertTrue(Medication.objects.filter(id=med.id).exists())


class MedicationAPITests(APITestCase):
    def setUp(self) -> None:
        self.patient = Patient.objects.create(name='Mario Rossi', date_of_birth=date(1958, 3, 14))

    def test_create_list_and_update_medication(self):
        response = self.client.post(
            '/medications',
            {'name': 'Metformin', 'dosage': '850mg', 'frequency': 'Twice daily'},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        mid = response.data['id']
        self.assertEqual(response.data['assignments'], [])

        response = self.client.patch(f'/medications/{mid}', {'dosage': '1000mg'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['dosage'], '1000mg')
        self.assertEqual(response.data['name'], 'Metformin')
        self.assertEqual(response.data['frequency'], 'Twice daily')

        response = self.client.get('/medications')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([m['id'] for m in response.data], [mid])

    def test_medication_detail_lists_assigned_patients(self):
        med = Medication.objects.create(name='Amoxicillin', dosage='500mg', frequency='3x daily')
        Assignment.objects.create(patient=self.patient, medication=med, start_date=date(2024, 5, 1), number_of_days=7)
        response = self.client.get(f'/medications/{med.id}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['assignments']), 1)
        self.assertEqual(response.data['assignments'][0]['patient']['name'], 'Mario Rossi')

    def test_delete_unassigned_medication(self):
        med = Medication.objects.create(name='Ibuprofen', dosage='400mg', frequency='every 8h')
        response = self.client.delete(f'/medications/{med.id}')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Medication.objects.filter(id=med.id).exists())

    def test_delete_assigned_medication_is_refused(self):
        med = Medication.objects.create(name='Ibuprofen', dosage='400mg', frequency='every 8h')
        Assignment.objects.create(patient=self.patient, medication=med, start_date=date(2024, 1, 1), number_of_days=5)
        response = self.client.delete(f'/medications/{med.id}')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        body = response.json()
        self.assertEqual(body['error']['code'], 'conflict')
        self.assertIn(f'Medication with ID {med.id}', body['error']['message'])
        self.assertTrue(Medication.objects.filter(id=med.id).exists())
        self.assertEqual(Assignment.objects.count(), 1)

    def test_missing_medication_returns_404(self):
        response = self.client.get('/medications/4242')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json()['error']['message'], 'Medication with ID 4242 not found')


class AssignmentAPITests(APITestCase):
    def setUp(self) -> None:
        self.patient = Patient.objects.create(name='Mario Rossi', date_of_birth=date(1958, 3, 14))
        self.other_patient = Patient.objects.create(name='John Smith', date_of_birth=date(1990, 6, 21))
        self.med = Medication.objects.create(name='Amoxicillin', dosage='500mg', frequency='3x daily')
        self.other_med = Medication.objects.create(name='Ibuprofen', dosage='400mg', frequency='every 8h')

    def _payload(self, **overrides):
        payload = {
            'patientId': self.patient.id,
            'medicationId': self.med.id,
            'startDate': '2024-05-01',
            'numberOfDays': 10,
        }
        payload.update(overrides)
        return payload

    def test_create_assignment_returns_related_records(self):
        response = self.client.post('/assignments', self._payload(), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['patientId'], self.patient.id)
        self.assertEqual(response.data['medicationId'], self.med.id)
        self.assertEqual(response.data['startDate'], '2024-05-01')
        self.assertEqual(response.data['numberOfDays'], 10)
        self.assertEqual(response.data['patient']['name'], 'Mario Rossi')
        self.assertEqual(response.data['medication']['dosage'], '500mg')
        self.assertNotIn('remainingDays', response.data)
        self.assertEqual(Assignment.objects.count(), 1)

    def test_create_accepts_iso_datetime_start(self):
        response = self.client.post(
            '/assignments', self._payload(startDate='2024-05-01T00:00:00.000Z'), format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['startDate'], '2024-05-01')

    def test_unknown_references_return_404(self):
        response = self.client.post('/assignments', self._payload(patientId=9999), format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json()['error']['message'], 'Patient with ID 9999 not found')

        response = self.client.post('/assignments', self._payload(medicationId=8888), format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json()['error']['message'], 'Medication with ID 8888 not found')
        self.assertEqual(Assignment.objects.count(), 0)

    def test_list_and_detail(self):
        a1 = Assignment.objects.create(patient=self.patient, medication=self.med, start_date=date(2024, 1, 1), number_of_days=5)
        a2 = Assignment.objects.create(patient=self.other_patient, medication=self.other_med, start_date=date(2024, 2, 1), number_of_days=3)

        response = self.client.get('/assignments')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([a['id'] for a in response.data], [a1.id, a2.id])
        self.assertEqual(response.data[1]['patient']['name'], 'John Smith')
        self.assertEqual(response.data[1]['medication']['name'], 'Ibuprofen')

        response = self.client.get(f'/assignments/{a2.id}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['numberOfDays'], 3)

    def test_patch_assignment(self):
        a = Assignment.objects.create(patient=self.patient, medication=self.med, start_date=date(2024, 1, 1), number_of_days=5)
        response = self.client.patch(
            f'/assignments/{a.id}',
            {'numberOfDays': 14, 'medicationId': self.other_med.id},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['numberOfDays'], 14)
        self.assertEqual(response.data['medication']['name'], 'Ibuprofen')
        self.assertEqual(response.data['startDate'], '2024-01-01')
        a.refresh_from_db()
        self.assertEqual(a.medication_id, self.other_med.id)
        self.assertEqual(a.patient_id, self.patient.id)

    def test_patch_to_unknown_patient_leaves_record_unchanged(self):
        a = Assignment.objects.create(patient=self.patient, medication=self.med, start_date=date(2024, 1, 1), number_of_days=5)
        response = self.client.patch(f'/assignments/{a.id}', {'patientId': 777, 'numberOfDays': 9}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        a.refresh_from_db()
        self.assertEqual(a.patient_id, self.patient.id)
        self.assertEqual(a.number_of_days, 5)

    def test_delete_assignment(self):
        a = Assignment.objects.create(patient=self.patient, medication=self.med, start_date=date(2024, 1, 1), number_of_days=5)
        response = self.client.delete(f'/assignments/{a.id}')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Assignment.objects.exists())

        response = self.client.delete(f'/assignments/{a.id}')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json()['error']['message'], f'Assignment with ID {a.id} not found')
