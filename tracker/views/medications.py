"""
Medication endpoints, shaped like the patient ones.

Deleting a medication that is still assigned to a patient answers 409;
the assignments must be removed first.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from tracker.serializers.medication import MedicationSerializer
from tracker.services import medications as svc


@api_view(['GET', 'POST'])
def medications_list(request):
    if request.method == 'GET':
        return Response([svc.format_medication(m) for m in svc.list_medications()])
    data = MedicationSerializer(data=request.data)
    data.is_valid(raise_exception=True)
    medication = svc.create_medication(**data.validated_data)
    return Response(svc.format_medication(medication), status=status.HTTP_201_CREATED)


@api_view(['GET', 'PATCH', 'DELETE'])
def medication_detail(request, pk: int):
    if request.method == 'GET':
        return Response(svc.format_medication(svc.get_medication(pk)))
    if request.method == 'PATCH':
        data = MedicationSerializer(data=request.data, partial=True)
        data.is_valid(raise_exception=True)
        medication = svc.update_medication(pk, **data.validated_data)
        return Response(svc.format_medication(medication))
    svc.delete_medication(pk)
    return Response(status=status.HTTP_204_NO_CONTENT)
