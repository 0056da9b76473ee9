"""
Patient endpoints.

``/patients`` lists and creates patients; ``/patients/<id>`` reads,
partially updates and deletes one.  Every patient is returned with its
assignments, each carrying the assigned medication.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from tracker.serializers.patient import PatientSerializer
from tracker.services import patients as svc


@api_view(['GET', 'POST'])
def patients_list(request):
    if request.method == 'GET':
        return Response([svc.format_patient(p) for p in svc.list_patients()])
    # POST
    data = PatientSerializer(data=request.data)
    data.is_valid(raise_exception=True)
    patient = svc.create_patient(**data.validated_data)
    return Response(svc.format_patient(patient), status=status.HTTP_201_CREATED)


@api_view(['GET', 'PATCH', 'DELETE'])
def patient_detail(request, pk: int):
    if request.method == 'GET':
        return Response(svc.format_patient(svc.get_patient(pk)))
    if request.method == 'PATCH':
        data = PatientSerializer(data=request.data, partial=True)
        data.is_valid(raise_exception=True)
        patient = svc.update_patient(pk, **data.validated_data)
        return Response(svc.format_patient(patient))
    # DELETE
    svc.delete_patient(pk)
    return Response(status=status.HTTP_204_NO_CONTENT)
