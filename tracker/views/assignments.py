"""
Assignment endpoints.

Besides plain CRUD two read-only listings add the derived
``remainingDays`` (and its ``urgency`` band) to each assignment:

* ``GET /assignments/with-remaining-days`` – every assignment.
* ``GET /assignments/patient/<patientId>/with-remaining-days`` – the
  assignments of one patient; 404 if the patient does not exist.

Both accept ``?active=true`` to drop treatments whose window has
already closed.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from tracker.serializers.assignment import AssignmentSerializer, RemainingDaysQuerySerializer
from tracker.services import assignments as svc


@api_view(['GET', 'POST'])
def assignments_list(request):
    if request.method == 'GET':
        return Response([svc.format_assignment(a) for a in svc.list_assignments()])
    data = AssignmentSerializer(data=request.data)
    data.is_valid(raise_exception=True)
    assignment = svc.create_assignment(**data.validated_data)
    return Response(svc.format_assignment(assignment), status=status.HTTP_201_CREATED)


@api_view(['GET'])
def assignments_with_remaining_days(request):
    q = RemainingDaysQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return Response(svc.assignments_with_remaining_days(active_only=q.validated_data['active']))


@api_view(['GET'])
def patient_assignments_with_remaining_days(request, patient_id: int):
    q = RemainingDaysQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return Response(svc.assignments_with_remaining_days(patient_id, active_only=q.validated_data['active']))


@api_view(['GET', 'PATCH', 'DELETE'])
def assignment_detail(request, pk: int):
    if request.method == 'GET':
        return Response(svc.format_assignment(svc.get_assignment(pk)))
    if request.method == 'PATCH':
        data = AssignmentSerializer(data=request.data, partial=True)
        data.is_valid(raise_exception=True)
        assignment = svc.update_assignment(pk, **data.validated_data)
        return Response(svc.format_assignment(assignment))
    svc.delete_assignment(pk)
    return Response(status=status.HTTP_204_NO_CONTENT)
