from rest_framework import serializers

from tracker.services.treatment import WINDOW_TOO_LATE, window_fits_calendar

from .fields import IsoDateField


class AssignmentSerializer(serializers.Serializer):
    patientId = serializers.IntegerField(source='patient_id')
    medicationId = serializers.IntegerField(source='medication_id')
    startDate = IsoDateField(source='start_date')
    numberOfDays = serializers.IntegerField(source='number_of_days', min_value=1, max_value=36500)

    def validate(self, attrs):
        # PATCH bodies may carry only one of the two; the service checks them merged.
        if 'start_date' in attrs and 'number_of_days' in attrs:
            if not window_fits_calendar(attrs['start_date'], attrs['number_of_days']):
                raise serializers.ValidationError({'startDate': WINDOW_TOO_LATE})
        return attrs


class RemainingDaysQuerySerializer(serializers.Serializer):
    active = serializers.BooleanField(required=False, default=False)
