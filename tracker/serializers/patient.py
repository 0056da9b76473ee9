from rest_framework import serializers

from .fields import IsoDateField, clean_text


class PatientSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    dateOfBirth = IsoDateField(source='date_of_birth')

    def validate_name(self, v):
        return clean_text(v)
