from rest_framework import serializers

from .fields import clean_text


class MedicationSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    dosage = serializers.CharField(max_length=255)
    frequency = serializers.CharField(max_length=255)

    def validate_name(self, v):
        return clean_text(v)

    def validate_dosage(self, v):
        return clean_text(v)

    def validate_frequency(self, v):
        return clean_text(v)
