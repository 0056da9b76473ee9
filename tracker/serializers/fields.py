import html

import bleach
from django.utils import timezone
from django.utils.dateparse import parse_datetime
from rest_framework import serializers


class IsoDateField(serializers.DateField):
    """ISO calendar date.

    A full ISO datetime is accepted too and reduced to its calendar date,
    in the local time zone when it carries a UTC offset.
    """

    def to_internal_value(self, value):
        if isinstance(value, str) and 'T' in value:
            try:
                parsed = parse_datetime(value.strip())
            except ValueError:
                parsed = None
            if parsed is None:
                self.fail('invalid', format='YYYY-MM-DD')
            if timezone.is_aware(parsed):
                try:
                    parsed = timezone.localtime(parsed)
                except OverflowError:
                    self.fail('invalid', format='YYYY-MM-DD')
            return parsed.date()
        return super().to_internal_value(value)


def clean_text(value: str) -> str:
    """Strip markup from free text and reject what is left empty."""
    value = html.unescape(bleach.clean((value or '').strip(), tags=set(), strip=True)).strip()
    if not value:
        raise serializers.ValidationError('This field may not be blank.')
    return value
