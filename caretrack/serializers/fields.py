"""Field types shared by the backend payload serializers."""
import datetime

from django.utils.dateparse import parse_datetime
from rest_framework import serializers


class IsoDateField(serializers.DateField):
    """A date that the backend may send either as ``YYYY-MM-DD`` or as a full timestamp."""

    def to_internal_value(self, value):
        if isinstance(value, datetime.datetime):
            return value.date()
        if isinstance(value, str) and 'T' in value:
            parsed = parse_datetime(value)
            if parsed is not None:
                return parsed.date()
        return super().to_internal_value(value)


class StringListField(serializers.ListField):
    """List of strings where a missing or null value means an empty list."""
    child = serializers.CharField(allow_blank=True)

    def __init__(self, **kwargs):
        if kwargs.get('required') is not True:
            kwargs.setdefault('default', list)
        super().__init__(**kwargs)

    def validate_empty_values(self, data):
        if data is None:
            return (True, [])
        return super().validate_empty_values(data)


def optional_text(source=None, **kwargs):
    kwargs.update(required=False, allow_null=True, allow_blank=True)
    if source:
        kwargs['source'] = source
    return serializers.CharField(**kwargs)


def optional_float(source=None, **kwargs):
    kwargs.update(required=False, allow_null=True)
    if source:
        kwargs['source'] = source
    return serializers.FloatField(**kwargs)


def optional_int(source=None, **kwargs):
    kwargs.update(required=False, allow_null=True)
    if source:
        kwargs['source'] = source
    return serializers.IntegerField(**kwargs)


def optional_date(source=None, **kwargs):
    kwargs.update(required=False, allow_null=True)
    if source:
        kwargs['source'] = source
    return IsoDateField(**kwargs)


def optional_datetime(source=None, **kwargs):
    kwargs.update(required=False, allow_null=True)
    if source:
        kwargs['source'] = source
    return serializers.DateTimeField(**kwargs)
