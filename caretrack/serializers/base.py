"""
Parsing and payload-building helpers around DRF serializers.

Response serializers declare the backend's camelCase keys and map them to
snake_case attributes through ``source``; their ``validate`` hook builds the
domain record.  Request serializers declare snake_case fields and are turned
into camelCase JSON bodies after validation.
"""
from __future__ import annotations

import datetime
import re
from typing import Any, Optional

from rest_framework import serializers

from caretrack.exceptions import InvalidRequest, SchemaError

_CAMEL_BOUNDARY = re.compile(r'(?<=[a-z0-9])([A-Z])')


def camelize(name: str) -> str:
    head, *rest = name.split('_')
    return head + ''.join(part[:1].upper() + part[1:] for part in rest)


def decamelize(name: str) -> str:
    return _CAMEL_BOUNDARY.sub(r'_\1', name).lower()


def decamelize_keys(data: Optional[dict]) -> dict:
    return {decamelize(k): v for k, v in (data or {}).items()}


def _wire_value(value: Any) -> Any:
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [_wire_value(v) for v in value]
    return value


class RecordSerializer(serializers.Serializer):
    """Serializer whose validated value is an instance of ``record_class``."""
    record_class: Any = None

    def validate(self, attrs):
        return self.record_class(**attrs)


def parse(serializer_class, payload: Any, *, many: bool = False) -> Any:
    """Parse a backend payload into domain records or raise ``SchemaError``."""
    s = serializer_class(data=payload, many=many)
    if not s.is_valid():
        label = serializer_class.__name__.replace('Serializer', '')
        raise SchemaError(f'Unexpected {label} payload from server', errors=s.errors)
    return s.validated_data


def build_payload(serializer_class, data: Optional[dict], *, partial: bool = False) -> dict:
    """Validate a request body client-side and render it with backend key names."""
    s = serializer_class(data=data or {}, partial=partial)
    if not s.is_valid():
        raise InvalidRequest(s.errors)
    return {camelize(k): _wire_value(v) for k, v in s.validated_data.items()}
