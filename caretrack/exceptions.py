"""
Error types raised between the backend API and the stores, and the
console's unified DRF exception handler.

Services raise; stores catch ``CareTrackError`` and keep the message for
display.  The ``code`` attribute lets callers tell categories apart without
matching on message text.
"""
from __future__ import annotations

from typing import Any, Optional

from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler


class CareTrackError(Exception):
    code = 'error'
    default_message = 'Request failed'

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NetworkError(CareTrackError):
    code = 'network_error'
    default_message = 'Network request failed. Check your connection and try again.'


class InvalidRequest(CareTrackError):
    """A request body failed client-side validation and was never sent."""
    code = 'invalid_request'
    default_message = 'Invalid request'

    def __init__(self, errors: Any, message: Optional[str] = None):
        self.errors = errors
        super().__init__(message or _first_error(errors) or self.default_message)


class SchemaError(CareTrackError):
    """The backend answered with a payload that does not match the expected shape."""
    code = 'schema_error'
    default_message = 'Unexpected response from server'

    def __init__(self, message: Optional[str] = None, errors: Any = None):
        self.errors = errors
        super().__init__(message)


class ApiError(CareTrackError):
    code = 'api_error'

    def __init__(self, message: Optional[str] = None, status: Optional[int] = None, payload: Any = None):
        self.status = status
        self.payload = payload
        super().__init__(message or (f'HTTP error! status: {status}' if status else None))


class AuthenticationError(ApiError):
    code = 'unauthorized'
    default_message = 'Session expired. Please sign in again.'


class NotFoundError(ApiError):
    code = 'not_found'
    default_message = 'Not found'


def _first_error(errors: Any) -> Optional[str]:
    if isinstance(errors, dict):
        for field, value in errors.items():
            msg = _first_error(value)
            if msg:
                return f'{field}: {msg}' if field != 'non_field_errors' else msg
        return None
    if isinstance(errors, (list, tuple)):
        for value in errors:
            msg = _first_error(value)
            if msg:
                return msg
        return None
    return str(errors) if errors else None


STATUS_BY_CODE = {
    NetworkError.code: 502,
    InvalidRequest.code: 400,
    SchemaError.code: 502,
    AuthenticationError.code: 401,
    NotFoundError.code: 404,
}


def http_status_for(code: Optional[str], upstream: Optional[int] = None) -> int:
    status = STATUS_BY_CODE.get(code)
    if status is not None:
        return status
    # backend 4xx pass through; backend 5xx is a bad gateway from our side
    upstream = upstream or 0
    return upstream if 400 <= upstream < 500 else 502


def api_exception_handler(exc, context):
    if isinstance(exc, CareTrackError):
        status = http_status_for(exc.code, getattr(exc, 'status', None))
        error = {'code': exc.code, 'message': exc.message}
        if isinstance(exc, InvalidRequest):
            error['fields'] = exc.errors
        return Response({'ok': False, 'error': error}, status=status)
    resp = drf_exception_handler(exc, context)
    if resp is None:
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': str(exc)}}, status=500)
    # normalize response
    detail = None
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = str(resp.data)
    return Response({'ok': False, 'error': {'code': 'api_error', 'message': detail}}, status=resp.status_code)
