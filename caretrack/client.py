"""
HTTP client for the health record backend.

Every service module talks to the backend through :class:`ApiClient`.
The client attaches the caregiver's bearer token, turns transport and
HTTP failures into the typed errors of :mod:`caretrack.exceptions`, and
makes one token refresh attempt when an authenticated call answers 401.
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

import requests
from django.conf import settings

from caretrack.exceptions import ApiError, AuthenticationError, NetworkError, NotFoundError, SchemaError

logger = logging.getLogger(__name__)

REFRESH_PATH = '/auth/refresh'


class Credentials(Protocol):
    access_token: Optional[str]
    refresh_token: Optional[str]

    def set_tokens(self, access_token: str, refresh_token: str) -> None: ...

    def clear_credentials(self) -> None: ...


def unwrap(payload: Any) -> Any:
    """Return ``data`` from a ``{success, data}`` envelope.

    Some backend routes answer with the bare object; those are passed
    through unchanged.
    """
    if isinstance(payload, dict) and 'success' in payload and 'data' in payload:
        if payload.get('success') is False:
            raise ApiError(payload.get('message') or 'Request was not successful', payload=payload)
        return payload['data']
    return payload


class ApiClient:
    def __init__(self, base_url: Optional[str] = None, *, timeout: Optional[float] = None,
                 credentials: Optional[Credentials] = None, session: Optional[requests.Session] = None):
        self.base_url = (base_url or settings.CARETRACK_API_BASE_URL).rstrip('/')
        self.timeout = timeout if timeout is not None else settings.CARETRACK_API_TIMEOUT
        self.credentials = credentials
        self.session = session or requests.Session()

    def request(self, method: str, path: str, body: Any = None, *, requires_auth: bool = True,
                params: Optional[dict] = None) -> Any:
        headers = {'Content-Type': 'application/json', 'Accept': 'application/json'}
        if requires_auth:
            token = self._access_token()
            if token:
                headers['Authorization'] = f'Bearer {token}'

        resp = self._send(method, path, body, headers, params)

        if resp.status_code == 401 and requires_auth:
            if self._try_refresh():
                headers['Authorization'] = f'Bearer {self._access_token()}'
                resp = self._send(method, path, body, headers, params)
            if resp.status_code == 401:
                if self.credentials is not None:
                    self.credentials.clear_credentials()
                raise AuthenticationError()

        return self._handle_response(resp)

    def get(self, path: str, *, requires_auth: bool = True, params: Optional[dict] = None) -> Any:
        return self.request('GET', path, requires_auth=requires_auth, params=params)

    def post(self, path: str, body: Any = None, *, requires_auth: bool = True) -> Any:
        return self.request('POST', path, body, requires_auth=requires_auth)

    def put(self, path: str, body: Any = None, *, requires_auth: bool = True) -> Any:
        return self.request('PUT', path, body, requires_auth=requires_auth)

    def patch(self, path: str, body: Any = None, *, requires_auth: bool = True) -> Any:
        return self.request('PATCH', path, body, requires_auth=requires_auth)

    def delete(self, path: str, *, requires_auth: bool = True) -> Any:
        return self.request('DELETE', path, requires_auth=requires_auth)

    # -- internals ---------------------------------------------------------

    def _access_token(self) -> Optional[str]:
        return getattr(self.credentials, 'access_token', None)

    def _send(self, method, path, body, headers, params) -> requests.Response:
        url = f'{self.base_url}{path}'
        logger.debug('%s %s', method, url)
        try:
            return self.session.request(
                method, url,
                json=body,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.Timeout as exc:
            logger.warning('%s %s timed out after %ss', method, url, self.timeout)
            raise NetworkError('Request timed out. Please try again.') from exc
        except requests.RequestException as exc:
            logger.warning('%s %s failed: %s', method, url, exc)
            raise NetworkError() from exc

    def _try_refresh(self) -> bool:
        refresh_token = getattr(self.credentials, 'refresh_token', None)
        if not refresh_token:
            return False
        headers = {'Content-Type': 'application/json', 'Accept': 'application/json'}
        try:
            resp = self._send('POST', REFRESH_PATH, {'refreshToken': refresh_token}, headers, None)
            if not resp.ok:
                return False
            data = resp.json()
        except (NetworkError, ValueError):
            return False
        tokens = data.get('data') if isinstance(data, dict) and data.get('success') else None
        if not tokens or not tokens.get('accessToken'):
            return False
        self.credentials.set_tokens(tokens['accessToken'], tokens.get('refreshToken') or refresh_token)
        logger.info('access token refreshed')
        return True

    def _handle_response(self, resp: requests.Response) -> Any:
        if resp.status_code == 204 or not resp.content:
            if resp.ok:
                return None
            data = None
        else:
            try:
                data = resp.json()
            except ValueError:
                if resp.ok:
                    raise SchemaError('Server returned a non-JSON response')
                data = None

        if resp.ok:
            return data

        message = None
        if isinstance(data, dict):
            message = data.get('message') or data.get('error')
            if not isinstance(message, str):
                message = None
        logger.warning('backend answered %s for %s: %s', resp.status_code, resp.url, message)
        if resp.status_code == 401:
            raise AuthenticationError(message, status=401, payload=data)
        if resp.status_code == 404:
            raise NotFoundError(message, status=404, payload=data)
        raise ApiError(message, status=resp.status_code, payload=data)
