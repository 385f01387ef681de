"""
Backend session endpoints.

The identity provider (Auth0) is only a source of a signed token; the
backend validates it and issues its own access/refresh pair.
"""
from caretrack.client import REFRESH_PATH, ApiClient, unwrap
from caretrack.domain import AppUser, AuthSession
from caretrack.exceptions import InvalidRequest
from caretrack.serializers.auth import AppUserSerializer, AuthSessionSerializer, TokenPairSerializer
from caretrack.serializers.base import parse


def validate_identity_token(client: ApiClient, identity_token: str) -> AuthSession:
    if not identity_token:
        raise InvalidRequest({'auth0Token': ['This field is required.']})
    payload = unwrap(client.post('/auth/auth0', {'auth0Token': identity_token}, requires_auth=False))
    return parse(AuthSessionSerializer, payload)


def refresh_tokens(client: ApiClient, refresh_token: str) -> tuple[str, str]:
    if not refresh_token:
        raise InvalidRequest({'refreshToken': ['This field is required.']})
    payload = unwrap(client.post(REFRESH_PATH, {'refreshToken': refresh_token}, requires_auth=False))
    return parse(TokenPairSerializer, payload)


def get_profile(client: ApiClient) -> AppUser:
    payload = unwrap(client.get('/auth/me'))
    # /auth/me nests the user one level down
    if isinstance(payload, dict) and isinstance(payload.get('user'), dict):
        payload = payload['user']
    return parse(AppUserSerializer, payload)


def logout(client: ApiClient, refresh_token: str) -> None:
    client.post('/auth/logout', {'refreshToken': refresh_token})


def logout_all(client: ApiClient) -> None:
    client.post('/auth/logout-all')
