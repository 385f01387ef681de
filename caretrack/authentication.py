"""
Bearer authentication for the console.

The console keeps no accounts of its own: the caller presents the backend
access token it got from ``/api/console/auth/login`` (or from the mobile
app).  That token keys the caller's stored session; store calls use the
latest backend token held there, which differs from it once a refresh has
rotated the pair.  The token is not checked here; a stale one surfaces as a
401 from the backend on first use.
"""
from __future__ import annotations

from rest_framework import authentication, exceptions


class CaregiverUser:
    """Request user wrapping the stores of one backend session."""
    is_authenticated = True
    is_anonymous = False

    def __init__(self, stores):
        self.stores = stores

    @property
    def profile(self):
        return self.stores.auth.state.user

    def __str__(self):
        user = self.profile
        return user.email if user else 'caregiver'


class BackendTokenAuthentication(authentication.BaseAuthentication):
    keyword = 'Bearer'

    def authenticate(self, request):
        auth = authentication.get_authorization_header(request).split()
        if not auth or auth[0].lower() != self.keyword.lower().encode():
            return None
        if len(auth) != 2:
            raise exceptions.AuthenticationFailed('Invalid bearer header.')
        try:
            token = auth[1].decode()
        except UnicodeError:
            raise exceptions.AuthenticationFailed('Invalid bearer token.')

        # DRF resolves this class while rest_framework.views is still loading
        from caretrack.stores.registry import build_stores, namespace_for_token

        stores = build_stores(namespace_for_token(token))
        if stores.auth.access_token is None:
            # the presented token only keys the session; a refreshed token stays stored under it
            stores.auth.set_tokens(token, stores.auth.refresh_token)
        return CaregiverUser(stores), token

    def authenticate_header(self, request):
        return self.keyword
