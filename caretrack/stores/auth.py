"""
Caregiver session state.

``AuthStore`` is also the credentials object handed to :class:`ApiClient`:
the client reads ``access_token``/``refresh_token`` from it and writes the
rotated pair back through ``set_tokens`` after a successful refresh.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from caretrack.domain import AppUser
from caretrack.exceptions import CareTrackError
from caretrack.services import auth as auth_service
from caretrack.stores.base import BaseStore, Outcome, StoreState

logger = logging.getLogger(__name__)

STATUS_IDLE = 'idle'
STATUS_LOADING = 'loading'
STATUS_AUTHENTICATED = 'authenticated'
STATUS_UNAUTHENTICATED = 'unauthenticated'
STATUS_ERROR = 'error'


@dataclass
class AuthState(StoreState):
    user: Optional[AppUser] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    identity_token: Optional[str] = None
    status: str = STATUS_IDLE


class AuthStore(BaseStore):
    storage_name = 'auth-storage'
    persisted_fields = ('user', 'access_token', 'refresh_token', 'identity_token', 'status')
    state_class = AuthState

    def snapshot(self) -> dict:
        data = super().snapshot()
        # an interrupted login must not come back as "loading"
        if data['status'] != STATUS_AUTHENTICATED:
            data['status'] = STATUS_UNAUTHENTICATED
        return data

    # credentials protocol used by ApiClient

    @property
    def access_token(self) -> Optional[str]:
        return self.state.access_token

    @property
    def refresh_token(self) -> Optional[str]:
        return self.state.refresh_token

    def set_tokens(self, access_token: str, refresh_token: str) -> None:
        self.update(access_token=access_token, refresh_token=refresh_token)

    def clear_credentials(self) -> None:
        self.update(user=None, access_token=None, refresh_token=None, identity_token=None,
                    status=STATUS_UNAUTHENTICATED, error=None)

    # actions

    def login_with_identity_token(self, identity_token: str) -> AppUser:
        self.update(status=STATUS_LOADING)
        try:
            with self._action():
                session = auth_service.validate_identity_token(self.client, identity_token)
                self.state.access_token = session.access_token
                self.state.refresh_token = session.refresh_token
                self.state.identity_token = identity_token
                self.state.user = session.user
                self.state.status = STATUS_AUTHENTICATED
        except CareTrackError:
            self.update(status=STATUS_ERROR)
            raise
        return self.state.user

    def refresh_access_token(self) -> bool:
        if not self.state.refresh_token:
            return False
        try:
            access, refresh = auth_service.refresh_tokens(self.client, self.state.refresh_token)
        except CareTrackError as exc:
            logger.info('token refresh rejected: %s', exc.message)
            self.clear_credentials()
            return False
        self.set_tokens(access, refresh)
        return True

    def fetch_profile(self) -> Optional[AppUser]:
        # a failed profile fetch never ends the session
        try:
            user = auth_service.get_profile(self.client)
        except CareTrackError as exc:
            logger.warning('failed to fetch profile: %s', exc.message)
            return None
        self.update(user=user, outcome=Outcome.OK)
        return user

    def logout(self, everywhere: bool = False) -> None:
        """End the session; ``everywhere`` also revokes the refresh tokens of every other device."""
        try:
            if everywhere and self.state.access_token:
                auth_service.logout_all(self.client)
            elif self.state.refresh_token:
                auth_service.logout(self.client, self.state.refresh_token)
        except CareTrackError as exc:
            logger.info('backend logout failed, clearing local session anyway: %s', exc.message)
        self.clear_credentials()

    def set_user(self, user: Optional[AppUser]) -> None:
        self.update(user=user)

    def set_status(self, status: str) -> None:
        self.update(status=status)

    def set_error(self, error: Optional[str]) -> None:
        super().set_error(error)
        if error:
            self.state.status = STATUS_ERROR
        self.persist()


def is_authenticated(state: AuthState) -> bool:
    return state.status == STATUS_AUTHENTICATED and bool(state.access_token)
