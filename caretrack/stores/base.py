"""
Shared machinery for the client-side stores.

A store owns a state dataclass and exposes command methods that call the
domain services and write the result back into that state.  Every action
follows the same lifecycle: raise the loading flag, clear ``error``, call
the backend, then either replace the data and record ``Outcome.OK`` or keep
the error message and record ``Outcome.ERROR`` / ``Outcome.NOT_FOUND``.
Fetch actions keep the failure on the state; mutating actions re-raise it
after recording.

A subset of each state is persisted through Django's cache framework under
``<namespace>:<storage_name>`` so a store rebuilt for the same owner comes
back with its last known data.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Optional

from django.conf import settings
from django.core.cache import cache as default_cache

from caretrack.exceptions import CareTrackError, NotFoundError

logger = logging.getLogger(__name__)


class Outcome:
    OK = 'ok'
    NOT_FOUND = 'not_found'
    ERROR = 'error'


@dataclass
class StoreState:
    is_loading: bool = False
    error: Optional[str] = None
    error_code: Optional[str] = None
    error_status: Optional[int] = None
    outcome: Optional[str] = None


class BaseStore:
    storage_name = ''
    persisted_fields: tuple = ()
    state_class = StoreState

    def __init__(self, client=None, *, namespace: Optional[str] = None, cache=None):
        self.client = client
        self.namespace = namespace
        self.cache = cache or default_cache
        self.state = self.state_class()
        self.restore()

    # -- persistence -------------------------------------------------------

    @property
    def storage_key(self) -> str:
        return f'{self.namespace}:{self.storage_name}' if self.namespace else self.storage_name

    def snapshot(self) -> dict:
        return {name: getattr(self.state, name) for name in self.persisted_fields}

    def persist(self) -> None:
        if not self.storage_name:
            return
        self.cache.set(self.storage_key, self.snapshot(), settings.CARETRACK_STORAGE_TIMEOUT)

    def restore(self) -> None:
        if not self.storage_name:
            return
        saved = self.cache.get(self.storage_key)
        if not saved:
            return
        for name in self.persisted_fields:
            if name in saved:
                setattr(self.state, name, saved[name])

    def clear_storage(self) -> None:
        self.cache.delete(self.storage_key)

    # -- state helpers -----------------------------------------------------

    def update(self, **changes) -> None:
        for name, value in changes.items():
            setattr(self.state, name, value)
        self.persist()

    def set_loading(self, loading: bool) -> None:
        self.state.is_loading = loading

    def set_error(self, error: Optional[str]) -> None:
        self.state.error = error
        if error:
            self.state.outcome = Outcome.ERROR

    def _record_failure(self, exc: CareTrackError) -> None:
        self.state.error = exc.message
        self.state.error_code = exc.code
        self.state.error_status = getattr(exc, 'status', None)
        self.state.outcome = Outcome.NOT_FOUND if isinstance(exc, NotFoundError) else Outcome.ERROR
        logger.warning('%s action failed (%s): %s', self.storage_name or type(self).__name__, exc.code, exc.message)

    @contextmanager
    def _action(self, *, reraise: bool = True, loading: str = 'is_loading', on_not_found: Optional[dict] = None):
        """Run one store action.

        ``on_not_found``: state changes applied when the backend answers 404;
        the failure is then recorded as ``Outcome.NOT_FOUND`` without an error
        message and is never re-raised.
        """
        setattr(self.state, loading, True)
        self.state.error = None
        self.state.error_code = None
        self.state.error_status = None
        try:
            yield
        except NotFoundError as exc:
            setattr(self.state, loading, False)
            if on_not_found is None:
                self._record_failure(exc)
                self.persist()
                if reraise:
                    raise
            else:
                logger.info('%s: nothing found (%s)', self.storage_name, exc.message)
                self.update(error=None, outcome=Outcome.NOT_FOUND, **on_not_found)
        except CareTrackError as exc:
            setattr(self.state, loading, False)
            self._record_failure(exc)
            self.persist()
            if reraise:
                raise
        except Exception:
            setattr(self.state, loading, False)
            raise
        else:
            setattr(self.state, loading, False)
            self.state.outcome = Outcome.OK
            self.persist()
