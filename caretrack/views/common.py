"""Response helpers shared by the console views."""
from rest_framework.response import Response

from caretrack.exceptions import http_status_for
from caretrack.stores.base import Outcome


def ok(data=None, status=200, **extra):
    payload = {'ok': True, 'data': data}
    payload.update(extra)
    return Response(payload, status=status)


def store_failure(store):
    """Error response for a fetch action that recorded its failure on the store, else ``None``."""
    state = store.state
    if state.outcome == Outcome.OK or not state.error:
        return None
    status = http_status_for(state.error_code, state.error_status)
    return Response({'ok': False, 'error': {'code': state.error_code or 'api_error', 'message': state.error}},
                    status=status)


def stores_of(request):
    return request.user.stores
