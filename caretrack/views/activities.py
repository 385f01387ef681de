from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from caretrack.domain import Activity
from caretrack.serializers.activities import ActivitySerializer
from caretrack.serializers.base import decamelize_keys
from caretrack.stores import activities as selectors
from caretrack.views.common import ok, store_failure, stores_of


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def child_activities_view(request, child_id):
    store = stores_of(request).activities
    if request.method == 'POST':
        activity = store.create_activity(child_id, decamelize_keys(request.data))
        return ok(ActivitySerializer(activity).data, status=201)
    store.fetch_activities(child_id)
    failed = store_failure(store)
    if failed:
        return failed
    activity_type = request.query_params.get('type')
    if activity_type in Activity.TYPES:
        items = selectors.activities_by_type(store.state, activity_type)
    else:
        try:
            limit = int(request.query_params.get('limit', 4))
        except ValueError:
            limit = 4
        items = selectors.recent_activities(store.state, limit)
    return ok(ActivitySerializer(items, many=True).data)


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def activity_detail_view(request, activity_id):
    store = stores_of(request).activities
    if request.method == 'DELETE':
        store.delete_activity(activity_id)
        return ok()
    activity = store.update_activity(activity_id, decamelize_keys(request.data))
    return ok(ActivitySerializer(activity).data)
