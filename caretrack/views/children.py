from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from caretrack.serializers.children import ChildProfileSerializer
from caretrack.serializers.base import decamelize_keys
from caretrack.stores.children import age_display, age_in_months
from caretrack.views.common import ok, store_failure, stores_of


def _render(profile):
    data = ChildProfileSerializer(profile).data
    data['ageInMonths'] = age_in_months(profile.date_of_birth)
    data['ageDisplay'] = age_display(profile.date_of_birth)
    return data


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def children_view(request):
    store = stores_of(request).children
    if request.method == 'POST':
        profile = store.create_child(decamelize_keys(request.data))
        return ok(_render(profile), status=201)
    store.fetch_children()
    failed = store_failure(store)
    if failed:
        return failed
    return ok([_render(p) for p in store.state.profiles], selectedChildId=store.state.selected_child_id)


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def child_detail_view(request, child_id):
    store = stores_of(request).children
    if request.method == 'PATCH':
        return ok(_render(store.update_child(child_id, decamelize_keys(request.data))))
    if request.method == 'DELETE':
        store.delete_child(child_id)
        return ok()
    store.fetch_child(child_id)
    failed = store_failure(store)
    if failed:
        return failed
    profile = next(p for p in store.state.profiles if p.id == child_id)
    return ok(_render(profile))
