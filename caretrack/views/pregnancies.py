from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from caretrack.serializers.base import decamelize_keys
from caretrack.serializers.children import ChildProfileSerializer
from caretrack.serializers.pregnancies import PregnancyCheckupSerializer, PregnancyProfileSerializer
from caretrack.stores import pregnancies as selectors
from caretrack.views.common import ok, store_failure, stores_of


def _render(pregnancy):
    data = PregnancyProfileSerializer(pregnancy).data
    data['weekDisplay'] = selectors.week_display(pregnancy.expected_delivery_date)
    data['trimesterLabel'] = selectors.trimester_label(pregnancy.trimester)
    data['daysUntilDelivery'] = selectors.days_until_delivery(pregnancy.expected_delivery_date)
    return data


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def pregnancies_view(request):
    store = stores_of(request).pregnancies
    if request.method == 'POST':
        return ok(_render(store.create_pregnancy(decamelize_keys(request.data))), status=201)
    if request.query_params.get('active') == '1':
        store.fetch_active_pregnancies()
    else:
        store.fetch_pregnancies()
    failed = store_failure(store)
    if failed:
        return failed
    return ok([_render(p) for p in store.state.pregnancies],
              selectedPregnancyId=store.state.selected_pregnancy_id)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def pregnancy_detail_view(request, pregnancy_id):
    store = stores_of(request).pregnancies
    if request.method == 'PUT':
        return ok(_render(store.update_pregnancy(pregnancy_id, decamelize_keys(request.data))))
    if request.method == 'DELETE':
        store.delete_pregnancy(pregnancy_id)
        return ok()
    store.fetch_pregnancy(pregnancy_id)
    failed = store_failure(store)
    if failed:
        return failed
    return ok(_render(store.state.current_pregnancy))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def convert_to_child_view(request, pregnancy_id):
    store = stores_of(request).pregnancies
    pregnancy, child = store.convert_to_child(pregnancy_id, decamelize_keys(request.data))
    return ok({'pregnancy': _render(pregnancy), 'child': ChildProfileSerializer(child).data}, status=201)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def pregnancy_checkups_view(request, pregnancy_id):
    store = stores_of(request).pregnancies
    if request.method == 'POST':
        checkup = store.add_checkup(pregnancy_id, decamelize_keys(request.data))
        return ok(PregnancyCheckupSerializer(checkup).data, status=201)
    checkups = store.fetch_checkups(pregnancy_id)
    return ok(PregnancyCheckupSerializer(checkups, many=True).data)
