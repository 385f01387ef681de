from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated

from caretrack.serializers.base import decamelize_keys
from caretrack.serializers.vaccines import (
    ChildSummarySerializer, VaccinationRecordSerializer, VaccinationStatisticsSerializer, VaccineSerializer,
)
from caretrack.stores import vaccines as selectors
from caretrack.stores.registry import build_stores
from caretrack.views.common import ok, store_failure, stores_of


@api_view(['GET'])
@permission_classes([AllowAny])
def vaccine_catalog_view(request):
    """Shared vaccine catalogue; served from storage when warm."""
    store = build_stores().vaccines
    if not store.state.vaccines or request.query_params.get('refresh') == '1':
        store.fetch_vaccines()
        failed = store_failure(store)
        if failed:
            return failed
    return ok(VaccineSerializer(store.state.vaccines, many=True).data)


def _render_schedule(state):
    data = state.vaccination_data
    stats = selectors.statistics(state)
    nxt = selectors.next_vaccine(state)
    return {
        'child': ChildSummarySerializer(data.child).data,
        'groups': [
            {'ageGroup': g.age_group, 'records': VaccinationRecordSerializer(g.records, many=True).data}
            for g in selectors.group_by_age_group(state)
        ],
        'statistics': VaccinationStatisticsSerializer(stats).data if stats else None,
        'completionPercentage': selectors.completion_percentage(state),
        'nextVaccine': VaccinationRecordSerializer(nxt).data if nxt else None,
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def child_vaccines_view(request, child_id):
    store = stores_of(request).vaccines
    store.fetch_child_vaccination_records(child_id)
    failed = store_failure(store)
    if failed:
        return failed
    return ok(_render_schedule(store.state))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def administer_vaccine_view(request, child_id, vaccine_id):
    store = stores_of(request).vaccines
    store.administer_vaccine(child_id, vaccine_id, decamelize_keys(request.data))
    return ok(_render_schedule(store.state))
