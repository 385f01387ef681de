from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from caretrack.serializers.base import decamelize_keys
from caretrack.serializers.growth import (
    ChartDataPointSerializer, ChildGrowthDataSerializer, GrowthMeasurementSerializer, PercentilePointSerializer,
)
from caretrack.stores import growth as selectors
from caretrack.stores.base import Outcome
from caretrack.views.common import ok, store_failure, stores_of


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def child_growth_view(request, child_id):
    store = stores_of(request).growth
    if request.method == 'POST':
        measurement = store.add_measurement(child_id, decamelize_keys(request.data))
        return ok(GrowthMeasurementSerializer(measurement).data, status=201)

    store.fetch_growth_data(child_id)
    failed = store_failure(store)
    if failed:
        return failed
    latest = selectors.latest_measurement(store.state)
    data = store.state.growth_data
    return ok(
        ChildGrowthDataSerializer(data).data if data else None,
        found=store.state.outcome != Outcome.NOT_FOUND,
        latest=GrowthMeasurementSerializer(latest).data if latest else None,
    )


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def growth_chart_view(request, child_id):
    store = stores_of(request).growth
    chart_type = request.query_params.get('type', 'weight')
    store.fetch_chart_data(child_id, chart_type)
    failed = store_failure(store)
    if failed:
        return failed
    chart = store.state.chart_data
    if chart is None:
        return ok(None)
    curves = selectors.reference_curves(chart)
    return ok({
        'chartType': chart.chart_type,
        'gender': chart.gender,
        'dataPoints': ChartDataPointSerializer(chart.data_points, many=True).data,
        'referenceData': {name: PercentilePointSerializer(points, many=True).data for name, points in curves.items()},
    })


@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def growth_measurement_view(request, measurement_id):
    store = stores_of(request).growth
    if request.method == 'DELETE':
        store.delete_measurement(measurement_id)
        return ok()
    measurement = store.update_measurement(measurement_id, decamelize_keys(request.data))
    return ok(GrowthMeasurementSerializer(measurement).data)
