from typing import Optional

from caretrack.client import ApiClient, unwrap
from caretrack.domain import CHART_TYPES, ChartData, ChildGrowthData, GrowthMeasurement
from caretrack.exceptions import InvalidRequest
from caretrack.serializers.base import build_payload, parse
from caretrack.serializers.growth import (
    ChartDataSerializer, ChildGrowthDataSerializer, GrowthMeasurementCreateSerializer, GrowthMeasurementSerializer,
    GrowthMeasurementUpdateSerializer,
)


def get_child_measurements(client: ApiClient, child_id: str) -> ChildGrowthData:
    return parse(ChildGrowthDataSerializer, unwrap(client.get(f'/growth/child/{child_id}')))


def get_chart_data(client: ApiClient, child_id: str, chart_type: str = 'weight') -> ChartData:
    if chart_type not in CHART_TYPES:
        raise InvalidRequest({'type': [f'"{chart_type}" is not a valid choice.']})
    payload = unwrap(client.get(f'/growth/child/{child_id}/chart', params={'type': chart_type}))
    return parse(ChartDataSerializer, payload)


def add_measurement(client: ApiClient, child_id: str, data: dict) -> GrowthMeasurement:
    body = build_payload(GrowthMeasurementCreateSerializer, data)
    return parse(GrowthMeasurementSerializer, unwrap(client.post(f'/growth/child/{child_id}', body)))


def update_measurement(client: ApiClient, measurement_id: str, data: Optional[dict]) -> GrowthMeasurement:
    body = build_payload(GrowthMeasurementUpdateSerializer, data, partial=True)
    return parse(GrowthMeasurementSerializer, unwrap(client.patch(f'/growth/{measurement_id}', body)))


def delete_measurement(client: ApiClient, measurement_id: str) -> None:
    client.delete(f'/growth/{measurement_id}')
