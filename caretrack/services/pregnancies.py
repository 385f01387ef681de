"""Pregnancy profiles and the antenatal readings attached to them."""
from typing import Optional

from caretrack.client import ApiClient, unwrap
from caretrack.domain import ChildProfile, PregnancyCheckup, PregnancyMeasurement, PregnancyProfile
from caretrack.serializers.base import build_payload, parse
from caretrack.serializers.pregnancies import (
    CheckupCreateSerializer, ConvertedPregnancySerializer, ConvertToChildSerializer, MeasurementCreateSerializer,
    PregnancyCheckupSerializer, PregnancyCreateSerializer, PregnancyMeasurementSerializer, PregnancyProfileSerializer,
    PregnancyUpdateSerializer,
)


def get_pregnancies(client: ApiClient) -> list[PregnancyProfile]:
    return parse(PregnancyProfileSerializer, unwrap(client.get('/pregnancies')), many=True)


def get_active_pregnancies(client: ApiClient) -> list[PregnancyProfile]:
    return parse(PregnancyProfileSerializer, unwrap(client.get('/pregnancies/active')), many=True)


def get_pregnancy(client: ApiClient, pregnancy_id: str) -> PregnancyProfile:
    return parse(PregnancyProfileSerializer, unwrap(client.get(f'/pregnancies/{pregnancy_id}')))


def create_pregnancy(client: ApiClient, data: dict) -> PregnancyProfile:
    body = build_payload(PregnancyCreateSerializer, data)
    return parse(PregnancyProfileSerializer, unwrap(client.post('/pregnancies', body)))


def update_pregnancy(client: ApiClient, pregnancy_id: str, data: Optional[dict]) -> PregnancyProfile:
    body = build_payload(PregnancyUpdateSerializer, data, partial=True)
    return parse(PregnancyProfileSerializer, unwrap(client.put(f'/pregnancies/{pregnancy_id}', body)))


def delete_pregnancy(client: ApiClient, pregnancy_id: str) -> None:
    client.delete(f'/pregnancies/{pregnancy_id}')


def convert_to_child(client: ApiClient, pregnancy_id: str, data: dict) -> tuple[PregnancyProfile, ChildProfile]:
    """Record the birth: the backend marks the pregnancy converted and creates the child profile.

    Returns ``(pregnancy, child)``.
    """
    body = build_payload(ConvertToChildSerializer, data)
    payload = unwrap(client.post(f'/pregnancies/{pregnancy_id}/convert-to-child', body))
    return parse(ConvertedPregnancySerializer, payload)


def add_checkup(client: ApiClient, pregnancy_id: str, data: dict) -> PregnancyCheckup:
    body = build_payload(CheckupCreateSerializer, data)
    return parse(PregnancyCheckupSerializer, unwrap(client.post(f'/pregnancies/{pregnancy_id}/checkups', body)))


def get_checkups(client: ApiClient, pregnancy_id: str) -> list[PregnancyCheckup]:
    return parse(PregnancyCheckupSerializer, unwrap(client.get(f'/pregnancies/{pregnancy_id}/checkups')), many=True)


def add_measurement(client: ApiClient, pregnancy_id: str, data: dict) -> PregnancyMeasurement:
    body = build_payload(MeasurementCreateSerializer, data)
    payload = unwrap(client.post(f'/pregnancies/{pregnancy_id}/measurements', body))
    return parse(PregnancyMeasurementSerializer, payload)


def get_measurements(client: ApiClient, pregnancy_id: str) -> list[PregnancyMeasurement]:
    payload = unwrap(client.get(f'/pregnancies/{pregnancy_id}/measurements'))
    return parse(PregnancyMeasurementSerializer, payload, many=True)
