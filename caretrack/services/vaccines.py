"""
Vaccine catalogue and per-child vaccination schedule.

The catalogue is public reference data and is fetched without a bearer
token.  Statuses (due, overdue, ...) are computed by the backend and are
never recomputed here.
"""
from typing import Optional

from caretrack.client import ApiClient, unwrap
from caretrack.domain import ChildVaccinationData, VaccinationRecord, Vaccine, VaccineAgeGroup
from caretrack.serializers.base import build_payload, parse
from caretrack.serializers.vaccines import (
    AdministerVaccineSerializer, ChildVaccinationDataSerializer, VaccinationRecordSerializer,
    VaccinationRecordUpdateSerializer, VaccineAgeGroupSerializer, VaccineSerializer,
)


def get_all_vaccines(client: ApiClient) -> list[Vaccine]:
    return parse(VaccineSerializer, unwrap(client.get('/vaccines', requires_auth=False)), many=True)


def get_vaccines_by_age_group(client: ApiClient) -> list[VaccineAgeGroup]:
    payload = unwrap(client.get('/vaccines/by-age-group', requires_auth=False))
    return parse(VaccineAgeGroupSerializer, payload, many=True)


def get_child_vaccination_records(client: ApiClient, child_id: str) -> ChildVaccinationData:
    return parse(ChildVaccinationDataSerializer, unwrap(client.get(f'/vaccines/child/{child_id}')))


def administer_vaccine(client: ApiClient, child_id: str, vaccine_id: str,
                       data: Optional[dict] = None) -> VaccinationRecord:
    body = build_payload(AdministerVaccineSerializer, data)
    payload = unwrap(client.post(f'/vaccines/child/{child_id}/administer/{vaccine_id}', body))
    return parse(VaccinationRecordSerializer, payload)


def update_vaccination_record(client: ApiClient, record_id: str, data: Optional[dict]) -> VaccinationRecord:
    body = build_payload(VaccinationRecordUpdateSerializer, data, partial=True)
    return parse(VaccinationRecordSerializer, unwrap(client.patch(f'/vaccines/records/{record_id}', body)))
