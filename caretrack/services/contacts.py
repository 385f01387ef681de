from typing import Optional

from caretrack.client import ApiClient, unwrap
from caretrack.domain import EmergencyContact
from caretrack.serializers.base import build_payload, parse
from caretrack.serializers.contacts import (
    EmergencyContactCreateSerializer, EmergencyContactSerializer, EmergencyContactUpdateSerializer,
)


def get_contacts(client: ApiClient) -> list[EmergencyContact]:
    return parse(EmergencyContactSerializer, unwrap(client.get('/emergency-contacts')), many=True)


def get_contact(client: ApiClient, contact_id: str) -> EmergencyContact:
    return parse(EmergencyContactSerializer, unwrap(client.get(f'/emergency-contacts/{contact_id}')))


def create_contact(client: ApiClient, data: dict) -> EmergencyContact:
    body = build_payload(EmergencyContactCreateSerializer, data)
    return parse(EmergencyContactSerializer, unwrap(client.post('/emergency-contacts', body)))


def update_contact(client: ApiClient, contact_id: str, data: Optional[dict]) -> EmergencyContact:
    body = build_payload(EmergencyContactUpdateSerializer, data, partial=True)
    return parse(EmergencyContactSerializer, unwrap(client.put(f'/emergency-contacts/{contact_id}', body)))


def delete_contact(client: ApiClient, contact_id: str) -> None:
    client.delete(f'/emergency-contacts/{contact_id}')


def set_primary_contact(client: ApiClient, contact_id: str) -> EmergencyContact:
    # the backend clears the flag on every other contact of the account
    return parse(EmergencyContactSerializer, unwrap(client.put(f'/emergency-contacts/{contact_id}/primary')))
