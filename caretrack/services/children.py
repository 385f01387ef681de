from typing import Optional

from caretrack.client import ApiClient, unwrap
from caretrack.domain import ChildProfile
from caretrack.serializers.base import build_payload, parse
from caretrack.serializers.children import ChildCreateSerializer, ChildProfileSerializer


def get_children(client: ApiClient) -> list[ChildProfile]:
    return parse(ChildProfileSerializer, unwrap(client.get('/children')), many=True)


def get_child(client: ApiClient, child_id: str) -> ChildProfile:
    return parse(ChildProfileSerializer, unwrap(client.get(f'/children/{child_id}')))


def create_child(client: ApiClient, data: dict) -> ChildProfile:
    body = build_payload(ChildCreateSerializer, data)
    return parse(ChildProfileSerializer, unwrap(client.post('/children', body)))


def update_child(client: ApiClient, child_id: str, data: Optional[dict]) -> ChildProfile:
    # PATCH semantics: only the supplied fields are validated and sent
    body = build_payload(ChildCreateSerializer, data, partial=True)
    return parse(ChildProfileSerializer, unwrap(client.patch(f'/children/{child_id}', body)))


def delete_child(client: ApiClient, child_id: str) -> None:
    client.delete(f'/children/{child_id}')
