from typing import Optional

from caretrack.client import ApiClient, unwrap
from caretrack.domain import Activity
from caretrack.serializers.activities import ActivityCreateSerializer, ActivitySerializer, ActivityUpdateSerializer
from caretrack.serializers.base import build_payload, parse


def get_child_activities(client: ApiClient, child_id: str) -> list[Activity]:
    return parse(ActivitySerializer, unwrap(client.get(f'/activity/child/{child_id}')), many=True)


def get_activity(client: ApiClient, activity_id: str) -> Activity:
    return parse(ActivitySerializer, unwrap(client.get(f'/activity/{activity_id}')))


def create_activity(client: ApiClient, child_id: str, data: dict) -> Activity:
    body = build_payload(ActivityCreateSerializer, data)
    return parse(ActivitySerializer, unwrap(client.post(f'/activity/child/{child_id}', body)))


def update_activity(client: ApiClient, activity_id: str, data: Optional[dict]) -> Activity:
    body = build_payload(ActivityUpdateSerializer, data, partial=True)
    return parse(ActivitySerializer, unwrap(client.put(f'/activity/{activity_id}', body)))


def delete_activity(client: ApiClient, activity_id: str) -> None:
    client.delete(f'/activity/{activity_id}')
