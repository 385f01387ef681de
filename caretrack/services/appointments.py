"""
Appointment scheduling.

These routes answer with bare objects rather than the ``{success, data}``
envelope; ``unwrap`` passes them through either way.
"""
from typing import Optional

from caretrack.client import ApiClient, unwrap
from caretrack.domain import Appointment, ChildAppointments
from caretrack.serializers.appointments import (
    AppointmentCreateSerializer, AppointmentSerializer, AppointmentUpdateSerializer, ChildAppointmentsSerializer,
)
from caretrack.serializers.base import build_payload, parse


def get_child_appointments(client: ApiClient, child_id: str) -> ChildAppointments:
    return parse(ChildAppointmentsSerializer, unwrap(client.get(f'/appointments/child/{child_id}')))


def get_upcoming_appointments(client: ApiClient) -> list[Appointment]:
    return parse(AppointmentSerializer, unwrap(client.get('/appointments/upcoming')), many=True)


def get_appointment(client: ApiClient, appointment_id: str) -> Appointment:
    return parse(AppointmentSerializer, unwrap(client.get(f'/appointments/{appointment_id}')))


def create_appointment(client: ApiClient, child_id: str, data: dict) -> Appointment:
    body = build_payload(AppointmentCreateSerializer, data)
    return parse(AppointmentSerializer, unwrap(client.post(f'/appointments/child/{child_id}', body)))


def update_appointment(client: ApiClient, appointment_id: str, data: Optional[dict]) -> Appointment:
    body = build_payload(AppointmentUpdateSerializer, data, partial=True)
    return parse(AppointmentSerializer, unwrap(client.patch(f'/appointments/{appointment_id}', body)))


def cancel_appointment(client: ApiClient, appointment_id: str) -> Appointment:
    return parse(AppointmentSerializer, unwrap(client.patch(f'/appointments/{appointment_id}/cancel', {})))


def complete_appointment(client: ApiClient, appointment_id: str) -> Appointment:
    return parse(AppointmentSerializer, unwrap(client.patch(f'/appointments/{appointment_id}/complete', {})))


def delete_appointment(client: ApiClient, appointment_id: str) -> None:
    client.delete(f'/appointments/{appointment_id}')
