from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import Optional

from django.utils import timezone

from caretrack.domain import Appointment
from caretrack.services import appointments as appointment_service
from caretrack.stores.base import BaseStore, StoreState


@dataclass
class AppointmentState(StoreState):
    appointments: list[Appointment] = field(default_factory=list)
    current_child_id: Optional[str] = None


class AppointmentStore(BaseStore):
    storage_name = 'appointment-storage'
    persisted_fields = ('appointments', 'current_child_id')
    state_class = AppointmentState

    def fetch_appointments(self, child_id: str) -> None:
        if self.state.current_child_id != child_id:
            self.state.appointments = []
        self.state.current_child_id = child_id
        with self._action(reraise=False):
            result = appointment_service.get_child_appointments(self.client, child_id)
            self.state.appointments = list(result.appointments)

    def create_appointment(self, child_id: str, data: dict) -> Appointment:
        with self._action():
            appointment = appointment_service.create_appointment(self.client, child_id, data)
            if child_id == self.state.current_child_id:
                self.state.appointments = [*self.state.appointments, appointment]
        return appointment

    def update_appointment(self, appointment_id: str, data: dict) -> Appointment:
        with self._action():
            appointment = appointment_service.update_appointment(self.client, appointment_id, data)
            self._put(appointment)
        return appointment

    def cancel_appointment(self, appointment_id: str) -> Appointment:
        with self._action():
            appointment = appointment_service.cancel_appointment(self.client, appointment_id)
            self._put(appointment)
        return appointment

    def complete_appointment(self, appointment_id: str) -> Appointment:
        with self._action():
            appointment = appointment_service.complete_appointment(self.client, appointment_id)
            self._put(appointment)
        return appointment

    def delete_appointment(self, appointment_id: str) -> None:
        with self._action():
            appointment_service.delete_appointment(self.client, appointment_id)
            self.state.appointments = [a for a in self.state.appointments if a.id != appointment_id]

    def clear_data(self) -> None:
        self.update(appointments=[], current_child_id=None, error=None)

    def _put(self, appointment):
        self.state.appointments = [appointment if a.id == appointment.id else a for a in self.state.appointments]


def upcoming_appointments(state: AppointmentState, now: Optional[datetime.datetime] = None) -> list[Appointment]:
    """Scheduled appointments from ``now`` on, soonest first."""
    now = now or timezone.now()
    upcoming = [a for a in state.appointments
                if a.date_time >= now and a.status == Appointment.STATUS_SCHEDULED]
    return sorted(upcoming, key=lambda a: a.date_time)


def past_appointments(state: AppointmentState, now: Optional[datetime.datetime] = None) -> list[Appointment]:
    """Appointments already held, completed or cancelled, most recent first."""
    now = now or timezone.now()
    closed = (Appointment.STATUS_COMPLETED, Appointment.STATUS_CANCELLED)
    past = [a for a in state.appointments if a.date_time < now or a.status in closed]
    return sorted(past, key=lambda a: a.date_time, reverse=True)


def next_appointment(state: AppointmentState, now: Optional[datetime.datetime] = None) -> Optional[Appointment]:
    upcoming = upcoming_appointments(state, now)
    return upcoming[0] if upcoming else None
