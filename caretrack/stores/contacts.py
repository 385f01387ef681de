from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from caretrack.domain import EmergencyContact
from caretrack.services import contacts as contact_service
from caretrack.stores.base import BaseStore, StoreState


@dataclass
class EmergencyContactState(StoreState):
    contacts: list[EmergencyContact] = field(default_factory=list)


class EmergencyContactStore(BaseStore):
    storage_name = 'emergency-contacts-storage'
    persisted_fields = ('contacts',)
    state_class = EmergencyContactState

    def fetch_contacts(self) -> None:
        with self._action(reraise=False):
            self.state.contacts = contact_service.get_contacts(self.client)

    def create_contact(self, data: dict) -> EmergencyContact:
        with self._action():
            contact = contact_service.create_contact(self.client, data)
            contacts = self.state.contacts
            if contact.is_primary:
                contacts = [replace(c, is_primary=False) for c in contacts]
            self.state.contacts = [*contacts, contact]
        return contact

    def update_contact(self, contact_id: str, data: dict) -> EmergencyContact:
        with self._action():
            contact = contact_service.update_contact(self.client, contact_id, data)
            contacts = self.state.contacts
            if contact.is_primary:
                contacts = [replace(c, is_primary=False) for c in contacts]
            self.state.contacts = [contact if c.id == contact_id else c for c in contacts]
        return contact

    def delete_contact(self, contact_id: str) -> None:
        with self._action():
            contact_service.delete_contact(self.client, contact_id)
            self.state.contacts = [c for c in self.state.contacts if c.id != contact_id]

    def set_primary_contact(self, contact_id: str) -> None:
        with self._action():
            contact_service.set_primary_contact(self.client, contact_id)
            self.state.contacts = [replace(c, is_primary=(c.id == contact_id)) for c in self.state.contacts]

    def clear_data(self) -> None:
        self.update(contacts=[], error=None)


def primary_contact(state: EmergencyContactState) -> Optional[EmergencyContact]:
    return next((c for c in state.contacts if c.is_primary), None)


def user_contacts(state: EmergencyContactState) -> list[EmergencyContact]:
    return [c for c in state.contacts if not c.is_default]


def default_contacts(state: EmergencyContactState) -> list[EmergencyContact]:
    return [c for c in state.contacts if c.is_default]
