"""
Wiring of one caregiver's client and stores.

The auth store doubles as the client's credentials object, so it is built
first and handed its client afterwards.
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Optional

from caretrack.client import ApiClient
from caretrack.stores.activities import ActivityStore
from caretrack.stores.appointments import AppointmentStore
from caretrack.stores.auth import AuthStore
from caretrack.stores.children import ChildStore
from caretrack.stores.contacts import EmergencyContactStore
from caretrack.stores.growth import GrowthStore
from caretrack.stores.pregnancies import PregnancyStore
from caretrack.stores.vaccines import VaccineStore


@dataclass
class Stores:
    client: ApiClient
    auth: AuthStore
    children: ChildStore
    pregnancies: PregnancyStore
    vaccines: VaccineStore
    growth: GrowthStore
    appointments: AppointmentStore
    contacts: EmergencyContactStore
    activities: ActivityStore

    def all(self):
        return (self.auth, self.children, self.pregnancies, self.vaccines, self.growth,
                self.appointments, self.contacts, self.activities)

    def clear(self) -> None:
        """Drop every persisted namespace, e.g. on sign-out."""
        for store in self.all():
            store.clear_storage()


def namespace_for_token(token: str) -> str:
    return 'ct:' + hashlib.sha256(token.encode('utf-8')).hexdigest()[:16]


def build_stores(namespace: Optional[str] = None, *, base_url: Optional[str] = None, session=None,
                 cache=None) -> Stores:
    auth = AuthStore(namespace=namespace, cache=cache)
    client = ApiClient(base_url, credentials=auth, session=session)
    auth.client = client
    kwargs = {'namespace': namespace, 'cache': cache}
    return Stores(
        client=client,
        auth=auth,
        children=ChildStore(client, **kwargs),
        pregnancies=PregnancyStore(client, **kwargs),
        vaccines=VaccineStore(client, **kwargs),
        growth=GrowthStore(client, **kwargs),
        appointments=AppointmentStore(client, **kwargs),
        contacts=EmergencyContactStore(client, **kwargs),
        activities=ActivityStore(client, **kwargs),
    )
