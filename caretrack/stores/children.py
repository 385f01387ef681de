from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import Optional

from django.utils import timezone

from caretrack.domain import ChildProfile
from caretrack.exceptions import InvalidRequest
from caretrack.services import children as child_service
from caretrack.stores.base import BaseStore, StoreState


@dataclass
class ChildState(StoreState):
    profiles: list[ChildProfile] = field(default_factory=list)
    selected_child_id: Optional[str] = None


class ChildStore(BaseStore):
    storage_name = 'child-storage'
    persisted_fields = ('profiles', 'selected_child_id')
    state_class = ChildState

    def fetch_children(self) -> None:
        with self._action(reraise=False):
            profiles = child_service.get_children(self.client)
            self.state.profiles = profiles
            if not any(p.id == self.state.selected_child_id for p in profiles):
                self.state.selected_child_id = profiles[0].id if profiles else None

    def fetch_child(self, child_id: str) -> None:
        with self._action(reraise=False):
            profile = child_service.get_child(self.client, child_id)
            self.state.profiles = _replace(self.state.profiles, profile, append=True)

    def create_child(self, data: dict) -> ChildProfile:
        with self._action():
            profile = child_service.create_child(self.client, data)
            self.state.profiles = [*self.state.profiles, profile]
            self.state.selected_child_id = profile.id
        return profile

    def update_child(self, child_id: str, data: dict) -> ChildProfile:
        with self._action():
            profile = child_service.update_child(self.client, child_id, data)
            self.state.profiles = _replace(self.state.profiles, profile)
        return profile

    def delete_child(self, child_id: str) -> None:
        if len(self.state.profiles) <= 1 and any(p.id == child_id for p in self.state.profiles):
            err = InvalidRequest({'child': ['The last child profile can not be deleted.']})
            self.set_error(err.message)
            raise err
        with self._action():
            child_service.delete_child(self.client, child_id)
            remaining = [p for p in self.state.profiles if p.id != child_id]
            self.state.profiles = remaining
            if self.state.selected_child_id == child_id:
                self.state.selected_child_id = remaining[0].id if remaining else None

    def select_child(self, child_id: str) -> None:
        if any(p.id == child_id for p in self.state.profiles):
            self.update(selected_child_id=child_id)

    def clear_data(self) -> None:
        self.update(profiles=[], selected_child_id=None, error=None)


def _replace(profiles, profile, append=False):
    out = [profile if p.id == profile.id else p for p in profiles]
    if append and not any(p.id == profile.id for p in profiles):
        out.append(profile)
    return out


def selected_child(state: ChildState) -> Optional[ChildProfile]:
    return next((p for p in state.profiles if p.id == state.selected_child_id), None)


def age_in_months(date_of_birth: Optional[datetime.date], today: Optional[datetime.date] = None) -> int:
    """Whole calendar months since birth; never negative."""
    if not date_of_birth:
        return 0
    today = today or timezone.localdate()
    months = (today.year - date_of_birth.year) * 12 + (today.month - date_of_birth.month)
    return max(0, months)


def age_display(date_of_birth: Optional[datetime.date], today: Optional[datetime.date] = None) -> dict:
    """Age as ``{'months', 'weeks'}`` counted in 30-day months, for the profile header."""
    if not date_of_birth:
        return {'months': 0, 'weeks': 0}
    today = today or timezone.localdate()
    days = max(0, (today - date_of_birth).days)
    return {'months': days // 30, 'weeks': (days % 30) // 7}
