"""
Pregnancy profiles of the signed-in mother and the selected pregnancy.

The week/trimester selectors are display helpers derived from the expected
delivery date; the authoritative ``current_week`` and ``trimester`` values
come from the backend.
"""
from __future__ import annotations

import datetime
from dataclasses import dataclass, field, replace
from typing import Optional

from django.utils import timezone

from caretrack.domain import ChildProfile, PregnancyCheckup, PregnancyMeasurement, PregnancyProfile
from caretrack.services import pregnancies as pregnancy_service
from caretrack.stores.base import BaseStore, StoreState

TERM_DAYS = 280
MAX_WEEKS = 42

TRIMESTER_LABELS = {1: 'First Trimester', 2: 'Second Trimester', 3: 'Third Trimester'}


@dataclass
class PregnancyState(StoreState):
    pregnancies: list[PregnancyProfile] = field(default_factory=list)
    selected_pregnancy_id: Optional[str] = None
    current_pregnancy: Optional[PregnancyProfile] = None


class PregnancyStore(BaseStore):
    storage_name = 'pregnancy-storage'
    persisted_fields = ('pregnancies', 'selected_pregnancy_id', 'current_pregnancy')
    state_class = PregnancyState

    def fetch_pregnancies(self) -> None:
        with self._action(reraise=False):
            pregnancies = pregnancy_service.get_pregnancies(self.client)
            self._reselect(pregnancies)

    def fetch_active_pregnancies(self) -> None:
        with self._action(reraise=False):
            pregnancies = pregnancy_service.get_active_pregnancies(self.client)
            self._reselect(pregnancies, prefer_active=False)

    def fetch_pregnancy(self, pregnancy_id: str) -> None:
        with self._action(reraise=False):
            pregnancy = pregnancy_service.get_pregnancy(self.client, pregnancy_id)
            self.state.pregnancies = [pregnancy if p.id == pregnancy_id else p for p in self.state.pregnancies]
            self.state.current_pregnancy = pregnancy
            self.state.selected_pregnancy_id = pregnancy_id

    def create_pregnancy(self, data: dict) -> PregnancyProfile:
        with self._action():
            pregnancy = pregnancy_service.create_pregnancy(self.client, data)
            self.state.pregnancies = [pregnancy, *self.state.pregnancies]
            self.state.current_pregnancy = pregnancy
            self.state.selected_pregnancy_id = pregnancy.id
        return pregnancy

    def update_pregnancy(self, pregnancy_id: str, data: dict) -> PregnancyProfile:
        with self._action():
            updated = pregnancy_service.update_pregnancy(self.client, pregnancy_id, data)
            self._put(updated)
        return updated

    def delete_pregnancy(self, pregnancy_id: str) -> None:
        with self._action():
            pregnancy_service.delete_pregnancy(self.client, pregnancy_id)
            remaining = [p for p in self.state.pregnancies if p.id != pregnancy_id]
            self.state.pregnancies = remaining
            if self.state.selected_pregnancy_id == pregnancy_id:
                pick = next((p for p in remaining if p.is_active), remaining[0] if remaining else None)
                self.state.current_pregnancy = pick
                self.state.selected_pregnancy_id = pick.id if pick else None

    def select_pregnancy(self, pregnancy_id: str) -> None:
        pregnancy = next((p for p in self.state.pregnancies if p.id == pregnancy_id), None)
        if pregnancy is not None:
            self.update(current_pregnancy=pregnancy, selected_pregnancy_id=pregnancy_id)

    def convert_to_child(self, pregnancy_id: str, data: dict) -> tuple[PregnancyProfile, ChildProfile]:
        with self._action():
            pregnancy, child = pregnancy_service.convert_to_child(self.client, pregnancy_id, data)
            self._put(pregnancy)
        return pregnancy, child

    def add_checkup(self, pregnancy_id: str, data: dict) -> PregnancyCheckup:
        with self._action():
            checkup = pregnancy_service.add_checkup(self.client, pregnancy_id, data)
            self._amend(pregnancy_id, lambda p: replace(
                p, checkups=[checkup, *(p.checkups or [])],
                current_weight=checkup.weight or p.current_weight,
            ))
        return checkup

    def fetch_checkups(self, pregnancy_id: str) -> list[PregnancyCheckup]:
        with self._action():
            checkups = pregnancy_service.get_checkups(self.client, pregnancy_id)
            self._amend(pregnancy_id, lambda p: replace(p, checkups=checkups))
        return checkups

    def add_measurement(self, pregnancy_id: str, data: dict) -> PregnancyMeasurement:
        with self._action():
            measurement = pregnancy_service.add_measurement(self.client, pregnancy_id, data)
            self._amend(pregnancy_id, lambda p: replace(
                p, measurements=[measurement, *(p.measurements or [])], current_weight=measurement.weight,
            ))
        return measurement

    def fetch_measurements(self, pregnancy_id: str) -> list[PregnancyMeasurement]:
        with self._action():
            measurements = pregnancy_service.get_measurements(self.client, pregnancy_id)
            self._amend(pregnancy_id, lambda p: replace(p, measurements=measurements))
        return measurements

    def clear_data(self) -> None:
        self.update(pregnancies=[], selected_pregnancy_id=None, current_pregnancy=None, error=None)

    # internals

    def _reselect(self, pregnancies, prefer_active=True):
        selected = next((p for p in pregnancies if p.id == self.state.selected_pregnancy_id), None)
        if selected is None and pregnancies:
            if prefer_active:
                selected = next((p for p in pregnancies if p.is_active), pregnancies[0])
            else:
                selected = pregnancies[0]
        self.state.pregnancies = pregnancies
        self.state.current_pregnancy = selected
        self.state.selected_pregnancy_id = selected.id if selected else None

    def _put(self, pregnancy):
        self.state.pregnancies = [pregnancy if p.id == pregnancy.id else p for p in self.state.pregnancies]
        current = self.state.current_pregnancy
        if current is not None and current.id == pregnancy.id:
            self.state.current_pregnancy = pregnancy

    def _amend(self, pregnancy_id, change):
        self.state.pregnancies = [change(p) if p.id == pregnancy_id else p for p in self.state.pregnancies]
        current = self.state.current_pregnancy
        if current is not None and current.id == pregnancy_id:
            self.state.current_pregnancy = change(current)


def active_pregnancies(state: PregnancyState) -> list[PregnancyProfile]:
    return [p for p in state.pregnancies if p.is_active]


def days_until_delivery(expected_delivery_date: Optional[datetime.date],
                        today: Optional[datetime.date] = None) -> int:
    if not expected_delivery_date:
        return 0
    today = today or timezone.localdate()
    return (expected_delivery_date - today).days


def week_display(expected_delivery_date: Optional[datetime.date], today: Optional[datetime.date] = None) -> dict:
    """Gestational age as ``{'weeks', 'days'}`` counted back from the EDD over a 280-day term."""
    if not expected_delivery_date:
        return {'weeks': 0, 'days': 0}
    current_day = TERM_DAYS - days_until_delivery(expected_delivery_date, today)
    weeks, days = divmod(current_day, 7)
    return {'weeks': max(0, min(MAX_WEEKS, weeks)), 'days': max(0, days) if current_day >= 0 else 0}


def trimester_label(trimester: Optional[int]) -> str:
    return TRIMESTER_LABELS.get(trimester, 'Unknown')
