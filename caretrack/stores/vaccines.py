"""
Vaccine catalogue and the current child's vaccination schedule.

Only the catalogue and the current child id are persisted; the schedule
is always fetched fresh since statuses move with the calendar.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from caretrack.domain import ChildVaccinationData, VaccinationRecord, VaccinationStatistics, Vaccine, VaccineRecordGroup
from caretrack.services import vaccines as vaccine_service
from caretrack.stores.base import BaseStore, StoreState


@dataclass
class VaccineState(StoreState):
    vaccines: list[Vaccine] = field(default_factory=list)
    vaccination_data: Optional[ChildVaccinationData] = None
    current_child_id: Optional[str] = None


class VaccineStore(BaseStore):
    storage_name = 'vaccine-storage'
    persisted_fields = ('vaccines', 'current_child_id')
    state_class = VaccineState

    def fetch_vaccines(self) -> None:
        with self._action(reraise=False):
            self.state.vaccines = vaccine_service.get_all_vaccines(self.client)

    def fetch_child_vaccination_records(self, child_id: str) -> None:
        if self.state.current_child_id != child_id:
            self.state.vaccination_data = None
        self.state.current_child_id = child_id
        with self._action(reraise=False):
            self.state.vaccination_data = vaccine_service.get_child_vaccination_records(self.client, child_id)

    def administer_vaccine(self, child_id: str, vaccine_id: str, data: Optional[dict] = None) -> None:
        with self._action():
            vaccine_service.administer_vaccine(self.client, child_id, vaccine_id, data or {})
            # counts and statuses are recomputed by the backend
            self.state.vaccination_data = vaccine_service.get_child_vaccination_records(self.client, child_id)
            self.state.current_child_id = child_id

    def update_vaccination_record(self, record_id: str, data: dict) -> VaccinationRecord:
        with self._action():
            record = vaccine_service.update_vaccination_record(self.client, record_id, data)
            child_id = self.state.current_child_id or record.child_id
            self.state.vaccination_data = vaccine_service.get_child_vaccination_records(self.client, child_id)
        return record

    def clear_data(self) -> None:
        self.update(vaccines=[], vaccination_data=None, current_child_id=None, error=None)


def group_by_age_group(state: VaccineState) -> list[VaccineRecordGroup]:
    """Schedule records grouped by age group in first-seen order, each group ordered by ``sort_order``."""
    if state.vaccination_data is None:
        return []
    groups: dict[str, list[VaccinationRecord]] = {}
    for record in state.vaccination_data.schedule:
        groups.setdefault(record.vaccine.age_group, []).append(record)
    return [
        VaccineRecordGroup(age_group=name, records=sorted(records, key=lambda r: r.vaccine.sort_order))
        for name, records in groups.items()
    ]


def statistics(state: VaccineState) -> Optional[VaccinationStatistics]:
    return state.vaccination_data.statistics if state.vaccination_data else None


def completed_count(state: VaccineState) -> int:
    stats = statistics(state)
    return stats.completed if stats else 0


def total_count(state: VaccineState) -> int:
    stats = statistics(state)
    return stats.total if stats else 0


def overdue_count(state: VaccineState) -> int:
    stats = statistics(state)
    return stats.overdue if stats else 0


def pending_count(state: VaccineState) -> int:
    stats = statistics(state)
    return stats.pending if stats else 0


def completion_percentage(state: VaccineState) -> float:
    stats = statistics(state)
    if not stats:
        return 0
    return min(100.0, max(0.0, float(stats.completion_percentage)))


def next_vaccine(state: VaccineState) -> Optional[VaccinationRecord]:
    return state.vaccination_data.next_vaccine if state.vaccination_data else None
