from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from caretrack.domain import Activity
from caretrack.services import activities as activity_service
from caretrack.stores.base import BaseStore, StoreState


@dataclass
class ActivityState(StoreState):
    activities: list[Activity] = field(default_factory=list)
    current_child_id: Optional[str] = None


class ActivityStore(BaseStore):
    storage_name = 'activity-storage'
    persisted_fields = ('activities', 'current_child_id')
    state_class = ActivityState

    def fetch_activities(self, child_id: str) -> None:
        if self.state.current_child_id and self.state.current_child_id != child_id:
            self.state.activities = []
        self.state.current_child_id = child_id
        with self._action(reraise=False):
            self.state.activities = activity_service.get_child_activities(self.client, child_id)

    def create_activity(self, child_id: str, data: dict) -> Activity:
        with self._action():
            activity = activity_service.create_activity(self.client, child_id, data)
            self.state.activities = [activity, *self.state.activities]
        return activity

    def update_activity(self, activity_id: str, data: dict) -> Activity:
        with self._action():
            activity = activity_service.update_activity(self.client, activity_id, data)
            self.state.activities = [activity if a.id == activity_id else a for a in self.state.activities]
        return activity

    def delete_activity(self, activity_id: str) -> None:
        with self._action():
            activity_service.delete_activity(self.client, activity_id)
            self.state.activities = [a for a in self.state.activities if a.id != activity_id]

    def clear_data(self) -> None:
        self.update(activities=[], current_child_id=None, error=None)


def activities_by_type(state: ActivityState, activity_type: str) -> list[Activity]:
    return [a for a in state.activities if a.type == activity_type]


def recent_activities(state: ActivityState, limit: int = 4) -> list[Activity]:
    return sorted(state.activities, key=lambda a: a.date, reverse=True)[:limit]
