"""
Growth measurements and chart data for the current child.

Percentiles and z-scores are computed by the backend; this store only
selects and trims what it received.  A child with no growth record yet
answers 404, which is kept as ``Outcome.NOT_FOUND`` with no error message.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from caretrack.domain import PERCENTILE_CURVES, ChartData, ChildGrowthData, GrowthMeasurement, PercentilePoint
from caretrack.services import growth as growth_service
from caretrack.stores.base import BaseStore, StoreState


@dataclass
class GrowthState(StoreState):
    growth_data: Optional[ChildGrowthData] = None
    chart_data: Optional[ChartData] = None
    current_child_id: Optional[str] = None
    is_chart_loading: bool = False


class GrowthStore(BaseStore):
    storage_name = 'growth-storage'
    persisted_fields = ('growth_data', 'current_child_id')
    state_class = GrowthState

    def fetch_growth_data(self, child_id: str) -> None:
        self._switch_child(child_id)
        with self._action(reraise=False, on_not_found={'growth_data': None}):
            self.state.growth_data = growth_service.get_child_measurements(self.client, child_id)

    def fetch_chart_data(self, child_id: str, chart_type: str = 'weight') -> None:
        if self.state.current_child_id and self.state.current_child_id != child_id:
            self.state.chart_data = None
        with self._action(reraise=False, loading='is_chart_loading', on_not_found={'chart_data': None}):
            self.state.chart_data = growth_service.get_chart_data(self.client, child_id, chart_type)

    def add_measurement(self, child_id: str, data: dict) -> GrowthMeasurement:
        self._switch_child(child_id)
        with self._action():
            measurement = growth_service.add_measurement(self.client, child_id, data)
            self.state.growth_data = growth_service.get_child_measurements(self.client, child_id)
        return measurement

    def update_measurement(self, measurement_id: str, data: dict) -> GrowthMeasurement:
        with self._action():
            measurement = growth_service.update_measurement(self.client, measurement_id, data)
            self._refetch()
        return measurement

    def delete_measurement(self, measurement_id: str) -> None:
        with self._action():
            growth_service.delete_measurement(self.client, measurement_id)
            self._refetch()

    def clear_data(self) -> None:
        self.update(growth_data=None, chart_data=None, current_child_id=None, error=None)

    def _switch_child(self, child_id):
        if self.state.current_child_id and self.state.current_child_id != child_id:
            self.state.growth_data = None
            self.state.chart_data = None
        self.state.current_child_id = child_id

    def _refetch(self):
        if self.state.current_child_id:
            self.state.growth_data = growth_service.get_child_measurements(self.client, self.state.current_child_id)


def measurements(state: GrowthState) -> list[GrowthMeasurement]:
    return list(state.growth_data.measurements) if state.growth_data else []


def latest_measurement(state: GrowthState) -> Optional[GrowthMeasurement]:
    data = state.growth_data
    if not data or not state.current_child_id or not data.measurements:
        return None
    # stale data restored for another child must not leak into the header
    if data.child_id != state.current_child_id:
        return None
    return data.measurements[-1]


def reference_curves(chart: Optional[ChartData], names=PERCENTILE_CURVES, *, margin: float = 0) -> dict[str, list[PercentilePoint]]:
    """Reference percentile curves trimmed to the age range covered by the child's data points.

    With no data points the full curves are returned.
    """
    if chart is None:
        return {}
    ages = [p.age_in_months for p in chart.data_points]
    curves = {name: list(chart.reference_data.get(name, [])) for name in names}
    if not ages:
        return curves
    low, high = min(ages) - margin, max(ages) + margin
    return {name: [pt for pt in points if low <= pt.age <= high] for name, points in curves.items()}
