"""
Manual gauging section mapper.

Maps the cross-section aggregates and the station verticals to the single
ManualGaugingDischargeSection of a discharge activity.
"""

from typing import Optional

from ..constants import StartPointType, StationType
from ..records import ManualGaugingDischargeSection
from .base import Mapper, MapperContext
from .discharge_method import map_discharge_equation
from .velocity import most_common_velocity_method
from .verticals import VerticalsMapper


class ManualGaugingMapper(Mapper):
    """
    Maps the cross-section to a manual gauging discharge section.

    Source fields:
    - activity.measurement_period / activity.discharge -> period, discharge
    - calculations.area / width / velocity.x -> area, width, average velocity
    - first station type -> start_point
    - station velocity methods (plurality) -> velocity_observation_method
    - configuration.discharge_equation -> discharge_method
    - stations -> verticals

    Requires DischargeActivityMapper to have populated context.activity.
    """

    def __init__(self, verticals_mapper: Optional[VerticalsMapper] = None):
        self.verticals_mapper = verticals_mapper or VerticalsMapper()

    @property
    def block_name(self) -> str:
        return "manual_gauging"

    def map(self, context: MapperContext) -> ManualGaugingDischargeSection:
        activity = context.activity
        if activity is None:
            raise RuntimeError("ManualGaugingMapper requires a discharge activity in context")

        calculations = context.calculations
        first_station = context.measurement.first_station

        start_point = (
            StartPointType.RIGHT_EDGE_OF_WATER
            if first_station.station_type == StationType.RIGHT_BANK
            else StartPointType.LEFT_EDGE_OF_WATER
        )

        section = ManualGaugingDischargeSection(
            measurement_period=activity.measurement_period,
            discharge=activity.discharge,
            unit_system=context.unit_system,
            area_value=calculations.area,
            width_value=calculations.width,
            velocity_average_value=calculations.velocity.x,
            start_point=start_point,
            velocity_observation_method=most_common_velocity_method(context.stations),
            discharge_method=map_discharge_equation(
                context.measurement.configuration.discharge_equation
            ),
        )

        section.verticals.extend(self.verticals_mapper.map(context))

        return section
