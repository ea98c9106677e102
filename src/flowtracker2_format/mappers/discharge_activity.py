"""
Discharge activity mapper.

Maps the measurement-wide discharge, party, comment and gauge height
to a DischargeActivity spanning the field visit.
"""

import logging
import math
from typing import Optional

from ..records import DischargeActivity, GageHeightMeasurement, Measurement
from .base import Mapper, MapperContext

logger = logging.getLogger(__name__)


class DischargeActivityMapper(Mapper):
    """
    Maps measurement aggregates to a discharge activity.

    Source fields:
    - visit.period -> measurement_period
    - calculations.discharge -> discharge (discharge unit)
    - properties.operator -> party
    - properties.comment -> comments
    - calculations.gauge_height -> gage_height_measurements (distance unit, omitted if NaN)
    """

    @property
    def block_name(self) -> str:
        return "discharge_activity"

    def map(self, context: MapperContext) -> DischargeActivity:
        properties = context.measurement.properties
        unit_system = context.unit_system

        activity = DischargeActivity(
            measurement_period=context.visit.period,
            discharge=Measurement(context.calculations.discharge, unit_system.discharge_unit_id),
            party=properties.operator,
            comments=properties.comment,
        )

        gage_height = self._build_gage_height(context)
        if gage_height is not None:
            activity.gage_height_measurements.append(gage_height)

        return activity

    def _build_gage_height(self, context: MapperContext) -> Optional[GageHeightMeasurement]:
        gage_height = context.calculations.gauge_height

        if gage_height is None or math.isnan(gage_height):
            logger.debug("No gauge height recorded, omitting gage height measurement")
            context.add_warning("Gauge height not recorded")
            return None

        return GageHeightMeasurement(
            Measurement(gage_height, context.unit_system.distance_unit_id)
        )
