"""Temperature reading mapper."""

from datetime import datetime

from ..constants import (
    DEGREES_CELSIUS_UNIT_ID,
    MANUFACTURER,
    TEMPERATURE_PROBE_MODEL,
    TEMPERATURE_PROBE_SERIAL,
    WATER_TEMPERATURE_PARAMETER_ID,
)
from ..records import DateTimeInterval, Measurement, MeasurementDevice, Reading
from .base import Mapper, MapperContext


def midpoint(period: DateTimeInterval) -> datetime:
    """Return the instant halfway through a period."""
    return period.start + period.duration // 2


class TemperatureReadingMapper(Mapper):
    """
    Maps the aggregate water temperature to a single reading taken at the
    middle of the field visit.
    """

    @property
    def block_name(self) -> str:
        return "temperature_reading"

    def map(self, context: MapperContext) -> Reading:
        return Reading(
            parameter_id=WATER_TEMPERATURE_PARAMETER_ID,
            measurement=Measurement(context.calculations.temperature, DEGREES_CELSIUS_UNIT_ID),
            date_time_offset=midpoint(context.visit.period),
            measurement_device=MeasurementDevice(
                MANUFACTURER, TEMPERATURE_PROBE_MODEL, TEMPERATURE_PROBE_SERIAL
            ),
        )
