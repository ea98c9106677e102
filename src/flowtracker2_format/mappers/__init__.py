"""
Mappers for converting a FlowTracker2 measurement to discharge records.

Each mapper is responsible for transforming a portion of the raw
measurement into the corresponding output record.
"""

from .base import Mapper, MapperContext
from .discharge_activity import DischargeActivityMapper
from .discharge_method import map_discharge_equation
from .manual_gauging import ManualGaugingMapper
from .readings import TemperatureReadingMapper, midpoint
from .units import IMPERIAL_UNITS, METRIC_UNITS, create_unit_system
from .velocity import VELOCITY_METHOD_MAP, map_velocity_method, most_common_velocity_method
from .verticals import VerticalsMapper

__all__ = [
    "Mapper",
    "MapperContext",
    # Record mappers, in processing order
    "DischargeActivityMapper",
    "ManualGaugingMapper",
    "VerticalsMapper",
    "TemperatureReadingMapper",
    # Lookups
    "create_unit_system",
    "METRIC_UNITS",
    "IMPERIAL_UNITS",
    "map_velocity_method",
    "most_common_velocity_method",
    "VELOCITY_METHOD_MAP",
    "map_discharge_equation",
    "midpoint",
]
