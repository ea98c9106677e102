"""
Unit system resolution.

The Metric and Imperial unit identifiers shared by every output record.
"""

from ..raw import RawMeasurement
from ..records import UnitSystem

METRIC_UNITS = UnitSystem(
    distance_unit_id="m",
    area_unit_id="m^2",
    velocity_unit_id="m/s",
    discharge_unit_id="m^3/s",
)

IMPERIAL_UNITS = UnitSystem(
    distance_unit_id="ft",
    area_unit_id="ft^2",
    velocity_unit_id="ft/s",
    discharge_unit_id="ft^3/s",
)


def create_unit_system(measurement: RawMeasurement) -> UnitSystem:
    """
    Choose the unit identifiers for a measurement.

    FlowTracker2 exports store every value in metric, even when the handheld
    "Units" setting says "English", so the setting is not consulted.
    """
    is_metric = True

    return METRIC_UNITS if is_metric else IMPERIAL_UNITS
