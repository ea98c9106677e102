"""
Raw FlowTracker2 measurement object graph.

These dataclasses are produced by an instrument file reader and are
read-only to the mapping engine. Field names follow the FlowTracker2
data file vocabulary.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Union

from .constants import DischargeEquation, StationType, VelocityMethod


@dataclass(frozen=True)
class Vector:
    """Velocity vector; x is the primary (longitudinal) component."""

    x: float
    y: float = 0.0
    z: float = 0.0


@dataclass
class HandheldInfo:
    serial_number: Optional[str] = None
    cpu_serial_number: Optional[str] = None
    software_version: Optional[str] = None
    firmware_version: Optional[str] = None
    settings: dict[str, Any] = field(default_factory=dict)


@dataclass
class ProbeInfo:
    serial_number: Optional[str] = None
    firmware_version: Optional[str] = None


@dataclass
class PointMeasurement:
    """
    One depth-specific velocity sample within a station.

    Attributes:
        fractional_depth: Fraction (0.0-1.0) of the station's effective depth
        start_time: Sampling start
        end_time: Sampling end
        velocity: Mean velocity vector over the sampling interval
        handheld_info: Handheld identity at sampling time
        probe_info: Probe identity at sampling time
    """

    fractional_depth: float
    start_time: datetime
    end_time: datetime
    velocity: Vector
    handheld_info: HandheldInfo = field(default_factory=HandheldInfo)
    probe_info: ProbeInfo = field(default_factory=ProbeInfo)


@dataclass
class StationCalculations:
    width: float
    area: float
    discharge: float
    fraction_of_total_discharge: float
    mean_velocity_in_vertical: Vector


@dataclass
class Station:
    """
    One cross-section sampling location.

    The ice measurements are only meaningful when station_type is ICE.
    """

    station_type: StationType
    location: float
    creation_time: datetime
    effective_depth: float
    final_depth: float
    velocity_method: Union[VelocityMethod, str]
    calculations: StationCalculations
    comment: Optional[str] = None
    water_surface_to_bottom_of_ice: float = math.nan
    water_surface_to_bottom_of_slush: float = math.nan
    ice_thickness: float = math.nan
    point_measurements: list[PointMeasurement] = field(default_factory=list)


@dataclass
class MeasurementCalculations:
    discharge: float
    area: float
    width: float
    velocity: Vector
    gauge_height: float = math.nan
    temperature: float = math.nan


@dataclass
class MeasurementProperties:
    site_number: str
    operator: Optional[str]
    start_time: datetime
    end_time: datetime
    comment: Optional[str] = None


@dataclass
class Configuration:
    data_collection_mode: str
    discharge_equation: Union[DischargeEquation, str]
    units: Optional[str] = None


@dataclass
class RawMeasurement:
    """
    A complete FlowTracker2 flow survey.

    Station order is significant: it is the traverse order across the
    channel and defines the vertical order of the converted activity.
    """

    properties: MeasurementProperties
    handheld_info: HandheldInfo
    configuration: Configuration
    calculations: MeasurementCalculations
    stations: list[Station] = field(default_factory=list)

    @property
    def first_station(self) -> Station:
        return self.stations[0]

    @property
    def last_station(self) -> Station:
        return self.stations[-1]
