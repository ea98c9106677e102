"""
Output records handed to the results sink.

All records are freshly constructed by the mappers; nothing here holds a
reference back into the raw measurement graph.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional, Union

from .constants import (
    DeploymentMethodType,
    DischargeMethodType,
    FlowDirectionType,
    MeterType,
    PointVelocityObservationType,
    StartPointType,
    VerticalType,
)


@dataclass(frozen=True)
class UnitSystem:
    """Unit identifiers shared read-only by every mapper."""

    distance_unit_id: str
    area_unit_id: str
    velocity_unit_id: str
    discharge_unit_id: str


@dataclass(frozen=True)
class DateTimeInterval:
    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


@dataclass(frozen=True)
class LocationInfo:
    identifier: str
    name: Optional[str] = None
    unique_id: Optional[str] = None


@dataclass
class FieldVisitDetails:
    period: DateTimeInterval
    party: Optional[str] = None


@dataclass
class FieldVisit:
    """A field visit as created by the results sink (which assigns visit_id)."""

    visit_id: str
    location: LocationInfo
    period: DateTimeInterval
    party: Optional[str] = None

    @property
    def start_date(self) -> datetime:
        return self.period.start

    @property
    def end_date(self) -> datetime:
        return self.period.end


@dataclass(frozen=True)
class Measurement:
    value: float
    unit_id: str


@dataclass
class GageHeightMeasurement:
    measurement: Measurement


@dataclass
class MeterCalibrationEquation:
    intercept_unit_id: str
    range_start: Optional[float] = None
    range_end: Optional[float] = None
    slope: Optional[float] = None
    intercept: Optional[float] = None


@dataclass
class MeterCalibration:
    meter_type: MeterType
    manufacturer: str
    model: str
    configuration: Optional[str] = None
    software_version: Optional[str] = None
    firmware_version: Optional[str] = None
    serial_number: Optional[str] = None
    equations: list[MeterCalibrationEquation] = field(default_factory=list)


@dataclass
class VelocityDepthObservation:
    depth: float
    velocity: float
    observation_interval: float
    revolution_count: int = 0


@dataclass
class VelocityObservation:
    velocity_observation_method: PointVelocityObservationType
    meter_calibration: MeterCalibration
    mean_velocity: float
    deployment_method: DeploymentMethodType = DeploymentMethodType.UNSPECIFIED
    observations: list[VelocityDepthObservation] = field(default_factory=list)


@dataclass
class OpenWaterData:
    """Open-water marker; carries no measurements."""


@dataclass
class IceCoveredData:
    water_surface_to_bottom_of_ice: float
    water_surface_to_bottom_of_slush: float
    ice_thickness: float


MeasurementConditionData = Union[OpenWaterData, IceCoveredData]


@dataclass
class Segment:
    width: float
    area: float
    discharge: float
    velocity: float
    total_discharge_portion: float


@dataclass
class Vertical:
    """Standardized record for one station of the traverse."""

    tagline_position: float
    measurement_time: datetime
    effective_depth: float
    sounded_depth: float
    vertical_type: VerticalType
    measurement_condition_data: MeasurementConditionData
    velocity_observation: VelocityObservation
    segment: Segment
    flow_direction: FlowDirectionType = FlowDirectionType.NORMAL
    comments: Optional[str] = None


@dataclass
class ManualGaugingDischargeSection:
    """Mid/mean-section channel measurement built from the verticals."""

    measurement_period: DateTimeInterval
    discharge: Measurement
    unit_system: UnitSystem
    area_value: float
    width_value: float
    velocity_average_value: float
    start_point: StartPointType
    velocity_observation_method: PointVelocityObservationType
    discharge_method: DischargeMethodType
    verticals: list[Vertical] = field(default_factory=list)


@dataclass
class DischargeActivity:
    measurement_period: DateTimeInterval
    discharge: Measurement
    party: Optional[str] = None
    comments: Optional[str] = None
    gage_height_measurements: list[GageHeightMeasurement] = field(default_factory=list)
    channel_measurements: list[ManualGaugingDischargeSection] = field(default_factory=list)


@dataclass(frozen=True)
class MeasurementDevice:
    manufacturer: str
    model: str
    serial_number: str


@dataclass
class Reading:
    parameter_id: str
    measurement: Measurement
    date_time_offset: datetime
    measurement_device: Optional[MeasurementDevice] = None
