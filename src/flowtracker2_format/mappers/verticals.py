"""
Verticals mapper for discharge activities.

Maps each FlowTracker2 station to one standardized vertical, keeping the
station order of the traverse.
"""

from typing import Optional

from ..constants import (
    MANUFACTURER,
    MODEL,
    DeploymentMethodType,
    FlowDirectionType,
    MeterType,
    PointVelocityObservationType,
    StationType,
    VerticalType,
)
from ..raw import HandheldInfo, PointMeasurement, Station
from ..records import (
    IceCoveredData,
    MeasurementConditionData,
    MeterCalibration,
    MeterCalibrationEquation,
    OpenWaterData,
    Segment,
    UnitSystem,
    VelocityDepthObservation,
    VelocityObservation,
    Vertical,
)
from .base import Mapper, MapperContext
from .velocity import map_velocity_method


class VerticalsMapper(Mapper):
    """
    Maps stations to verticals.

    Source fields (per station):
    - station.location -> tagline_position
    - station.creation_time -> measurement_time
    - station.effective_depth -> effective_depth
    - station.final_depth -> sounded_depth
    - station.velocity_method -> velocity_observation.velocity_observation_method
    - station.calculations.mean_velocity_in_vertical.x -> velocity_observation.mean_velocity
    - station.point_measurements -> velocity_observation.observations
    - station.calculations -> segment

    Edge classification compares station types, not positions: every
    station whose type matches the first station's type is a start edge,
    and every other station matching the last station's type is an end edge.
    """

    @property
    def block_name(self) -> str:
        return "verticals"

    def map(self, context: MapperContext) -> list[Vertical]:
        """Map every station of the measurement, in traverse order."""
        stations = context.stations
        start_station_type = context.measurement.first_station.station_type
        end_station_type = context.measurement.last_station.station_type

        return [
            self.map_station(
                station,
                start_station_type,
                end_station_type,
                context.unit_system,
                context.measurement.handheld_info,
            )
            for station in stations
        ]

    def map_station(
        self,
        station: Station,
        start_station_type: StationType,
        end_station_type: StationType,
        unit_system: UnitSystem,
        handheld_info: HandheldInfo,
    ) -> Vertical:
        """Map a single station to a vertical."""
        # TODO: classify island edges once stations carry an island marker
        if station.station_type == start_station_type:
            vertical_type = VerticalType.START_EDGE_NO_WATER_BEFORE
        elif station.station_type == end_station_type:
            vertical_type = VerticalType.END_EDGE_NO_WATER_AFTER
        else:
            vertical_type = VerticalType.MID_RIVER

        calculations = station.calculations

        return Vertical(
            tagline_position=station.location,
            comments=station.comment,
            measurement_time=station.creation_time,
            effective_depth=station.effective_depth,
            sounded_depth=station.final_depth,
            measurement_condition_data=self._build_measurement_condition(station),
            velocity_observation=self._build_velocity_observation(
                station, unit_system, handheld_info
            ),
            flow_direction=FlowDirectionType.NORMAL,
            vertical_type=vertical_type,
            segment=Segment(
                width=calculations.width,
                area=calculations.area,
                discharge=calculations.discharge,
                velocity=calculations.mean_velocity_in_vertical.x,
                total_discharge_portion=100 * calculations.fraction_of_total_discharge,
            ),
        )

    def _build_measurement_condition(self, station: Station) -> MeasurementConditionData:
        if station.station_type == StationType.ICE:
            return IceCoveredData(
                water_surface_to_bottom_of_ice=station.water_surface_to_bottom_of_ice,
                water_surface_to_bottom_of_slush=station.water_surface_to_bottom_of_slush,
                ice_thickness=station.ice_thickness,
            )

        return OpenWaterData()

    def _build_velocity_observation(
        self, station: Station, unit_system: UnitSystem, handheld_info: HandheldInfo
    ) -> VelocityObservation:
        """
        Build the velocity observation for a station.

        A station without point measurements still gets one observation:
        a zero-valued surface sample.
        """
        observation = VelocityObservation(
            velocity_observation_method=map_velocity_method(station.velocity_method),
            meter_calibration=self._build_meter_calibration(station, unit_system, handheld_info),
            mean_velocity=station.calculations.mean_velocity_in_vertical.x,
            deployment_method=DeploymentMethodType.UNSPECIFIED,
        )

        for point in station.point_measurements:
            observation.observations.append(
                VelocityDepthObservation(
                    depth=point.fractional_depth * station.effective_depth,
                    velocity=point.velocity.x,
                    observation_interval=(point.end_time - point.start_time).total_seconds(),
                    revolution_count=0,
                )
            )

        if not observation.observations:
            observation.velocity_observation_method = PointVelocityObservationType.SURFACE
            observation.observations.append(
                VelocityDepthObservation(
                    depth=0.0,
                    velocity=0.0,
                    observation_interval=0.0,
                    revolution_count=0,
                )
            )

        return observation

    def _build_meter_calibration(
        self, station: Station, unit_system: UnitSystem, handheld_info: HandheldInfo
    ) -> MeterCalibration:
        point: Optional[PointMeasurement] = (
            station.point_measurements[0] if station.point_measurements else None
        )

        serial_number = handheld_info.serial_number
        if point is not None and point.probe_info.serial_number is not None:
            serial_number = point.probe_info.serial_number

        return MeterCalibration(
            meter_type=MeterType.ADV,
            manufacturer=MANUFACTURER,
            model=MODEL,
            configuration=f"{handheld_info.serial_number}/{handheld_info.cpu_serial_number}",
            software_version=point.handheld_info.software_version if point else None,
            firmware_version=point.probe_info.firmware_version if point else None,
            serial_number=serial_number,
            equations=[MeterCalibrationEquation(intercept_unit_id=unit_system.distance_unit_id)],
        )
