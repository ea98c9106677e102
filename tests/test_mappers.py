"""
Tests for discharge activity mappers and lookups.
"""

import math
from datetime import datetime, timedelta, timezone
from types import MappingProxyType

import pytest

from flowtracker2_format.constants import (
    DischargeEquation,
    DischargeMethodType,
    PointVelocityObservationType,
    StartPointType,
    StationType,
    VelocityMethod,
    VerticalType,
)
from flowtracker2_format.errors import UnsupportedConfigurationError
from flowtracker2_format.mappers import (
    IMPERIAL_UNITS,
    METRIC_UNITS,
    VELOCITY_METHOD_MAP,
    DischargeActivityMapper,
    ManualGaugingMapper,
    MapperContext,
    TemperatureReadingMapper,
    create_unit_system,
    map_discharge_equation,
    map_velocity_method,
    midpoint,
    most_common_velocity_method,
)
from flowtracker2_format.records import DateTimeInterval, FieldVisit, LocationInfo

from .fixtures import END_TIME, START_TIME, create_measurement, create_station


def create_context(measurement=None, start=START_TIME, end=END_TIME) -> MapperContext:
    """Helper to create a MapperContext for a measurement."""
    measurement = measurement or create_measurement()
    visit = FieldVisit(
        visit_id="01J0ABCDEFGHJKMNPQRSTVWXYZ",
        location=LocationInfo("01234567"),
        period=DateTimeInterval(start, end),
        party=measurement.properties.operator,
    )
    return MapperContext(
        measurement=measurement,
        unit_system=create_unit_system(measurement),
        visit=visit,
    )


class TestUnitSystem:
    """Tests for unit system resolution."""

    def test_metric_unit_ids(self):
        """Should resolve the canonical metric unit identifiers."""
        units = create_unit_system(create_measurement())

        assert units.distance_unit_id == "m"
        assert units.area_unit_id == "m^2"
        assert units.velocity_unit_id == "m/s"
        assert units.discharge_unit_id == "m^3/s"

    def test_english_setting_still_metric(self):
        """Handheld 'English' units setting does not switch to imperial."""
        measurement = create_measurement()
        measurement.handheld_info.settings["Units"] = "English"
        measurement.configuration.units = "English"

        assert create_unit_system(measurement) is METRIC_UNITS

    def test_imperial_unit_ids(self):
        """Imperial unit system carries feet-based identifiers."""
        assert IMPERIAL_UNITS.distance_unit_id == "ft"
        assert IMPERIAL_UNITS.discharge_unit_id == "ft^3/s"


class TestVelocityMethodClassifier:
    """Tests for velocity method mapping and plurality vote."""

    @pytest.mark.parametrize(
        "method,expected",
        [
            (VelocityMethod.FIVE_TENTHS, PointVelocityObservationType.ONE_AT_POINT_FIVE),
            (VelocityMethod.SIX_TENTHS, PointVelocityObservationType.ONE_AT_POINT_SIX),
            (
                VelocityMethod.TWO_TENTHS_EIGHT_TENTHS,
                PointVelocityObservationType.ONE_AT_POINT_TWO_AND_POINT_EIGHT,
            ),
            (
                VelocityMethod.TWO_TENTHS_SIX_TENTHS_EIGHT_TENTHS,
                PointVelocityObservationType.ONE_AT_POINT_TWO_POINT_SIX_AND_POINT_EIGHT,
            ),
            (VelocityMethod.FIVE_POINT, PointVelocityObservationType.FIVE_POINT),
            (VelocityMethod.SIX_POINT, PointVelocityObservationType.SIX_POINT),
        ],
    )
    def test_known_methods(self, method, expected):
        """Each instrument method maps to its standardized equivalent."""
        assert map_velocity_method(method) == expected

    def test_unmapped_enum_member_is_unknown(self):
        """Methods outside the table map to UNKNOWN."""
        assert map_velocity_method(VelocityMethod.KREPS) == PointVelocityObservationType.UNKNOWN

    def test_unrecognized_string_is_unknown(self):
        """Unrecognized raw values map to UNKNOWN without raising."""
        assert map_velocity_method("Ice0.5") == PointVelocityObservationType.UNKNOWN

    def test_raw_string_of_known_method(self):
        """Raw string values are looked up like their enum members."""
        assert map_velocity_method("SixTenths") == PointVelocityObservationType.ONE_AT_POINT_SIX

    def test_table_is_read_only(self):
        """The lookup table cannot be modified."""
        assert isinstance(VELOCITY_METHOD_MAP, MappingProxyType)
        with pytest.raises(TypeError):
            VELOCITY_METHOD_MAP[VelocityMethod.KREPS] = PointVelocityObservationType.SURFACE

    def test_most_common_simple_majority(self):
        """Should pick the method used by most stations."""
        stations = [
            create_station(velocity_method=VelocityMethod.SIX_TENTHS),
            create_station(velocity_method=VelocityMethod.TWO_TENTHS_EIGHT_TENTHS),
            create_station(velocity_method=VelocityMethod.TWO_TENTHS_EIGHT_TENTHS),
        ]

        assert (
            most_common_velocity_method(stations)
            == PointVelocityObservationType.ONE_AT_POINT_TWO_AND_POINT_EIGHT
        )

    def test_most_common_tie_goes_to_first_seen(self):
        """[A, B, A, C, B] ties A and B; A was seen first."""
        a = VelocityMethod.FIVE_TENTHS
        b = VelocityMethod.SIX_TENTHS
        c = VelocityMethod.FIVE_POINT
        stations = [create_station(velocity_method=m) for m in [a, b, a, c, b]]

        assert most_common_velocity_method(stations) == PointVelocityObservationType.ONE_AT_POINT_FIVE

    def test_most_common_tie_order_reversed(self):
        """Reversing first occurrence flips the tie winner."""
        a = VelocityMethod.FIVE_TENTHS
        b = VelocityMethod.SIX_TENTHS
        stations = [create_station(velocity_method=m) for m in [b, a, a, b]]

        assert most_common_velocity_method(stations) == PointVelocityObservationType.ONE_AT_POINT_SIX

    def test_most_common_unmapped_winner(self):
        """A winning method without an equivalent yields UNKNOWN."""
        stations = [
            create_station(velocity_method=VelocityMethod.KREPS),
            create_station(velocity_method=VelocityMethod.KREPS),
            create_station(velocity_method=VelocityMethod.SIX_TENTHS),
        ]

        assert most_common_velocity_method(stations) == PointVelocityObservationType.UNKNOWN

    def test_most_common_requires_stations(self):
        """An empty station sequence is a caller error."""
        with pytest.raises(ValueError):
            most_common_velocity_method([])


class TestDischargeMethodSelector:
    """Tests for discharge equation mapping."""

    def test_mean_section(self):
        assert map_discharge_equation(DischargeEquation.MEAN_SECTION) == DischargeMethodType.MEAN_SECTION

    def test_mid_section(self):
        assert map_discharge_equation(DischargeEquation.MID_SECTION) == DischargeMethodType.MID_SECTION

    def test_raw_string_value(self):
        """Raw string values map like their enum members."""
        assert map_discharge_equation("MidSection") == DischargeMethodType.MID_SECTION

    def test_unsupported_enum_member(self):
        """Recognized but unhandled equations are rejected."""
        with pytest.raises(UnsupportedConfigurationError, match="DischargeEquation='Japanese'"):
            map_discharge_equation(DischargeEquation.JAPANESE)

    def test_unsupported_raw_value(self):
        """Unrecognized equations are rejected, never defaulted."""
        with pytest.raises(UnsupportedConfigurationError, match="is not supported"):
            map_discharge_equation("Velocity-Area")

    def test_unsupported_is_value_error(self):
        """UnsupportedConfigurationError is a ValueError."""
        with pytest.raises(ValueError):
            map_discharge_equation("Velocity-Area")


class TestDischargeActivityMapper:
    """Tests for DischargeActivityMapper."""

    def test_block_name(self):
        assert DischargeActivityMapper().block_name == "discharge_activity"

    def test_is_required(self):
        assert DischargeActivityMapper().is_required() is True

    def test_map_activity_fields(self):
        """Should copy period, discharge, party and comment."""
        context = create_context()
        activity = DischargeActivityMapper().map(context)

        assert activity.measurement_period == DateTimeInterval(START_TIME, END_TIME)
        assert activity.discharge.value == pytest.approx(0.336)
        assert activity.discharge.unit_id == "m^3/s"
        assert activity.party == "J. Rivers"
        assert activity.comments == "Wading measurement below the weir"
        assert activity.channel_measurements == []

    def test_gage_height_present(self):
        """A defined gauge height yields exactly one measurement in the distance unit."""
        context = create_context(create_measurement(gauge_height=1.23))
        activity = DischargeActivityMapper().map(context)

        assert len(activity.gage_height_measurements) == 1
        measurement = activity.gage_height_measurements[0].measurement
        assert measurement.value == 1.23
        assert measurement.unit_id == "m"

    def test_gage_height_nan_omitted(self):
        """A NaN gauge height is omitted entirely."""
        context = create_context(create_measurement(gauge_height=math.nan))
        activity = DischargeActivityMapper().map(context)

        assert activity.gage_height_measurements == []
        assert context.has_warnings

    def test_zero_gage_height_kept(self):
        """Zero is a defined gauge height."""
        context = create_context(create_measurement(gauge_height=0.0))
        activity = DischargeActivityMapper().map(context)

        assert activity.gage_height_measurements[0].measurement.value == 0.0


class TestManualGaugingMapper:
    """Tests for ManualGaugingMapper."""

    def _context_with_activity(self, measurement=None) -> MapperContext:
        context = create_context(measurement)
        context.activity = DischargeActivityMapper().map(context)
        return context

    def test_block_name(self):
        assert ManualGaugingMapper().block_name == "manual_gauging"

    def test_requires_activity(self):
        """Should refuse to run before the discharge activity exists."""
        with pytest.raises(RuntimeError):
            ManualGaugingMapper().map(create_context())

    def test_map_section_aggregates(self):
        """Should copy aggregates and units onto the section."""
        context = self._context_with_activity()
        section = ManualGaugingMapper().map(context)

        assert section.measurement_period == context.activity.measurement_period
        assert section.discharge == context.activity.discharge
        assert section.area_value == 1.6
        assert section.width_value == 3.0
        assert section.velocity_average_value == 0.21
        assert section.unit_system == context.unit_system
        assert section.discharge_method == DischargeMethodType.MID_SECTION
        assert section.velocity_observation_method == PointVelocityObservationType.ONE_AT_POINT_SIX

    def test_start_point_right_bank(self):
        """A right-bank first station starts at the right edge of water."""
        context = self._context_with_activity()
        section = ManualGaugingMapper().map(context)

        assert section.start_point == StartPointType.RIGHT_EDGE_OF_WATER

    @pytest.mark.parametrize("first_type", [StationType.LEFT_BANK, StationType.MID_RIVER, StationType.ICE])
    def test_start_point_otherwise_left(self, first_type):
        """Any other first station type starts at the left edge of water."""
        stations = [
            create_station(first_type, location=0.0),
            create_station(StationType.RIGHT_BANK, location=2.0),
        ]
        context = self._context_with_activity(create_measurement(stations=stations))
        section = ManualGaugingMapper().map(context)

        assert section.start_point == StartPointType.LEFT_EDGE_OF_WATER

    def test_verticals_in_station_order(self):
        """Should attach one vertical per station, in order."""
        context = self._context_with_activity()
        section = ManualGaugingMapper().map(context)

        assert [v.tagline_position for v in section.verticals] == [0.0, 1.5, 3.0]
        assert [v.vertical_type for v in section.verticals] == [
            VerticalType.START_EDGE_NO_WATER_BEFORE,
            VerticalType.MID_RIVER,
            VerticalType.END_EDGE_NO_WATER_AFTER,
        ]

    def test_unsupported_discharge_equation(self):
        """Should raise for an unsupported discharge equation."""
        context = self._context_with_activity(
            create_measurement(discharge_equation=DischargeEquation.JAPANESE)
        )

        with pytest.raises(UnsupportedConfigurationError):
            ManualGaugingMapper().map(context)


class TestTemperatureReadingMapper:
    """Tests for TemperatureReadingMapper."""

    def test_block_name(self):
        assert TemperatureReadingMapper().block_name == "temperature_reading"

    def test_map_reading(self):
        """Should build a water temperature reading at the visit midpoint."""
        context = create_context()
        reading = TemperatureReadingMapper().map(context)

        assert reading.parameter_id == "TW"
        assert reading.measurement.value == 15.0
        assert reading.measurement.unit_id == "degC"
        assert reading.date_time_offset == datetime(2024, 6, 12, 14, 15, 0, tzinfo=timezone.utc)
        assert reading.measurement_device.manufacturer == "SonTek"
        assert reading.measurement_device.model == "ProbeModel"
        assert reading.measurement_device.serial_number == "ProbeSerial"

    def test_midpoint_odd_duration(self):
        """Odd durations floor to whole microseconds."""
        start = datetime(2024, 6, 12, 14, 0, 0, tzinfo=timezone.utc)
        period = DateTimeInterval(start, start + timedelta(microseconds=3))

        assert midpoint(period) == start + timedelta(microseconds=1)

    def test_midpoint_zero_duration(self):
        """A zero-length visit has its midpoint at the start."""
        period = DateTimeInterval(START_TIME, START_TIME)

        assert midpoint(period) == START_TIME
