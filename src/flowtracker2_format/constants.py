"""
Constants and enums for FlowTracker2 discharge conversion.

Centralizes magic strings to improve maintainability and type safety.
Instrument enums mirror the values found in FlowTracker2 measurement
exports; standardized enums mirror the field-data framework vocabulary.
"""

from enum import Enum


# -----------------------------------------------------------------------------
# Instrument (FlowTracker2) enumerations
# -----------------------------------------------------------------------------


class StationType(str, Enum):
    """FlowTracker2 station types."""

    LEFT_BANK = "LeftBank"
    RIGHT_BANK = "RightBank"
    MID_RIVER = "MidRiver"
    ICE = "Ice"


class VelocityMethod(str, Enum):
    """FlowTracker2 velocity sampling methods."""

    FIVE_TENTHS = "FiveTenths"
    SIX_TENTHS = "SixTenths"
    TWO_TENTHS_EIGHT_TENTHS = "TwoTenthsEightTenths"
    TWO_TENTHS_SIX_TENTHS_EIGHT_TENTHS = "TwoTenthsSixTenthsEightTenths"
    FIVE_POINT = "FivePoint"
    SIX_POINT = "SixPoint"
    KREPS = "Kreps"


class DischargeEquation(str, Enum):
    """FlowTracker2 discharge equations."""

    MEAN_SECTION = "MeanSection"
    MID_SECTION = "MidSection"
    JAPANESE = "Japanese"


# -----------------------------------------------------------------------------
# Standardized (field-data) enumerations
# -----------------------------------------------------------------------------


class PointVelocityObservationType(str, Enum):
    """Point velocity observation methods."""

    ONE_AT_POINT_FIVE = "OneAtPointFive"
    ONE_AT_POINT_SIX = "OneAtPointSix"
    ONE_AT_POINT_TWO_AND_POINT_EIGHT = "OneAtPointTwoAndPointEight"
    ONE_AT_POINT_TWO_POINT_SIX_AND_POINT_EIGHT = "OneAtPointTwoPointSixAndPointEight"
    FIVE_POINT = "FivePoint"
    SIX_POINT = "SixPoint"
    SURFACE = "Surface"
    UNKNOWN = "Unknown"


class VerticalType(str, Enum):
    """Vertical classification within a cross-section."""

    START_EDGE_NO_WATER_BEFORE = "StartEdgeNoWaterBefore"
    END_EDGE_NO_WATER_AFTER = "EndEdgeNoWaterAfter"
    MID_RIVER = "MidRiver"


class StartPointType(str, Enum):
    """Bank where the cross-section traverse started."""

    LEFT_EDGE_OF_WATER = "LeftEdgeOfWater"
    RIGHT_EDGE_OF_WATER = "RightEdgeOfWater"


class DischargeMethodType(str, Enum):
    """Discharge computation methods."""

    MEAN_SECTION = "MeanSection"
    MID_SECTION = "MidSection"


class DeploymentMethodType(str, Enum):
    """Meter deployment methods."""

    UNSPECIFIED = "Unspecified"


class FlowDirectionType(str, Enum):
    """Flow direction at a vertical."""

    NORMAL = "Normal"


class MeterType(str, Enum):
    """Current meter types."""

    ADV = "Adv"


class ParseStatus(str, Enum):
    """Terminal outcomes of parsing one measurement file."""

    CANNOT_PARSE = "CannotParse"
    PARSED_BUT_INVALID = "SuccessfullyParsedButDataInvalid"
    SUCCESSFULLY_PARSED_VALID = "SuccessfullyParsedAndDataValid"


class ReadErrorKind(str, Enum):
    """Failure kinds reported by an instrument file reader."""

    FORMAT_MISMATCH = "format_mismatch"
    MALFORMED_CONTENT = "malformed_content"
    OTHER = "other"


# Instrument identity
MANUFACTURER = "SonTek"
MODEL = "FlowTracker2"

# Temperature readings carry placeholder probe identifiers
TEMPERATURE_PROBE_MODEL = "ProbeModel"
TEMPERATURE_PROBE_SERIAL = "ProbeSerial"
WATER_TEMPERATURE_PARAMETER_ID = "TW"
DEGREES_CELSIUS_UNIT_ID = "degC"

# Environment variables
MALFORMED_AS_INVALID_ENV = "FT2_MALFORMED_AS_INVALID"
SCHEMA_PATH_ENV = "FT2_SCHEMA_PATH"
